"""Amazon cart relay: MCP-style tools over JSON-RPC + Server-Sent Events."""

__all__: list[str] = []
