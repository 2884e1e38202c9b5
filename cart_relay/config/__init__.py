"""Configuration module exports (env names, defaults and protocol constants only)."""

from .secrets import ENV_AUTH_TOKEN
from .jsonrpc import SERVER_NAME, SERVER_VERSION, MCP_PROTOCOL_VERSION

__all__ = [
    "ENV_AUTH_TOKEN",
    "MCP_PROTOCOL_VERSION",
    "SERVER_NAME",
    "SERVER_VERSION",
]
