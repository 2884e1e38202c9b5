"""JSON-RPC 2.0 / MCP protocol constants."""

from __future__ import annotations

JSONRPC_VERSION = "2.0"

# Envelope keys
RPC_KEY_JSONRPC = "jsonrpc"
RPC_KEY_ID = "id"
RPC_KEY_METHOD = "method"
RPC_KEY_PARAMS = "params"
RPC_KEY_RESULT = "result"
RPC_KEY_ERROR = "error"

# Error codes (error.code values)
RPC_PARSE_ERROR = -32700
RPC_INVALID_REQUEST = -32600
RPC_METHOD_NOT_FOUND = -32601
RPC_INVALID_PARAMS = -32602
RPC_INTERNAL_ERROR = -32603
RPC_NO_ACTIVE_SESSION = -32000

# MCP handshake descriptor
MCP_PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "amazon-cart-server"
SERVER_VERSION = "1.0.0"

# Methods
METHOD_INITIALIZE = "initialize"
METHOD_PING = "ping"
METHOD_TOOLS_LIST = "tools/list"
METHOD_TOOLS_CALL = "tools/call"
METHOD_RESOURCES_LIST = "resources/list"
METHOD_RESOURCE_TEMPLATES_LIST = "resources/templates/list"
METHOD_PROMPTS_LIST = "prompts/list"

__all__ = [
    "JSONRPC_VERSION",
    "MCP_PROTOCOL_VERSION",
    "METHOD_INITIALIZE",
    "METHOD_PING",
    "METHOD_PROMPTS_LIST",
    "METHOD_RESOURCES_LIST",
    "METHOD_RESOURCE_TEMPLATES_LIST",
    "METHOD_TOOLS_CALL",
    "METHOD_TOOLS_LIST",
    "RPC_INTERNAL_ERROR",
    "RPC_INVALID_PARAMS",
    "RPC_INVALID_REQUEST",
    "RPC_KEY_ERROR",
    "RPC_KEY_ID",
    "RPC_KEY_JSONRPC",
    "RPC_KEY_METHOD",
    "RPC_KEY_PARAMS",
    "RPC_KEY_RESULT",
    "RPC_METHOD_NOT_FOUND",
    "RPC_NO_ACTIVE_SESSION",
    "RPC_PARSE_ERROR",
    "SERVER_NAME",
    "SERVER_VERSION",
]
