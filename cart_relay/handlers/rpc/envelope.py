"""JSON-RPC 2.0 response envelope builders."""

from __future__ import annotations

from typing import Any

from cart_relay.config.jsonrpc import (
    RPC_KEY_ID,
    RPC_KEY_ERROR,
    RPC_KEY_RESULT,
    JSONRPC_VERSION,
    RPC_KEY_JSONRPC,
)


def build_result(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {RPC_KEY_JSONRPC: JSONRPC_VERSION, RPC_KEY_ID: request_id, RPC_KEY_RESULT: result}


def build_error(
    request_id: Any,
    code: int,
    message: str,
    *,
    data: Any = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {RPC_KEY_JSONRPC: JSONRPC_VERSION, RPC_KEY_ID: request_id, RPC_KEY_ERROR: error}


__all__ = ["build_error", "build_result"]
