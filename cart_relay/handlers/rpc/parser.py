"""Inbound JSON-RPC message parsing/validation."""

from __future__ import annotations

from typing import Any

import orjson

from cart_relay.errors import InvalidRequestError
from cart_relay.state.envelope import RequestEnvelope
from cart_relay.config.jsonrpc import (
    RPC_KEY_ID,
    RPC_KEY_PARAMS,
    RPC_KEY_METHOD,
    RPC_PARSE_ERROR,
    RPC_INVALID_REQUEST,
)


def _valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (str, int, float))


def parse_request(raw: bytes | str) -> RequestEnvelope:
    """Validate one envelope.

    Notification iff the `id` key is absent; `id: 0` and `id: null` are
    requests and get a reply.
    """
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise InvalidRequestError(RPC_PARSE_ERROR, f"Parse error: {exc}") from exc

    if not isinstance(msg, dict):
        raise InvalidRequestError(RPC_INVALID_REQUEST, "Invalid Request: message must be a JSON object")

    method = msg.get(RPC_KEY_METHOD)
    if not isinstance(method, str) or not method.strip():
        raise InvalidRequestError(RPC_INVALID_REQUEST, "Invalid Request: missing method")

    has_id = RPC_KEY_ID in msg
    request_id = msg.get(RPC_KEY_ID)
    if has_id and not _valid_id(request_id):
        raise InvalidRequestError(RPC_INVALID_REQUEST, "Invalid Request: id must be a string, number or null")

    params = msg.get(RPC_KEY_PARAMS)
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise InvalidRequestError(RPC_INVALID_REQUEST, "Invalid Request: params must be an object")

    return RequestEnvelope(method=method.strip(), id=request_id, has_id=has_id, params=params)


def peek_request_id(raw: bytes | str) -> Any:
    """Best-effort id extraction for error replies to unparseable messages."""
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None
    if isinstance(msg, dict) and _valid_id(msg.get(RPC_KEY_ID)):
        return msg.get(RPC_KEY_ID)
    return None


__all__ = ["parse_request", "peek_request_id"]
