"""POST /message: accept one envelope, answer it over the event stream."""

from __future__ import annotations

import logging
from typing import Any

from fastapi.responses import Response, ORJSONResponse

from cart_relay.state import RuntimeDeps
from cart_relay.errors import InvalidRequestError
from cart_relay.config.jsonrpc import RPC_INTERNAL_ERROR, RPC_NO_ACTIVE_SESSION

from .envelope import build_error
from .parser import parse_request, peek_request_id

logger = logging.getLogger(__name__)


def _accepted() -> Response:
    return Response(status_code=202)


def _error_response(status_code: int, request_id: Any, code: int, message: str) -> Response:
    return ORJSONResponse(status_code=status_code, content=build_error(request_id, code, message))


async def handle_message(raw: bytes, runtime_deps: RuntimeDeps, *, session_id: str | None = None) -> Response:
    try:
        request = parse_request(raw)
    except InvalidRequestError as exc:
        logger.warning("rpc: rejected message: %s", exc.message)
        return _error_response(400, peek_request_id(raw), exc.code, exc.message)

    sessions = runtime_deps.sessions
    logger.info("rpc: received %s id=%r (streams: %s)", request.method, request.id, sessions.get_session_count())

    if request.is_notification:
        return _accepted()

    # Nowhere to send the answer; do not run the request at all.
    if sessions.select(session_id) is None:
        logger.error("rpc: no active stream for %s id=%r", request.method, request.id)
        return _error_response(503, request.id, RPC_NO_ACTIVE_SESSION, "No active connection")

    try:
        response = await runtime_deps.dispatcher.dispatch(request)
    except Exception:
        logger.exception("rpc: error handling %s", request.method)
        return _error_response(500, request.id, RPC_INTERNAL_ERROR, "Internal error")

    if response is None:
        return _accepted()

    if not sessions.deliver(response, session_id=session_id):
        # The stream went away while the request ran; the result is lost.
        return _error_response(503, request.id, RPC_NO_ACTIVE_SESSION, "SSE connection closed")
    return _accepted()


__all__ = ["handle_message"]
