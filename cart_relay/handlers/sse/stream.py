"""GET /sse: open an event stream and pump its frames to the client."""

from __future__ import annotations

import logging
from urllib.parse import urlencode
from collections.abc import AsyncIterator

from fastapi import Request
from fastapi.responses import Response, ORJSONResponse, StreamingResponse

from cart_relay.state import RuntimeDeps
from cart_relay.config.secrets import AUTH_QUERY_PARAM
from cart_relay.config.jsonrpc import RPC_NO_ACTIVE_SESSION
from cart_relay.config.http import SSE_MEDIA_TYPE, SSE_RESPONSE_HEADERS, MESSAGE_ENDPOINT_PATH

from .session import StreamSession
from .directory import SessionDirectory

logger = logging.getLogger(__name__)


def build_message_endpoint_url(request: Request) -> str:
    # Honour tunnel/proxy headers so the advertised URL is reachable from outside.
    proto = (request.headers.get("x-forwarded-proto") or request.url.scheme or "http").split(",")[0].strip()
    host = (request.headers.get("x-forwarded-host") or request.headers.get("host") or request.url.netloc).split(",")[0]
    url = f"{proto}://{host.strip()}{MESSAGE_ENDPOINT_PATH}"
    # A client that authenticated by query string can only do so again the same way.
    token = request.query_params.get(AUTH_QUERY_PARAM)
    if token:
        url = f"{url}?{urlencode({AUTH_QUERY_PARAM: token})}"
    return url


async def _pump_frames(session: StreamSession, sessions: SessionDirectory) -> AsyncIterator[str]:
    try:
        async for frame in session.frames():
            yield frame
    finally:
        # Client disconnect cancels the body iterator; teardown is idempotent.
        sessions.close(session.session_id, reason="client disconnected")


def _unavailable(message: str) -> Response:
    return ORJSONResponse(
        status_code=503,
        content={"jsonrpc": "2.0", "error": {"code": RPC_NO_ACTIVE_SESSION, "message": message}, "id": None},
    )


async def open_event_stream(request: Request, runtime_deps: RuntimeDeps) -> Response:
    sessions = runtime_deps.sessions
    if sessions.at_capacity:
        return _unavailable("Too many open streams")

    endpoint_url = build_message_endpoint_url(request)
    session = sessions.open(endpoint_url)
    if session is None:
        return _unavailable("Stream could not be opened")

    logger.info("[%s] advertised endpoint %s", session.session_id, endpoint_url)
    return StreamingResponse(
        _pump_frames(session, runtime_deps.sessions),
        media_type=SSE_MEDIA_TYPE,
        headers=dict(SSE_RESPONSE_HEADERS),
    )


__all__ = ["build_message_endpoint_url", "open_event_stream"]
