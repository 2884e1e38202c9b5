"""HTTP surface configuration: paths, CORS and SSE response headers."""

from __future__ import annotations

SSE_ENDPOINT_PATH = "/sse"
MESSAGE_ENDPOINT_PATH = "/message"
HEALTH_ENDPOINT_PATH = "/health"

# Query parameter appended to the advertised message endpoint.
SESSION_QUERY_PARAM = "session_id"

ENV_HOST = "HOST"
DEFAULT_HOST = "0.0.0.0"
ENV_PORT = "PORT"
DEFAULT_PORT = 3000

# Upper bound on waiting for open connections once exit starts.
ENV_GRACEFUL_SHUTDOWN_TIMEOUT_S = "GRACEFUL_SHUTDOWN_TIMEOUT_S"
DEFAULT_GRACEFUL_SHUTDOWN_TIMEOUT_S = 5.0

ENV_CORS_ALLOW_ORIGINS = "CORS_ALLOW_ORIGINS"
DEFAULT_CORS_ALLOW_ORIGINS = "*"

SSE_MEDIA_TYPE = "text/event-stream"
SSE_RESPONSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    # Stops nginx-style proxies from buffering the stream.
    "X-Accel-Buffering": "no",
}

__all__ = [
    "DEFAULT_CORS_ALLOW_ORIGINS",
    "DEFAULT_GRACEFUL_SHUTDOWN_TIMEOUT_S",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ENV_CORS_ALLOW_ORIGINS",
    "ENV_GRACEFUL_SHUTDOWN_TIMEOUT_S",
    "ENV_HOST",
    "ENV_PORT",
    "HEALTH_ENDPOINT_PATH",
    "MESSAGE_ENDPOINT_PATH",
    "SESSION_QUERY_PARAM",
    "SSE_ENDPOINT_PATH",
    "SSE_MEDIA_TYPE",
    "SSE_RESPONSE_HEADERS",
]
