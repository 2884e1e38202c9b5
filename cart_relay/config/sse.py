"""Server-Sent Events stream configuration and frame constants."""

from __future__ import annotations

# Frame vocabulary
SSE_EVENT_ENDPOINT = "endpoint"
SSE_EVENT_MESSAGE = "message"
SSE_COMMENT_CONNECTED = "connected"
SSE_COMMENT_HEARTBEAT = "ping"

# Heartbeat keeps proxies from closing an idle stream.
ENV_SSE_HEARTBEAT_INTERVAL_S = "SSE_HEARTBEAT_INTERVAL_S"
DEFAULT_SSE_HEARTBEAT_INTERVAL_S = 15.0

# Frames buffered per stream before a write counts as failed.
ENV_SSE_QUEUE_MAX = "SSE_QUEUE_MAX"
DEFAULT_SSE_QUEUE_MAX = 256
# Both handshake frames must fit before the client starts reading.
MIN_SSE_QUEUE_MAX = 2

ENV_MAX_CONCURRENT_STREAMS = "MAX_CONCURRENT_STREAMS"
DEFAULT_MAX_CONCURRENT_STREAMS = 8

SESSION_ID_PREFIX = "session"

__all__ = [
    "DEFAULT_MAX_CONCURRENT_STREAMS",
    "DEFAULT_SSE_HEARTBEAT_INTERVAL_S",
    "DEFAULT_SSE_QUEUE_MAX",
    "ENV_MAX_CONCURRENT_STREAMS",
    "ENV_SSE_HEARTBEAT_INTERVAL_S",
    "ENV_SSE_QUEUE_MAX",
    "MIN_SSE_QUEUE_MAX",
    "SESSION_ID_PREFIX",
    "SSE_COMMENT_CONNECTED",
    "SSE_COMMENT_HEARTBEAT",
    "SSE_EVENT_ENDPOINT",
    "SSE_EVENT_MESSAGE",
]
