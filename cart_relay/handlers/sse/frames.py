"""Text/event-stream frame builders."""

from __future__ import annotations

from typing import Any

import orjson

from cart_relay.config.sse import (
    SSE_EVENT_MESSAGE,
    SSE_EVENT_ENDPOINT,
    SSE_COMMENT_HEARTBEAT,
    SSE_COMMENT_CONNECTED,
)


def comment_frame(text: str) -> str:
    return f": {text}\n\n"


def event_frame(event: str, data: str) -> str:
    # Multi-line payloads need one data field per line.
    lines = "".join(f"data: {line}\n" for line in data.split("\n"))
    return f"event: {event}\n{lines}\n"


def connected_frame() -> str:
    return comment_frame(SSE_COMMENT_CONNECTED)


def heartbeat_frame() -> str:
    return comment_frame(SSE_COMMENT_HEARTBEAT)


def endpoint_frame(url: str) -> str:
    return event_frame(SSE_EVENT_ENDPOINT, url)


def message_frame(payload: dict[str, Any]) -> str:
    return event_frame(SSE_EVENT_MESSAGE, orjson.dumps(payload).decode("utf-8"))


__all__ = [
    "comment_frame",
    "connected_frame",
    "endpoint_frame",
    "event_frame",
    "heartbeat_frame",
    "message_frame",
]
