"""One open event stream and its exclusively owned output sink."""

from __future__ import annotations

import time
import asyncio
import logging
import secrets
from collections.abc import AsyncIterator

from cart_relay.config.sse import SESSION_ID_PREFIX
from cart_relay.runtime.periodic import PeriodicTask

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return f"{SESSION_ID_PREFIX}_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


class StreamSession:
    """Frames are queued here and drained by the HTTP response body.

    `write` never raises: a closed or saturated sink reports False and the
    caller tears the session down.
    """

    def __init__(self, *, session_id: str | None = None, queue_max: int = 256) -> None:
        self.session_id = session_id or new_session_id()
        self.created_at = time.time()
        self._queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=max(1, int(queue_max)))
        self._closed = False
        self.heartbeat: PeriodicTask | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, frame: str) -> bool:
        if self._closed:
            return False
        try:
            self._queue.put_nowait(frame)
        except asyncio.QueueFull:
            logger.warning("[%s] stream backlog full; dropping session", self.session_id)
            return False
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.heartbeat is not None:
            self.heartbeat.cancel()
        # Make room for the end-of-stream sentinel; nobody will read pending frames.
        while True:
            try:
                self._queue.put_nowait(None)
                return
            except asyncio.QueueFull:
                self._queue.get_nowait()

    async def frames(self) -> AsyncIterator[str]:
        while True:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame

    def pending(self) -> list[str]:
        """Drain queued frames without waiting (used by tests and diagnostics)."""
        out: list[str] = []
        while not self._queue.empty():
            frame = self._queue.get_nowait()
            if frame is None:
                self._queue.put_nowait(None)
                break
            out.append(frame)
        return out


__all__ = ["StreamSession", "new_session_id"]
