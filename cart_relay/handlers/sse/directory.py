"""Session directory: the set of open event streams and the only writer onto them."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

from cart_relay.config.sse import MIN_SSE_QUEUE_MAX
from cart_relay.config.http import SESSION_QUERY_PARAM
from cart_relay.runtime.periodic import PeriodicTask

from .session import StreamSession
from .frames import message_frame, endpoint_frame, connected_frame, heartbeat_frame

logger = logging.getLogger(__name__)


class SessionDirectory:
    """Own the open streams and decide where responses go.

    Delivery targets the named session when one is given, otherwise the most
    recently opened session that is still active.
    """

    def __init__(self, *, heartbeat_interval_s: float, queue_max: int, max_sessions: int) -> None:
        self._heartbeat_interval_s = float(heartbeat_interval_s)
        self._queue_max = max(MIN_SSE_QUEUE_MAX, int(queue_max))
        self._max = max(1, int(max_sessions))
        # Insertion order doubles as open order.
        self._active: dict[str, StreamSession] = {}

    @property
    def at_capacity(self) -> bool:
        return len(self._active) >= self._max

    def open(self, endpoint_url: str) -> StreamSession | None:
        """Register a stream, send the handshake frames and start its heartbeat."""
        if self.at_capacity:
            logger.warning("stream rejected: %s already open", len(self._active))
            return None

        session = StreamSession(queue_max=self._queue_max)
        self._active[session.session_id] = session

        separator = "&" if "?" in endpoint_url else "?"
        advertised = f"{endpoint_url}{separator}{urlencode({SESSION_QUERY_PARAM: session.session_id})}"
        if not (self._write(session, connected_frame()) and self._write(session, endpoint_frame(advertised))):
            return None

        session.heartbeat = PeriodicTask(
            lambda: self._beat(session.session_id),
            interval_s=self._heartbeat_interval_s,
            name=f"heartbeat:{session.session_id}",
        )
        session.heartbeat.start()
        logger.info("[%s] stream opened (active: %s)", session.session_id, len(self._active))
        return session

    def close(self, session_id: str, *, reason: str = "closed") -> bool:
        session = self._active.pop(session_id, None)
        if session is None:
            return False
        session.close()
        logger.info("[%s] stream closed: %s (active: %s)", session_id, reason, len(self._active))
        return True

    def get(self, session_id: str) -> StreamSession | None:
        return self._active.get(session_id)

    def select(self, session_id: str | None = None) -> StreamSession | None:
        if session_id:
            return self._active.get(session_id)
        if not self._active:
            return None
        return next(reversed(self._active.values()))

    def deliver(self, payload: dict[str, Any], *, session_id: str | None = None) -> bool:
        session = self.select(session_id)
        if session is None:
            logger.error("delivery failed: no active stream (requested=%s)", session_id)
            return False
        return self._write(session, message_frame(payload))

    def get_session_count(self) -> int:
        return len(self._active)

    async def shutdown(self) -> None:
        sessions = list(self._active.values())
        for session in sessions:
            self.close(session.session_id, reason="server shutdown")
        for session in sessions:
            if session.heartbeat is not None:
                await session.heartbeat.stop()

    def _write(self, session: StreamSession, frame: str) -> bool:
        try:
            ok = session.write(frame)
        except Exception:
            logger.debug("[%s] stream write raised", session.session_id, exc_info=True)
            ok = False
        if not ok:
            self.close(session.session_id, reason="write failed")
        return ok

    async def _beat(self, session_id: str) -> None:
        session = self._active.get(session_id)
        if session is None:
            return
        if self._write(session, heartbeat_frame()):
            logger.debug("[%s] heartbeat sent (active: %s)", session_id, len(self._active))


__all__ = ["SessionDirectory"]
