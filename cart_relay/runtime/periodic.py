"""Owned, cancellable recurring task (stream heartbeats, credential autosave)."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable, Awaitable

logger = logging.getLogger(__name__)

TickFn = Callable[[], Awaitable[None]]


class PeriodicTask:
    def __init__(self, tick: TickFn, *, interval_s: float, name: str) -> None:
        self._tick = tick
        self._interval_s = float(interval_s)
        self._name = name
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._loop(), name=self._name)
        return self._task

    def cancel(self) -> None:
        """Stop without waiting; safe to call from inside a tick."""
        self._stop_event.set()
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        if self._task is not asyncio.current_task():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await self._task
        self._task = None

    async def _loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._interval_s)
                if self._stop_event.is_set():
                    break
                try:
                    await self._tick()
                except asyncio.CancelledError:
                    raise
                except Exception:
                    logger.exception("%s: tick failed", self._name)
        except asyncio.CancelledError:
            return


__all__ = ["PeriodicTask"]
