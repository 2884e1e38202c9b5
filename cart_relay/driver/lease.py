"""Serialised, time-bounded access to the single browser context."""

from __future__ import annotations

import asyncio
import logging
from typing import TypeVar
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable, AsyncIterator

from cart_relay.errors import DriverTimeoutError
from cart_relay.state.operation import OperationResult

from .base import CapabilityDriver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DriverLease:
    """One holder at a time; a second tool call waits for the first to finish."""

    def __init__(self, driver: CapabilityDriver, *, timeout_s: float) -> None:
        self._driver = driver
        self._timeout_s = float(timeout_s)
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[CapabilityDriver]:
        async with self._lock:
            yield self._driver

    async def call(self, fn: Callable[[CapabilityDriver], Awaitable[T]], *, operation: str) -> T:
        async with self.acquire() as driver:
            try:
                return await asyncio.wait_for(fn(driver), timeout=self._timeout_s)
            except TimeoutError as exc:
                raise DriverTimeoutError(operation=operation, timeout_s=self._timeout_s) from exc

    async def run(
        self,
        fn: Callable[[CapabilityDriver], Awaitable[OperationResult]],
        *,
        operation: str,
    ) -> OperationResult:
        """Like `call`, but every failure comes back as a failed result."""
        try:
            return await self.call(fn, operation=operation)
        except DriverTimeoutError as exc:
            logger.warning("driver: %s", exc)
            return OperationResult.failure(f"{operation} did not finish in time", str(exc), retryable=True)
        except Exception as exc:
            logger.exception("driver: %s failed", operation)
            return OperationResult.failure(f"{operation} failed", str(exc) or type(exc).__name__)


__all__ = ["DriverLease"]
