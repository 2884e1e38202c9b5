"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import field, dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from cart_relay.driver.base import CapabilityDriver
    from cart_relay.driver.lease import DriverLease
    from cart_relay.state.settings import AppSettings
    from cart_relay.runtime.periodic import PeriodicTask
    from cart_relay.credentials.store import CredentialStore
    from cart_relay.handlers.rpc.dispatch import ProtocolDispatcher
    from cart_relay.handlers.sse.directory import SessionDirectory


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    sessions: SessionDirectory
    dispatcher: ProtocolDispatcher
    credentials: CredentialStore
    lease: DriverLease
    driver: CapabilityDriver
    autosave: PeriodicTask
    _released: bool = field(default=False, init=False, repr=False)

    async def save_credentials(self) -> None:
        async with self.lease.acquire() as driver:
            await self.credentials.capture(driver)

    async def shutdown(self) -> None:
        # Reached from the lifespan and again from the server after it; runs once.
        if self._released:
            return
        self._released = True
        await self.autosave.stop()
        await self.sessions.shutdown()

        timeout_s = self.settings.credentials.shutdown_save_timeout_s
        try:
            await asyncio.wait_for(self.save_credentials(), timeout=timeout_s)
            logger.info("credentials: saved before shutdown")
        except TimeoutError:
            logger.warning("credentials: shutdown save timed out after %.1fs", timeout_s)
        except Exception:
            logger.exception("credentials: shutdown save failed")

        try:
            await self.driver.close()
        except Exception:
            logger.exception("driver shutdown failed")


__all__ = ["RuntimeDeps"]
