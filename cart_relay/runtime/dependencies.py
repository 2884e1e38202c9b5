"""Runtime dependency construction (browser driver + session relay)."""

from __future__ import annotations

import logging

from cart_relay.state import RuntimeDeps
from cart_relay.driver.lease import DriverLease
from cart_relay.driver.base import CapabilityDriver
from cart_relay.driver.amazon import AmazonDriver
from cart_relay.state.settings import AppSettings
from cart_relay.credentials.store import CredentialStore
from cart_relay.handlers.rpc.dispatch import ProtocolDispatcher
from cart_relay.handlers.sse.directory import SessionDirectory
from cart_relay.tools import ToolExecutor, build_tool_registry

from .settings import load_settings
from .periodic import PeriodicTask

logger = logging.getLogger(__name__)


async def _warm_up(driver: CapabilityDriver, credentials: CredentialStore) -> None:
    """Restore the saved login, land on the home page and write the jar back."""
    restored = await credentials.restore(driver)
    try:
        await driver.open_home()
    except Exception:
        logger.exception("driver: could not open the home page")
        return
    if restored:
        logged_in = await credentials.is_logged_in(driver)
        logger.info("credentials: restored session is %s", "logged in" if logged_in else "not logged in")
    await credentials.capture(driver)


async def build_runtime_deps(
    settings: AppSettings | None = None,
    driver: CapabilityDriver | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()
    if not settings.auth.token:
        logger.warning("auth: AUTH_TOKEN is not set; every endpoint is open")

    driver = driver or AmazonDriver(settings.browser)
    credentials = CredentialStore(
        settings.credentials.cookies_file,
        domain_filter=settings.credentials.domain_filter,
        persist_ttl_s=settings.credentials.persist_ttl_s,
    )
    lease = DriverLease(driver, timeout_s=settings.browser.operation_timeout_s)
    executor = ToolExecutor(build_tool_registry(), lease, credentials)
    sessions = SessionDirectory(
        heartbeat_interval_s=settings.stream.heartbeat_interval_s,
        queue_max=settings.stream.queue_max,
        max_sessions=settings.stream.max_sessions,
    )

    # A driver that cannot start leaves nothing to serve; let startup fail.
    await driver.start()
    logger.info("driver: started (%s)", settings.browser.base_url)
    async with lease.acquire():
        await _warm_up(driver, credentials)

    async def _autosave() -> None:
        async with lease.acquire() as held:
            await credentials.capture(held)

    autosave = PeriodicTask(_autosave, interval_s=settings.credentials.autosave_interval_s, name="credentials-autosave")
    autosave.start()

    return RuntimeDeps(
        settings=settings,
        sessions=sessions,
        dispatcher=ProtocolDispatcher(executor),
        credentials=credentials,
        lease=lease,
        driver=driver,
        autosave=autosave,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
