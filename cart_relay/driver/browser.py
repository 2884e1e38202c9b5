"""Persistent Chromium context owned by the Amazon driver."""

from __future__ import annotations

import logging

from playwright.async_api import Page, Playwright, BrowserContext, async_playwright

from cart_relay.state.settings import BrowserSettings
from cart_relay.config.browser import BROWSER_VIEWPORT, BROWSER_LAUNCH_ARGS

logger = logging.getLogger(__name__)


class BrowserSession:
    """Launch lazily, and relaunch if the user closed the window."""

    def __init__(self, settings: BrowserSettings) -> None:
        self._settings = settings
        self._playwright: Playwright | None = None
        self._context: BrowserContext | None = None

    @property
    def started(self) -> bool:
        return self._context is not None

    async def context(self) -> BrowserContext:
        if self._context is None:
            await self._launch()
        if self._context is None:
            raise RuntimeError("Browser context failed to launch")
        return self._context

    async def page(self) -> Page:
        context = await self.context()
        if context.pages:
            return context.pages[0]
        return await context.new_page()

    async def close(self) -> None:
        context, self._context = self._context, None
        if context is not None:
            try:
                await context.close()
            except Exception:
                logger.debug("browser: context already gone", exc_info=True)
        playwright, self._playwright = self._playwright, None
        if playwright is not None:
            await playwright.stop()

    async def _launch(self) -> None:
        if self._playwright is None:
            self._playwright = await async_playwright().start()

        user_data_dir = self._settings.user_data_dir.expanduser().resolve()
        user_data_dir.mkdir(parents=True, exist_ok=True)
        context = await self._playwright.chromium.launch_persistent_context(
            str(user_data_dir),
            headless=self._settings.headless,
            args=list(BROWSER_LAUNCH_ARGS),
            viewport=dict(BROWSER_VIEWPORT),
        )
        context.set_default_timeout(self._settings.navigation_timeout_s * 1000)
        context.on("close", lambda _ctx: self._on_closed(context))
        self._context = context
        logger.info("browser: launched (headless=%s, profile=%s)", self._settings.headless, user_data_dir)

    def _on_closed(self, context: BrowserContext) -> None:
        if self._context is context:
            logger.warning("browser: context closed; it will be relaunched on next use")
            self._context = None


__all__ = ["BrowserSession"]
