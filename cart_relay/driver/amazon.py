"""Amazon capability driver on top of Playwright.

Selectors track Amazon's current markup and will drift; every capability call
turns a missing element or a timeout into a failed `OperationResult`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote_plus
from collections.abc import Callable, Awaitable

from playwright.async_api import Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from cart_relay.state.settings import BrowserSettings
from cart_relay.state.operation import OperationResult
from cart_relay.credentials.greeting import greeting_means_logged_in

from .base import CapabilityDriver
from .browser import BrowserSession

logger = logging.getLogger(__name__)

SEARCH_RESULT = '[data-component-type="s-search-result"]'
SEARCH_RESULT_LINK = f"{SEARCH_RESULT} h2 a"
PRODUCT_TITLE = "#productTitle"
QUANTITY_SELECT = "#quantity"
ADD_TO_CART_BUTTON = "#add-to-cart-button"
ADD_TO_CART_CONFIRMATION = "#sw-atc-confirmation, #NATC_SMART_WAGON_CONF_MSG_SUCCESS"
CART_EMPTY = ".sc-your-amazon-cart-is-empty"
CART_ITEM = '[data-name="Active Items"] .sc-list-item'
CART_SUBTOTAL = "#sc-subtotal-amount-activecart .sc-price"
ACCOUNT_GREETING = "#nav-link-accountList-nav-line-1"

_CONFIRMATION_TIMEOUT_MS = 3000
_CONFIRMATION_FALLBACK_WAIT_S = 2.0
_GREETING_TIMEOUT_MS = 2000

_EXTRACT_SEARCH_RESULTS_JS = """
(items, limit) => items.slice(0, limit).map((item) => {
  const text = (sel) => item.querySelector(sel)?.textContent?.trim() || '';
  const whole = text('.a-price-whole');
  const fraction = text('.a-price-fraction');
  return {
    title: text('h2 a span') || text('h2 span') || 'Unknown',
    asin: item.getAttribute('data-asin') || '',
    price: whole && fraction ? `$${whole}${fraction}` : 'Price not available',
    rating: text('.a-icon-star-small span') || 'No rating',
    imageUrl: item.querySelector('img.s-image')?.getAttribute('src') || '',
  };
})
"""

_EXTRACT_CART_ITEMS_JS = """
(items) => items.map((item) => {
  const quantityEl = item.querySelector('[name^="quantity"]');
  const quantity = quantityEl && quantityEl.value ? parseInt(quantityEl.value, 10) : 1;
  return {
    title: item.querySelector('.sc-product-title')?.textContent?.trim() || 'Unknown',
    price: item.querySelector('.sc-product-price')?.textContent?.trim() || 'N/A',
    quantity: Number.isNaN(quantity) ? 1 : quantity,
    asin: item.getAttribute('data-asin') || '',
    imageUrl: item.querySelector('img')?.getAttribute('src') || '',
  };
})
"""


class AmazonDriver(CapabilityDriver):
    def __init__(self, settings: BrowserSettings, *, browser: BrowserSession | None = None) -> None:
        self._settings = settings
        self._browser = browser or BrowserSession(settings)
        self._base_url = settings.base_url

    async def start(self) -> None:
        await self._browser.context()

    async def close(self) -> None:
        await self._browser.close()

    async def open_home(self) -> None:
        page = await self._browser.page()
        await self._goto(page, self._base_url)

    async def search(self, query: str) -> OperationResult:
        async def _run() -> OperationResult:
            page = await self._browser.page()
            await self._goto(page, f"{self._base_url}/s?k={quote_plus(query)}")
            await page.wait_for_selector(SEARCH_RESULT)
            results = await page.eval_on_selector_all(
                SEARCH_RESULT,
                _EXTRACT_SEARCH_RESULTS_JS,
                self._settings.search_result_limit,
            )
            return OperationResult.ok(f"Found {len(results)} products", results)

        return await self._attempt("Failed to search products", _run)

    async def add_to_cart(
        self,
        *,
        asin: str | None = None,
        query: str | None = None,
        quantity: int = 1,
    ) -> OperationResult:
        if bool(asin) == bool(query):
            return OperationResult.failure(
                "Failed to add item to cart",
                "Exactly one of query or asin must be provided",
            )
        quantity = max(1, int(quantity))

        async def _run() -> OperationResult:
            page = await self._browser.page()
            if asin:
                await self._goto(page, f"{self._base_url}/dp/{quote_plus(asin)}")
            else:
                await self._goto(page, f"{self._base_url}/s?k={quote_plus(query or '')}")
                await page.wait_for_selector(SEARCH_RESULT_LINK)
                async with page.expect_navigation(wait_until="domcontentloaded"):
                    await page.click(SEARCH_RESULT_LINK)

            title = (await page.text_content(PRODUCT_TITLE) or "").strip() or "Unknown Product"

            if quantity > 1 and await page.locator(QUANTITY_SELECT).count() > 0:
                await page.select_option(QUANTITY_SELECT, str(quantity))

            button = page.locator(ADD_TO_CART_BUTTON)
            if await button.count() == 0:
                return OperationResult.failure("Failed to add item to cart", "Add to Cart button not found")
            await button.first.click()

            try:
                await page.wait_for_selector(ADD_TO_CART_CONFIRMATION, timeout=_CONFIRMATION_TIMEOUT_MS)
            except PlaywrightTimeoutError:
                # Some layouts show no banner; give the cart request time to land.
                await asyncio.sleep(_CONFIRMATION_FALLBACK_WAIT_S)

            return OperationResult.ok(
                f'Added "{title}" to cart (quantity: {quantity})',
                {"title": title, "quantity": quantity},
            )

        return await self._attempt("Failed to add item to cart", _run)

    async def view_cart(self) -> OperationResult:
        async def _run() -> OperationResult:
            page = await self._browser.page()
            await self._goto(page, f"{self._base_url}/gp/cart/view.html")

            if await page.locator(CART_EMPTY).count() > 0:
                return OperationResult.ok("Cart is empty", {"items": [], "subtotal": "$0.00"})

            items = await page.eval_on_selector_all(CART_ITEM, _EXTRACT_CART_ITEMS_JS)
            subtotal = "$0.00"
            if await page.locator(CART_SUBTOTAL).count() > 0:
                subtotal = (await page.locator(CART_SUBTOTAL).first.text_content() or "").strip() or subtotal
            return OperationResult.ok(f"Cart contains {len(items)} item(s)", {"items": items, "subtotal": subtotal})

        return await self._attempt("Failed to get cart contents", _run)

    async def check_login(self) -> OperationResult:
        async def _run() -> OperationResult:
            page = await self._browser.page()
            await self._goto(page, self._base_url)
            logged_in = greeting_means_logged_in(await self.account_greeting())
            return OperationResult.ok(
                "Logged in to Amazon" if logged_in else "Not logged in",
                {"loggedIn": logged_in},
            )

        return await self._attempt("Failed to check login status", _run)

    async def cookies(self) -> list[dict[str, Any]]:
        context = await self._browser.context()
        return [dict(c) for c in await context.cookies()]

    async def add_cookies(self, cookies: list[dict[str, Any]]) -> None:
        context = await self._browser.context()
        await context.add_cookies(cookies)  # type: ignore[arg-type]

    async def account_greeting(self) -> str:
        page = await self._browser.page()
        try:
            text = await page.text_content(ACCOUNT_GREETING, timeout=_GREETING_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            return ""
        return (text or "").strip()

    async def _goto(self, page: Page, url: str) -> None:
        logger.debug("browser: goto %s", url)
        await page.goto(url, wait_until="domcontentloaded")

    async def _attempt(self, failure_message: str, action: Callable[[], Awaitable[OperationResult]]) -> OperationResult:
        try:
            return await action()
        except PlaywrightTimeoutError as exc:
            logger.warning("amazon: %s (timeout): %s", failure_message, exc)
            return OperationResult.failure(failure_message, f"Element or content not found: {exc}", retryable=True)
        except PlaywrightError as exc:
            logger.warning("amazon: %s: %s", failure_message, exc)
            return OperationResult.failure(failure_message, str(exc))


__all__ = ["AmazonDriver"]
