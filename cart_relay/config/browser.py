"""Browser / capability driver configuration (env names and defaults only)."""

from __future__ import annotations

from pathlib import Path

ENV_AMAZON_DOMAIN = "AMAZON_DOMAIN"
DEFAULT_AMAZON_DOMAIN = "amazon.com"

ENV_HEADLESS = "HEADLESS"
DEFAULT_HEADLESS = False

ENV_USER_DATA_DIR = "USER_DATA_DIR"
DEFAULT_USER_DATA_DIR = Path("user-data")

ENV_BROWSER_NAVIGATION_TIMEOUT_S = "BROWSER_NAVIGATION_TIMEOUT_S"
DEFAULT_BROWSER_NAVIGATION_TIMEOUT_S = 30.0

# Upper bound on one whole tool call against the browser.
ENV_DRIVER_OPERATION_TIMEOUT_S = "DRIVER_OPERATION_TIMEOUT_S"
DEFAULT_DRIVER_OPERATION_TIMEOUT_S = 90.0

ENV_SEARCH_RESULT_LIMIT = "SEARCH_RESULT_LIMIT"
DEFAULT_SEARCH_RESULT_LIMIT = 5

BROWSER_VIEWPORT: dict[str, int] = {"width": 1280, "height": 800}
BROWSER_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
)

__all__ = [
    "BROWSER_LAUNCH_ARGS",
    "BROWSER_VIEWPORT",
    "DEFAULT_AMAZON_DOMAIN",
    "DEFAULT_BROWSER_NAVIGATION_TIMEOUT_S",
    "DEFAULT_DRIVER_OPERATION_TIMEOUT_S",
    "DEFAULT_HEADLESS",
    "DEFAULT_SEARCH_RESULT_LIMIT",
    "DEFAULT_USER_DATA_DIR",
    "ENV_AMAZON_DOMAIN",
    "ENV_BROWSER_NAVIGATION_TIMEOUT_S",
    "ENV_DRIVER_OPERATION_TIMEOUT_S",
    "ENV_HEADLESS",
    "ENV_SEARCH_RESULT_LIMIT",
    "ENV_USER_DATA_DIR",
]
