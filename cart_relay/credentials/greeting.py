"""Login detection from the site's account greeting."""

from __future__ import annotations

from typing import Protocol

from cart_relay.config.credentials import LOGGED_OUT_MARKER, LOGGED_IN_GREETING


class AccountGreeter(Protocol):
    async def account_greeting(self) -> str: ...


def greeting_means_logged_in(greeting: str) -> bool:
    # Signed-out pages greet with "Hello, sign in".
    return LOGGED_IN_GREETING in greeting and LOGGED_OUT_MARKER not in greeting.lower()


__all__ = ["AccountGreeter", "greeting_means_logged_in"]
