"""Cookie access the credential store needs from the browser."""

from __future__ import annotations

from typing import Any, Protocol


class CookieJar(Protocol):
    async def cookies(self) -> list[dict[str, Any]]: ...

    async def add_cookies(self, cookies: list[dict[str, Any]]) -> None: ...


__all__ = ["CookieJar"]
