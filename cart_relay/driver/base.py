"""Capability driver contract: the only way the relay touches the product site."""

from __future__ import annotations

from typing import Any
from abc import ABC, abstractmethod

from cart_relay.state.operation import OperationResult


class CapabilityDriver(ABC):
    """Product site driver.

    Capability calls return an `OperationResult` and must not raise for
    site-level failures (missing elements, navigation timeouts). Calls are not
    safe to interleave; callers go through `DriverLease`.
    """

    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def close(self) -> None: ...

    @abstractmethod
    async def open_home(self) -> None: ...

    @abstractmethod
    async def search(self, query: str) -> OperationResult: ...

    @abstractmethod
    async def add_to_cart(
        self,
        *,
        asin: str | None = None,
        query: str | None = None,
        quantity: int = 1,
    ) -> OperationResult: ...

    @abstractmethod
    async def view_cart(self) -> OperationResult: ...

    @abstractmethod
    async def check_login(self) -> OperationResult: ...

    # Cookie jar and account greeting used by the credential store.

    @abstractmethod
    async def cookies(self) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def add_cookies(self, cookies: list[dict[str, Any]]) -> None: ...

    @abstractmethod
    async def account_greeting(self) -> str:
        """Text of the account widget on the current page, without navigating."""


__all__ = ["CapabilityDriver"]
