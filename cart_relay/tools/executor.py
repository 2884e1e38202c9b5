"""Run a named tool: validate, serialise onto the driver, turn failures into data."""

from __future__ import annotations

import logging
from typing import Any

from cart_relay.driver.lease import DriverLease
from cart_relay.errors import ToolArgumentsError
from cart_relay.driver.base import CapabilityDriver
from cart_relay.state.operation import OperationResult
from cart_relay.state.tools import ToolSpec, ToolContext
from cart_relay.credentials.store import CredentialStore

from .registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolExecutor:
    def __init__(self, registry: ToolRegistry, lease: DriverLease, credentials: CredentialStore) -> None:
        self.registry = registry
        self._lease = lease
        self._credentials = credentials

    async def execute(self, name: str, arguments: Any) -> OperationResult:
        tool = self.registry.get(name)
        if tool is None:
            logger.info("tools: unknown tool %r", name)
            return OperationResult.failure(f"Tool not found: {name}", "tool_not_found")

        try:
            args = self.registry.validate(name, arguments)
        except ToolArgumentsError as exc:
            logger.info("tools: rejected arguments for %s: %s", name, exc.message)
            return OperationResult.failure(f"Invalid arguments for {name}", exc.message)

        logger.info("tools: calling %s", name)
        result = await self._lease.run(lambda driver: self._invoke(tool, driver, args), operation=name)
        logger.info("tools: %s -> success=%s", name, result.success)
        return result

    async def _invoke(self, tool: ToolSpec, driver: CapabilityDriver, args: dict[str, Any]) -> OperationResult:
        result = await tool.handler(ToolContext(driver=driver, credentials=self._credentials), args)
        if tool.refreshes_credentials:
            await self._credentials.capture(driver)
        return result


__all__ = ["ToolExecutor"]
