"""Declarative tool catalog entries (dataclasses only)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from dataclasses import dataclass
from collections.abc import Callable, Awaitable

if TYPE_CHECKING:
    from cart_relay.driver.base import CapabilityDriver
    from cart_relay.state.operation import OperationResult
    from cart_relay.credentials.store import CredentialStore

_JSON_TYPES = {"string", "integer", "number", "boolean"}


@dataclass(frozen=True, slots=True)
class ToolContext:
    driver: CapabilityDriver
    credentials: CredentialStore


ToolHandler = Callable[[ToolContext, dict[str, Any]], Awaitable["OperationResult"]]


@dataclass(frozen=True, slots=True)
class ParamSpec:
    name: str
    type: str
    description: str
    required: bool = False
    default: Any = None
    minimum: float | None = None

    def __post_init__(self) -> None:
        if self.type not in _JSON_TYPES:
            raise ValueError(f"unsupported parameter type {self.type!r} for {self.name!r}")

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        return schema


@dataclass(frozen=True, slots=True)
class ToolSpec:
    name: str
    description: str
    handler: ToolHandler
    params: tuple[ParamSpec, ...] = ()
    # At most one group: exactly one of these params must be supplied.
    exactly_one_of: tuple[str, ...] = ()
    # Capture cookies after the call; the site may have rotated them.
    refreshes_credentials: bool = True

    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.params},
        }
        required = [p.name for p in self.params if p.required]
        if required:
            schema["required"] = required
        return schema

    def descriptor(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


__all__ = ["ParamSpec", "ToolContext", "ToolHandler", "ToolSpec"]
