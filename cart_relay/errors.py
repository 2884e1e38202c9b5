"""Shared error types for the cart relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InvalidRequestError(Exception):
    """Raised when an inbound JSON-RPC message cannot be dispatched."""

    code: int
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ToolArgumentsError(Exception):
    """Raised when tool arguments do not match the registry schema."""

    tool: str
    message: str

    def __str__(self) -> str:
        return f"{self.tool}: {self.message}"


@dataclass(frozen=True, slots=True)
class DriverTimeoutError(Exception):
    """Raised when a driver operation exceeds its time budget."""

    operation: str
    timeout_s: float

    def __str__(self) -> str:
        return f"{self.operation} timed out after {self.timeout_s:g}s"


__all__ = ["DriverTimeoutError", "InvalidRequestError", "ToolArgumentsError"]
