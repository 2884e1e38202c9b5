"""Uniform result envelope returned by every capability driver call."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OperationResult:
    success: bool
    message: str
    data: Any = None
    error: str | None = None
    retryable: bool = False

    @classmethod
    def ok(cls, message: str, data: Any = None) -> OperationResult:
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(cls, message: str, error: str, *, retryable: bool = False) -> OperationResult:
        return cls(success=False, message=message, error=error, retryable=retryable)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        if self.error is not None:
            out["error"] = self.error
        if self.retryable:
            out["retryable"] = True
        return out


__all__ = ["OperationResult"]
