"""Inbound JSON-RPC request envelope."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RequestEnvelope:
    method: str
    # Only meaningful when has_id is true; a null id is still a request.
    id: Any = None
    has_id: bool = False
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def is_notification(self) -> bool:
        return not self.has_id


__all__ = ["RequestEnvelope"]
