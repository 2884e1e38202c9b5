"""Serialized authentication cookie."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass, replace
from collections.abc import Mapping

_SAME_SITE_VALUES = {"Strict", "Lax", "None"}


@dataclass(frozen=True, slots=True)
class Cookie:
    name: str
    value: str
    domain: str
    path: str = "/"
    # Seconds since epoch; <= 0 means "session only" in browser terms.
    expires: float = -1.0
    http_only: bool = False
    secure: bool = False
    same_site: str = "Lax"

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Cookie:
        """Build from a browser/file record (Playwright key names)."""
        name = record.get("name")
        value = record.get("value")
        domain = record.get("domain")
        if not isinstance(name, str) or not name or not isinstance(value, str) or not isinstance(domain, str):
            raise ValueError("cookie record needs string name, value and domain")
        if not domain:
            raise ValueError("cookie record has an empty domain")

        expires_raw = record.get("expires")
        if isinstance(expires_raw, bool) or not isinstance(expires_raw, (int, float)):
            expires = -1.0
        else:
            expires = float(expires_raw)

        same_site = record.get("sameSite")
        return cls(
            name=name,
            value=value,
            domain=domain,
            path=record.get("path") or "/",
            expires=expires,
            http_only=bool(record.get("httpOnly", False)),
            secure=bool(record.get("secure", False)),
            same_site=same_site if same_site in _SAME_SITE_VALUES else "Lax",
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "expires": self.expires,
            "httpOnly": self.http_only,
            "secure": self.secure,
            "sameSite": self.same_site,
        }

    @property
    def is_session(self) -> bool:
        return self.expires <= 0

    def is_expired(self, now: float) -> bool:
        return self.expires <= now

    def persistent(self, expires_at: float) -> Cookie:
        return replace(self, expires=expires_at) if self.is_session else self

    def matches_domain(self, site_domain: str) -> bool:
        host = self.domain.lstrip(".").lower()
        site = site_domain.lstrip(".").lower()
        return host == site or host.endswith("." + site)


__all__ = ["Cookie"]
