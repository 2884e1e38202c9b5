"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    # Empty token disables authentication entirely.
    token: str


@dataclass(frozen=True, slots=True)
class HttpSettings:
    cors_allow_origins: tuple[str, ...]
    host: str = "0.0.0.0"
    port: int = 3000
    graceful_shutdown_timeout_s: float = 5.0


@dataclass(frozen=True, slots=True)
class StreamSettings:
    heartbeat_interval_s: float
    queue_max: int
    max_sessions: int


@dataclass(frozen=True, slots=True)
class CredentialSettings:
    cookies_file: Path
    domain_filter: str
    autosave_interval_s: float
    persist_ttl_s: float
    shutdown_save_timeout_s: float


@dataclass(frozen=True, slots=True)
class BrowserSettings:
    domain: str
    user_data_dir: Path
    headless: bool
    navigation_timeout_s: float
    operation_timeout_s: float
    search_result_limit: int

    @property
    def base_url(self) -> str:
        return f"https://www.{self.domain}"


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    http: HttpSettings
    stream: StreamSettings
    credentials: CredentialSettings
    browser: BrowserSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "BrowserSettings",
    "CredentialSettings",
    "HttpSettings",
    "StreamSettings",
]
