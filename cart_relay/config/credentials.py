"""Credential (cookie) persistence configuration."""

from __future__ import annotations

from pathlib import Path

ENV_COOKIES_FILE = "COOKIES_FILE"
DEFAULT_COOKIES_FILE = Path("user-data") / "amazon-session-cookies.json"

ENV_SESSION_AUTOSAVE_INTERVAL_S = "SESSION_AUTOSAVE_INTERVAL_S"
DEFAULT_SESSION_AUTOSAVE_INTERVAL_S = 5 * 60.0

# Session-only cookies are stored with this much lifetime.
ENV_SESSION_PERSIST_DAYS = "SESSION_PERSIST_DAYS"
DEFAULT_SESSION_PERSIST_DAYS = 365.0

ENV_SHUTDOWN_SAVE_TIMEOUT_S = "SHUTDOWN_SAVE_TIMEOUT_S"
DEFAULT_SHUTDOWN_SAVE_TIMEOUT_S = 10.0

# The account widget greets everyone; anonymous visitors get "Hello, sign in".
LOGGED_IN_GREETING = "Hello"
LOGGED_OUT_MARKER = "sign in"

__all__ = [
    "DEFAULT_COOKIES_FILE",
    "DEFAULT_SESSION_AUTOSAVE_INTERVAL_S",
    "DEFAULT_SESSION_PERSIST_DAYS",
    "DEFAULT_SHUTDOWN_SAVE_TIMEOUT_S",
    "ENV_COOKIES_FILE",
    "ENV_SESSION_AUTOSAVE_INTERVAL_S",
    "ENV_SESSION_PERSIST_DAYS",
    "ENV_SHUTDOWN_SAVE_TIMEOUT_S",
    "LOGGED_IN_GREETING",
    "LOGGED_OUT_MARKER",
]
