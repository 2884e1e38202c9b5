"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
from pathlib import Path

from cart_relay.config.secrets import ENV_AUTH_TOKEN
from cart_relay.config.http import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_CORS_ALLOW_ORIGINS,
    DEFAULT_CORS_ALLOW_ORIGINS,
    ENV_GRACEFUL_SHUTDOWN_TIMEOUT_S,
    DEFAULT_GRACEFUL_SHUTDOWN_TIMEOUT_S,
)
from cart_relay.state.settings import (
    AppSettings,
    AuthSettings,
    HttpSettings,
    StreamSettings,
    BrowserSettings,
    CredentialSettings,
)
from cart_relay.config.sse import (
    MIN_SSE_QUEUE_MAX,
    ENV_SSE_QUEUE_MAX,
    DEFAULT_SSE_QUEUE_MAX,
    ENV_MAX_CONCURRENT_STREAMS,
    ENV_SSE_HEARTBEAT_INTERVAL_S,
    DEFAULT_MAX_CONCURRENT_STREAMS,
    DEFAULT_SSE_HEARTBEAT_INTERVAL_S,
)
from cart_relay.config.credentials import (
    ENV_COOKIES_FILE,
    DEFAULT_COOKIES_FILE,
    ENV_SESSION_PERSIST_DAYS,
    ENV_SHUTDOWN_SAVE_TIMEOUT_S,
    DEFAULT_SESSION_PERSIST_DAYS,
    DEFAULT_SHUTDOWN_SAVE_TIMEOUT_S,
    ENV_SESSION_AUTOSAVE_INTERVAL_S,
    DEFAULT_SESSION_AUTOSAVE_INTERVAL_S,
)
from cart_relay.config.browser import (
    ENV_HEADLESS,
    DEFAULT_HEADLESS,
    ENV_AMAZON_DOMAIN,
    ENV_USER_DATA_DIR,
    DEFAULT_AMAZON_DOMAIN,
    DEFAULT_USER_DATA_DIR,
    ENV_SEARCH_RESULT_LIMIT,
    DEFAULT_SEARCH_RESULT_LIMIT,
    ENV_DRIVER_OPERATION_TIMEOUT_S,
    ENV_BROWSER_NAVIGATION_TIMEOUT_S,
    DEFAULT_DRIVER_OPERATION_TIMEOUT_S,
    DEFAULT_BROWSER_NAVIGATION_TIMEOUT_S,
)

_SECONDS_PER_DAY = 24 * 60 * 60


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _path_env(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()


def _load_auth_settings() -> AuthSettings:
    token = (os.getenv(ENV_AUTH_TOKEN) or "").strip()
    return AuthSettings(token=token)


def _load_http_settings() -> HttpSettings:
    raw = _str_env(ENV_CORS_ALLOW_ORIGINS, DEFAULT_CORS_ALLOW_ORIGINS)
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    port = _int_env(ENV_PORT, DEFAULT_PORT)
    return HttpSettings(
        cors_allow_origins=origins or (DEFAULT_CORS_ALLOW_ORIGINS,),
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=port if 0 < port < 65536 else DEFAULT_PORT,
        graceful_shutdown_timeout_s=max(
            0.1, _float_env(ENV_GRACEFUL_SHUTDOWN_TIMEOUT_S, DEFAULT_GRACEFUL_SHUTDOWN_TIMEOUT_S)
        ),
    )


def _load_stream_settings() -> StreamSettings:
    heartbeat = _float_env(ENV_SSE_HEARTBEAT_INTERVAL_S, DEFAULT_SSE_HEARTBEAT_INTERVAL_S)
    if heartbeat <= 0:
        heartbeat = DEFAULT_SSE_HEARTBEAT_INTERVAL_S
    return StreamSettings(
        heartbeat_interval_s=heartbeat,
        queue_max=max(MIN_SSE_QUEUE_MAX, _int_env(ENV_SSE_QUEUE_MAX, DEFAULT_SSE_QUEUE_MAX)),
        max_sessions=max(1, _int_env(ENV_MAX_CONCURRENT_STREAMS, DEFAULT_MAX_CONCURRENT_STREAMS)),
    )


def _load_browser_settings() -> BrowserSettings:
    domain = _str_env(ENV_AMAZON_DOMAIN, DEFAULT_AMAZON_DOMAIN).lower().removeprefix("www.")
    navigation_timeout_s = _float_env(ENV_BROWSER_NAVIGATION_TIMEOUT_S, DEFAULT_BROWSER_NAVIGATION_TIMEOUT_S)
    return BrowserSettings(
        domain=domain,
        user_data_dir=_path_env(ENV_USER_DATA_DIR, DEFAULT_USER_DATA_DIR),
        headless=_bool_env(ENV_HEADLESS, DEFAULT_HEADLESS),
        navigation_timeout_s=max(1.0, navigation_timeout_s),
        operation_timeout_s=max(1.0, _float_env(ENV_DRIVER_OPERATION_TIMEOUT_S, DEFAULT_DRIVER_OPERATION_TIMEOUT_S)),
        search_result_limit=max(1, _int_env(ENV_SEARCH_RESULT_LIMIT, DEFAULT_SEARCH_RESULT_LIMIT)),
    )


def _load_credential_settings(browser: BrowserSettings) -> CredentialSettings:
    autosave = _float_env(ENV_SESSION_AUTOSAVE_INTERVAL_S, DEFAULT_SESSION_AUTOSAVE_INTERVAL_S)
    if autosave <= 0:
        autosave = DEFAULT_SESSION_AUTOSAVE_INTERVAL_S
    persist_days = _float_env(ENV_SESSION_PERSIST_DAYS, DEFAULT_SESSION_PERSIST_DAYS)
    if persist_days <= 0:
        persist_days = DEFAULT_SESSION_PERSIST_DAYS
    return CredentialSettings(
        cookies_file=_path_env(ENV_COOKIES_FILE, DEFAULT_COOKIES_FILE),
        domain_filter=browser.domain,
        autosave_interval_s=autosave,
        persist_ttl_s=persist_days * _SECONDS_PER_DAY,
        shutdown_save_timeout_s=max(0.1, _float_env(ENV_SHUTDOWN_SAVE_TIMEOUT_S, DEFAULT_SHUTDOWN_SAVE_TIMEOUT_S)),
    )


def load_settings() -> AppSettings:
    browser = _load_browser_settings()
    return AppSettings(
        auth=_load_auth_settings(),
        http=_load_http_settings(),
        stream=_load_stream_settings(),
        credentials=_load_credential_settings(browser),
        browser=browser,
    )


__all__ = ["load_settings"]
