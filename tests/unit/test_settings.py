from __future__ import annotations

from pathlib import Path

import pytest

from cart_relay.runtime.settings import load_settings

_ENV = (
    "AUTH_TOKEN",
    "AMAZON_DOMAIN",
    "HEADLESS",
    "PORT",
    "CORS_ALLOW_ORIGINS",
    "SSE_HEARTBEAT_INTERVAL_S",
    "SSE_QUEUE_MAX",
    "GRACEFUL_SHUTDOWN_TIMEOUT_S",
    "COOKIES_FILE",
    "SESSION_PERSIST_DAYS",
    "SEARCH_RESULT_LIMIT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.auth.token == ""
    assert settings.browser.domain == "amazon.com"
    assert settings.browser.base_url == "https://www.amazon.com"
    assert settings.browser.headless is False
    assert settings.credentials.domain_filter == "amazon.com"
    assert settings.credentials.persist_ttl_s == 365 * 24 * 3600
    assert settings.stream.heartbeat_interval_s == 15.0
    assert settings.http.port == 3000
    assert settings.http.cors_allow_origins == ("*",)
    assert settings.http.graceful_shutdown_timeout_s == 5.0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("AUTH_TOKEN", " s3cret ")
    monkeypatch.setenv("AMAZON_DOMAIN", "www.amazon.co.uk")
    monkeypatch.setenv("HEADLESS", "true")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("COOKIES_FILE", str(tmp_path / "jar.json"))
    monkeypatch.setenv("SESSION_PERSIST_DAYS", "2")
    monkeypatch.setenv("SEARCH_RESULT_LIMIT", "10")
    monkeypatch.setenv("GRACEFUL_SHUTDOWN_TIMEOUT_S", "2.5")

    settings = load_settings()
    assert settings.auth.token == "s3cret"
    assert settings.browser.domain == "amazon.co.uk"
    assert settings.browser.base_url == "https://www.amazon.co.uk"
    assert settings.credentials.domain_filter == "amazon.co.uk"
    assert settings.browser.headless is True
    assert settings.browser.search_result_limit == 10
    assert settings.http.port == 8080
    assert settings.http.cors_allow_origins == ("https://a.example", "https://b.example")
    assert settings.credentials.cookies_file == tmp_path / "jar.json"
    assert settings.credentials.persist_ttl_s == 2 * 24 * 3600
    assert settings.http.graceful_shutdown_timeout_s == 2.5


def test_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSE_HEARTBEAT_INTERVAL_S", "soon")
    monkeypatch.setenv("SSE_QUEUE_MAX", "-4")
    monkeypatch.setenv("PORT", "99999")
    monkeypatch.setenv("SESSION_PERSIST_DAYS", "0")

    settings = load_settings()
    assert settings.stream.heartbeat_interval_s == 15.0
    assert settings.stream.queue_max == 2
    assert settings.http.port == 3000
    assert settings.credentials.persist_ttl_s == 365 * 24 * 3600


def test_queue_max_leaves_room_for_handshake(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSE_QUEUE_MAX", "1")
    assert load_settings().stream.queue_max == 2
