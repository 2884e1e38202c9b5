from __future__ import annotations

from starlette.requests import Request

from cart_relay.handlers.auth import validate_token, get_provided_token


def _request(*, headers: dict[str, str] | None = None, query: str = "") -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/health",
        "query_string": query.encode("latin-1"),
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()],
    }
    return Request(scope)


def test_validate_token_open_when_unconfigured() -> None:
    assert validate_token("", "") is True
    assert validate_token("anything", "") is True


def test_validate_token_matches() -> None:
    assert validate_token("secret", "secret") is True
    assert validate_token("wrong", "secret") is False
    assert validate_token("", "secret") is False


def test_provided_token_from_bearer_header() -> None:
    assert get_provided_token(_request(headers={"Authorization": "Bearer  secret "})) == "secret"
    assert get_provided_token(_request(headers={"Authorization": "bearer secret"})) == "secret"


def test_provided_token_from_query_param() -> None:
    assert get_provided_token(_request(query="token=secret")) == "secret"
    assert get_provided_token(_request(headers={"Authorization": "Basic xyz"}, query="token=q")) == "q"


def test_provided_token_missing() -> None:
    assert get_provided_token(_request()) == ""
