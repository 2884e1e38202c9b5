from __future__ import annotations

import pytest

from cart_relay.errors import InvalidRequestError
from cart_relay.handlers.rpc.parser import parse_request, peek_request_id
from cart_relay.config.jsonrpc import RPC_PARSE_ERROR, RPC_INVALID_REQUEST


def test_parse_request_ok() -> None:
    req = parse_request(b'{"jsonrpc": "2.0", "id": 7, "method": "tools/list", "params": {"x": 1}}')
    assert req.method == "tools/list"
    assert req.id == 7
    assert req.params == {"x": 1}
    assert req.is_notification is False


def test_parse_request_absent_id_is_notification() -> None:
    req = parse_request('{"jsonrpc": "2.0", "method": "notifications/initialized"}')
    assert req.is_notification is True
    assert req.params == {}


@pytest.mark.parametrize("raw_id, expected", [("0", 0), ("null", None), ('"abc"', "abc")])
def test_parse_request_zero_and_null_ids_are_requests(raw_id: str, expected: object) -> None:
    req = parse_request(f'{{"jsonrpc": "2.0", "id": {raw_id}, "method": "ping"}}')
    assert req.is_notification is False
    assert req.id == expected


def test_parse_request_null_params_become_empty() -> None:
    req = parse_request('{"id": 1, "method": "ping", "params": null}')
    assert req.params == {}


def test_parse_request_bad_json_is_parse_error() -> None:
    with pytest.raises(InvalidRequestError) as exc:
        parse_request(b"{not json")
    assert exc.value.code == RPC_PARSE_ERROR


@pytest.mark.parametrize(
    "raw",
    [
        "[]",
        '"ping"',
        '{"id": 1}',
        '{"id": 1, "method": ""}',
        '{"id": 1, "method": 5}',
        '{"id": true, "method": "ping"}',
        '{"id": {"a": 1}, "method": "ping"}',
        '{"id": 1, "method": "ping", "params": [1, 2]}',
    ],
)
def test_parse_request_invalid(raw: str) -> None:
    with pytest.raises(InvalidRequestError) as exc:
        parse_request(raw)
    assert exc.value.code == RPC_INVALID_REQUEST


def test_peek_request_id() -> None:
    assert peek_request_id('{"id": 3, "method": 5}') == 3
    assert peek_request_id("garbage") is None
    assert peek_request_id('{"id": [1]}') is None
