from __future__ import annotations

from pathlib import Path
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from fakes import FakeDriver, make_settings, make_runtime_deps

from cart_relay.server import create_app

TOKEN = "s3cret"
AUTH = {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def client(tmp_path: Path, driver: FakeDriver) -> Iterator[TestClient]:
    async def _factory():
        return make_runtime_deps(make_settings(tmp_path, token=TOKEN), driver)

    with TestClient(create_app(_factory)) as test_client:
        yield test_client


def test_health_requires_token(client: TestClient) -> None:
    assert client.get("/health").status_code == 401
    assert client.get("/health", headers={"Authorization": "Bearer wrong"}).status_code == 401


def test_health(client: TestClient) -> None:
    response = client.get("/health", headers=AUTH)
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "server": "amazon-cart-server"}


def test_token_in_query_string(client: TestClient) -> None:
    assert client.get(f"/health?token={TOKEN}").status_code == 200


def test_message_requires_token(client: TestClient, driver: FakeDriver) -> None:
    response = client.post("/message", content=b'{"id": 1, "method": "ping"}')
    assert response.status_code == 401
    assert driver.calls == []


def test_message_without_stream(client: TestClient) -> None:
    response = client.post("/message", headers=AUTH, content=b'{"jsonrpc": "2.0", "id": 1, "method": "tools/list"}')
    assert response.status_code == 503
    assert response.json()["error"]["code"] == -32000


def test_message_parse_error(client: TestClient) -> None:
    response = client.post("/message", headers=AUTH, content=b"not json")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32700


def test_message_notification(client: TestClient) -> None:
    body = b'{"jsonrpc": "2.0", "method": "notifications/initialized"}'
    assert client.post("/message", headers=AUTH, content=body).status_code == 202


def test_shutdown_saves_credentials_and_closes_driver(tmp_path: Path, driver: FakeDriver) -> None:
    async def _factory():
        return make_runtime_deps(make_settings(tmp_path), driver)

    with TestClient(create_app(_factory)) as test_client:
        assert test_client.get("/health").status_code == 200

    assert driver.closed is True
    assert (tmp_path / "cookies.json").exists()
