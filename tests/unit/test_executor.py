from __future__ import annotations

import asyncio
from pathlib import Path

import orjson
import pytest

from fakes import FakeDriver, make_settings, make_runtime_deps

from cart_relay.driver.lease import DriverLease
from cart_relay.errors import DriverTimeoutError
from cart_relay.tools import ToolExecutor, build_tool_registry
from cart_relay.credentials.store import CredentialStore


def _executor(tmp_path: Path, driver: FakeDriver, *, timeout_s: float = 5.0) -> ToolExecutor:
    credentials = CredentialStore(tmp_path / "cookies.json", domain_filter="amazon.com", persist_ttl_s=3600.0)
    return ToolExecutor(build_tool_registry(), DriverLease(driver, timeout_s=timeout_s), credentials)


@pytest.mark.asyncio
async def test_unknown_tool_is_a_failed_result(tmp_path: Path) -> None:
    driver = FakeDriver()
    result = await _executor(tmp_path, driver).execute("buy_everything", {})

    assert result.success is False
    assert result.message == "Tool not found: buy_everything"
    assert driver.calls == []


@pytest.mark.asyncio
async def test_invalid_arguments_never_reach_the_driver(tmp_path: Path) -> None:
    driver = FakeDriver()
    result = await _executor(tmp_path, driver).execute("add_to_cart", {"asin": "B1", "query": "x"})

    assert result.success is False
    assert result.message == "Invalid arguments for add_to_cart"
    assert "exactly one" in (result.error or "")
    assert driver.calls == []


@pytest.mark.asyncio
async def test_successful_call_refreshes_saved_cookies(tmp_path: Path) -> None:
    driver = FakeDriver()
    result = await _executor(tmp_path, driver).execute("search_amazon", {"query": "usb cable"})

    assert result.success is True
    assert result.message == "Found 2 products"
    assert driver.calls[0] == ("search", "usb cable")
    assert driver.called("cookies") == 1
    assert [c["name"] for c in orjson.loads((tmp_path / "cookies.json").read_bytes())] == ["session-id"]


@pytest.mark.asyncio
async def test_add_to_cart_forwards_defaults(tmp_path: Path) -> None:
    driver = FakeDriver()
    result = await _executor(tmp_path, driver).execute("add_to_cart", {"asin": "B000123"})

    assert result.success is True
    assert driver.calls[0] == ("add_to_cart", {"asin": "B000123", "query": None, "quantity": 1})


@pytest.mark.asyncio
async def test_save_session_captures_once(tmp_path: Path) -> None:
    driver = FakeDriver()
    result = await _executor(tmp_path, driver).execute("save_session", None)

    assert result.success is True
    assert driver.called("cookies") == 1
    assert (tmp_path / "cookies.json").exists()


@pytest.mark.asyncio
async def test_driver_timeout_is_retryable_failure(tmp_path: Path) -> None:
    driver = FakeDriver(delay_s=1.0)
    result = await _executor(tmp_path, driver, timeout_s=0.05).execute("view_cart", {})

    assert result.success is False
    assert result.retryable is True
    assert "timed out" in (result.error or "")


@pytest.mark.asyncio
async def test_driver_exception_is_failed_result(tmp_path: Path) -> None:
    driver = FakeDriver()
    driver.raise_on.add("check_login")
    result = await _executor(tmp_path, driver).execute("check_login", {})

    assert result.success is False
    assert result.retryable is False
    assert result.error == "check_login exploded"


@pytest.mark.asyncio
async def test_calls_are_serialised_on_one_driver(tmp_path: Path) -> None:
    driver = FakeDriver(delay_s=0.02)
    executor = _executor(tmp_path, driver)

    results = await asyncio.gather(
        executor.execute("search_amazon", {"query": "a"}),
        executor.execute("view_cart", {}),
        executor.execute("check_login", {}),
    )

    assert all(r.success for r in results)
    assert driver.max_active == 1


@pytest.mark.asyncio
async def test_lease_call_raises_typed_timeout() -> None:
    driver = FakeDriver(delay_s=1.0)
    lease = DriverLease(driver, timeout_s=0.05)

    with pytest.raises(DriverTimeoutError) as exc:
        await lease.call(lambda d: d.view_cart(), operation="view_cart")
    assert exc.value.operation == "view_cart"
    assert lease.busy is False


@pytest.mark.asyncio
async def test_runtime_save_credentials(tmp_path: Path) -> None:
    driver = FakeDriver()
    deps = make_runtime_deps(make_settings(tmp_path), driver)

    await deps.save_credentials()
    assert (tmp_path / "cookies.json").exists()

    await deps.shutdown()
    assert driver.closed is True
