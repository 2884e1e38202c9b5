"""Test doubles shared by the unit tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any
from dataclasses import dataclass
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import httpx
import orjson
import uvicorn
from fastapi import FastAPI

from cart_relay.state import RuntimeDeps
from cart_relay.driver.lease import DriverLease
from cart_relay.driver.base import CapabilityDriver
from cart_relay.runtime.periodic import PeriodicTask
from cart_relay.runtime.serving import RelayServer
from cart_relay.state.operation import OperationResult
from cart_relay.credentials.store import CredentialStore
from cart_relay.handlers.rpc.dispatch import ProtocolDispatcher
from cart_relay.tools import ToolExecutor, build_tool_registry
from cart_relay.handlers.sse.directory import SessionDirectory
from cart_relay.state.settings import (
    AppSettings,
    AuthSettings,
    HttpSettings,
    StreamSettings,
    BrowserSettings,
    CredentialSettings,
)

NOW = 1_700_000_000.0


class FakeDriver(CapabilityDriver):
    """In-memory driver; records calls and can be slowed down or made to fail."""

    def __init__(self, *, delay_s: float = 0.0, greeting: str = "Hello, Ada") -> None:
        self.delay_s = delay_s
        self.greeting = greeting
        self.calls: list[tuple[str, Any]] = []
        self.jar: list[dict[str, Any]] = [
            {"name": "session-id", "value": "abc", "domain": ".amazon.com", "path": "/", "expires": -1},
        ]
        self.raise_on: set[str] = set()
        self.active = 0
        self.max_active = 0
        self.started = False
        self.closed = False

    async def _enter(self, name: str, payload: Any = None) -> None:
        self.calls.append((name, payload))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay_s:
                await asyncio.sleep(self.delay_s)
            if name in self.raise_on:
                raise RuntimeError(f"{name} exploded")
        finally:
            self.active -= 1

    async def start(self) -> None:
        self.started = True

    async def close(self) -> None:
        self.closed = True

    async def open_home(self) -> None:
        self.calls.append(("open_home", None))

    async def search(self, query: str) -> OperationResult:
        await self._enter("search", query)
        results = [{"title": f"{query} {i}", "asin": f"B00{i}", "price": "$1.00"} for i in range(2)]
        return OperationResult.ok(f"Found {len(results)} products", results)

    async def add_to_cart(self, *, asin=None, query=None, quantity=1) -> OperationResult:
        await self._enter("add_to_cart", {"asin": asin, "query": query, "quantity": quantity})
        return OperationResult.ok(f'Added "Widget" to cart (quantity: {quantity})')

    async def view_cart(self) -> OperationResult:
        await self._enter("view_cart")
        return OperationResult.ok("Cart is empty", {"items": [], "subtotal": "$0.00"})

    async def check_login(self) -> OperationResult:
        await self._enter("check_login")
        return OperationResult.ok("Logged in to Amazon", {"loggedIn": True})

    async def cookies(self) -> list[dict[str, Any]]:
        self.calls.append(("cookies", None))
        return [dict(c) for c in self.jar]

    async def add_cookies(self, cookies: list[dict[str, Any]]) -> None:
        self.calls.append(("add_cookies", cookies))
        self.jar = [dict(c) for c in cookies]

    async def account_greeting(self) -> str:
        return self.greeting

    def called(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)


def make_settings(
    tmp_path: Path,
    *,
    token: str = "",
    operation_timeout_s: float = 5.0,
    max_sessions: int = 4,
    heartbeat_interval_s: float = 60.0,
) -> AppSettings:
    browser = BrowserSettings(
        domain="amazon.com",
        user_data_dir=tmp_path / "profile",
        headless=True,
        navigation_timeout_s=5.0,
        operation_timeout_s=operation_timeout_s,
        search_result_limit=5,
    )
    return AppSettings(
        auth=AuthSettings(token=token),
        http=HttpSettings(cors_allow_origins=("*",)),
        stream=StreamSettings(heartbeat_interval_s=heartbeat_interval_s, queue_max=64, max_sessions=max_sessions),
        credentials=CredentialSettings(
            cookies_file=tmp_path / "cookies.json",
            domain_filter="amazon.com",
            autosave_interval_s=60.0,
            persist_ttl_s=365 * 24 * 3600.0,
            shutdown_save_timeout_s=1.0,
        ),
        browser=browser,
    )


def make_runtime_deps(settings: AppSettings, driver: CapabilityDriver) -> RuntimeDeps:
    credentials = CredentialStore(
        settings.credentials.cookies_file,
        domain_filter=settings.credentials.domain_filter,
        persist_ttl_s=settings.credentials.persist_ttl_s,
        now_fn=lambda: NOW,
    )
    lease = DriverLease(driver, timeout_s=settings.browser.operation_timeout_s)
    sessions = SessionDirectory(
        heartbeat_interval_s=settings.stream.heartbeat_interval_s,
        queue_max=settings.stream.queue_max,
        max_sessions=settings.stream.max_sessions,
    )

    async def _noop() -> None:
        return None

    return RuntimeDeps(
        settings=settings,
        sessions=sessions,
        dispatcher=ProtocolDispatcher(ToolExecutor(build_tool_registry(), lease, credentials)),
        credentials=credentials,
        lease=lease,
        driver=driver,
        # Never started in tests; shutdown() must cope with that.
        autosave=PeriodicTask(_noop, interval_s=60.0, name="autosave"),
    )


def message_payloads(frames: list[str]) -> list[dict[str, Any]]:
    """Decode the JSON data of every `message` event among `frames`."""
    return [orjson.loads(frame_data(frame)) for frame in frames if frame.startswith("event: message\n")]


@dataclass(slots=True)
class LiveServer:
    server: RelayServer
    task: asyncio.Task
    base_url: str


@asynccontextmanager
async def serving(app: FastAPI) -> AsyncIterator[LiveServer]:
    """Serve `app` with a real uvicorn server on a free local port."""
    config = uvicorn.Config(app, host="127.0.0.1", port=0, log_config=None, timeout_graceful_shutdown=5)
    server = RelayServer(config, app)
    task = asyncio.create_task(server.serve())
    try:
        while not server.started:
            if task.done():
                await task
                raise RuntimeError("uvicorn exited during startup")
            await asyncio.sleep(0.01)
        port = server.servers[0].sockets[0].getsockname()[1]
        yield LiveServer(server=server, task=task, base_url=f"http://127.0.0.1:{port}")
    finally:
        server.should_exit = True
        await asyncio.wait_for(task, timeout=10)


class SseReader:
    """Split a streamed response body into SSE frames."""

    def __init__(self, response: httpx.Response) -> None:
        self._chunks = response.aiter_text()
        self._buffer = ""

    async def next_frame(self) -> str:
        while "\n\n" not in self._buffer:
            self._buffer += await anext(self._chunks)
        frame, self._buffer = self._buffer.split("\n\n", 1)
        return f"{frame}\n\n"

    async def next_event(self, event: str) -> str:
        while True:
            frame = await self.next_frame()
            if frame.startswith(f"event: {event}\n"):
                return frame


def frame_data(frame: str) -> str:
    return "\n".join(line[len("data: ") :] for line in frame.splitlines() if line.startswith("data: "))
