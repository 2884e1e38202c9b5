"""Main FastAPI server for the Amazon cart relay (MCP over SSE)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

from fastapi import FastAPI, Depends, Request
from fastapi.responses import Response, ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from cart_relay.state import RuntimeDeps
from cart_relay.config.jsonrpc import SERVER_NAME
from cart_relay.handlers.auth import require_auth
from cart_relay.runtime.settings import load_settings
from cart_relay.runtime.logging import configure_logging
from cart_relay.handlers.rpc.message import handle_message
from cart_relay.handlers.sse.stream import open_event_stream
from cart_relay.runtime.dependencies import build_runtime_deps
from cart_relay.config.http import (
    SSE_ENDPOINT_PATH,
    SESSION_QUERY_PARAM,
    HEALTH_ENDPOINT_PATH,
    MESSAGE_ENDPOINT_PATH,
)

logger = logging.getLogger(__name__)

configure_logging()

DepsFactory = Callable[[], Awaitable[RuntimeDeps]]


def _runtime_deps(request: Request) -> RuntimeDeps:
    runtime_deps = getattr(request.app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


def create_app(deps_factory: DepsFactory = build_runtime_deps) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = await deps_factory()
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(load_settings().http.cors_allow_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get(HEALTH_ENDPOINT_PATH, dependencies=[Depends(require_auth)])
    async def health() -> dict[str, str]:
        return {"status": "ok", "server": SERVER_NAME}

    @app.get(SSE_ENDPOINT_PATH, dependencies=[Depends(require_auth)])
    async def sse(request: Request) -> Response:
        return await open_event_stream(request, _runtime_deps(request))

    @app.post(MESSAGE_ENDPOINT_PATH, dependencies=[Depends(require_auth)])
    async def message(request: Request) -> Response:
        raw = await request.body()
        session_id = request.query_params.get(SESSION_QUERY_PARAM) or None
        return await handle_message(raw, _runtime_deps(request), session_id=session_id)

    return app


app = create_app()
