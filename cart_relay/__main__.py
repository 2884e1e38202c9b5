"""Run the relay: ``python -m cart_relay``."""

from __future__ import annotations

import uvicorn

from cart_relay.server import app
from cart_relay.runtime.serving import RelayServer
from cart_relay.runtime.settings import load_settings


def main() -> int:
    http = load_settings().http
    # One process only: the browser context and the stream directory live in memory.
    config = uvicorn.Config(
        app,
        host=http.host,
        port=http.port,
        workers=1,
        log_config=None,
        timeout_graceful_shutdown=http.graceful_shutdown_timeout_s,
    )
    RelayServer(config, app).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
