"""Logging initialization."""

from __future__ import annotations

import os
import logging

from cart_relay.config.logging import LOG_LEVEL, LOG_FORMAT, ENV_SHOW_ACCESS_LOGS


def configure_logging() -> None:
    # Clients poll /message constantly; keep uvicorn's access log quiet unless asked.
    if (os.getenv(ENV_SHOW_ACCESS_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
