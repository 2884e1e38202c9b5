"""uvicorn server that ends the event streams as soon as exit is requested."""

from __future__ import annotations

import socket
import logging

import uvicorn
from fastapi import FastAPI

logger = logging.getLogger(__name__)


class RelayServer(uvicorn.Server):
    """Event streams never finish on their own, so uvicorn would wait on them forever.

    Streams are ended on the first tick that sees an exit request. After uvicorn's
    own shutdown the runtime is released again, which is a no-op when the lifespan
    already did it and the only release when a forced exit skipped the lifespan.
    """

    def __init__(self, config: uvicorn.Config, app: FastAPI) -> None:
        super().__init__(config)
        self._app = app
        self._streams_ended = False

    async def on_tick(self, counter: int) -> bool:
        should_exit = await super().on_tick(counter)
        if should_exit and not self._streams_ended:
            self._streams_ended = True
            await self._end_streams()
        return should_exit

    async def shutdown(self, sockets: list[socket.socket] | None = None) -> None:
        await super().shutdown(sockets)
        runtime_deps = getattr(self._app.state, "runtime_deps", None)
        if runtime_deps is None:
            return
        if self.force_exit:
            logger.warning("forced exit: releasing runtime without lifespan shutdown")
        await runtime_deps.shutdown()

    async def _end_streams(self) -> None:
        runtime_deps = getattr(self._app.state, "runtime_deps", None)
        if runtime_deps is None:
            return
        count = runtime_deps.sessions.get_session_count()
        if count:
            logger.info("exit requested: ending %s open stream(s)", count)
        await runtime_deps.sessions.shutdown()


__all__ = ["RelayServer"]
