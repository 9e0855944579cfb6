"""
APIServerWrapper - runs uvicorn inside the bridge's event loop.

uvicorn's own signal handlers are disabled so SIGINT/SIGTERM reach the
ShutdownCoordinator; stop() asks the server to exit and waits for serve().
"""

from __future__ import annotations
import asyncio
from typing import Optional

import uvicorn
from fastapi import FastAPI

from owotnes.models.enums import LogCategory
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:

    def __init__(self, app: FastAPI, host: str = "127.0.0.1", port: int = 8000):
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._serving = False

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level="warning",
            access_log=False,
            server_header=False,
        )
        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore
        return server

    async def start(self) -> None:
        """Serve until stop() is called. Schedule with create_tracked_task()."""
        if self._serving:
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._serving = True
        log.info(f"🌐 Launching API server on http://{self.host}:{self.port}")
        try:
            await self._server.serve()
        finally:
            self._serving = False
            log.debug("API server serve() returned")

    async def stop(self, timeout: float = 3.0) -> None:
        if self._server is None or not self._serving:
            log.debug("API server not running")
            return

        log.info("🌐 Stopping API server...")
        self._server.should_exit = True

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self._serving and loop.time() < deadline:
            await asyncio.sleep(0.05)

        if self._serving:
            log.warn("🌐 API server did not exit in time, forcing")
            self._server.force_exit = True

    @property
    def is_running(self) -> bool:
        return self._serving
