from __future__ import annotations
from typing import TYPE_CHECKING

from owotnes.lifecycle.shutdown_protocol import IShutdownHandler
from owotnes.models.enums import LogCategory
from owotnes.utils.logger import get_logger

if TYPE_CHECKING:
    from owotnes.lifecycle.api_server_wrapper import APIServerWrapper

log = get_logger().for_category(LogCategory.SHUTDOWN)


class APIServerShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the admin API server (FastAPI + Uvicorn).

    Priority: 90
    """

    def __init__(self, api_wrapper: "APIServerWrapper"):
        self.api_wrapper = api_wrapper

    @property
    def shutdown_priority(self) -> int:
        return 90

    async def shutdown(self) -> None:
        if not self.api_wrapper.is_running:
            log.debug("API server not running")
            return
        log.info("Stopping API server...")
        await self.api_wrapper.stop()
