from __future__ import annotations
from typing import TYPE_CHECKING

from owotnes.lifecycle.shutdown_protocol import IShutdownHandler
from owotnes.models.enums import LogCategory
from owotnes.utils.logger import get_logger

if TYPE_CHECKING:
    from owotnes.transport.websocket_transport import WebSocketTransport

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TransportShutdownHandler(IShutdownHandler):
    """
    Closes the canvas WebSocket and stops the reconnect loop.

    Priority: 100 (after the session, so the last render tick is not cut off mid-send)
    """

    def __init__(self, transport: "WebSocketTransport"):
        self.transport = transport

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Closing canvas connection...")
        await self.transport.stop()
