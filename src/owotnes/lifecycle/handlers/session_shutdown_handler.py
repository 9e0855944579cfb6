"""
BridgeSession shutdown handler.

Stops the producer and render loops first so nothing new is written to the
canvas while the rest of the process winds down.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from owotnes.lifecycle.shutdown_protocol import IShutdownHandler
from owotnes.models.enums import LogCategory
from owotnes.utils.logger import get_logger

if TYPE_CHECKING:
    from owotnes.services.bridge_session import BridgeSession

log = get_logger().for_category(LogCategory.SHUTDOWN)


class SessionShutdownHandler(IShutdownHandler):

    def __init__(self, session: "BridgeSession"):
        self.session = session

    @property
    def shutdown_priority(self) -> int:
        return 120  # stop rendering early

    async def shutdown(self) -> None:
        log.info("Stopping bridge session...")
        await self.session.stop()
