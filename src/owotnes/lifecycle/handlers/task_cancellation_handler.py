from __future__ import annotations
import asyncio
from typing import List

from owotnes.lifecycle.shutdown_protocol import IShutdownHandler
from owotnes.models.enums import LogCategory
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Cancels and awaits the long-running top-level tasks (transport, API).

    Priority: 40
    """

    def __init__(self, tasks: List[asyncio.Task]):
        self.tasks = tasks

    @property
    def shutdown_priority(self) -> int:
        """Tasks are cancelled after their owners had a chance to stop cleanly."""
        return 40

    async def shutdown(self) -> None:
        pending = [task for task in self.tasks if not task.done()]
        log.info(f"Cancelling {len(pending)} background task(s)...")

        for task in pending:
            task.cancel()
            log.debug(f"Cancelled task: {task.get_name()}")

        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        log.debug("All tasks cancelled")
