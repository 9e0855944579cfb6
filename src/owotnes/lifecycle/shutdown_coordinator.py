"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order. Also watches the critical
tracked tasks: if the emulator loop, render loop, transport or API server
dies with an exception, the process shuts down with a non-zero exit code.
"""

import asyncio
import signal
from typing import Dict, List, Optional, Set

from owotnes.lifecycle.task_registry import TaskCategory, TaskRegistry
from owotnes.models.enums import LogCategory
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SHUTDOWN)

CRITICAL_CATEGORIES: Set[TaskCategory] = {
    TaskCategory.API,
    TaskCategory.EMULATOR,
    TaskCategory.RENDER,
    TaskCategory.TRANSPORT,
}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(SessionShutdownHandler(session))
        coordinator.register(TransportShutdownHandler(transport))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
        sys.exit(coordinator.exit_code)
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}
        self.exit_code = 0

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT/SIGTERM handlers that trigger the shutdown event."""
        self._ensure_event()
        shutdown_event = self._shutdown_event

        def signal_handler(sig: signal.Signals) -> None:
            self._shutdown_trigger["reason"] = sig.name
            log.info(f"Signal {sig.name} received → triggering shutdown")
            shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def _ensure_event(self) -> None:
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()

    def request_shutdown(self, reason: str, exit_code: int = 0) -> None:
        """Trigger shutdown from application code (e.g. fatal startup error)."""
        self._ensure_event()
        self._shutdown_trigger["reason"] = reason
        self.exit_code = exit_code
        self._shutdown_event.set()

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    # ===== Critical task monitoring =====

    @staticmethod
    def _get_critical_tasks() -> List[asyncio.Task]:
        return [
            r.task for r in TaskRegistry.instance().active()
            if r.info.category in CRITICAL_CATEGORIES
        ]

    def _check_critical_task_failures(self) -> bool:
        """True (and shutdown reason recorded) if any critical task has failed."""
        for record in TaskRegistry.instance().failed():
            if record.info.category in CRITICAL_CATEGORIES:
                log.error(
                    f"❌ Critical task failed: {record.info.description}",
                    task_category=record.info.category.name,
                    error=str(record.finished_with_error),
                )
                self._shutdown_trigger["reason"] = f"Task failure: {record.info.description}"
                self.exit_code = 1
                return True
        return False

    async def _wait_for_critical_task_completion(self, critical_tasks: List[asyncio.Task]) -> Optional[bool]:
        """
        Wait for either shutdown signal or critical task completion.

        Returns:
            True if shutdown signal received
            False if a critical task FAILED (not just completed)
            None to keep monitoring
        """
        if not critical_tasks:
            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=0.2)
                return True
            except asyncio.TimeoutError:
                return None

        shutdown_waiter = asyncio.create_task(self._shutdown_event.wait())
        wait_set: Set[asyncio.Task] = set(critical_tasks)
        wait_set.add(shutdown_waiter)

        try:
            done, _ = await asyncio.wait(wait_set, return_when=asyncio.FIRST_COMPLETED)

            if shutdown_waiter in done:
                return True
            for completed_task in done:
                if self._handle_critical_task_completion(completed_task):
                    return False
            return None
        finally:
            # Only the waiter is ours; critical tasks are watched again next round
            if not shutdown_waiter.done():
                shutdown_waiter.cancel()

    def _handle_critical_task_completion(self, completed_task: asyncio.Task) -> bool:
        """
        Returns:
            True if the task failed (should trigger shutdown). Cancellation
            (session reload, shutdown) and clean completion do not count.
        """
        if completed_task.cancelled():
            return False

        record = TaskRegistry.instance()._get_record_by_task(completed_task)
        task_name = record.info.description if record else completed_task.get_name()

        error = completed_task.exception()
        if error is not None:
            log.error(f"❌ Critical task failed: {task_name}", error=str(error), error_type=type(error).__name__)
            self._shutdown_trigger["reason"] = f"Task failure: {task_name}"
            self.exit_code = 1
            return True

        log.debug(f"Critical task completed cleanly: {task_name}")
        return False

    async def wait_for_shutdown(self) -> None:
        """
        Wait for shutdown event or critical task failure.

        Raises:
            RuntimeError: If signal handlers weren't setup
        """
        if self._shutdown_event is None:
            raise RuntimeError("Call setup_signal_handlers() first")

        while not self._shutdown_event.is_set():
            if self._check_critical_task_failures():
                return

            result = await self._wait_for_critical_task_completion(self._get_critical_tasks())

            if result is True or self._shutdown_event.is_set():
                log.debug("Shutdown triggered by signal handler")
                return
            if result is False:
                return

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first), each
        with its own timeout, the whole sequence bounded by total_timeout.
        """
        log.info("🛑 Initiating graceful shutdown sequence...")
        log.info(f"   Reason: {self._shutdown_trigger.get('reason') or 'UNKNOWN'}")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"⚠️  Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")
            except asyncio.TimeoutError:
                log.error(f"⚠️  {handler_name} shutdown timeout ({self._timeout_per_handler}s)")
            except Exception as e:
                # Continue with other handlers even if one fails
                log.error(f"❌ Error shutting down {handler_name}", error=str(e), error_type=type(e).__name__)

        log.info("✓ Shutdown sequence complete")

    def get_handler(self, handler_type: type):
        """Get a registered handler by type (testing/debugging)."""
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
