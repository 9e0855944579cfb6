"""
Tests for shutdown sequencing and critical task monitoring.
"""

import asyncio

import pytest

from owotnes.lifecycle.shutdown_coordinator import ShutdownCoordinator
from owotnes.lifecycle.task_registry import TaskCategory, create_tracked_task


class RecordingHandler:

    def __init__(self, name, priority, calls, error=None):
        self.name = name
        self._priority = priority
        self.calls = calls
        self.error = error

    @property
    def shutdown_priority(self) -> int:
        return self._priority

    async def shutdown(self) -> None:
        self.calls.append(self.name)
        if self.error is not None:
            raise self.error


class TestShutdownCoordinator:

    @pytest.mark.asyncio
    async def test_request_shutdown_wakes_waiter(self):
        coordinator = ShutdownCoordinator()
        coordinator.request_shutdown("ROM missing", exit_code=1)

        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=1.0)
        assert coordinator.reason == "ROM missing"
        assert coordinator.exit_code == 1

    @pytest.mark.asyncio
    async def test_wait_requires_event(self):
        with pytest.raises(RuntimeError):
            await ShutdownCoordinator().wait_for_shutdown()

    @pytest.mark.asyncio
    async def test_critical_task_failure_sets_exit_code(self):
        coordinator = ShutdownCoordinator()
        coordinator.setup_signal_handlers(asyncio.get_running_loop())

        async def failing():
            await asyncio.sleep(0.01)
            raise RuntimeError("socket gone")

        create_tracked_task(failing(), category=TaskCategory.TRANSPORT, description="transport")

        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)
        assert coordinator.exit_code == 1
        assert coordinator.reason == "Task failure: transport"

    @pytest.mark.asyncio
    async def test_cancelled_critical_task_is_not_a_failure(self):
        coordinator = ShutdownCoordinator()
        coordinator.setup_signal_handlers(asyncio.get_running_loop())

        task = create_tracked_task(asyncio.sleep(10), category=TaskCategory.RENDER, description="render")

        async def cancel_then_signal():
            await asyncio.sleep(0.01)
            task.cancel()
            await asyncio.sleep(0.05)
            coordinator.request_shutdown("SIGTERM")

        trigger = asyncio.create_task(cancel_then_signal())
        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)
        await trigger

        assert coordinator.exit_code == 0
        assert coordinator.reason == "SIGTERM"

    @pytest.mark.asyncio
    async def test_handlers_run_by_descending_priority(self):
        calls = []
        coordinator = ShutdownCoordinator()
        coordinator.register(RecordingHandler("tasks", 40, calls))
        coordinator.register(RecordingHandler("session", 120, calls, error=RuntimeError("late")))
        coordinator.register(RecordingHandler("transport", 100, calls))

        await coordinator.shutdown_all()

        assert calls == ["session", "transport", "tasks"]
        assert coordinator.get_handler(RecordingHandler).name == "tasks"

    def test_register_rejects_incomplete_handler(self):
        with pytest.raises(ValueError):
            ShutdownCoordinator().register(object())
