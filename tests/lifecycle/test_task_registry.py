"""
Tests for tracked task bookkeeping.
"""

import asyncio

import pytest

from owotnes.lifecycle.task_registry import TaskCategory, TaskRegistry, create_tracked_task


class TestTaskRegistry:

    @pytest.mark.asyncio
    async def test_tracked_task_is_registered(self):
        task = create_tracked_task(asyncio.sleep(10), category=TaskCategory.RENDER, description="render")
        registry = TaskRegistry.instance()

        assert [r.info.description for r in registry.active(TaskCategory.RENDER)] == ["render"]
        assert registry.active(TaskCategory.EMULATOR) == []
        assert task.get_name() == "render"

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        assert registry.list_all()[0].status == "cancelled"
        assert len(registry.cancelled()) == 1

    @pytest.mark.asyncio
    async def test_failure_is_recorded(self):
        async def boom():
            raise RuntimeError("emulator exploded")

        task = create_tracked_task(boom(), category=TaskCategory.EMULATOR, description="producer")
        await asyncio.gather(task, return_exceptions=True)

        failed = TaskRegistry.instance().failed()
        assert len(failed) == 1
        assert failed[0].status == "failed"
        assert str(failed[0].finished_with_error) == "emulator exploded"

    @pytest.mark.asyncio
    async def test_completed_result_and_summary(self):
        async def answer():
            return 42

        task = create_tracked_task(answer(), category=TaskCategory.BACKGROUND, description="answer")
        await task

        registry = TaskRegistry.instance()
        assert registry.list_all()[0].finished_return == 42
        assert registry.summary() == "Tasks: total=1, running=0, failed=0, cancelled=0"

    @pytest.mark.asyncio
    async def test_tasks_for_shutdown_honours_exclude(self):
        keep = create_tracked_task(asyncio.sleep(10), category=TaskCategory.API, description="api")
        other = create_tracked_task(asyncio.sleep(10), category=TaskCategory.TRANSPORT, description="ws")

        assert TaskRegistry.instance().get_tasks_for_shutdown(exclude=[keep]) == [other]

        for task in (keep, other):
            task.cancel()
        await asyncio.gather(keep, other, return_exceptions=True)
