import asyncio

import pytest
import pytest_asyncio
from fastapi import FastAPI

from owotnes.lifecycle.api_server_wrapper import APIServerWrapper


@pytest_asyncio.fixture
async def api_wrapper():
    # Port 0 lets the OS pick a free port
    return APIServerWrapper(FastAPI(), host="127.0.0.1", port=0)


@pytest.mark.asyncio
async def test_start_and_stop(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.2)
    assert api_wrapper.is_running

    await api_wrapper.stop()
    await asyncio.wait_for(task, timeout=5.0)
    assert not api_wrapper.is_running


@pytest.mark.asyncio
async def test_stop_without_start(api_wrapper):
    # Should not crash
    await api_wrapper.stop()
    assert not api_wrapper.is_running


@pytest.mark.asyncio
async def test_double_start_rejected(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.1)

    with pytest.raises(RuntimeError):
        await api_wrapper.start()

    await api_wrapper.stop()
    await asyncio.wait_for(task, timeout=5.0)


@pytest.mark.asyncio
async def test_start_cancelled_externally(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.05)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    await api_wrapper.stop()
    assert not api_wrapper.is_running
