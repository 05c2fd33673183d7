"""Tests for the background event loop."""

import asyncio

import pytest

from roadmap.errors import SyncError
from roadmap.runner import BackgroundLoop


@pytest.fixture
def loop():
    background = BackgroundLoop()
    yield background
    background.stop()


class TestBackgroundLoop:
    def test_run_returns_result(self, loop):
        async def add(a, b):
            await asyncio.sleep(0)
            return a + b

        assert loop.run(add(2, 3)) == 5
        assert loop.running

    def test_exceptions_propagate(self, loop):
        async def fail():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            loop.run(fail())

    def test_timeout(self, loop):
        cancelled = []

        async def slow():
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        with pytest.raises(SyncError):
            loop.run(slow(), timeout=0.05)

        # The cancellation is delivered on the loop thread
        loop.run(asyncio.sleep(0.05))
        assert cancelled == [True]

    def test_stop(self, loop):
        loop.run(asyncio.sleep(0))
        loop.stop()
        assert not loop.running
