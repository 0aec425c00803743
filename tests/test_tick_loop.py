"""Tests for TickLoop: periodic, non-reentrant, stoppable."""

import asyncio

import pytest

from shower_tracker.engine import TickLoop


class TestTickLoop:
    @pytest.mark.asyncio
    async def test_runs_until_stopped(self):
        calls = []

        async def func():
            calls.append(1)

        loop = TickLoop(func, interval_seconds=0.01)
        loop.start()
        assert loop.running is True
        await asyncio.sleep(0.1)
        await loop.stop()
        assert loop.running is False
        count = len(calls)
        assert count >= 2
        await asyncio.sleep(0.05)
        assert len(calls) == count

    @pytest.mark.asyncio
    async def test_errors_do_not_stop_loop(self):
        calls = []

        async def func():
            calls.append(1)
            raise RuntimeError("boom")

        loop = TickLoop(func, interval_seconds=0.01)
        loop.start()
        await asyncio.sleep(0.1)
        await loop.stop()
        assert len(calls) >= 2

    @pytest.mark.asyncio
    async def test_never_overlaps(self):
        active = []
        overlaps = []

        async def slow():
            if active:
                overlaps.append(1)
            active.append(1)
            await asyncio.sleep(0.03)
            active.pop()

        loop = TickLoop(slow, interval_seconds=0.001)
        loop.start()
        await asyncio.sleep(0.15)
        await loop.stop()
        assert overlaps == []

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        async def func():
            pass

        loop = TickLoop(func, interval_seconds=0.01)
        first = loop.start()
        assert loop.start() is first
        await loop.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        async def func():
            pass

        await TickLoop(func).stop()
