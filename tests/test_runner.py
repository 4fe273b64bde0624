# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Tests for the debounced reparse coordinator."""

import asyncio

import pytest

from ext_index.runner import ReparseCoordinator


class TestDebounce:
    @pytest.mark.asyncio
    async def test_burst_runs_once_with_last_request(self):
        coordinator = ReparseCoordinator(delay=0.05)
        calls = []

        futures = [
            coordinator.run("doc", lambda value=value: calls.append(value) or value)
            for value in range(5)
        ]
        results = await asyncio.gather(*futures)

        assert calls == [4]
        assert results == [4] * 5

    @pytest.mark.asyncio
    async def test_keys_are_independent(self):
        coordinator = ReparseCoordinator(delay=0.01)
        calls = []

        await asyncio.gather(
            coordinator.run("a", lambda: calls.append("a")),
            coordinator.run("b", lambda: calls.append("b")),
        )

        assert sorted(calls) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_coroutine_tasks_are_awaited(self):
        coordinator = ReparseCoordinator(delay=0)

        async def task():
            await asyncio.sleep(0)
            return "done"

        assert await coordinator.run("doc", task) == "done"

    @pytest.mark.asyncio
    async def test_runs_for_one_key_never_overlap(self):
        coordinator = ReparseCoordinator(delay=0.01)
        active = 0
        peak = 0

        async def task():
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.05)
            active -= 1

        first = coordinator.run("doc", task)
        await asyncio.sleep(0.03)  # first run is now in progress
        second = coordinator.run("doc", task)
        await asyncio.gather(first, second)

        assert peak == 1

    @pytest.mark.asyncio
    async def test_locks_are_dropped_once_idle(self):
        coordinator = ReparseCoordinator(delay=0)

        await asyncio.gather(
            coordinator.run("a", lambda: None),
            coordinator.run("b", lambda: None),
        )

        assert coordinator._locks == {}
        assert coordinator._lock_users == {}

    @pytest.mark.asyncio
    async def test_waiting_run_keeps_the_lock_alive(self):
        coordinator = ReparseCoordinator(delay=0)
        active = 0
        peak = 0

        async def task():
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.03)
            active -= 1

        first = coordinator.run("doc", task)
        await asyncio.sleep(0.01)
        second = coordinator.run("doc", task)  # waits on the first run
        await first
        third = coordinator.run("doc", task)
        await asyncio.gather(second, third)

        assert peak == 1
        assert coordinator._locks == {}

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_resolves_none(self, caplog):
        coordinator = ReparseCoordinator(delay=0)

        def task():
            raise ValueError("bad input")

        assert await coordinator.run("doc", task) is None
        assert "Task for doc failed" in caplog.text

        # The key keeps working after a failure
        assert await coordinator.run("doc", lambda: 1) == 1


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancel_drops_pending_request(self):
        coordinator = ReparseCoordinator(delay=0.05)
        calls = []

        future = coordinator.run("doc", lambda: calls.append(1))
        assert coordinator.is_pending("doc")
        coordinator.cancel("doc")
        await asyncio.sleep(0.1)

        assert future.cancelled()
        assert calls == []
        assert not coordinator.is_pending("doc")

    @pytest.mark.asyncio
    async def test_close_cancels_everything_pending(self):
        coordinator = ReparseCoordinator(delay=0.05)

        future = coordinator.run("doc", lambda: None)
        await coordinator.close()

        assert future.cancelled()
