# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Debounced, per-key serialized task runner.

Absorbs bursts of edit notifications: every request for a key restarts
that key's debounce window, and only the most recent request runs once
the window elapses. Runs for one key never overlap; different keys are
independent.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Set, Union

logger = logging.getLogger(__name__)

Task = Callable[[], Union[Awaitable[Any], Any]]


class ReparseCoordinator:
    """Per-key trailing-edge debouncer.

    Usage:
        coordinator = ReparseCoordinator(delay=0.2)
        await coordinator.run(document.uri, lambda: module.reparse(document))
    """

    def __init__(self, delay: float = 0.2):
        """Initialize the coordinator.

        Args:
            delay: Debounce window in seconds
        """
        self.delay = delay
        self._handles: Dict[str, asyncio.TimerHandle] = {}  # key -> pending start
        self._waiters: Dict[str, List[asyncio.Future]] = {}  # key -> futures of pending requests
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}  # key -> runs holding or awaiting the lock
        self._running: Set[asyncio.Task] = set()

    def run(self, key: str, task: Task) -> asyncio.Future:
        """Schedule ``task`` for ``key``, superseding any pending request.

        Returns:
            Future resolved with the task's result once the request (or the
            request that superseded it) has run. Failures are logged and
            resolve to None.
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._waiters.setdefault(key, []).append(future)

        pending = self._handles.pop(key, None)
        if pending is not None:
            pending.cancel()
            logger.debug(f"Superseded pending run for {key}")

        self._handles[key] = loop.call_later(self.delay, self._start, key, task)
        return future

    def is_pending(self, key: str) -> bool:
        return key in self._handles

    def cancel(self, key: str) -> None:
        """Drop a pending request. A run already in progress is not interrupted."""
        handle = self._handles.pop(key, None)
        if handle is not None:
            handle.cancel()
        for waiter in self._waiters.pop(key, []):
            waiter.cancel()

    async def close(self) -> None:
        """Cancel everything pending and wait for runs in progress."""
        for key in list(self._handles):
            self.cancel(key)
        if self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    def _start(self, key: str, task: Task) -> None:
        self._handles.pop(key, None)
        waiters = self._waiters.pop(key, [])
        runner = asyncio.ensure_future(self._execute(key, task, waiters))
        self._running.add(runner)
        runner.add_done_callback(self._running.discard)

    async def _execute(self, key: str, task: Task, waiters: List[asyncio.Future]) -> None:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        result = None
        try:
            async with lock:
                try:
                    result = task()
                    if inspect.isawaitable(result):
                        result = await result
                except Exception:
                    logger.exception(f"Task for {key} failed")
                    result = None
        finally:
            self._release_lock(key)

        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(result)

    def _release_lock(self, key: str) -> None:
        users = self._lock_users.get(key, 1) - 1
        if users:
            self._lock_users[key] = users
            return
        # Nobody holds or awaits it; a later run creates a fresh one
        self._lock_users.pop(key, None)
        self._locks.pop(key, None)
