"""Cancellable periodic background task.

Used by the in-memory stores to sweep expired entries. The task runs on the
event loop it was started from and is stopped explicitly at shutdown.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run a synchronous callback every ``interval`` seconds.

    Example:
        ```python
        task = PeriodicTask(cache.sweep, interval=300, name="cache-sweep")
        task.start()
        ...
        await task.stop()
        ```
    """

    def __init__(self, callback: Callable[[], Any], interval: float, name: str) -> None:
        """Initialize the periodic task.

        Args:
            callback: Function to call on each tick. Must not block.
            interval: Seconds between calls.
            name: Task name, used in logs.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the task on the running event loop. No-op if already running."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)
        logger.debug("Started periodic task %s (every %.1fs)", self._name, self._interval)

    async def stop(self) -> None:
        """Cancel the task and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Stopped periodic task %s", self._name)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._callback()
            except Exception:
                logger.exception("Periodic task %s failed", self._name)
