"""Periodic background sweeps for in-memory state."""

import asyncio
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Sweepable(Protocol):
    def cleanup(self) -> int:
        ...


class PeriodicSweeper:
    """Call ``target.cleanup()`` every ``interval`` seconds on the event loop.

    The cache and rate limiter never return stale state, so sweeps only
    bound memory for keys that are never touched again.

    Example:
        ```python
        sweeper = PeriodicSweeper(cache, interval=300, name="cache")
        sweeper.start()
        ...
        await sweeper.shutdown()
        ```
    """

    def __init__(self, target: Sweepable, interval: float, name: str = "sweeper") -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._target = target
        self._interval = interval
        self._name = name
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop.

        Calling ``start`` on an already running sweeper is a no-op.
        """
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=f"{self._name}-sweeper")
        logger.info("Started %s sweeper (interval=%ss)", self._name, self._interval)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.sweep()

    def sweep(self) -> int:
        """Run one cleanup pass, logging rather than propagating failures."""
        try:
            removed = self._target.cleanup()
        except Exception:
            logger.exception("%s sweep failed", self._name)
            return 0
        if removed:
            logger.debug("%s sweep removed %d entries", self._name, removed)
        return removed

    async def shutdown(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Stopped %s sweeper", self._name)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval(self) -> float:
        return self._interval
