# src/cache/sweeper.py - v1
"""Background task that periodically purges expired cache entries.

Lifecycle is explicit: ``start()`` schedules the task on the running loop,
``stop()`` cancels it and waits for it to finish. Sweeps never overlap
because a single task runs them back to back.
"""

from __future__ import annotations

import asyncio
import logging

from creatorlens.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Runs ``store.purge_expired()`` every ``interval_s`` seconds."""

    def __init__(self, store: BaseCacheStore, interval_s: float = 3600.0) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self._store = store
        self._interval_s = interval_s
        self._task: asyncio.Task[None] | None = None
        self.sweeps_completed = 0
        self.total_removed = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop. No-op if already running.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="creatorlens-cache-sweeper"
        )
        logger.info("Cache sweeper started (interval=%ss)", self._interval_s)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to exit."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Cache sweeper stopped after %d sweeps", self.sweeps_completed)

    async def sweep_once(self) -> int:
        """Run a single purge and update counters."""
        removed = await self._store.purge_expired()
        self.sweeps_completed += 1
        self.total_removed += removed
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval_s)
            try:
                await self.sweep_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Cache sweep failed; will retry next interval")
