"""Periodic removal of expired cache entries.

Lazy expiry only frees entries that are looked up again. The sweeper bounds
memory under low read volume by calling sweep_expired() on a fixed interval,
independent of request handling.
"""

import asyncio
import contextlib
import logging

from case_search.config import settings
from case_search.protocols import CacheStore

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Background asyncio task that sweeps a cache on an interval.

    Example:
        ```python
        sweeper = CacheSweeper(cache=cache, interval=300)
        sweeper.start()
        ...
        await sweeper.stop()
        ```
    """

    def __init__(self, cache: CacheStore, interval: float | None = None) -> None:
        """Initialize the sweeper.

        Args:
            cache: The cache to sweep (required).
            interval: Seconds between sweeps. Defaults to settings.cache_sweep_interval.
        """
        self._cache = cache
        self._interval = settings.cache_sweep_interval if interval is None else interval
        self._task: asyncio.Task | None = None

        if self._interval <= 0:
            raise ValueError("interval must be greater than 0")

    def start(self) -> None:
        """Start sweeping on the running event loop. No-op if already running."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    def sweep_once(self) -> int:
        """Run a single sweep.

        Returns:
            Number of entries removed (0 if the sweep failed)
        """
        try:
            removed = self._cache.sweep_expired()
        except Exception:
            logger.exception("Cache sweep failed")
            return 0

        if removed:
            logger.info("Swept %d expired cache entries", removed)
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.sweep_once()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval(self) -> float:
        return self._interval
