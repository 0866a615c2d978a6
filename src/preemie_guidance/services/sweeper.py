"""Background sweeps for the response cache and the rate limiter.

Expired cache entries and finished rate-limit windows are only removed
lazily by traffic; without a periodic sweep, callers that stop sending
requests would keep their state in memory forever.
"""

import asyncio
from typing import Awaitable, Callable

from loguru import logger

from preemie_guidance.config import settings
from preemie_guidance.protocols import CacheStore
from preemie_guidance.services.rate_limiter import RateLimiter

log = logger.bind(component="sweeper")


class PeriodicSweeper:
    """Runs ``cache.sweep()`` and ``limiter.sweep()`` on fixed intervals.

    Each sweep gets its own task so the two intervals are independent.

    Example:
        ```python
        sweeper = PeriodicSweeper(cache, limiter)
        sweeper.start()
        ...
        await sweeper.stop()
        ```
    """

    def __init__(
        self,
        cache: CacheStore,
        limiter: RateLimiter,
        cache_interval: float | None = None,
        limiter_interval: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._cache = cache
        self._limiter = limiter
        self._cache_interval = cache_interval or settings.cache_sweep_interval
        self._limiter_interval = limiter_interval or settings.rate_limit_sweep_interval
        self._sleep = sleep
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        """Schedule both sweep loops on the running event loop."""
        if self.running:
            return
        self._tasks = [
            self._spawn(self._loop(self._cache.sweep, self._cache_interval), "cache"),
            self._spawn(self._loop(self._limiter.sweep, self._limiter_interval), "rate_limiter"),
        ]
        log.info(
            "Sweeper started (cache every {}s, rate limiter every {}s)",
            self._cache_interval,
            self._limiter_interval,
        )

    async def stop(self) -> None:
        """Cancel the sweep loops and wait for them to finish."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        log.info("Sweeper stopped")

    def sweep_once(self) -> dict[str, int]:
        """Run both sweeps immediately.

        Returns:
            Number of removed cache entries and rate-limit windows
        """
        return {"cache": self._cache.sweep(), "rate_limiter": self._limiter.sweep()}

    async def _loop(self, sweep: Callable[[], int], interval: float) -> None:
        while True:
            await self._sleep(interval)
            try:
                sweep()
            except Exception as e:
                log.warning("Sweep failed: {}", e)

    @staticmethod
    def _spawn(coro: Awaitable[None], label: str) -> asyncio.Task:
        task = asyncio.ensure_future(coro)

        def _on_done(done_task: asyncio.Task) -> None:
            if done_task.cancelled():
                log.debug("Sweep task cancelled: {}", label)
            elif done_task.exception() is not None:
                log.warning("Sweep task failed ({}): {}", label, done_task.exception())

        task.add_done_callback(_on_done)
        return task
