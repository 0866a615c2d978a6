"""
Tests for the background sweeper.
"""

import asyncio

from preemie_guidance.repositories import InMemoryCacheRepository
from preemie_guidance.services import PeriodicSweeper, RateLimiter


async def test_sweep_once_cleans_both_stores(clock):
    cache = InMemoryCacheRepository(max_entries=10, clock=clock)
    limiter = RateLimiter(clock=clock)
    cache.put("k", "v", ttl=1)
    limiter.check("u", "daily", 5, 1_000)
    clock.advance(2)

    sweeper = PeriodicSweeper(cache, limiter, cache_interval=60, limiter_interval=60)

    assert sweeper.sweep_once() == {"cache": 1, "rate_limiter": 1}


async def test_loops_run_until_stopped(clock):
    cache = InMemoryCacheRepository(max_entries=10, clock=clock)
    limiter = RateLimiter(clock=clock)
    cache.put("k", "v", ttl=1)
    clock.advance(2)

    sweeper = PeriodicSweeper(cache, limiter, cache_interval=0.01, limiter_interval=0.01)
    sweeper.start()
    assert sweeper.running
    for _ in range(50):
        if cache.count() == 0:
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert cache.count() == 0
    assert not sweeper.running


async def test_failing_sweep_keeps_loop_alive(clock):
    class BrokenCache(InMemoryCacheRepository):
        def __init__(self):
            super().__init__(max_entries=10, clock=clock)
            self.sweeps = 0

        def sweep(self):
            self.sweeps += 1
            raise RuntimeError("disk on fire")

    cache = BrokenCache()
    sweeper = PeriodicSweeper(cache, RateLimiter(clock=clock), cache_interval=0.01, limiter_interval=60)
    sweeper.start()
    for _ in range(50):
        if cache.sweeps >= 2:
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert cache.sweeps >= 2
