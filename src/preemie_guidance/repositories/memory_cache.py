"""In-process implementation of CacheStore.

Entries live in a plain dictionary keyed by fingerprint. Expiry is lazy on
``get`` and eager on ``sweep``; the size bound is enforced on ``put`` by
evicting the entries with the oldest ``stored_at``.
"""

import time
from typing import Callable

from loguru import logger

from preemie_guidance.config import settings
from preemie_guidance.entities import CacheEntryEntity

log = logger.bind(component="cache")


class InMemoryCacheRepository:
    """Bounded TTL cache of serialized generation results.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Every write replaces the keyed slot with a new frozen entry, so a reader
    never sees a half-written value.

    Example:
        ```python
        cache = InMemoryCacheRepository.create()
        cache.put("abc", '{"title": "..."}', ttl=3600)
        cache.get("abc")  # '{"title": "..."}'
        ```
    """

    def __init__(
        self,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            max_entries: Size bound. Defaults to settings.cache_max_entries.
            clock: Returns the current time in seconds.
        """
        self._max_entries = max_entries or settings.cache_max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntryEntity] = {}
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @classmethod
    def create(
        cls,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults.

        Args:
            max_entries: Size bound. If None, uses settings.
            clock: Time source in seconds.

        Returns:
            Configured InMemoryCacheRepository
        """
        return cls(max_entries=max_entries, clock=clock)

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if not entry.is_live(self._clock()):
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        return entry.content

    def put(self, key: str, content: str, ttl: float) -> None:
        now = self._clock()
        self._entries[key] = CacheEntryEntity(content=content, stored_at=now, expires_at=now + ttl)

        while len(self._entries) > self._max_entries:
            oldest = min(self._entries, key=lambda k: self._entries[k].stored_at)
            del self._entries[oldest]
            self._evictions += 1
            log.debug("Evicted cache entry {}", oldest[:12])

    def sweep(self) -> int:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if not entry.is_live(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            log.debug("Swept {} expired cache entries", len(expired))
        return len(expired)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def count(self) -> int:
        return len(self._entries)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with entry count, bound, hit/miss counts and hit rate
        """
        lookups = self._hits + self._misses
        return {
            "total_entries": self.count(),
            "max_entries": self._max_entries,
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "hit_rate": self._hits / lookups if lookups else 0.0,
        }
