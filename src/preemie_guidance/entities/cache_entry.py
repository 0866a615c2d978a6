"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached generation result.

    Entries are never mutated in place: a write builds a new entity and
    replaces the keyed slot in one step.

    Attributes:
        content: Serialized, already-sanitized generation result
        stored_at: Unix timestamp when the entry was written
        expires_at: Unix timestamp after which the entry is logically absent
    """

    content: str
    stored_at: float
    expires_at: float

    def is_live(self, now: float) -> bool:
        """Check whether the entry is still visible at ``now``."""
        return now < self.expires_at
