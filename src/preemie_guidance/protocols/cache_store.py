"""Cache storage protocol.

Defines the interface for any backend that stores serialized generation
results under a fingerprint key with a time-to-live.

Implementations can include:
- In-process dictionary (default)
- Any external key-value store with TTL support
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for response cache backends.

    Example:
        ```python
        from preemie_guidance.protocols import CacheStore

        store: CacheStore = InMemoryCacheRepository(max_entries=1000)
        ```
    """

    def get(self, key: str) -> str | None:
        """Return the live entry for ``key``.

        Args:
            key: Fingerprint key

        Returns:
            The stored content, or None when absent or expired
        """
        ...

    def put(self, key: str, content: str, ttl: float) -> None:
        """Store or overwrite an entry, resetting its TTL.

        Args:
            key: Fingerprint key
            content: Serialized result
            ttl: Time-to-live in seconds
        """
        ...

    def sweep(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a specific entry by key.

        Returns:
            True if deleted, False otherwise
        """
        ...

    def clear(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries deleted
        """
        ...

    def count(self) -> int:
        """Count stored entries, expired ones included until swept."""
        ...

    def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
