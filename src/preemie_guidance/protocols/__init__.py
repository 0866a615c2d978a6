"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the in-process cache for an external store
- Unit testing with fake upstream clients
- Clear separation of concerns

Usage:
    ```python
    from preemie_guidance.protocols import CacheStore, UpstreamClient

    store: CacheStore = InMemoryCacheRepository()
    client: UpstreamClient = ChatCompletionClient.create()
    ```
"""

from .cache_store import CacheStore
from .upstream_client import UpstreamClient

__all__ = [
    "CacheStore",
    "UpstreamClient",
]
