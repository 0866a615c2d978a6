"""Repository layer for data access.

This layer abstracts external dependencies (the upstream model service and
the response store) behind protocol-based interfaces. This enables:
- Swapping the in-process cache for an external store
- Unit testing with fake upstream clients
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from preemie_guidance.protocols import CacheStore, UpstreamClient

from .chat_completion_client import ChatCompletionClient
from .memory_cache import InMemoryCacheRepository

__all__ = [
    "CacheStore",
    "ChatCompletionClient",
    "InMemoryCacheRepository",
    "UpstreamClient",
]
