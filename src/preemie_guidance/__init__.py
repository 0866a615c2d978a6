"""Preemie Guidance - LLM-generated personalized content for preemie growth tracking.

This package provides a layered architecture around an upstream language model:

Layers:
    - prompts: Template definitions and ``{{variable}}`` rendering
    - protocols: Interface contracts (CacheStore, UpstreamClient)
    - repositories: Data access implementations (in-process cache, HTTP client)
    - services: Business logic (GuidanceService, RateLimiter, PeriodicSweeper)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from preemie_guidance.services import GuidanceService

    service = GuidanceService.create()
    card = await service.generate_daily_guidance("user-1", age, activity)
    ```

For HTTP API:
    ```python
    from preemie_guidance.api.app import app
    ```
"""

__version__ = "0.1.0"

from preemie_guidance.config import settings
from preemie_guidance.entities import (
    ActionKind,
    AgeBucket,
    AgeContext,
    DataSummary,
    FeedingSummary,
    GenerationContext,
    MilestoneSummary,
    RecentActivity,
    SleepSummary,
)
from preemie_guidance.handlers import GuidanceHandler
from preemie_guidance.models import (
    GrowthInsights,
    KnowledgeCard,
    PersonalizedContent,
    UrgencyLevel,
    UsageMetrics,
)
from preemie_guidance.protocols import CacheStore, UpstreamClient
from preemie_guidance.repositories import ChatCompletionClient, InMemoryCacheRepository
from preemie_guidance.sanitizer import ContentSanitizer, SanitizationFailure
from preemie_guidance.services import GuidanceService, PeriodicSweeper, RateLimiter

__all__ = [
    "__version__",
    # Configuration
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "UpstreamClient",
    # Services (business logic)
    "GuidanceService",
    "PeriodicSweeper",
    "RateLimiter",
    "ContentSanitizer",
    "SanitizationFailure",
    # Handlers (HTTP)
    "GuidanceHandler",
    # Repositories (data access)
    "ChatCompletionClient",
    "InMemoryCacheRepository",
    # Entities (domain models)
    "ActionKind",
    "AgeBucket",
    "AgeContext",
    "DataSummary",
    "FeedingSummary",
    "GenerationContext",
    "MilestoneSummary",
    "RecentActivity",
    "SleepSummary",
    # Output contracts
    "GrowthInsights",
    "KnowledgeCard",
    "PersonalizedContent",
    "UrgencyLevel",
    "UsageMetrics",
]
