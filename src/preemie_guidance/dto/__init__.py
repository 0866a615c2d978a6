"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import (
    AgePayload,
    DailyGuidanceRequest,
    FeedingPayload,
    GrowthInsightsRequest,
    KnowledgeCardsRequest,
    MilestonePayload,
    MilestoneRecommendationRequest,
    SleepPayload,
)
from .responses import (
    CacheClearResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    KnowledgeCardsResponse,
    MetricsResetResponse,
    MilestoneRecommendationResponse,
    ServiceHealthItem,
    UsageMetricsItem,
    UsageMetricsResponse,
)

__all__ = [
    "AgePayload",
    "CacheClearResponse",
    "CacheStatsResponse",
    "DailyGuidanceRequest",
    "FeedingPayload",
    "GrowthInsightsRequest",
    "HealthCheckResponse",
    "KnowledgeCardsRequest",
    "KnowledgeCardsResponse",
    "MetricsResetResponse",
    "MilestonePayload",
    "MilestoneRecommendationRequest",
    "MilestoneRecommendationResponse",
    "ServiceHealthItem",
    "SleepPayload",
    "UsageMetricsItem",
    "UsageMetricsResponse",
]
