"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

from preemie_guidance.models import KnowledgeCard


class MilestoneRecommendationResponse(BaseModel):
    recommendation: str = Field(..., description="Plain-text recommendation")


class KnowledgeCardsResponse(BaseModel):
    cards: list[KnowledgeCard] = Field(default_factory=list)


class UsageMetricsItem(BaseModel):
    """Usage counters in the form shown to operators."""

    request_count: int = Field(..., ge=0)
    tokens_consumed: int = Field(..., ge=0)
    error_count: int = Field(..., ge=0)
    last_reset_at: float = Field(..., description="Unix timestamp of the last reset")
    uptime_hours: float = Field(..., description="Hours since the last reset", ge=0.0)
    error_rate_percent: float = Field(..., description="Failed attempts per attempt, in percent")
    average_tokens_per_request: float = Field(..., ge=0.0)


class ServiceHealthItem(BaseModel):
    status: str = Field(..., description="'healthy' or 'disabled'")
    recommendations: list[str] = Field(default_factory=list)


class UsageMetricsResponse(BaseModel):
    """Response DTO for GET /metrics."""

    service_enabled: bool
    service_grade: str = Field(..., description="A (best) to F (disabled)", pattern="^[A-DF]$")
    metrics: UsageMetricsItem
    health: ServiceHealthItem


class MetricsResetResponse(BaseModel):
    success: bool
    reset_at: float = Field(..., description="Unix timestamp of the reset")
    previous: UsageMetricsItem


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Entries currently stored", ge=0)
    max_entries: int = Field(..., description="Size bound", ge=1)
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    evictions: int = Field(..., ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)
    ttl_seconds: float = Field(..., description="Lifetime of cached results", ge=0)


class CacheClearResponse(BaseModel):
    success: bool
    deleted_count: int = Field(..., ge=0)
    message: str


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="'healthy' or 'degraded'")
    upstream_configured: bool = Field(..., description="Whether a credential is configured")
    cache_entries: int = Field(..., ge=0)
    active_rate_limit_windows: int = Field(..., ge=0)
