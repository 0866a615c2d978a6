"""HTTP handlers for guidance operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
Generation itself never fails: the service resolves errors to fallback
content, so only unexpected faults surface as HTTP 500.
"""

import time

from fastapi import HTTPException, status

from preemie_guidance.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    DailyGuidanceRequest,
    GrowthInsightsRequest,
    HealthCheckResponse,
    KnowledgeCardsRequest,
    KnowledgeCardsResponse,
    MetricsResetResponse,
    MilestoneRecommendationRequest,
    MilestoneRecommendationResponse,
    ServiceHealthItem,
    UsageMetricsItem,
    UsageMetricsResponse,
)
from preemie_guidance.models import GrowthInsights, PersonalizedContent, UsageMetrics
from preemie_guidance.services import GuidanceService

HIGH_TOKEN_USAGE = 800


def service_grade(enabled: bool, error_rate: float) -> str:
    """Grade the upstream service from A (healthy) to F (disabled)."""
    if not enabled:
        return "F"
    if error_rate > 0.2:
        return "D"
    if error_rate > 0.1:
        return "C"
    if error_rate > 0.05:
        return "B"
    return "A"


def health_recommendations(enabled: bool, metrics: UsageMetrics) -> list[str]:
    """Operator hints derived from the usage counters."""
    if not enabled:
        return [
            "Live generation is disabled: set AI_API_KEY to enable it",
            "Static fallback content is served until a credential is configured",
        ]

    recommendations = []
    if metrics.error_rate > 0.1:
        recommendations.append("High error rate: check network access and credential validity")
    if metrics.average_tokens_per_request > HIGH_TOKEN_USAGE:
        recommendations.append("High average token usage: consider shortening prompts")
    if metrics.error_rate < 0.05:
        recommendations.append("Service is running well")
    recommendations.append("Keep monitoring service status regularly")
    return recommendations


def _metrics_item(metrics: UsageMetrics, now: float) -> UsageMetricsItem:
    return UsageMetricsItem(
        request_count=metrics.request_count,
        tokens_consumed=metrics.tokens_consumed,
        error_count=metrics.error_count,
        last_reset_at=metrics.last_reset_at,
        uptime_hours=round(max(0.0, now - metrics.last_reset_at) / 3600, 2),
        error_rate_percent=round(metrics.error_rate * 100, 2),
        average_tokens_per_request=round(metrics.average_tokens_per_request, 2),
    )


class GuidanceHandler:
    """HTTP handlers for guidance operations.

    This handler delegates business logic to GuidanceService
    and handles HTTP-specific concerns like:
    - Converting DTOs to entities
    - Setting appropriate status codes
    - Error handling and responses

    Example:
        ```python
        from preemie_guidance.handlers import GuidanceHandler
        from preemie_guidance.services import GuidanceService

        handler = GuidanceHandler(guidance_service=GuidanceService.create())

        @app.post("/guidance/daily", response_model=PersonalizedContent)
        async def daily(request: DailyGuidanceRequest, caller_id: str):
            return await handler.daily_guidance(caller_id, request)
        ```
    """

    def __init__(self, guidance_service: GuidanceService) -> None:
        """Initialize the guidance handler.

        Args:
            guidance_service: The orchestrator for business logic (required).
        """
        self._service = guidance_service

    async def daily_guidance(
        self, caller_id: str, request: DailyGuidanceRequest
    ) -> PersonalizedContent:
        """Handle POST /guidance/daily requests."""
        try:
            return await self._service.generate_daily_guidance(
                caller_id, request.age.to_entity(), request.to_activity()
            )
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to generate daily guidance: {e}",
            ) from e

    async def milestone_recommendation(
        self, caller_id: str, request: MilestoneRecommendationRequest
    ) -> MilestoneRecommendationResponse:
        """Handle POST /guidance/milestone requests."""
        try:
            recommendation = await self._service.generate_milestone_recommendation(
                caller_id,
                request.age.to_entity(),
                [m.to_entity() for m in request.achieved_milestones],
            )
            return MilestoneRecommendationResponse(recommendation=recommendation)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to generate milestone recommendation: {e}",
            ) from e

    async def growth_insights(
        self, caller_id: str, request: GrowthInsightsRequest
    ) -> GrowthInsights:
        """Handle POST /guidance/insights requests."""
        try:
            return await self._service.generate_growth_insights(caller_id, request.to_summary())
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to generate growth insights: {e}",
            ) from e

    async def knowledge_cards(
        self, caller_id: str, request: KnowledgeCardsRequest
    ) -> KnowledgeCardsResponse:
        """Handle POST /guidance/knowledge-cards requests."""
        try:
            cards = await self._service.generate_knowledge_cards(
                caller_id, request.age.to_entity(), request.card_count
            )
            return KnowledgeCardsResponse(cards=cards)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to generate knowledge cards: {e}",
            ) from e

    async def get_metrics(self) -> UsageMetricsResponse:
        """Handle GET /metrics requests.

        Returns:
            Usage counters with a service grade and operator recommendations
        """
        metrics = self._service.usage_metrics()
        enabled = self._service.is_enabled
        return UsageMetricsResponse(
            service_enabled=enabled,
            service_grade=service_grade(enabled, metrics.error_rate),
            metrics=_metrics_item(metrics, time.time()),
            health=ServiceHealthItem(
                status="healthy" if enabled else "disabled",
                recommendations=health_recommendations(enabled, metrics),
            ),
        )

    async def reset_metrics(self) -> MetricsResetResponse:
        """Handle POST /metrics/reset requests."""
        now = time.time()
        previous = self._service.reset_usage_metrics()
        return MetricsResetResponse(
            success=True,
            reset_at=self._service.usage_metrics().last_reset_at,
            previous=_metrics_item(previous, now),
        )

    async def get_cache_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._service.cache.get_stats()

            return CacheStatsResponse(
                total_entries=stats.get("total_entries", 0),
                max_entries=stats.get("max_entries", 1),
                hits=stats.get("hits", 0),
                misses=stats.get("misses", 0),
                evictions=stats.get("evictions", 0),
                hit_rate=stats.get("hit_rate", 0.0),
                ttl_seconds=self._service.cache_ttl,
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /cache requests."""
        try:
            count = self._service.cache.clear()

            return CacheClearResponse(
                success=True,
                deleted_count=count,
                message="Cache cleared successfully",
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        The service stays usable without a credential, so a missing one
        reports ``degraded`` rather than an error status.
        """
        enabled = self._service.is_enabled
        return HealthCheckResponse(
            status="healthy" if enabled else "degraded",
            upstream_configured=enabled,
            cache_entries=self._service.cache.count(),
            active_rate_limit_windows=self._service.limiter.active_windows(),
        )
