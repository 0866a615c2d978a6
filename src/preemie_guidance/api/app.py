from typing import Any, Callable

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from preemie_guidance import __version__
from preemie_guidance.api.dependencies import CallerDep, HandlerDep, build_lifespan
from preemie_guidance.config import settings
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
    UsageMetricsResponse,
)
from preemie_guidance.models import GrowthInsights, PersonalizedContent
from preemie_guidance.services import GuidanceService

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Preemie Guidance API",
        "version": __version__,
        "description": "Personalized guidance for premature-infant growth tracking",
        "endpoints": {
            "guidance": "/guidance",
            "metrics": "/metrics",
            "cache": "/cache",
            "health": "/health",
            "docs": "/docs",
        },
    }


@router.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@router.post("/guidance/daily", response_model=PersonalizedContent, response_model_by_alias=True)
async def daily_guidance(
    request: DailyGuidanceRequest, handler: HandlerDep, caller_id: CallerDep
) -> PersonalizedContent:
    """Generate today's care card for a child."""
    return await handler.daily_guidance(caller_id, request)


@router.post("/guidance/milestone", response_model=MilestoneRecommendationResponse)
async def milestone_recommendation(
    request: MilestoneRecommendationRequest, handler: HandlerDep, caller_id: CallerDep
) -> MilestoneRecommendationResponse:
    """Recommend the next developmental focus."""
    return await handler.milestone_recommendation(caller_id, request)


@router.post("/guidance/insights", response_model=GrowthInsights)
async def growth_insights(
    request: GrowthInsightsRequest, handler: HandlerDep, caller_id: CallerDep
) -> GrowthInsights:
    """Analyse aggregated care records."""
    return await handler.growth_insights(caller_id, request)


@router.post("/guidance/knowledge-cards", response_model=KnowledgeCardsResponse)
async def knowledge_cards(
    request: KnowledgeCardsRequest, handler: HandlerDep, caller_id: CallerDep
) -> KnowledgeCardsResponse:
    """Generate age-appropriate knowledge cards."""
    return await handler.knowledge_cards(caller_id, request)


@router.get("/metrics", response_model=UsageMetricsResponse)
async def get_metrics(handler: HandlerDep) -> UsageMetricsResponse:
    """Usage counters, service grade and recommendations."""
    return await handler.get_metrics()


@router.post("/metrics/reset", response_model=MetricsResetResponse)
async def reset_metrics(handler: HandlerDep) -> MetricsResetResponse:
    """Zero the usage counters."""
    return await handler.reset_metrics()


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get response cache statistics."""
    return await handler.get_cache_stats()


@router.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
    """Clear all entries from the response cache."""
    return await handler.clear_cache()


def create_app(
    service_factory: Callable[[], GuidanceService] = GuidanceService.create,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        service_factory: Builds the GuidanceService during startup.

    Returns:
        Configured FastAPI app
    """
    application = FastAPI(
        title="Preemie Guidance API",
        description="Personalized guidance for premature-infant growth tracking",
        version=__version__,
        lifespan=build_lifespan(service_factory),
    )

    application.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "preemie_guidance.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
