"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated, Callable

from fastapi import Depends, FastAPI, Header, Request
from loguru import logger

from preemie_guidance.config import init_logger, settings
from preemie_guidance.handlers import GuidanceHandler
from preemie_guidance.services import GuidanceService, PeriodicSweeper

ANONYMOUS_CALLER = "anonymous"

log = logger.bind(component="api")


def get_guidance_service(request: Request) -> GuidanceService:
    """Dependency injection for GuidanceService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The GuidanceService instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    service = getattr(request.app.state, "guidance_service", None)
    if service is None:
        raise RuntimeError("GuidanceService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> GuidanceHandler:
    """Dependency injection for GuidanceHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "guidance_handler", None)
    if handler is None:
        raise RuntimeError("GuidanceHandler not initialized. Check lifespan setup.")
    return handler


def get_caller_id(
    request: Request,
    x_caller_id: Annotated[str | None, Header()] = None,
) -> str:
    """Identity used for rate limiting.

    Taken from the ``X-Caller-Id`` header, falling back to the client address.
    """
    if x_caller_id and x_caller_id.strip():
        return x_caller_id.strip()
    if request.client is not None:
        return request.client.host
    return ANONYMOUS_CALLER


def build_lifespan(
    service_factory: Callable[[], GuidanceService] = GuidanceService.create,
):
    """Create the lifespan context manager for a FastAPI app.

    Args:
        service_factory: Builds the GuidanceService; tests pass one wired to
            a fake upstream.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state.

        1. Service (business logic) - stored in app.state.guidance_service
        2. Handler (HTTP endpoints) - stored in app.state.guidance_handler
        3. Sweeper (background cleanup) - stored in app.state.sweeper
        """
        init_logger()

        guidance_service = service_factory()
        guidance_handler = GuidanceHandler(guidance_service=guidance_service)
        sweeper = PeriodicSweeper(
            cache=guidance_service.cache,
            limiter=guidance_service.limiter,
            cache_interval=settings.cache_sweep_interval,
            limiter_interval=settings.rate_limit_sweep_interval,
        )
        sweeper.start()

        app.state.guidance_service = guidance_service
        app.state.guidance_handler = guidance_handler
        app.state.sweeper = sweeper

        if guidance_service.is_enabled:
            log.info("Guidance service initialized (model: {})", settings.ai_model)
        else:
            log.warning("AI_API_KEY not set; serving static fallback content only")

        yield

        await sweeper.stop()
        await guidance_service.close()

        del app.state.sweeper
        del app.state.guidance_handler
        del app.state.guidance_service
        log.info("Guidance service shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[GuidanceHandler, Depends(get_handler)]
ServiceDep = Annotated[GuidanceService, Depends(get_guidance_service)]
CallerDep = Annotated[str, Depends(get_caller_id)]
