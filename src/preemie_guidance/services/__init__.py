"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from preemie_guidance.services import GuidanceService

    # Using factory method (recommended)
    service = GuidanceService.create()

    # Or manual creation
    service = GuidanceService(upstream=client, cache=cache, limiter=limiter)
    ```
"""

from .guidance_service import GuidanceService
from .rate_limiter import RateLimiter
from .sweeper import PeriodicSweeper

__all__ = [
    "GuidanceService",
    "PeriodicSweeper",
    "RateLimiter",
]
