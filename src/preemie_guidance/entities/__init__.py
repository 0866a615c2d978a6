"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .completion import CompletionResult
from .generation_context import (
    ActionKind,
    AgeBucket,
    AgeContext,
    DataSummary,
    FeedingSummary,
    GenerationContext,
    MilestoneSummary,
    RecentActivity,
    SleepSummary,
    age_bucket_for,
    as_utc,
)
from .prompt_template import GenerationConfig, PromptTemplate
from .rate_limit import RateLimitDecision, RateLimitWindow

__all__ = [
    "ActionKind",
    "AgeBucket",
    "AgeContext",
    "CacheEntryEntity",
    "CompletionResult",
    "DataSummary",
    "FeedingSummary",
    "GenerationConfig",
    "GenerationContext",
    "MilestoneSummary",
    "PromptTemplate",
    "RateLimitDecision",
    "RateLimitWindow",
    "RecentActivity",
    "SleepSummary",
    "age_bucket_for",
    "as_utc",
]
