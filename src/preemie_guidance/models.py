import time
from dataclasses import dataclass, field, replace
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MAX_FIELD_CHARS = 500
MAX_ACTION_ITEMS = 3
MAX_TAGS = 4
MAX_INSIGHT_ITEMS = 3


class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PersonalizedContent(BaseModel):
    """Daily guidance card. The only structure crossing the pipeline boundary."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., max_length=MAX_FIELD_CHARS)
    content: str = Field(..., max_length=MAX_FIELD_CHARS)
    action_items: list[str] = Field(
        default_factory=list, alias="actionItems", max_length=MAX_ACTION_ITEMS
    )
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)
    urgency_level: UrgencyLevel = Field(UrgencyLevel.LOW, alias="urgencyLevel")


class GrowthInsights(BaseModel):
    """Pattern analysis over a child's recent records."""

    insights: list[str] = Field(default_factory=list, max_length=MAX_INSIGHT_ITEMS)
    recommendations: list[str] = Field(default_factory=list, max_length=MAX_INSIGHT_ITEMS)
    concerns: list[str] = Field(default_factory=list, max_length=MAX_INSIGHT_ITEMS)


class KnowledgeCard(BaseModel):
    """Short age-appropriate knowledge card."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., max_length=MAX_FIELD_CHARS)
    content: str = Field(..., max_length=MAX_FIELD_CHARS)
    category: str = Field("", max_length=MAX_FIELD_CHARS)
    relevance_score: float = Field(0.5, alias="relevanceScore", ge=0.0, le=1.0)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)


class KnowledgeCardList(BaseModel):
    """Wrapper so a list of cards can be cached as one JSON document."""

    cards: list[KnowledgeCard] = Field(default_factory=list)


@dataclass
class UsageMetrics:
    """Process-wide counters for upstream usage."""

    request_count: int = 0
    tokens_consumed: int = 0
    error_count: int = 0
    last_reset_at: float = field(default_factory=time.time)

    @property
    def error_rate(self) -> float:
        """Calculate failures per upstream attempt, capped at 1.0.

        Failures recorded before any attempt (a missing credential, a broken
        template) still count: with no attempts, any error reads as 1.0.
        """
        if self.request_count == 0:
            return 1.0 if self.error_count else 0.0
        return min(1.0, self.error_count / self.request_count)

    @property
    def average_tokens_per_request(self) -> float:
        """Calculate average tokens consumed per attempt."""
        if self.request_count == 0:
            return 0.0
        return self.tokens_consumed / self.request_count

    def record_request(self) -> None:
        """Record an upstream attempt."""
        self.request_count += 1

    def record_tokens(self, tokens: int) -> None:
        """Record tokens reported by the upstream."""
        self.tokens_consumed += max(0, tokens)

    def record_error(self) -> None:
        """Record a failed attempt or fatal configuration failure."""
        self.error_count += 1

    def snapshot(self) -> "UsageMetrics":
        """Return a detached copy for read-only callers."""
        return replace(self)

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "request_count": self.request_count,
            "tokens_consumed": self.tokens_consumed,
            "error_count": self.error_count,
            "last_reset_at": self.last_reset_at,
            "error_rate": self.error_rate,
            "average_tokens_per_request": self.average_tokens_per_request,
        }
