"""Shared fixtures: a manual clock, a recording sleep and a scripted upstream."""

import json

import pytest

from preemie_guidance.config import RateLimitRule
from preemie_guidance.entities import (
    ActionKind,
    AgeContext,
    CompletionResult,
    GenerationConfig,
    RecentActivity,
)
from preemie_guidance.repositories import InMemoryCacheRepository
from preemie_guidance.services import GuidanceService, RateLimiter


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Sleep replacement that records requested delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeUpstream:
    """Upstream client returning scripted outcomes in order.

    Each outcome is a string (returned as completion text), a
    CompletionResult, or an exception instance (raised). The last outcome
    repeats once the script runs out.
    """

    def __init__(self, *outcomes, configured: bool = True) -> None:
        self.outcomes = list(outcomes)
        self.configured = configured
        self.calls: list[tuple[list[dict[str, str]], GenerationConfig]] = []
        self.closed = False

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def complete(self, messages, config) -> CompletionResult:
        self.calls.append((messages, config))
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, CompletionResult):
            return outcome
        return CompletionResult(text=outcome, tokens_used=100)

    async def close(self) -> None:
        self.closed = True


DAILY_JSON = json.dumps(
    {
        "title": "Gentle tummy time",
        "content": "Short tummy time sessions help build neck strength.",
        "actionItems": ["Try three short sessions", "Use a rolled towel", "Sing while you play"],
        "tags": ["#gross-motor", "#bonding"],
        "urgencyLevel": "low",
    }
)

INSIGHTS_JSON = json.dumps(
    {
        "insights": ["Feeding is regular."],
        "recommendations": ["Keep the evening routine."],
        "concerns": [],
    }
)

CARDS_JSON = json.dumps(
    {
        "cards": [
            {"title": "Low", "content": "Low relevance", "category": "sleep", "relevanceScore": 0.2},
            {"title": "High", "content": "High relevance", "category": "feeding", "relevanceScore": 0.9},
            {"title": "Mid", "content": "Mid relevance", "category": "bonding", "relevanceScore": 0.5},
        ]
    }
)

TEST_RULES = {
    ActionKind.DAILY_GUIDANCE: RateLimitRule(max_requests=5, window_ms=60_000),
    ActionKind.MILESTONE: RateLimitRule(max_requests=5, window_ms=60_000),
    ActionKind.INSIGHTS: RateLimitRule(max_requests=3, window_ms=300_000),
    ActionKind.KNOWLEDGE_CARDS: RateLimitRule(max_requests=10, window_ms=60_000),
}


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def age() -> AgeContext:
    """A child born at 32 weeks, now 3 months corrected."""
    return AgeContext(
        name="Mia",
        gestational_weeks=32,
        gestational_days=3,
        corrected_age_in_days=95,
        corrected_months=3,
        corrected_days=5,
        actual_months=5,
        actual_days=2,
    )


@pytest.fixture
def activity() -> RecentActivity:
    return RecentActivity()


@pytest.fixture
def make_service(clock, sleep):
    """Build a GuidanceService around a fake upstream with injected state."""

    def _make(upstream: FakeUpstream, max_retries: int = 3, rules=None) -> GuidanceService:
        return GuidanceService(
            upstream=upstream,
            cache=InMemoryCacheRepository(max_entries=100, clock=clock),
            limiter=RateLimiter(rules=rules or TEST_RULES, clock=clock),
            timeout_seconds=5,
            max_retries=max_retries,
            retry_base_delay=1.0,
            cache_ttl=3600,
            clock=clock,
            sleep=sleep,
        )

    return _make
