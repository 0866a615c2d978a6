"""Generation input entities.

The corrected-age calculator and the record queries live outside this
package; their results arrive here as plain frozen records.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

FULL_TERM_WEEKS = 40


class ActionKind(str, Enum):
    """Named categories of generation request, each with its own rate budget."""

    DAILY_GUIDANCE = "daily"
    MILESTONE = "milestone"
    INSIGHTS = "insights"
    KNOWLEDGE_CARDS = "knowledge"


class AgeBucket(str, Enum):
    """Developmental-age bucket by corrected age."""

    MONTHS_0_2 = "0-2 months"
    MONTHS_2_4 = "2-4 months"
    MONTHS_4_6 = "4-6 months"
    MONTHS_6_9 = "6-9 months"
    MONTHS_9_12 = "9-12 months"
    MONTHS_12_PLUS = "12+ months"


_BUCKET_UPPER_BOUNDS = (
    (60, AgeBucket.MONTHS_0_2),
    (120, AgeBucket.MONTHS_2_4),
    (180, AgeBucket.MONTHS_4_6),
    (270, AgeBucket.MONTHS_6_9),
    (365, AgeBucket.MONTHS_9_12),
)


def age_bucket_for(corrected_age_in_days: int) -> AgeBucket:
    """Map a corrected age in days to its developmental bucket."""
    for upper_bound, bucket in _BUCKET_UPPER_BOUNDS:
        if corrected_age_in_days < upper_bound:
            return bucket
    return AgeBucket.MONTHS_12_PLUS


def as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC so aware and naive values compare."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class AgeContext:
    """Output of the corrected-age calculator for one child."""

    name: str
    gestational_weeks: int
    gestational_days: int
    corrected_age_in_days: int
    corrected_months: int
    corrected_days: int
    actual_months: int
    actual_days: int

    @property
    def premature_weeks(self) -> int:
        return max(0, FULL_TERM_WEEKS - self.gestational_weeks)

    @property
    def age_bucket(self) -> AgeBucket:
        return age_bucket_for(self.corrected_age_in_days)


@dataclass(frozen=True)
class FeedingSummary:
    kind: str
    amount_or_duration: str
    notes: str = ""


@dataclass(frozen=True)
class SleepSummary:
    start_time: datetime
    end_time: datetime

    @property
    def duration_minutes(self) -> int:
        elapsed = as_utc(self.end_time) - as_utc(self.start_time)
        return max(0, int(elapsed.total_seconds() // 60))


@dataclass(frozen=True)
class MilestoneSummary:
    title: str
    category: str
    achieved_at: datetime | None = None


@dataclass(frozen=True)
class RecentActivity:
    """Last-24-hour care records plus achieved milestones."""

    feedings: tuple[FeedingSummary, ...] = ()
    sleeps: tuple[SleepSummary, ...] = ()
    milestones: tuple[MilestoneSummary, ...] = ()


@dataclass(frozen=True)
class DataSummary:
    """Aggregated record counts and a free-text pattern analysis."""

    age: AgeContext
    feeding_count: int
    sleep_count: int
    milestones_count: int
    data_analysis: str = ""


@dataclass(frozen=True)
class GenerationContext:
    """Per-call input to the orchestrator.

    Attributes:
        caller_id: Identity used for rate limiting and logs
        action_kind: Which template, budget and fallback apply
        age_bucket: Selects the fallback content
        variables: Values substituted into the template
        fingerprint_fields: Identifying fields folded into the cache key
    """

    caller_id: str
    action_kind: ActionKind
    age_bucket: AgeBucket
    variables: Mapping[str, str]
    fingerprint_fields: Mapping[str, Any] = field(default_factory=dict)
