"""Request DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from preemie_guidance.entities import (
    AgeContext,
    DataSummary,
    FeedingSummary,
    MilestoneSummary,
    RecentActivity,
    SleepSummary,
    as_utc,
)


class AgePayload(BaseModel):
    """Corrected-age data as produced by the age calculator.

    The handler converts this to the internal AgeContext entity.
    """

    name: str = Field(..., description="Child's name", min_length=1, max_length=100)
    gestational_weeks: int = Field(..., description="Gestational weeks at birth", ge=20, le=44)
    gestational_days: int = Field(0, description="Extra gestational days at birth", ge=0, le=6)
    corrected_age_in_days: int = Field(..., description="Corrected age in days", ge=0)
    corrected_months: int = Field(..., ge=0)
    corrected_days: int = Field(..., ge=0)
    actual_months: int = Field(..., ge=0)
    actual_days: int = Field(..., ge=0)

    def to_entity(self) -> AgeContext:
        return AgeContext(**self.model_dump())


class FeedingPayload(BaseModel):
    kind: str = Field(..., description="Feeding type, e.g. breast, formula, solid")
    amount_or_duration: str = Field(..., description="Volume or duration as recorded")
    notes: str = ""


class SleepPayload(BaseModel):
    """One sleep session. Timestamps without an offset are read as UTC."""

    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def check_order(self) -> "SleepPayload":
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class MilestonePayload(BaseModel):
    title: str = Field(..., min_length=1)
    category: str = Field(..., description="motor, cognitive, social or language")
    achieved_at: datetime | None = None

    def to_entity(self) -> MilestoneSummary:
        return MilestoneSummary(
            title=self.title, category=self.category, achieved_at=self.achieved_at
        )


class DailyGuidanceRequest(BaseModel):
    """Request DTO for daily guidance: age plus last-24-hour records."""

    age: AgePayload
    feedings: list[FeedingPayload] = Field(default_factory=list)
    sleeps: list[SleepPayload] = Field(default_factory=list)
    milestones: list[MilestonePayload] = Field(default_factory=list)

    def to_activity(self) -> RecentActivity:
        return RecentActivity(
            feedings=tuple(FeedingSummary(**f.model_dump()) for f in self.feedings),
            sleeps=tuple(SleepSummary(**s.model_dump()) for s in self.sleeps),
            milestones=tuple(m.to_entity() for m in self.milestones),
        )


class MilestoneRecommendationRequest(BaseModel):
    """Request DTO for a milestone recommendation."""

    age: AgePayload
    achieved_milestones: list[MilestonePayload] = Field(default_factory=list)


class GrowthInsightsRequest(BaseModel):
    """Request DTO for growth insights over aggregated records."""

    age: AgePayload
    feeding_count: int = Field(0, ge=0)
    sleep_count: int = Field(0, ge=0)
    milestones_count: int = Field(0, ge=0)
    data_analysis: str = Field("", description="Free-text summary of observed patterns")

    def to_summary(self) -> DataSummary:
        return DataSummary(
            age=self.age.to_entity(),
            feeding_count=self.feeding_count,
            sleep_count=self.sleep_count,
            milestones_count=self.milestones_count,
            data_analysis=self.data_analysis,
        )


class KnowledgeCardsRequest(BaseModel):
    """Request DTO for knowledge cards. Out-of-range counts are clamped to 1..10."""

    age: AgePayload
    card_count: int = Field(5, description="Number of cards wanted")
