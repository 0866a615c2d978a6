"""Build template variable mappings from care records."""

from preemie_guidance.entities import AgeContext, DataSummary, MilestoneSummary, RecentActivity

from .guidance import AGE_SPECIFIC_GUIDANCE, prematurity_profile

NO_RECORDS = "No records"
NO_MILESTONES = "None yet"

MILESTONE_CATEGORIES = ("motor", "cognitive", "social", "language")


def _age_variables(age: AgeContext) -> dict[str, str]:
    return {
        "babyName": age.name,
        "gestationalWeeks": str(age.gestational_weeks),
        "gestationalDays": str(age.gestational_days),
        "prematureWeeks": str(age.premature_weeks),
        "correctedMonths": str(age.corrected_months),
        "correctedDays": str(age.corrected_days),
        "actualMonths": str(age.actual_months),
        "actualDays": str(age.actual_days),
    }


def _milestone_titles(milestones: tuple[MilestoneSummary, ...] | list[MilestoneSummary]) -> str:
    return ", ".join(m.title for m in milestones) or NO_MILESTONES


def daily_guidance_variables(age: AgeContext, activity: RecentActivity) -> dict[str, str]:
    """Variables for the daily guidance template.

    Args:
        age: Corrected-age data for the child
        activity: Last-24-hour feeding and sleep records plus achieved milestones

    Returns:
        Mapping covering every variable the template declares
    """
    feeding = "\n".join(
        f"- {f.kind} - {f.amount_or_duration}" + (f" - {f.notes}" if f.notes else "")
        for f in activity.feedings
    )
    sleep = "\n".join(
        f"- {s.start_time:%H:%M} to {s.end_time:%H:%M} ({s.duration_minutes} min)"
        for s in activity.sleeps
    )
    guidance = AGE_SPECIFIC_GUIDANCE[age.age_bucket]
    development = (
        f"Milestones achieved: {_milestone_titles(activity.milestones)}\n"
        f"Focus areas for this stage: {', '.join(guidance.focus_areas)}"
    )

    variables = _age_variables(age)
    variables.update(
        {
            "prematureSeverity": prematurity_profile(age.premature_weeks).severity,
            "ageCategory": age.age_bucket.value,
            "feedingAnalysis": feeding or NO_RECORDS,
            "sleepAnalysis": sleep or NO_RECORDS,
            "developmentAnalysis": development,
        }
    )
    return variables


def milestone_variables(age: AgeContext, achieved: list[MilestoneSummary]) -> dict[str, str]:
    """Variables for the milestone recommendation template."""
    counts = {category: 0 for category in MILESTONE_CATEGORIES}
    for milestone in achieved:
        if milestone.category in counts:
            counts[milestone.category] += 1

    variables = _age_variables(age)
    variables.update(
        {
            "totalMilestones": str(len(achieved)),
            "motorCount": str(counts["motor"]),
            "cognitiveCount": str(counts["cognitive"]),
            "socialCount": str(counts["social"]),
            "languageCount": str(counts["language"]),
            "recentMilestones": _milestone_titles(achieved[:5]),
        }
    )
    return variables


def insights_variables(summary: DataSummary) -> dict[str, str]:
    """Variables for the growth insights template."""
    return {
        "correctedMonths": str(summary.age.corrected_months),
        "correctedDays": str(summary.age.corrected_days),
        "prematureWeeks": str(summary.age.premature_weeks),
        "feedingCount": str(summary.feeding_count),
        "sleepCount": str(summary.sleep_count),
        "milestonesCount": str(summary.milestones_count),
        "dataAnalysis": summary.data_analysis or NO_RECORDS,
    }


def knowledge_card_variables(age: AgeContext, card_count: int) -> dict[str, str]:
    """Variables for the knowledge cards template."""
    return {
        "ageCategory": age.age_bucket.value,
        "cardCount": str(card_count),
        "correctedMonths": str(age.corrected_months),
        "correctedDays": str(age.corrected_days),
        "prematureWeeks": str(age.premature_weeks),
    }
