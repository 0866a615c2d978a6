"""Age- and prematurity-specific guidance tables used to fill templates."""

from dataclasses import dataclass

from preemie_guidance.entities import AgeBucket


@dataclass(frozen=True)
class PrematurityProfile:
    severity: str
    focus_areas: tuple[str, ...]
    support_needs: tuple[str, ...]


@dataclass(frozen=True)
class AgeGuidance:
    focus_areas: tuple[str, ...]
    common_concerns: tuple[str, ...]
    key_milestones: tuple[str, ...]


AGE_SPECIFIC_GUIDANCE: dict[AgeBucket, AgeGuidance] = {
    AgeBucket.MONTHS_0_2: AgeGuidance(
        focus_areas=("sensory stimulation", "basic care", "sense of security", "feeding"),
        common_concerns=("catch-up growth", "sleep patterns", "weight gain", "muscle tone"),
        key_milestones=("visual tracking", "social smile", "lifting head on tummy", "reacting to sounds"),
    ),
    AgeBucket.MONTHS_2_4: AgeGuidance(
        focus_areas=("tummy time", "social interaction", "hand-eye coordination", "early language"),
        common_concerns=("head control", "sleep rhythm", "social responses", "motor development"),
        key_milestones=("steady head", "getting ready to roll", "grasping", "cooing"),
    ),
    AgeBucket.MONTHS_4_6: AgeGuidance(
        focus_areas=("supported sitting", "fine motor skills", "preparing for solids", "exploration"),
        common_concerns=("sitting balance", "hand skills", "nutrition", "cognitive growth"),
        key_milestones=("sitting alone", "two-handed grasp", "passing objects", "stranger awareness"),
    ),
    AgeBucket.MONTHS_6_9: AgeGuidance(
        focus_areas=("getting ready to crawl", "understanding words", "fine motor skills", "independence"),
        common_concerns=("mobility", "separation anxiety", "food allergies", "social skills"),
        key_milestones=("crawling", "pulling to stand", "finger foods", "simple instructions"),
    ),
    AgeBucket.MONTHS_9_12: AgeGuidance(
        focus_areas=("standing and cruising", "first words", "pincer grasp", "play routines"),
        common_concerns=("walking readiness", "sleep transitions", "self-feeding", "communication"),
        key_milestones=("cruising furniture", "first words", "pincer grasp", "waving bye-bye"),
    ),
    AgeBucket.MONTHS_12_PLUS: AgeGuidance(
        focus_areas=("walking", "vocabulary", "pretend play", "self-care"),
        common_concerns=("balance", "picky eating", "tantrums", "language growth"),
        key_milestones=("independent steps", "two-word phrases", "stacking blocks", "using a spoon"),
    ),
}


def prematurity_profile(premature_weeks: int) -> PrematurityProfile:
    """Classify how early the child was born and what support that implies."""
    if premature_weeks <= 4:
        return PrematurityProfile(
            severity="mildly premature",
            focus_areas=("sensory development", "catch-up growth", "social interaction"),
            support_needs=("catch-up growth", "sensory development"),
        )
    if premature_weeks <= 8:
        return PrematurityProfile(
            severity="moderately premature",
            focus_areas=("motor development", "early cognition", "nutrition support"),
            support_needs=("motor development", "cognitive support", "enhanced nutrition"),
        )
    return PrematurityProfile(
        severity="extremely premature",
        focus_areas=("whole-child development", "professional guidance", "family support"),
        support_needs=("whole-child development support", "medical follow-up", "specialised care"),
    )
