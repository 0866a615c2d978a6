"""Static guidance served when live generation is unavailable.

Everything here is deterministic, needs no network access and already
satisfies the output bounds, so the fallback path can never fail.
"""

from preemie_guidance.entities import AgeBucket
from preemie_guidance.models import (
    GrowthInsights,
    KnowledgeCard,
    KnowledgeCardList,
    PersonalizedContent,
    UrgencyLevel,
)

FALLBACK_DAILY_GUIDANCE: dict[AgeBucket, PersonalizedContent] = {
    AgeBucket.MONTHS_0_2: PersonalizedContent(
        title="Focus on the senses",
        content=(
            "At this stage your baby is adjusting to the world outside, and sensory "
            "development comes first. High-contrast black and white patterns catch "
            "attention and support early vision."
        ),
        action_items=[
            "Play with black and white cards every day",
            "Talk to your baby often to support hearing",
            "Enjoy skin-to-skin contact to build a sense of security",
        ],
        tags=["#cognition", "#sensory"],
        urgency_level=UrgencyLevel.LOW,
    ),
    AgeBucket.MONTHS_2_4: PersonalizedContent(
        title="Time for playful interaction",
        content=(
            "Your baby is showing more interest in the surrounding world. Simple "
            "interactive games now support motor skills and social development."
        ),
        action_items=[
            "Practise short sessions of tummy time",
            "Use gentle sounds to attract attention",
            "Share plenty of eye contact and smiles",
        ],
        tags=["#gross-motor", "#social-emotional"],
        urgency_level=UrgencyLevel.LOW,
    ),
    AgeBucket.MONTHS_4_6: PersonalizedContent(
        title="Reaching, grasping and sitting",
        content=(
            "Hands are becoming busy explorers. Supported sitting and safe toys to "
            "grasp help your baby build balance and fine motor control at a "
            "comfortable pace."
        ),
        action_items=[
            "Offer toys that are easy to grasp and pass between hands",
            "Practise supported sitting with cushions around",
            "Name objects as your baby touches them",
        ],
        tags=["#fine-motor", "#gross-motor", "#cognition"],
        urgency_level=UrgencyLevel.LOW,
    ),
    AgeBucket.MONTHS_6_9: PersonalizedContent(
        title="Getting ready to move",
        content=(
            "Many babies now prepare to crawl and start to understand familiar "
            "words. Floor play and simple routines build confidence and independence."
        ),
        action_items=[
            "Give plenty of safe floor time for rocking and reaching",
            "Use the same words for daily routines",
            "Offer soft finger foods when your baby is ready",
        ],
        tags=["#gross-motor", "#feeding", "#bonding"],
        urgency_level=UrgencyLevel.LOW,
    ),
    AgeBucket.MONTHS_9_12: PersonalizedContent(
        title="Little explorer on the move",
        content=(
            "Pulling up, cruising along furniture and babbling are all part of this "
            "lively stage. Celebrate each small step and keep the play space safe."
        ),
        action_items=[
            "Set up sturdy furniture for cruising practice",
            "Read picture books together every day",
            "Play simple games like peekaboo and waving",
        ],
        tags=["#gross-motor", "#cognition", "#social-emotional"],
        urgency_level=UrgencyLevel.LOW,
    ),
    AgeBucket.MONTHS_12_PLUS: PersonalizedContent(
        title="Growing independence",
        content=(
            "Toddlers learn by doing. First steps, new words and pretend play all "
            "grow from everyday moments shared with you."
        ),
        action_items=[
            "Encourage walking with a push toy or your hands",
            "Describe what you are doing during daily routines",
            "Offer simple pretend play with cups and spoons",
        ],
        tags=["#gross-motor", "#cognition", "#bonding"],
        urgency_level=UrgencyLevel.LOW,
    ),
}

FALLBACK_MILESTONE_RECOMMENDATION = (
    "Keep observing how your baby develops. Every baby has an individual rhythm, "
    "and patient companionship matters most."
)

FALLBACK_GROWTH_INSIGHTS = GrowthInsights(
    insights=[
        "Your baby is growing steadily; keep recording to see clearer patterns.",
        "Regular feeding and sleep records help you understand individual needs.",
    ],
    recommendations=[
        "Keep a consistent daily routine for feeding and sleep.",
        "Celebrate each new milestone, however small.",
    ],
    concerns=[
        "Share any questions with your pediatrician at the next routine visit.",
    ],
)

_GENERAL_CARDS = (
    KnowledgeCard(
        title="Why corrected age matters",
        content=(
            "Corrected age counts from the original due date. Comparing development "
            "against corrected age gives a fairer picture for babies born early."
        ),
        category="development",
        relevance_score=0.9,
        tags=["#catch-up-growth"],
    ),
    KnowledgeCard(
        title="Routines that calm",
        content=(
            "Predictable routines for feeding, bathing and sleep help premature "
            "babies feel secure and settle more easily."
        ),
        category="sleep",
        relevance_score=0.8,
        tags=["#sleep", "#bonding"],
    ),
    KnowledgeCard(
        title="Caring for yourself too",
        content=(
            "Parents of premature babies carry a lot. Rest when you can and lean on "
            "family, friends and parent groups for support."
        ),
        category="emotional support",
        relevance_score=0.7,
        tags=["#bonding"],
    ),
)


def fallback_daily_guidance(bucket: AgeBucket) -> PersonalizedContent:
    """Static daily guidance for an age bucket, as a fresh copy."""
    content = FALLBACK_DAILY_GUIDANCE.get(bucket, FALLBACK_DAILY_GUIDANCE[AgeBucket.MONTHS_0_2])
    return content.model_copy(deep=True)


def fallback_knowledge_cards(bucket: AgeBucket, limit: int) -> KnowledgeCardList:
    """Static knowledge cards: the bucket card first, then general ones."""
    guidance = fallback_daily_guidance(bucket)
    bucket_card = KnowledgeCard(
        title=guidance.title,
        content=guidance.content,
        category="development",
        relevance_score=1.0,
        tags=guidance.tags,
    )
    return KnowledgeCardList(cards=[bucket_card, *_GENERAL_CARDS][:limit])
