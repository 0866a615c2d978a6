"""Prompt Template Engine.

Templates are immutable definitions created at import time; ``render``
substitutes ``{{variable}}`` placeholders literally.

Usage:
    ```python
    from preemie_guidance.prompts import DAILY_GUIDANCE, daily_guidance_variables, render

    prompt = render(DAILY_GUIDANCE, daily_guidance_variables(age, activity))
    ```
"""

from .guidance import AGE_SPECIFIC_GUIDANCE, AgeGuidance, PrematurityProfile, prematurity_profile
from .renderer import render, render_messages, system_message
from .templates import (
    DAILY_GUIDANCE,
    GROWTH_INSIGHTS,
    KNOWLEDGE_CARDS,
    MILESTONE_RECOMMENDATION,
    TEMPLATES,
)
from .variables import (
    daily_guidance_variables,
    insights_variables,
    knowledge_card_variables,
    milestone_variables,
)

__all__ = [
    "AGE_SPECIFIC_GUIDANCE",
    "AgeGuidance",
    "DAILY_GUIDANCE",
    "GROWTH_INSIGHTS",
    "KNOWLEDGE_CARDS",
    "MILESTONE_RECOMMENDATION",
    "PrematurityProfile",
    "TEMPLATES",
    "daily_guidance_variables",
    "insights_variables",
    "knowledge_card_variables",
    "milestone_variables",
    "prematurity_profile",
    "render",
    "render_messages",
    "system_message",
]
