"""Post-processing of raw model output.

The model is asked to answer with a JSON object, but free text around it is
common and the object itself may be missing fields. Everything here is
best-effort: when no usable structure can be found the sanitizer returns a
``SanitizationFailure`` instead of raising, and the orchestrator treats that
as a failed attempt.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from preemie_guidance.models import (
    MAX_ACTION_ITEMS,
    MAX_FIELD_CHARS,
    MAX_INSIGHT_ITEMS,
    MAX_TAGS,
    GrowthInsights,
    KnowledgeCard,
    KnowledgeCardList,
    PersonalizedContent,
    UrgencyLevel,
)

DEFAULT_TITLE = "A care tip for today"
DEFAULT_CONTENT = "Keep following the healthy growth of your baby, one day at a time!"

UNSAFE_CHARACTERS = "<>\"'&"
_UNSAFE_TABLE = str.maketrans("", "", UNSAFE_CHARACTERS)

# Longer terms first so "problems" wins over "problem".
ANXIETY_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("delayed", "at its own pace"),
    ("behind", "catching up"),
    ("abnormal", "individual variation"),
    ("problems", "traits"),
    ("problem", "trait"),
    ("worried", "attentive"),
    ("alarming", "worth noting"),
)


@dataclass(frozen=True)
class SanitizationFailure:
    """Raw output could not be turned into the requested shape."""

    reason: str


def _balanced_end(text: str, start: int) -> int | None:
    """Index of the brace closing the one at ``start``, skipping JSON strings."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def extract_json_object(raw_text: str) -> dict[str, Any] | None:
    """Return the first balanced ``{...}`` block that parses as a JSON object."""
    start = raw_text.find("{")
    while start != -1:
        end = _balanced_end(raw_text, start)
        if end is not None:
            try:
                parsed = json.loads(raw_text[start : end + 1])
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, dict):
                return parsed
        start = raw_text.find("{", start + 1)
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return ""


def _as_text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [text for text in (_as_text(item) for item in value) if text]


class ContentSanitizer:
    """Turns raw model output into safe, bounded content.

    Every text field passes through the same steps: length clamp, removal of
    markup-injection characters, rewrite of anxiety-triggering terms, and a
    final clamp so rewrites can never push a field past the limit.

    Example:
        ```python
        sanitizer = ContentSanitizer()
        result = sanitizer.sanitize(raw_text)
        if isinstance(result, SanitizationFailure):
            ...
        ```
    """

    def __init__(
        self,
        max_chars: int = MAX_FIELD_CHARS,
        replacements: tuple[tuple[str, str], ...] = ANXIETY_REPLACEMENTS,
    ) -> None:
        self._max_chars = max_chars
        self._replacements = [
            (re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE), replacement)
            for term, replacement in replacements
        ]

    def clean_text(self, text: str) -> str:
        """Apply clamp, character strip, term rewrite and the final clamp."""
        cleaned = text[: self._max_chars]
        cleaned = cleaned.translate(_UNSAFE_TABLE)
        for pattern, replacement in self._replacements:
            cleaned = pattern.sub(lambda m, r=replacement: _match_case(m.group(0), r), cleaned)
        return cleaned.strip()[: self._max_chars]

    def _clean_list(self, items: list[str], limit: int) -> list[str]:
        cleaned = [self.clean_text(item) for item in items]
        return [item for item in cleaned if item][:limit]

    def _clean_tags(self, tags: list[str]) -> list[str]:
        result: list[str] = []
        for tag in tags:
            cleaned = self.clean_text(tag).lstrip("#").strip()
            if not cleaned:
                continue
            tag_text = f"#{cleaned}"[: self._max_chars]
            if tag_text not in result:
                result.append(tag_text)
            if len(result) == MAX_TAGS:
                break
        return result

    def sanitize(self, raw_text: str) -> PersonalizedContent | SanitizationFailure:
        """Parse a daily guidance card out of raw model output."""
        data = extract_json_object(raw_text)
        if data is None:
            return SanitizationFailure("no structured block found")

        urgency_raw = _as_text(data.get("urgencyLevel", data.get("urgency_level"))).lower()
        try:
            urgency = UrgencyLevel(urgency_raw)
        except ValueError:
            urgency = UrgencyLevel.LOW

        action_items = _as_text_list(data.get("actionItems", data.get("action_items")))
        return PersonalizedContent(
            title=self.clean_text(_as_text(data.get("title"))) or DEFAULT_TITLE,
            content=self.clean_text(_as_text(data.get("content"))) or DEFAULT_CONTENT,
            action_items=self._clean_list(action_items, MAX_ACTION_ITEMS),
            tags=self._clean_tags(_as_text_list(data.get("tags"))),
            urgency_level=urgency,
        )

    def sanitize_text(self, raw_text: str) -> str | SanitizationFailure:
        """Clean unstructured output such as a milestone recommendation."""
        cleaned = self.clean_text(raw_text.strip())
        if not cleaned:
            return SanitizationFailure("empty text")
        return cleaned

    def sanitize_insights(self, raw_text: str) -> GrowthInsights | SanitizationFailure:
        """Parse insights, recommendations and concerns out of raw output."""
        data = extract_json_object(raw_text)
        if data is None:
            return SanitizationFailure("no structured block found")

        insights = GrowthInsights(
            insights=self._clean_list(_as_text_list(data.get("insights")), MAX_INSIGHT_ITEMS),
            recommendations=self._clean_list(
                _as_text_list(data.get("recommendations")), MAX_INSIGHT_ITEMS
            ),
            concerns=self._clean_list(_as_text_list(data.get("concerns")), MAX_INSIGHT_ITEMS),
        )
        if not (insights.insights or insights.recommendations):
            return SanitizationFailure("no insights or recommendations")
        return insights

    def sanitize_knowledge_cards(
        self, raw_text: str, limit: int
    ) -> KnowledgeCardList | SanitizationFailure:
        """Parse knowledge cards, sorted by relevance and capped at ``limit``."""
        data = extract_json_object(raw_text)
        if data is None:
            return SanitizationFailure("no structured block found")

        raw_cards = data.get("cards")
        if not isinstance(raw_cards, list):
            return SanitizationFailure("no cards list")

        cards: list[KnowledgeCard] = []
        for raw_card in raw_cards:
            if not isinstance(raw_card, dict):
                continue
            title = self.clean_text(_as_text(raw_card.get("title")))
            content = self.clean_text(_as_text(raw_card.get("content")))
            if not title or not content:
                continue
            cards.append(
                KnowledgeCard(
                    title=title,
                    content=content,
                    category=self.clean_text(_as_text(raw_card.get("category"))),
                    relevance_score=_as_score(raw_card.get("relevanceScore")),
                    tags=self._clean_tags(_as_text_list(raw_card.get("tags"))),
                )
            )

        if not cards:
            return SanitizationFailure("no usable cards")
        cards.sort(key=lambda card: card.relevance_score, reverse=True)
        return KnowledgeCardList(cards=cards[:limit])


def _as_score(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return 0.5
    try:
        score = float(value)
    except ValueError:
        return 0.5
    if score != score:  # NaN
        return 0.5
    return min(1.0, max(0.0, score))


def _match_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement
