"""
Tests for the content sanitizer.
"""

import json

import pytest

from preemie_guidance.models import UrgencyLevel
from preemie_guidance.sanitizer import (
    DEFAULT_CONTENT,
    DEFAULT_TITLE,
    UNSAFE_CHARACTERS,
    ContentSanitizer,
    SanitizationFailure,
    extract_json_object,
)


@pytest.fixture
def sanitizer():
    return ContentSanitizer()


def test_extracts_object_surrounded_by_text():
    raw = 'Sure! Here you go:\n{"title": "Hi", "content": "Body"}\nHope that helps.'
    assert extract_json_object(raw) == {"title": "Hi", "content": "Body"}


def test_extraction_ignores_braces_inside_strings():
    raw = 'x {"title": "a } b", "content": "{nested}"} y'
    assert extract_json_object(raw) == {"title": "a } b", "content": "{nested}"}


def test_extraction_skips_unparseable_blocks():
    raw = '{not json} then {"title": "ok"}'
    assert extract_json_object(raw) == {"title": "ok"}


def test_no_block_is_a_failure(sanitizer):
    result = sanitizer.sanitize("I cannot answer in JSON today.")
    assert isinstance(result, SanitizationFailure)
    assert result.reason


def test_missing_fields_get_defaults(sanitizer):
    result = sanitizer.sanitize("{}")
    assert result.title == DEFAULT_TITLE
    assert result.content == DEFAULT_CONTENT
    assert result.action_items == []
    assert result.tags == []
    assert result.urgency_level is UrgencyLevel.LOW


def test_invalid_urgency_falls_back_to_low(sanitizer):
    result = sanitizer.sanitize('{"title": "t", "content": "c", "urgencyLevel": "panic"}')
    assert result.urgency_level is UrgencyLevel.LOW


def test_valid_urgency_is_kept(sanitizer):
    result = sanitizer.sanitize('{"title": "t", "content": "c", "urgencyLevel": "MEDIUM"}')
    assert result.urgency_level is UrgencyLevel.MEDIUM


def test_lists_are_truncated_and_tags_prefixed(sanitizer):
    raw = json.dumps(
        {
            "title": "t",
            "content": "c",
            "actionItems": ["a", "b", "c", "d", "e"],
            "tags": ["sleep", "#sleep", "#feeding", "bonding", "cognition", "sensory"],
        }
    )
    result = sanitizer.sanitize(raw)
    assert result.action_items == ["a", "b", "c"]
    assert result.tags == ["#sleep", "#feeding", "#bonding", "#cognition"]


def test_unsafe_characters_are_stripped(sanitizer):
    raw = json.dumps(
        {
            "title": "<script>alert('x')</script>",
            "content": 'Tom & "Jerry"',
            "actionItems": ["<b>bold</b>"],
        }
    )
    result = sanitizer.sanitize(raw)
    for text in [result.title, result.content, *result.action_items]:
        assert not any(ch in text for ch in UNSAFE_CHARACTERS)
    assert result.title == "scriptalert(x)/script"


def test_anxiety_terms_are_rewritten(sanitizer):
    raw = json.dumps(
        {
            "title": "Delayed crawling",
            "content": "Your baby is behind on milestones, which is not a problem.",
        }
    )
    result = sanitizer.sanitize(raw)
    assert result.title == "At its own pace crawling"
    assert "catching up" in result.content
    assert "trait" in result.content
    assert "behind" not in result.content.lower()
    assert "problem" not in result.content.lower()


def test_rewrite_respects_word_boundaries(sanitizer):
    assert sanitizer.clean_text("problematic") == "problematic"
    assert sanitizer.clean_text("behindhand") == "behindhand"


def test_plural_is_rewritten_before_singular(sanitizer):
    assert sanitizer.clean_text("no problems here") == "no traits here"


def test_length_bound_holds_after_rewriting(sanitizer):
    text = "delayed " * 200
    cleaned = sanitizer.clean_text(text)
    assert len(cleaned) <= 500
    assert "delayed" not in cleaned


def test_sanitize_text(sanitizer):
    assert sanitizer.sanitize_text("  Try <more> tummy time if delayed.  ") == (
        "Try more tummy time if at its own pace."
    )
    assert isinstance(sanitizer.sanitize_text("   "), SanitizationFailure)


def test_sanitize_insights(sanitizer):
    raw = json.dumps(
        {
            "insights": ["one", "two", "three", "four"],
            "recommendations": "single recommendation",
            "concerns": ["Feeding seems abnormal"],
        }
    )
    result = sanitizer.sanitize_insights(raw)
    assert result.insights == ["one", "two", "three"]
    assert result.recommendations == ["single recommendation"]
    assert result.concerns == ["Feeding seems individual variation"]


def test_empty_insights_are_a_failure(sanitizer):
    result = sanitizer.sanitize_insights('{"insights": [], "recommendations": []}')
    assert isinstance(result, SanitizationFailure)


def test_knowledge_cards_sorted_and_limited(sanitizer):
    raw = json.dumps(
        {
            "cards": [
                {"title": "A", "content": "a", "relevanceScore": 0.1},
                {"title": "B", "content": "b", "relevanceScore": 0.9},
                {"title": "C", "content": "c", "relevanceScore": "0.5"},
                {"title": "", "content": "dropped"},
                "not a card",
            ]
        }
    )
    result = sanitizer.sanitize_knowledge_cards(raw, limit=2)
    assert [card.title for card in result.cards] == ["B", "C"]


def test_knowledge_card_scores_are_clamped(sanitizer):
    raw = json.dumps({"cards": [{"title": "A", "content": "a", "relevanceScore": 7}]})
    result = sanitizer.sanitize_knowledge_cards(raw, limit=5)
    assert result.cards[0].relevance_score == 1.0


def test_knowledge_cards_without_list_is_a_failure(sanitizer):
    assert isinstance(
        sanitizer.sanitize_knowledge_cards('{"cards": "none"}', limit=3), SanitizationFailure
    )
