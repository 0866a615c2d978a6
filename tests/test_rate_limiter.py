"""
Tests for the fixed-window rate limiter.
"""

import pytest

from preemie_guidance.config import RateLimitRule
from preemie_guidance.entities import ActionKind
from preemie_guidance.services import RateLimiter

WINDOW_MS = 60_000


@pytest.fixture
def limiter(clock):
    # Start exactly on a window boundary so the window index is predictable.
    clock.now = 1_020_000.0
    return RateLimiter(
        rules={
            ActionKind.DAILY_GUIDANCE: RateLimitRule(max_requests=3, window_ms=WINDOW_MS),
            ActionKind.MILESTONE: RateLimitRule(max_requests=1, window_ms=WINDOW_MS),
        },
        clock=clock,
    )


def test_allows_up_to_max_then_rejects(limiter):
    results = [limiter.check("u", "daily", 3, WINDOW_MS).allowed for _ in range(4)]
    assert results == [True, True, True, False]


def test_remaining_counts_down(limiter):
    remaining = [limiter.check("u", "daily", 3, WINDOW_MS).remaining for _ in range(4)]
    assert remaining == [2, 1, 0, 0]


def test_rejection_carries_retry_after(limiter, clock):
    for _ in range(3):
        limiter.check("u", "daily", 3, WINDOW_MS)
    clock.advance(20.5)
    decision = limiter.check("u", "daily", 3, WINDOW_MS)
    assert not decision.allowed
    assert decision.retry_after_seconds == 40
    assert decision.reset_at == 1_020_060.0


def test_allowed_decision_has_no_retry_after(limiter):
    assert limiter.check("u", "daily", 3, WINDOW_MS).retry_after_seconds is None


def test_rejections_do_not_consume_quota(limiter, clock):
    for _ in range(10):
        limiter.check("u", "daily", 3, WINDOW_MS)
    clock.advance(WINDOW_MS / 1000)
    decision = limiter.check("u", "daily", 3, WINDOW_MS)
    assert decision.allowed
    assert decision.remaining == 2


def test_new_window_starts_fresh(limiter, clock):
    for _ in range(4):
        limiter.check("u", "daily", 3, WINDOW_MS)
    clock.advance(60)
    decision = limiter.check("u", "daily", 3, WINDOW_MS)
    assert decision.allowed
    # count is 1 in the new window
    assert decision.remaining == 2


def test_callers_have_independent_budgets(limiter):
    for _ in range(3):
        limiter.check("alice", "daily", 3, WINDOW_MS)
    assert not limiter.check("alice", "daily", 3, WINDOW_MS).allowed
    assert limiter.check("bob", "daily", 3, WINDOW_MS).allowed


def test_action_kinds_have_independent_budgets(limiter):
    assert limiter.check_action("u", ActionKind.MILESTONE).allowed
    assert not limiter.check_action("u", ActionKind.MILESTONE).allowed
    assert limiter.check_action("u", ActionKind.DAILY_GUIDANCE).allowed


def test_sweep_drops_finished_windows(limiter, clock):
    limiter.check("a", "daily", 3, WINDOW_MS)
    limiter.check("b", "daily", 3, WINDOW_MS)
    assert limiter.active_windows() == 2
    assert limiter.sweep() == 0
    clock.advance(60)
    assert limiter.sweep() == 2
    assert limiter.active_windows() == 0
