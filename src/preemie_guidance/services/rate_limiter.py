"""Per-caller, per-action fixed-window rate limiting."""

import math
import time
from typing import Callable

from loguru import logger

from preemie_guidance.config import RateLimitRule, settings
from preemie_guidance.entities import ActionKind, RateLimitDecision, RateLimitWindow

log = logger.bind(component="rate_limiter")

WindowKey = tuple[str, str, int]


class RateLimiter:
    """Fixed-window request counter.

    Windows are keyed by ``(caller_id, action_kind, floor(now_ms / window_ms))``
    so each action kind has its own budget. Only allowed calls consume quota.
    Around a window boundary a caller can get up to twice ``max_requests``
    through; that is the accepted cost of fixed windows.

    Example:
        ```python
        limiter = RateLimiter.create()
        decision = limiter.check_action("user-1", ActionKind.DAILY_GUIDANCE)
        if not decision.allowed:
            print(f"retry in {decision.retry_after_seconds}s")
        ```
    """

    def __init__(
        self,
        rules: dict[ActionKind, RateLimitRule] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            rules: Budget per action kind. Defaults to settings.rate_limits.
            clock: Returns the current time in seconds.
        """
        self._rules = rules or settings.rate_limits
        self._clock = clock
        self._windows: dict[WindowKey, RateLimitWindow] = {}

    @classmethod
    def create(
        cls,
        rules: dict[ActionKind, RateLimitRule] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "RateLimiter":
        """Factory method to create RateLimiter with configured budgets."""
        return cls(rules=rules, clock=clock)

    def check(
        self,
        caller_id: str,
        action_kind: ActionKind | str,
        max_requests: int,
        window_ms: int,
    ) -> RateLimitDecision:
        """Count one call against the caller's window and decide.

        Args:
            caller_id: Identity being limited
            action_kind: Budget the call belongs to
            max_requests: Calls allowed per window
            window_ms: Window length in milliseconds

        Returns:
            RateLimitDecision; rejected decisions carry ``retry_after_seconds``
        """
        now = self._clock()
        kind = action_kind.value if isinstance(action_kind, ActionKind) else action_kind
        key = (caller_id, kind, math.floor(now * 1000 / window_ms))

        window = self._windows.get(key)
        if window is None or now >= window.reset_at:
            window = RateLimitWindow(count=0, reset_at=now + window_ms / 1000)

        if window.count >= max_requests:
            self._windows[key] = window
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                reset_at=window.reset_at,
                retry_after_seconds=math.ceil(window.reset_at - now),
            )

        window = RateLimitWindow(count=window.count + 1, reset_at=window.reset_at)
        self._windows[key] = window
        return RateLimitDecision(
            allowed=True,
            remaining=max_requests - window.count,
            reset_at=window.reset_at,
        )

    def check_action(self, caller_id: str, action_kind: ActionKind) -> RateLimitDecision:
        """Apply the configured budget for ``action_kind``."""
        rule = self._rules[action_kind]
        return self.check(caller_id, action_kind, rule.max_requests, rule.window_ms)

    def sweep(self) -> int:
        """Drop windows whose reset time has passed.

        Returns:
            Number of windows removed
        """
        now = self._clock()
        stale = [key for key, window in self._windows.items() if now >= window.reset_at]
        for key in stale:
            del self._windows[key]
        if stale:
            log.debug("Swept {} expired rate-limit windows", len(stale))
        return len(stale)

    def active_windows(self) -> int:
        return len(self._windows)
