"""Rate-limit domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitWindow:
    """Request count for one ``(caller, action kind, window index)`` key.

    Attributes:
        count: Requests allowed so far in this window
        reset_at: Unix timestamp at which the window is replaced by a fresh one
    """

    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a rate-limit check.

    Attributes:
        allowed: Whether the call may proceed
        remaining: Requests left in the current window after this call
        reset_at: Unix timestamp when the current window resets
        retry_after_seconds: Seconds until retry makes sense (rejections only)
    """

    allowed: bool
    remaining: int
    reset_at: float
    retry_after_seconds: int | None = None
