"""Upstream completion entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionResult:
    """Raw text returned by the upstream model for one attempt.

    Attributes:
        text: ``choices[0].message.content`` from the response
        tokens_used: ``usage.total_tokens``, 0 when the upstream omits it
    """

    text: str
    tokens_used: int = 0
