"""Error taxonomy for the generation pipeline.

None of these escape ``GuidanceService.generate*``: they are caught by the
orchestrator, counted in the usage metrics and resolved to fallback content.
Rate-limit rejection is deliberately absent here; it is an ordinary
``RateLimitDecision`` with ``allowed=False``.
"""


class GuidanceError(Exception):
    """Base class for pipeline errors."""

    category = "error"


class TransientUpstreamError(GuidanceError):
    """Timeout, network failure or 5xx from the upstream. Retried."""

    category = "transient"


class UpstreamError(TransientUpstreamError):
    """Non-success HTTP status from the upstream."""

    category = "upstream_status"

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message or f"Upstream call failed with status {status_code}")
        self.status_code = status_code


class MalformedResponseError(GuidanceError):
    """Response envelope or content lacks the expected structure. Retried."""

    category = "malformed"


class ConfigurationError(GuidanceError):
    """Missing credential, rejected credential or invalid template. Never retried."""

    category = "configuration"


class MissingVariableError(ConfigurationError):
    """A template placeholder has no supplied value."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"Missing value for template variable '{variable}'")
        self.variable = variable
