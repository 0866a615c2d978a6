"""Upstream model client protocol.

Defines the interface for any chat-completion service the orchestrator can
call. Implementations can include:
- OpenAI-compatible HTTP endpoints (default)
- In-process fakes for tests
"""

from typing import Protocol, runtime_checkable

from preemie_guidance.entities import CompletionResult, GenerationConfig


@runtime_checkable
class UpstreamClient(Protocol):
    """Protocol for chat-completion clients.

    Any type that implements these members satisfies the protocol, no
    explicit inheritance needed.

    Example:
        ```python
        from preemie_guidance.protocols import UpstreamClient

        client: UpstreamClient = ChatCompletionClient.create()
        result = await client.complete(messages, template.generation_config)
        ```
    """

    @property
    def is_configured(self) -> bool:
        """Return whether a credential is available.

        Returns:
            False when calls would be rejected before reaching the network
        """
        ...

    async def complete(
        self, messages: list[dict[str, str]], config: GenerationConfig
    ) -> CompletionResult:
        """Run one completion attempt.

        Args:
            messages: Chat messages (system + user)
            config: Temperature and token budget for the call

        Returns:
            The raw completion text and token usage

        Raises:
            ConfigurationError: Missing or rejected credential
            UpstreamError: Non-success HTTP status
            TransientUpstreamError: Network failure
            MalformedResponseError: Response envelope lacks the expected fields
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
