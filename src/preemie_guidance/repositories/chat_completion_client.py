"""OpenAI-compatible chat-completion client.

Calls ``POST {base_url}/v1/chat/completions`` with a bearer credential. Most
hosted gateways (OpenAI, Gemini through its OpenAI endpoint, OpenRouter,
local servers such as vLLM) accept this shape.

Status mapping:
- 401/403: ``ConfigurationError`` (the credential is wrong; retrying is useless)
- any other non-2xx: ``UpstreamError`` with the status kept
- connection failures and read errors: ``TransientUpstreamError``
- a 2xx body without ``choices[0].message.content``: ``MalformedResponseError``
"""

from typing import Any

import httpx

from preemie_guidance.config import settings
from preemie_guidance.entities import CompletionResult, GenerationConfig
from preemie_guidance.errors import (
    ConfigurationError,
    MalformedResponseError,
    TransientUpstreamError,
    UpstreamError,
)

FATAL_STATUS_CODES = frozenset({401, 403})


class ChatCompletionClient:
    """httpx-based implementation of the UpstreamClient protocol.

    This class satisfies the UpstreamClient protocol through structural
    typing - no explicit inheritance needed.

    The client performs exactly one HTTP request per ``complete`` call.
    Timeouts and retries belong to the orchestrator.

    Example:
        ```python
        client = ChatCompletionClient.create()
        result = await client.complete(messages, DAILY_GUIDANCE.generation_config)
        print(result.text, result.tokens_used)
        await client.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Bearer credential. Defaults to settings.ai_api_key.
            base_url: Service root without the ``/v1`` suffix.
                     Defaults to settings.ai_base_url.
            model: Model identifier. Defaults to settings.ai_model.
            timeout: Request timeout in seconds.
                     Defaults to settings.ai_timeout_seconds.
            transport: Optional httpx transport, used by tests.
        """
        self._api_key = api_key if api_key is not None else settings.ai_api_key
        self._base_url = (base_url or settings.ai_base_url).rstrip("/")
        self._model = model or settings.ai_model
        self._timeout = timeout if timeout is not None else settings.ai_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> "ChatCompletionClient":
        """Factory method to create ChatCompletionClient with defaults.

        Args:
            api_key: Credential. If None, uses settings.
            base_url: Service URL. If None, uses settings.
            model: Model name. If None, uses settings.
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured ChatCompletionClient
        """
        return cls(api_key=api_key, base_url=base_url, model=model, timeout=timeout)

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model_name(self) -> str:
        return self._model

    async def complete(
        self, messages: list[dict[str, str]], config: GenerationConfig
    ) -> CompletionResult:
        """Run one chat completion.

        Args:
            messages: System and user messages
            config: Temperature and token budget

        Returns:
            CompletionResult with the message text and total tokens

        Raises:
            ConfigurationError: No credential, or the upstream rejected it
            UpstreamError: Any other non-success status
            TransientUpstreamError: Transport failure
            MalformedResponseError: Missing fields in the response envelope
        """
        if not self.is_configured:
            raise ConfigurationError("AI_API_KEY is not configured")

        url = f"{self._base_url}/v1/chat/completions"
        payload = {
            "model": self._model,
            "messages": messages,
            "temperature": config.temperature,
            "max_tokens": config.max_output_tokens,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            response = await self.client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise TransientUpstreamError(f"Upstream request failed: {e}") from e

        if response.status_code in FATAL_STATUS_CODES:
            raise ConfigurationError(
                f"Upstream rejected the credential (status {response.status_code})"
            )
        if not response.is_success:
            raise UpstreamError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError("Upstream response is not JSON") from e

        return CompletionResult(text=_message_text(data), tokens_used=_total_tokens(data))

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _message_text(data: Any) -> str:
    try:
        text = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError(f"Unexpected response format: {data!r:.200}") from e
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponseError("Upstream returned empty content")
    return text


def _total_tokens(data: dict) -> int:
    usage = data.get("usage")
    if not isinstance(usage, dict):
        return 0
    tokens = usage.get("total_tokens")
    return tokens if isinstance(tokens, int) else 0
