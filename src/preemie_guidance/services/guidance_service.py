"""Request orchestration for personalized content.

This service composes the template engine, response cache, rate limiter,
upstream client and sanitizer into one failure-transparent façade: every
``generate*`` method returns usable content, falling back to static content
when generation is not possible.

Flow per request:
1. Build the template values, render the prompt and derive the cache key;
   a failure at this stage is counted as an error and serves fallback content
2. Cache hit: return it without touching the rate limiter or the upstream
3. Rate check: rejected calls get fallback content
4. Up to ``max_retries + 1`` upstream attempts, each bounded by a timeout,
   with linear backoff between attempts
5. Sanitize; a sanitized success is cached and returned
"""

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

from loguru import logger

from preemie_guidance.config import Settings, settings as default_settings
from preemie_guidance.entities import (
    ActionKind,
    AgeContext,
    DataSummary,
    GenerationContext,
    MilestoneSummary,
    PromptTemplate,
    RecentActivity,
)
from preemie_guidance.errors import ConfigurationError, GuidanceError
from preemie_guidance.fallbacks import (
    FALLBACK_GROWTH_INSIGHTS,
    FALLBACK_MILESTONE_RECOMMENDATION,
    fallback_daily_guidance,
    fallback_knowledge_cards,
)
from preemie_guidance.models import (
    GrowthInsights,
    KnowledgeCard,
    KnowledgeCardList,
    PersonalizedContent,
    UsageMetrics,
)
from preemie_guidance.prompts import (
    TEMPLATES,
    daily_guidance_variables,
    insights_variables,
    knowledge_card_variables,
    milestone_variables,
    render_messages,
)
from preemie_guidance.protocols import CacheStore, UpstreamClient
from preemie_guidance.repositories import ChatCompletionClient, InMemoryCacheRepository
from preemie_guidance.sanitizer import ContentSanitizer, SanitizationFailure
from preemie_guidance.services.rate_limiter import RateLimiter
from preemie_guidance.utils import cache_key

T = TypeVar("T")

MIN_KNOWLEDGE_CARDS = 1
MAX_KNOWLEDGE_CARDS = 10


class GuidanceService:
    """Failure-transparent generation façade.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: in-process dictionary or any external store
    - UpstreamClient: OpenAI-compatible endpoint or a test fake

    Example:
        ```python
        from preemie_guidance.services import GuidanceService

        service = GuidanceService.create()
        card = await service.generate_daily_guidance("user-1", age, activity)
        print(card.title)
        ```
    """

    def __init__(
        self,
        upstream: UpstreamClient,
        cache: CacheStore,
        limiter: RateLimiter,
        sanitizer: ContentSanitizer | None = None,
        timeout_seconds: float | None = None,
        max_retries: int | None = None,
        retry_base_delay: float | None = None,
        cache_ttl: float | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the service.

        Args:
            upstream: Chat-completion client (required).
            cache: Response store (required).
            limiter: Per-caller rate limiter (required).
            sanitizer: Output post-processor. Defaults to ContentSanitizer().
            timeout_seconds: Bound on each attempt. Defaults to settings.
            max_retries: Retries after the first attempt. Defaults to settings.
            retry_base_delay: Backoff unit in seconds. Defaults to settings.
            cache_ttl: Lifetime of cached results in seconds. Defaults to settings.
            clock: Time source used for metric resets.
            sleep: Awaitable used between attempts.
        """
        self._upstream = upstream
        self._cache = cache
        self._limiter = limiter
        self._sanitizer = sanitizer or ContentSanitizer()
        self._timeout = (
            timeout_seconds if timeout_seconds is not None else default_settings.ai_timeout_seconds
        )
        self._max_retries = (
            max_retries if max_retries is not None else default_settings.ai_max_retries
        )
        self._retry_base_delay = (
            retry_base_delay if retry_base_delay is not None else default_settings.ai_retry_base_delay
        )
        self._cache_ttl = cache_ttl if cache_ttl is not None else default_settings.cache_ttl
        self._clock = clock
        self._sleep = sleep
        self._templates: dict[ActionKind, PromptTemplate] = dict(TEMPLATES)
        self._metrics = UsageMetrics(last_reset_at=clock())
        self._log = logger.bind(component="guidance")

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        upstream: UpstreamClient | None = None,
        cache: CacheStore | None = None,
        limiter: RateLimiter | None = None,
    ) -> "GuidanceService":
        """Factory method to create GuidanceService with sensible defaults.

        Args:
            settings: Configuration. If None, uses the global settings.
            upstream: Client override. If None, builds a ChatCompletionClient.
            cache: Store override. If None, builds an InMemoryCacheRepository.
            limiter: Limiter override. If None, builds one from settings.

        Returns:
            Configured GuidanceService instance

        Example:
            ```python
            service = GuidanceService.create()

            # Or with a fake upstream in tests
            service = GuidanceService.create(upstream=FakeUpstream())
            ```
        """
        cfg = settings or default_settings
        return cls(
            upstream=upstream
            or ChatCompletionClient(
                api_key=cfg.ai_api_key,
                base_url=cfg.ai_base_url,
                model=cfg.ai_model,
                timeout=cfg.ai_timeout_seconds,
            ),
            cache=cache or InMemoryCacheRepository(max_entries=cfg.cache_max_entries),
            limiter=limiter or RateLimiter(rules=cfg.rate_limits),
            timeout_seconds=cfg.ai_timeout_seconds,
            max_retries=cfg.ai_max_retries,
            retry_base_delay=cfg.ai_retry_base_delay,
            cache_ttl=cfg.cache_ttl,
        )

    @property
    def is_enabled(self) -> bool:
        """Whether live generation is possible (a credential is configured)."""
        return self._upstream.is_configured

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def limiter(self) -> RateLimiter:
        return self._limiter

    @property
    def cache_ttl(self) -> float:
        return self._cache_ttl

    def usage_metrics(self) -> UsageMetrics:
        """Return a copy of the usage counters."""
        return self._metrics.snapshot()

    def reset_usage_metrics(self) -> UsageMetrics:
        """Zero the usage counters.

        Returns:
            The counters as they were before the reset
        """
        previous = self._metrics.snapshot()
        self._metrics = UsageMetrics(last_reset_at=self._clock())
        self._log.info("Usage metrics reset")
        return previous

    async def close(self) -> None:
        """Release the upstream client."""
        await self._upstream.close()

    async def generate(self, context: GenerationContext) -> PersonalizedContent:
        """Produce a guidance card for ``context``; never raises.

        Args:
            context: Caller, action kind, age bucket, template values and
                identifying fields

        Returns:
            Sanitized generated content, cached content, or the static
            fallback for the context's age bucket
        """
        return await self._run(
            context,
            parse=self._sanitizer.sanitize,
            fallback=lambda: fallback_daily_guidance(context.age_bucket),
            encode=lambda content: content.model_dump_json(by_alias=True),
            decode=PersonalizedContent.model_validate_json,
        )

    async def generate_daily_guidance(
        self, caller_id: str, age: AgeContext, recent_activity: RecentActivity
    ) -> PersonalizedContent:
        """Daily care card from the child's age and last-24-hour records."""
        variables = self._build_variables(
            ActionKind.DAILY_GUIDANCE,
            caller_id,
            lambda: daily_guidance_variables(age, recent_activity),
        )
        if variables is None:
            return fallback_daily_guidance(age.age_bucket)
        context = GenerationContext(
            caller_id=caller_id,
            action_kind=ActionKind.DAILY_GUIDANCE,
            age_bucket=age.age_bucket,
            variables=variables,
            fingerprint_fields={
                "caller": caller_id,
                "child": age.name,
                "correctedAgeInDays": age.corrected_age_in_days,
            },
        )
        return await self.generate(context)

    async def generate_milestone_recommendation(
        self, caller_id: str, age: AgeContext, achieved_milestones: list[MilestoneSummary]
    ) -> str:
        """Short plain-text recommendation for the next developmental focus."""
        variables = self._build_variables(
            ActionKind.MILESTONE,
            caller_id,
            lambda: milestone_variables(age, achieved_milestones),
        )
        if variables is None:
            return FALLBACK_MILESTONE_RECOMMENDATION
        context = GenerationContext(
            caller_id=caller_id,
            action_kind=ActionKind.MILESTONE,
            age_bucket=age.age_bucket,
            variables=variables,
            fingerprint_fields={
                "caller": caller_id,
                "child": age.name,
                "correctedAgeInDays": age.corrected_age_in_days,
            },
        )
        return await self._run(
            context,
            parse=self._sanitizer.sanitize_text,
            fallback=lambda: FALLBACK_MILESTONE_RECOMMENDATION,
            encode=lambda text: text,
            decode=lambda text: text,
        )

    async def generate_growth_insights(
        self, caller_id: str, data_summary: DataSummary
    ) -> GrowthInsights:
        """Insights, recommendations and concerns from aggregated records."""
        age = data_summary.age
        variables = self._build_variables(
            ActionKind.INSIGHTS, caller_id, lambda: insights_variables(data_summary)
        )
        if variables is None:
            return FALLBACK_GROWTH_INSIGHTS.model_copy(deep=True)
        context = GenerationContext(
            caller_id=caller_id,
            action_kind=ActionKind.INSIGHTS,
            age_bucket=age.age_bucket,
            variables=variables,
            fingerprint_fields={
                "caller": caller_id,
                "child": age.name,
                "correctedAgeInDays": age.corrected_age_in_days,
            },
        )
        return await self._run(
            context,
            parse=self._sanitizer.sanitize_insights,
            fallback=lambda: FALLBACK_GROWTH_INSIGHTS.model_copy(deep=True),
            encode=lambda insights: insights.model_dump_json(),
            decode=GrowthInsights.model_validate_json,
        )

    async def generate_knowledge_cards(
        self, caller_id: str, age: AgeContext, card_count: int = 5
    ) -> list[KnowledgeCard]:
        """Age-appropriate knowledge cards, most relevant first.

        Args:
            caller_id: Identity used for rate limiting
            age: Corrected-age data for the child
            card_count: Requested number of cards, clamped to 1..10

        Returns:
            At most ``card_count`` cards sorted by relevance
        """
        count = min(MAX_KNOWLEDGE_CARDS, max(MIN_KNOWLEDGE_CARDS, card_count))
        variables = self._build_variables(
            ActionKind.KNOWLEDGE_CARDS, caller_id, lambda: knowledge_card_variables(age, count)
        )
        if variables is None:
            return fallback_knowledge_cards(age.age_bucket, count).cards
        context = GenerationContext(
            caller_id=caller_id,
            action_kind=ActionKind.KNOWLEDGE_CARDS,
            age_bucket=age.age_bucket,
            variables=variables,
            fingerprint_fields={"ageBucket": age.age_bucket.value, "cardCount": count},
        )
        result = await self._run(
            context,
            parse=lambda raw: self._sanitizer.sanitize_knowledge_cards(raw, count),
            fallback=lambda: fallback_knowledge_cards(age.age_bucket, count),
            encode=lambda cards: cards.model_dump_json(by_alias=True),
            decode=KnowledgeCardList.model_validate_json,
        )
        return result.cards

    def _build_variables(
        self,
        kind: ActionKind,
        caller_id: str,
        build: Callable[[], dict[str, str]],
    ) -> dict[str, str] | None:
        """Build template values; a failure is counted and yields None."""
        try:
            return build()
        except Exception as e:
            self._metrics.record_error()
            self._log.bind(action=kind.value, caller=caller_id).error(
                "Could not build prompt variables [input]: {!r}; serving fallback", e
            )
            return None

    async def _run(
        self,
        context: GenerationContext,
        parse: Callable[[str], T | SanitizationFailure],
        fallback: Callable[[], T],
        encode: Callable[[T], str],
        decode: Callable[[str], T],
    ) -> T:
        kind = context.action_kind
        log = self._log.bind(action=kind.value, caller=context.caller_id)
        template = self._templates[kind]

        try:
            messages = render_messages(template, context.variables)
        except ConfigurationError as e:
            self._metrics.record_error()
            log.error("Template '{}' failed to render [configuration]: {}", template.name, e)
            return fallback()

        key = cache_key(messages[-1]["content"], context.fingerprint_fields)
        cached = self._cache.get(key)
        if cached is not None:
            try:
                value = decode(cached)
            except ValueError:
                self._cache.delete(key)
                log.warning("Dropped undecodable cache entry {}", key[:12])
            else:
                log.debug("Cache hit for {}", key[:12])
                return value

        decision = self._limiter.check_action(context.caller_id, kind)
        if not decision.allowed:
            log.info(
                "Rate limit reached for {} [rate_limited], retry after {}s; serving fallback",
                kind.value,
                decision.retry_after_seconds,
            )
            return fallback()

        if not self._upstream.is_configured:
            self._metrics.record_error()
            log.warning("Upstream credential missing [configuration]; serving fallback")
            return fallback()

        result = await self._invoke(template, messages, parse, log)
        if result is None:
            return fallback()

        self._cache.put(key, encode(result), self._cache_ttl)
        return result

    async def _invoke(
        self,
        template: PromptTemplate,
        messages: list[dict[str, str]],
        parse: Callable[[str], T | SanitizationFailure],
        log,
    ) -> T | None:
        attempts = self._max_retries + 1
        for attempt in range(1, attempts + 1):
            if attempt > 1:
                await self._sleep(self._retry_base_delay * (attempt - 1))

            self._metrics.record_request()
            try:
                completion = await asyncio.wait_for(
                    self._upstream.complete(messages, template.generation_config),
                    timeout=self._timeout,
                )
            except asyncio.TimeoutError:
                category, detail = "timeout", f"no response within {self._timeout}s"
            except ConfigurationError as e:
                self._metrics.record_error()
                log.error(
                    "Attempt {}/{} failed [{}]: {}; not retrying", attempt, attempts, e.category, e
                )
                return None
            except GuidanceError as e:
                category, detail = e.category, str(e)
            except Exception as e:
                category, detail = "unexpected", repr(e)
            else:
                self._metrics.record_tokens(completion.tokens_used)
                parsed = parse(completion.text)
                if not isinstance(parsed, SanitizationFailure):
                    if attempt > 1:
                        log.info("Attempt {}/{} succeeded", attempt, attempts)
                    return parsed
                category, detail = "sanitization", parsed.reason

            self._metrics.record_error()
            log.warning("Attempt {}/{} failed [{}]: {}", attempt, attempts, category, detail)

        log.error("All {} attempts failed for '{}'; serving fallback", attempts, template.name)
        return None
