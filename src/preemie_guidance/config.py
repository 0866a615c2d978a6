import os
import sys
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from loguru import logger

from preemie_guidance.entities import ActionKind

load_dotenv()


@dataclass(frozen=True)
class RateLimitRule:
    """Quota for one action kind: at most ``max_requests`` per ``window_ms``."""

    max_requests: int
    window_ms: int


def _rule_from_env(kind: str, max_requests: int, window_ms: int) -> RateLimitRule:
    prefix = f"RATE_LIMIT_{kind.upper()}"
    return RateLimitRule(
        max_requests=int(os.getenv(f"{prefix}_MAX", str(max_requests))),
        window_ms=int(os.getenv(f"{prefix}_WINDOW_MS", str(window_ms))),
    )


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Upstream LLM service
    ai_api_key: str | None = os.getenv("AI_API_KEY") or None
    ai_base_url: str = os.getenv("AI_BASE_URL", "https://api.openai.com")
    ai_model: str = os.getenv("AI_MODEL", "gemini-2.5-pro")
    ai_timeout_seconds: float = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))
    ai_max_retries: int = int(os.getenv("AI_MAX_RETRIES", "3"))
    ai_retry_base_delay: float = float(os.getenv("AI_RETRY_BASE_DELAY", "1.0"))

    # Response cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))  # 1 hour default
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", "1000"))
    cache_sweep_interval: float = float(os.getenv("CACHE_SWEEP_INTERVAL", "300"))

    # Rate limiting
    rate_limit_sweep_interval: float = float(os.getenv("RATE_LIMIT_SWEEP_INTERVAL", "300"))
    rate_limit_daily: RateLimitRule = _rule_from_env("daily", 5, 60_000)
    rate_limit_milestone: RateLimitRule = _rule_from_env("milestone", 5, 60_000)
    rate_limit_insights: RateLimitRule = _rule_from_env("insights", 3, 300_000)
    rate_limit_knowledge: RateLimitRule = _rule_from_env("knowledge", 10, 60_000)

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def upstream_enabled(self) -> bool:
        """Check if a credential is configured for the upstream service.

        Returns:
            True if upstream calls are possible, False for fallback-only mode
        """
        return bool(self.ai_api_key)

    @property
    def rate_limits(self) -> dict[ActionKind, RateLimitRule]:
        """Rate-limit rule per action kind."""
        return {
            ActionKind.DAILY_GUIDANCE: self.rate_limit_daily,
            ActionKind.MILESTONE: self.rate_limit_milestone,
            ActionKind.INSIGHTS: self.rate_limit_insights,
            ActionKind.KNOWLEDGE_CARDS: self.rate_limit_knowledge,
        }

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.ai_timeout_seconds <= 0:
            raise ValueError("AI_TIMEOUT_SECONDS must be positive")

        if self.ai_max_retries < 0:
            raise ValueError(f"AI_MAX_RETRIES must be >= 0, got {self.ai_max_retries}")

        if self.ai_retry_base_delay < 0:
            raise ValueError("AI_RETRY_BASE_DELAY must be >= 0")

        if self.cache_ttl <= 0 or self.cache_max_entries <= 0:
            raise ValueError("CACHE_TTL and CACHE_MAX_ENTRIES must be positive")

        for kind, rule in self.rate_limits.items():
            if rule.max_requests <= 0 or rule.window_ms <= 0:
                raise ValueError(
                    f"Rate limit for '{kind.value}' must have positive max and window, got {rule}"
                )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def init_logger(console_log_level: str | None = None) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=console_log_level or settings.log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | {message} | {extra}"
        ),
        colorize=True,
    )
