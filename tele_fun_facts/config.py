"""Central configuration for tele_fun_facts."""

from __future__ import annotations

import logging
import os
from typing import Set

from .models.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_FACT_API_URL = "https://uselessfacts.jsph.pl/api/v2/facts/random?language=en"


def _split_ints(s: str) -> Set[int]:
    """Parse comma-separated string into a set of integers.

    Args:
        s: Comma-separated string of integers (e.g., "123,456,789")

    Returns:
        Set of parsed integers. Invalid entries are silently skipped.

    Example:
        >>> _split_ints("123,456,invalid,789")
        {123, 456, 789}
    """
    out = set()
    for part in (s or "").split(","):
        p = part.strip()
        if p.lstrip("-").isdigit():
            out.add(int(p))
    return out


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, str(default)) or default)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes"}


def _read_settings() -> Settings:
    """Read all configuration from environment variables.

    Returns:
        Settings object with all configuration values.

    Note:
        Invalid numeric values fall back to sensible defaults.
        Boolean values accept: 1/true/yes (case-insensitive) as True.
    """
    token = os.environ.get("BOT_TOKEN") or None
    allowed = _split_ints(os.environ.get("ALLOWED_CHAT_IDS", ""))

    # Fact endpoint
    api_url = os.environ.get("FACT_API_URL") or DEFAULT_FACT_API_URL
    text_field = os.environ.get("FACT_TEXT_FIELD") or "text"
    timeout = _float_env("FACT_TIMEOUT_S", 10.0)

    # Retry/backoff
    max_retries = max(0, _int_env("FACT_MAX_RETRIES", 3))
    base_delay = max(0.0, _float_env("FACT_BASE_DELAY_S", 0.4))
    jitter = min(1.0, max(0.0, _float_env("FACT_JITTER", 0.25)))
    min_delay = max(0.0, _float_env("FACT_MIN_DELAY_S", 0.1))

    # Cache and tap throttling
    cache_size = max(0, _int_env("FACT_CACHE_SIZE", 4))
    rate_enabled = _bool_env("FACT_RATE_LIMIT_ENABLED", True)
    rate_max = max(1, _int_env("FACT_RATE_LIMIT_MAX", 5))
    rate_window = _float_env("FACT_RATE_LIMIT_WINDOW_S", 60.0)
    if rate_window <= 0:
        rate_window = 60.0
    tick = _float_env("FACT_COUNTDOWN_TICK_S", 5.0)
    if tick <= 0:
        tick = 5.0

    return Settings(
        BOT_TOKEN=token,
        ALLOWED_CHAT_IDS=allowed,
        FACT_API_URL=api_url,
        FACT_TEXT_FIELD=text_field,
        FACT_TIMEOUT_S=timeout,
        FACT_MAX_RETRIES=max_retries,
        FACT_BASE_DELAY_S=base_delay,
        FACT_JITTER=jitter,
        FACT_MIN_DELAY_S=min_delay,
        FACT_CACHE_SIZE=cache_size,
        FACT_RATE_LIMIT_ENABLED=rate_enabled,
        FACT_RATE_LIMIT_MAX=rate_max,
        FACT_RATE_LIMIT_WINDOW_S=rate_window,
        FACT_COUNTDOWN_TICK_S=tick,
    )


settings = _read_settings()


def validate_settings() -> None:
    """Validate critical configuration and log warnings for issues."""
    if settings.BOT_TOKEN is None:
        logger.error("BOT_TOKEN environment variable is not set")
    if not settings.ALLOWED_CHAT_IDS:
        logger.warning("ALLOWED_CHAT_IDS is empty; all chats will be unauthorized.")
    if not settings.FACT_API_URL.startswith(("http://", "https://")):
        logger.warning("FACT_API_URL does not look like an HTTP URL: %s", settings.FACT_API_URL)


# Exported constants
TOKEN: str | None = settings.BOT_TOKEN
ALLOWED: set[int] = settings.ALLOWED_CHAT_IDS
FACT_API_URL: str = settings.FACT_API_URL
RATE_LIMIT_ENABLED: bool = settings.FACT_RATE_LIMIT_ENABLED

validate_settings()
