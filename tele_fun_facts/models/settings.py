"""Configuration dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Set


@dataclass
class Settings:
    """Configuration settings for tele_fun_facts.

    All settings are loaded from environment variables with sensible defaults.
    """

    BOT_TOKEN: str | None
    ALLOWED_CHAT_IDS: Set[int]
    FACT_API_URL: str
    FACT_TEXT_FIELD: str
    FACT_TIMEOUT_S: float
    FACT_MAX_RETRIES: int
    FACT_BASE_DELAY_S: float
    FACT_JITTER: float
    FACT_MIN_DELAY_S: float
    FACT_CACHE_SIZE: int
    FACT_RATE_LIMIT_ENABLED: bool
    FACT_RATE_LIMIT_MAX: int
    FACT_RATE_LIMIT_WINDOW_S: float
    FACT_COUNTDOWN_TICK_S: float
