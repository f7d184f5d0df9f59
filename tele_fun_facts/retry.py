"""Bounded exponential-backoff retry around a single-attempt fetch."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable

from .fetcher import NetworkError

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
BASE_DELAY_S = 0.4
JITTER = 0.25
MIN_DELAY_S = 0.1


class RetryPolicy:
    """Retry ``fetch`` with jittered exponential backoff.

    ``fetch_with_retry`` never raises for network failures: when every attempt
    fails it returns ``None`` and the caller moves on to its next source.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[str]],
        max_retries: int = MAX_RETRIES,
        base_delay_s: float = BASE_DELAY_S,
        jitter: float = JITTER,
        min_delay_s: float = MIN_DELAY_S,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        rng: random.Random | None = None,
    ):
        self.fetch = fetch
        self.max_retries = max_retries
        self.base_delay_s = base_delay_s
        self.jitter = jitter
        self.min_delay_s = min_delay_s
        self._sleep = sleep
        self._rng = rng or random.Random()

    def compute_delay(self, attempt: int) -> float:
        """Backoff before retry number ``attempt + 1``, in seconds."""
        delay = self.base_delay_s * (2**attempt)
        delay *= 1 + self.jitter * self._rng.uniform(-1.0, 1.0)
        return max(self.min_delay_s, delay)

    async def fetch_with_retry(self) -> str | None:
        for attempt in range(self.max_retries + 1):
            try:
                text = await self.fetch()
            except NetworkError as e:
                if attempt >= self.max_retries:
                    logger.warning(
                        "Fact fetch exhausted after %d attempts: %s", attempt + 1, e
                    )
                    return None
                delay = self.compute_delay(attempt)
                logger.debug(
                    "Fact fetch attempt %d failed (%s); retrying in %.2fs",
                    attempt + 1,
                    e,
                    delay,
                )
                await self._sleep(delay)
                continue
            return text.lower()
        return None
