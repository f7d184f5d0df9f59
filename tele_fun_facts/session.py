"""Fact session: the state machine behind one fact screen.

A session owns the prefetch cache, the tap limiter and the presenter. It
always has a fact to show: a queued fact, a live fetch, or a local fallback.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
import time
from enum import Enum
from typing import Awaitable, Callable, Protocol

import httpx

from . import config
from .background import cancel_all, spawn_once
from .cache import FactCache
from .fallback import EmptyFallbackError, FallbackCorpus
from .fetcher import FactClient
from .models.metrics import SessionMetrics
from .models.rate_window import RateLimitInfo
from .models.settings import Settings
from .ratelimit import RateLimiter
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

LOADING_TEXT = "loading fun fact…"

_TASK_REFILL = "refill"
_TASK_COUNTDOWN = "rate_limit_countdown"


class SessionStatus(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    RATE_LIMITED = "rate_limited"


class Presenter(Protocol):
    async def display(
        self, fact: str, busy: bool, rate_limit: RateLimitInfo | None = None
    ) -> None: ...


def _now_ms() -> float:
    return time.time() * 1000


class FactSession:
    """Orchestrates fact acquisition for one screen.

    Only ``on_tap`` is subject to the rate limiter; the initial load and
    background refills never consume quota.
    """

    def __init__(
        self,
        presenter: Presenter,
        fetch: Callable[[], Awaitable[str | None]],
        cache: FactCache,
        corpus: FallbackCorpus,
        limiter: RateLimiter | None = None,
        clock: Callable[[], float] = _now_ms,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        countdown_tick_s: float = 5.0,
    ):
        self.presenter = presenter
        self.cache = cache
        self.corpus = corpus
        self.limiter = limiter
        self.countdown_tick_s = countdown_tick_s
        self._fetch = fetch
        self._clock = clock
        self._sleep = sleep

        self.status = SessionStatus.IDLE
        self.current_fact = LOADING_TEXT
        self.limited_until: float | None = None
        self.notice_visible = False
        self.metrics = SessionMetrics()
        self.tasks: dict[str, asyncio.Task] = {}
        self._loaded = False

        self._next_chain = (
            ("cache", self._from_cache),
            ("network", self._from_network),
            ("fallback", self._from_fallback),
        )
        self._initial_chain = self._next_chain[1:]

    @property
    def busy(self) -> bool:
        return self.status is SessionStatus.FETCHING

    @property
    def refill_task(self) -> asyncio.Task | None:
        return self.tasks.get(_TASK_REFILL)

    def rate_limit_info(self) -> RateLimitInfo | None:
        if not self.notice_visible or self.limited_until is None:
            return None
        remaining_ms = self.limited_until - self._clock()
        return RateLimitInfo(seconds_remaining=max(0, math.ceil(remaining_ms / 1000)))

    def taps_left(self) -> int | None:
        if self.limiter is None:
            return None
        return self.limiter.remaining(self._clock())

    async def redisplay(self) -> None:
        await self.presenter.display(
            self.current_fact, self.busy, self.rate_limit_info()
        )

    async def load_initial(self) -> str:
        """Show the first fact. Runs once; later calls only re-render."""
        if self._loaded:
            await self.redisplay()
            return self.current_fact
        self._loaded = True
        try:
            return await self._show_next(self._initial_chain)
        except Exception:
            self._loaded = False
            raise

    async def get_next_fact(self) -> str:
        return await self._show_next(self._next_chain)

    async def on_tap(self) -> str | None:
        """Handle a user tap.

        Returns:
            The newly shown fact, or None when the tap was ignored or denied.
        """
        self.metrics.taps += 1
        if self.busy:
            self.metrics.ignored_taps += 1
            logger.debug("Tap ignored: fetch already in progress")
            return None

        now = self._clock()
        if self.limited_until is not None:
            if now < self.limited_until:
                self.metrics.rate_limited += 1
                self.notice_visible = True
                await self.redisplay()
                return None
            self._clear_rate_limit()

        if self.limiter is not None:
            decision = self.limiter.try_consume(now)
            if not decision:
                self._enter_rate_limited(decision.retry_at or now)
                await self.redisplay()
                return None
        return await self.get_next_fact()

    async def dismiss_notice(self) -> None:
        """Hide the rate-limit notice; the limit itself stays in force."""
        if not self.notice_visible:
            return
        self.notice_visible = False
        await self.redisplay()

    async def close(self) -> None:
        await cancel_all(self.tasks)

    async def _show_next(self, chain) -> str:
        self.status = SessionStatus.FETCHING
        try:
            await self._render()
            source, fact = await self._resolve(chain)
            self._publish(source, fact)
        finally:
            self.status = SessionStatus.IDLE
        await self._render()
        self._schedule_refill()
        return fact

    async def _render(self) -> None:
        """Redisplay, logging presenter failures instead of raising.

        The session state stays consistent when an edit times out; the next
        render shows the current fact again.
        """
        try:
            await self.redisplay()
        except Exception as e:
            self.metrics.render_errors += 1
            logger.warning("Failed to render fact screen: %s", e, exc_info=True)

    async def _resolve(self, chain) -> tuple[str, str]:
        for name, strategy in chain:
            fact = await strategy()
            if fact:
                return name, fact.lower()
        raise EmptyFallbackError("no fact source produced a value")

    async def _from_cache(self) -> str | None:
        return self.cache.consume()

    async def _from_network(self) -> str | None:
        return await self._fetch()

    async def _from_fallback(self) -> str | None:
        fact = self.corpus.pick()
        logger.info("Fact API unavailable; showing a fallback fact")
        return fact

    def _publish(self, source: str, fact: str) -> None:
        self.current_fact = fact
        self.cache.mark_seen(fact)
        self.metrics.record_shown(source, time.time())

    def _schedule_refill(self) -> asyncio.Task | None:
        if self.cache.target_size <= 0:
            return None
        return spawn_once(self.tasks, _TASK_REFILL, self._refill)

    async def _refill(self) -> None:
        self.metrics.refills += 1
        try:
            added = await self.cache.refill()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.metrics.refill_errors += 1
            self.metrics.last_refill_error = str(e)
            logger.exception("Background refill failed")
            return
        self.metrics.prefetched += added
        logger.debug("Refill queued %d fact(s); cache size %d", added, len(self.cache))

    def _enter_rate_limited(self, retry_at: float) -> None:
        self.status = SessionStatus.RATE_LIMITED
        self.limited_until = retry_at
        self.notice_visible = True
        self.metrics.rate_limited += 1
        logger.info(
            "Tap rate limited; next tap allowed in %.1fs",
            max(0.0, (retry_at - self._clock()) / 1000),
        )
        spawn_once(self.tasks, _TASK_COUNTDOWN, self._countdown)

    def _clear_rate_limit(self) -> None:
        self.limited_until = None
        self.notice_visible = False
        if self.status is SessionStatus.RATE_LIMITED:
            self.status = SessionStatus.IDLE

    async def _countdown(self) -> None:
        while self.limited_until is not None:
            remaining_ms = self.limited_until - self._clock()
            if remaining_ms <= 0:
                break
            await self._sleep(min(self.countdown_tick_s, remaining_ms / 1000))
            if (
                self.notice_visible
                and self.limited_until is not None
                and self.limited_until > self._clock()
            ):
                await self._render()
        if self.status is SessionStatus.RATE_LIMITED:
            self._clear_rate_limit()
            await self._render()


def build_session(
    presenter: Presenter,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    rng: random.Random | None = None,
) -> FactSession:
    """Wire a session from configuration."""
    settings = settings or config.settings
    client = FactClient(
        settings.FACT_API_URL,
        field=settings.FACT_TEXT_FIELD,
        timeout=settings.FACT_TIMEOUT_S,
        transport=transport,
    )
    retry = RetryPolicy(
        client.fetch_fact,
        max_retries=settings.FACT_MAX_RETRIES,
        base_delay_s=settings.FACT_BASE_DELAY_S,
        jitter=settings.FACT_JITTER,
        min_delay_s=settings.FACT_MIN_DELAY_S,
        rng=rng,
    )
    cache = FactCache(retry.fetch_with_retry, target_size=settings.FACT_CACHE_SIZE)
    limiter = None
    if settings.FACT_RATE_LIMIT_ENABLED:
        limiter = RateLimiter(
            max_per_window=settings.FACT_RATE_LIMIT_MAX,
            window_ms=settings.FACT_RATE_LIMIT_WINDOW_S * 1000,
        )
    return FactSession(
        presenter,
        retry.fetch_with_retry,
        cache,
        FallbackCorpus(rng=rng),
        limiter=limiter,
        countdown_tick_s=settings.FACT_COUNTDOWN_TICK_S,
    )
