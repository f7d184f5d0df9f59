"""Prefetch queue with per-session de-duplication."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from .models.cache import CacheState

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SIZE = 4
# Consecutive already-seen facts tolerated in one refill before giving up.
DEFAULT_MAX_DUPLICATES = 10


class FactCache:
    """FIFO of prefetched facts backed by a session seen-set.

    ``source`` is the retry-wrapped fetch; it returns ``None`` once its
    attempts are exhausted, which ends the refill.
    """

    def __init__(
        self,
        source: Callable[[], Awaitable[str | None]],
        state: CacheState | None = None,
        target_size: int = DEFAULT_TARGET_SIZE,
        max_duplicates: int = DEFAULT_MAX_DUPLICATES,
    ):
        self.source = source
        self.state = state or CacheState()
        self.target_size = target_size
        self.max_duplicates = max_duplicates

    def __len__(self) -> int:
        return len(self.state.queue)

    @property
    def seen(self) -> set[str]:
        return self.state.seen

    def consume(self) -> str | None:
        """Pop the oldest queued fact, or None when the queue is empty."""
        if not self.state.queue:
            return None
        return self.state.queue.popleft()

    def mark_seen(self, fact: str) -> None:
        self.state.seen.add(fact)

    async def refill(self, target_size: int | None = None) -> int:
        """Fetch until the queue holds ``target_size`` facts.

        Returns:
            Number of facts queued by this call.
        """
        target = self.target_size if target_size is None else target_size
        added = 0
        duplicates = 0
        while len(self.state.queue) < target:
            fact = await self.source()
            if fact is None:
                logger.debug("Refill stopped early: source exhausted")
                break
            if fact in self.state.seen:
                duplicates += 1
                if duplicates >= self.max_duplicates:
                    logger.info(
                        "Refill stopped after %d duplicate facts in a row", duplicates
                    )
                    break
                continue
            duplicates = 0
            self.state.queue.append(fact)
            self.state.seen.add(fact)
            added += 1
        return added
