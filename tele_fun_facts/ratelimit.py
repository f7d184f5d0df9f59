"""Sliding-window limiter for user-triggered fact requests.

Timestamps are epoch milliseconds. A denied attempt is not recorded, so
hammering the button while limited does not extend the wait.
"""

from __future__ import annotations

from collections import deque

from .models.rate_window import RateDecision, RateWindow

MAX_PER_WINDOW = 5
WINDOW_MS = 60_000


class RateLimiter:
    def __init__(
        self,
        max_per_window: int = MAX_PER_WINDOW,
        window_ms: float = WINDOW_MS,
        window: RateWindow | None = None,
    ):
        self.max_per_window = max_per_window
        self.window_ms = window_ms
        self.window = window or RateWindow()

    def _prune(self, now: float) -> None:
        self.window.timestamps = deque(
            ts for ts in self.window.timestamps if now - ts < self.window_ms
        )

    def try_consume(self, now: float) -> RateDecision:
        self._prune(now)
        timestamps = self.window.timestamps
        if len(timestamps) >= self.max_per_window:
            return RateDecision(allowed=False, retry_at=min(timestamps) + self.window_ms)
        timestamps.append(now)
        return RateDecision(allowed=True)

    def remaining(self, now: float) -> int:
        """Taps still available in the current window."""
        self._prune(now)
        return max(0, self.max_per_window - len(self.window.timestamps))
