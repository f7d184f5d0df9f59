"""Sliding rate window dataclasses."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field


@dataclass
class RateWindow:
    """Epoch-millisecond timestamps of user-triggered fetch attempts."""

    timestamps: deque[float] = field(default_factory=deque)


@dataclass(frozen=True)
class RateDecision:
    allowed: bool
    retry_at: float | None = None

    def __bool__(self) -> bool:
        return self.allowed


@dataclass(frozen=True)
class RateLimitInfo:
    seconds_remaining: int
