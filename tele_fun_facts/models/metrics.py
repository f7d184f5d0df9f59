"""Session metrics dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SessionMetrics:
    shown: int = 0
    by_source: dict[str, int] = field(default_factory=dict)
    taps: int = 0
    ignored_taps: int = 0
    rate_limited: int = 0
    refills: int = 0
    prefetched: int = 0
    refill_errors: int = 0
    last_refill_error: str | None = None
    render_errors: int = 0
    last_shown_ts: float | None = None

    def record_shown(self, source: str, ts: float) -> None:
        self.shown += 1
        self.by_source[source] = self.by_source.get(source, 0) + 1
        self.last_shown_ts = ts
