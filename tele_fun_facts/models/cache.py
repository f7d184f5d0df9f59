"""Prefetch cache state."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field


@dataclass
class CacheState:
    """Queued facts (oldest first) and every fact seen this session.

    Every queued fact is also in ``seen``; ``seen`` is never cleared.
    """

    queue: deque[str] = field(default_factory=deque)
    seen: set[str] = field(default_factory=set)
