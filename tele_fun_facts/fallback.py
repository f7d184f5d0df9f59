"""Local facts used when the API cannot be reached."""

from __future__ import annotations

import random
from typing import Iterable

DEFAULT_FACTS: tuple[str, ...] = (
    "honey never spoils.",
    "octopuses have three hearts.",
    "sharks existed before trees.",
    "wombat poop is cube-shaped.",
    "bananas are berries; strawberries aren't.",
)


class EmptyFallbackError(ValueError):
    """Raised when a fallback corpus is configured without any facts."""


class FallbackCorpus:
    def __init__(
        self, facts: Iterable[str] = DEFAULT_FACTS, rng: random.Random | None = None
    ):
        self.facts = tuple(f for f in facts if f and f.strip())
        if not self.facts:
            raise EmptyFallbackError("fallback corpus must contain at least one fact")
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self.facts)

    def pick(self) -> str:
        """Uniformly random fact, lowercased."""
        return self._rng.choice(self.facts).lower()
