"""Tests for the prefetch cache."""

from collections import deque

import pytest

from tele_fun_facts.cache import FactCache
from tele_fun_facts.models.cache import CacheState

from conftest import sequence_source


@pytest.mark.asyncio
async def test_refill_fills_to_target_in_fetch_order() -> None:
    cache = FactCache(sequence_source(["a", "b", "c", "d", "e"]), target_size=4)

    added = await cache.refill()

    assert added == 4
    assert list(cache.state.queue) == ["a", "b", "c", "d"]
    assert cache.seen == {"a", "b", "c", "d"}


@pytest.mark.asyncio
async def test_refill_drops_duplicates_without_counting_them() -> None:
    source = sequence_source(["a", "a", "b", "c"])
    cache = FactCache(source, target_size=3)

    added = await cache.refill()

    assert added == 3
    assert list(cache.state.queue) == ["a", "b", "c"]
    assert source.calls["count"] == 4


@pytest.mark.asyncio
async def test_refill_skips_facts_already_shown() -> None:
    state = CacheState(seen={"shown"})
    cache = FactCache(sequence_source(["shown", "fresh"]), state=state, target_size=1)

    await cache.refill()

    assert list(cache.state.queue) == ["fresh"]


@pytest.mark.asyncio
async def test_refill_stops_when_source_is_exhausted() -> None:
    source = sequence_source(["a", None, "b"])
    cache = FactCache(source, target_size=4)

    added = await cache.refill()

    assert added == 1
    assert list(cache.state.queue) == ["a"]
    assert source.calls["count"] == 2


@pytest.mark.asyncio
async def test_refill_gives_up_on_endless_duplicates() -> None:
    calls = {"n": 0}

    async def source() -> str:
        calls["n"] += 1
        return "same fact"

    cache = FactCache(
        source, state=CacheState(seen={"same fact"}), target_size=2, max_duplicates=3
    )

    assert await cache.refill() == 0
    assert calls["n"] == 3


@pytest.mark.asyncio
async def test_refill_with_explicit_target_and_full_queue() -> None:
    state = CacheState(queue=deque(["a", "b"]), seen={"a", "b"})
    source = sequence_source(["c"])
    cache = FactCache(source, state=state, target_size=4)

    assert await cache.refill(target_size=2) == 0
    assert source.calls["count"] == 0


def test_consume_is_fifo_and_non_blocking() -> None:
    state = CacheState(queue=deque(["fact-a", "fact-b"]), seen={"fact-a", "fact-b"})
    cache = FactCache(sequence_source([]), state=state)

    assert cache.consume() == "fact-a"
    assert cache.consume() == "fact-b"
    assert cache.consume() is None
    # Consuming never forgets what was seen.
    assert cache.seen == {"fact-a", "fact-b"}


@pytest.mark.asyncio
async def test_queue_unique_and_seen_monotonic_over_many_refills() -> None:
    items = [f"fact-{i % 7}" for i in range(40)]
    cache = FactCache(sequence_source(items), target_size=3)
    previous_seen = 0

    for _ in range(10):
        await cache.refill()
        queue = list(cache.state.queue)
        assert len(queue) == len(set(queue))
        assert set(queue) <= cache.seen
        assert len(cache.seen) >= previous_seen
        previous_seen = len(cache.seen)
        cache.consume()


@pytest.mark.asyncio
async def test_fresh_fact_resets_duplicate_run() -> None:
    source = sequence_source(["x", "x", "a", "x", "x", "b"])
    cache = FactCache(
        source, state=CacheState(seen={"x"}), target_size=2, max_duplicates=3
    )

    assert await cache.refill() == 2
    assert list(cache.state.queue) == ["a", "b"]
    assert source.calls["count"] == 6
