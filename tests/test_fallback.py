import random

import pytest

from tele_fun_facts.fallback import DEFAULT_FACTS, EmptyFallbackError, FallbackCorpus


def test_empty_corpus_is_a_configuration_error() -> None:
    with pytest.raises(EmptyFallbackError):
        FallbackCorpus([])
    with pytest.raises(EmptyFallbackError):
        FallbackCorpus(["", "   "])


def test_pick_returns_lowercased_corpus_entry() -> None:
    corpus = FallbackCorpus(["Honey Never Spoils."], rng=random.Random(3))
    assert corpus.pick() == "honey never spoils."


def test_pick_covers_corpus() -> None:
    corpus = FallbackCorpus(rng=random.Random(11))
    picks = {corpus.pick() for _ in range(200)}
    assert picks == {f.lower() for f in DEFAULT_FACTS}
    assert len(corpus) == len(DEFAULT_FACTS)
