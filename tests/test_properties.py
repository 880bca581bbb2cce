"""Invariants of built tables on randomly generated observations."""

from collections import Counter

import numpy as np
import pytest

from cfd_tlbx.data import CountsDistribution, FileSource, ObservationSource, PairSource, build_cfd, get


VOCAB = np.array(["a", "b", "c", "d", "e", "f"])


@pytest.fixture
def observations() -> dict[str, list[str]]:
    """Random observations for three conditions."""
    rng = np.random.default_rng(42)
    return {condition: rng.choice(VOCAB, size=size).tolist() for condition, size in [("A", 50), ("B", 7), ("C", 0)]}


class TestCountInvariants:
    def test_counts_non_negative_and_zero_when_unseen(self, observations) -> None:
        cfd = build_cfd(ObservationSource(observations))
        for condition, words in observations.items():
            for sample in [*VOCAB.tolist(), "never-seen"]:
                count = get(cfd, condition, sample)
                assert count >= 0
                if sample not in words:
                    assert count == 0

    def test_conservation(self, observations) -> None:
        cfd = build_cfd(ObservationSource(observations))
        for condition, words in observations.items():
            assert sum(get(cfd, condition, sample) for sample in cfd[condition]) == len(words)
            assert cfd[condition].total == len(words)

    def test_merge_then_count_equals_count_then_sum(self, observations) -> None:
        first, second = observations["A"][:20], observations["A"][20:]
        merged = build_cfd(ObservationSource({"first": first, "second": second}, condition_of=lambda _: "A"))
        separate = build_cfd(ObservationSource({"first": first, "second": second}))
        summed = CountsDistribution(separate["first"].as_dict()) + separate["second"]
        assert merged["A"].as_dict() == summed.as_dict()
        assert merged["A"].as_dict() == dict(Counter(observations["A"]))

    def test_merge_order_does_not_matter(self, observations) -> None:
        words = observations["A"]
        forward = build_cfd(PairSource(("A", w) for w in words))
        backward = build_cfd(PairSource(("A", w) for w in reversed(words)))
        assert forward["A"].as_dict() == backward["A"].as_dict()

    def test_chained_equivalence_across_backends(self, observations, write_text) -> None:
        eager = build_cfd(ObservationSource(observations))
        lazy = build_cfd(
            FileSource({c: write_text(f"{c}.txt", " ".join(words)) for c, words in observations.items()}),
        )
        for cfd in (eager, lazy):
            for condition in observations:
                for sample in VOCAB.tolist():
                    assert get(cfd, condition, sample) == get(get(cfd, condition), sample)
                    assert get(eager, condition, sample) == get(lazy, condition, sample)
