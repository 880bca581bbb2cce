"""Tests for ConditionalFreqDist."""

import pandas as pd
import pytest

from cfd_tlbx.data import ConditionalFreqDist, CountsDistribution
from cfd_tlbx.errors import ConditionNotFound


class TestConditionalFreqDist:
    """Test the condition -> distribution table."""

    def test_natural_order_and_len(self, small_cfd) -> None:
        assert small_cfd.conditions() == ["A", "B"]
        assert list(small_cfd) == ["A", "B"]
        assert len(small_cfd) == 2
        assert "A" in small_cfd
        assert "C" not in small_cfd

    def test_getitem_and_lookup(self, small_cfd) -> None:
        assert small_cfd["A"] is small_cfd.lookup("A")
        with pytest.raises(ConditionNotFound):
            small_cfd["C"]

    def test_total_and_samples(self, small_cfd) -> None:
        assert small_cfd.total == 8
        assert small_cfd.samples() == ["x", "y"]
        assert small_cfd.samples(["B"]) == ["x"]
        assert small_cfd.samples(["B", "missing"]) == ["x"]

    def test_duplicate_condition_rejected(self, small_cfd) -> None:
        with pytest.raises(ValueError, match="already present"):
            small_cfd.add("A", CountsDistribution())

    def test_requires_distribution(self) -> None:
        with pytest.raises(TypeError):
            ConditionalFreqDist({"A": {"x": 1}})  # type: ignore[dict-item]

    def test_supplied_distribution_name_untouched(self) -> None:
        dist = CountsDistribution({"x": 1})
        named = CountsDistribution({"x": 1}, name="news-1961")
        ConditionalFreqDist({"A": dist, "B": named})
        assert dist.name is None
        assert named.name == "news-1961"

    def test_key_discipline(self) -> None:
        cfd = ConditionalFreqDist({"News": CountsDistribution({"x": 1})}, key=str.lower)
        assert cfd.conditions() == ["News"]
        assert [condition for condition, _ in cfd.items()] == ["News"]
        assert list(cfd) == ["News"]
        assert cfd["NEWS"].count("x") == 1
        assert "nEwS" in cfd
        with pytest.raises(ValueError, match="News"):
            cfd.add("news", CountsDistribution())

    def test_key_discipline_with_incompatible_key(self) -> None:
        cfd = ConditionalFreqDist({"a": CountsDistribution()}, key=str.lower)
        assert 3 not in cfd
        with pytest.raises(ConditionNotFound):
            cfd[3]

    def test_case_sensitive_by_default(self) -> None:
        cfd = ConditionalFreqDist({"News": CountsDistribution()})
        assert "news" not in cfd

    def test_to_frame(self, small_cfd) -> None:
        frame = small_cfd.to_frame()
        expected = pd.DataFrame({"x": [2, 1], "y": [5, 0]}, index=["A", "B"])
        pd.testing.assert_frame_equal(frame, expected, check_index_type=False, check_column_type=False)

    def test_to_frame_cumulative(self, small_cfd) -> None:
        frame = small_cfd.to_frame(samples=["x", "y"], cumulative=True)
        assert frame.loc["A"].tolist() == [2, 7]
        assert frame.loc["B"].tolist() == [1, 1]

    def test_to_frame_untracked_condition_is_zero(self, small_cfd) -> None:
        frame = small_cfd.to_frame(conditions=["B", "Z"], samples=["x"])
        assert frame["x"].tolist() == [1, 0]

    def test_empty_table(self) -> None:
        cfd = ConditionalFreqDist()
        assert cfd.conditions() == []
        assert cfd.total == 0
        assert cfd.to_frame().shape == (0, 0)
