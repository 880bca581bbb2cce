"""Tests for the generic element accessor."""

from collections import Counter
from collections.abc import Hashable, Iterator

import pandas as pd
import pytest

from cfd_tlbx.data import (
    ConditionalFreqDist,
    CountsDistribution,
    FileDistribution,
    FrequencyObjectDistribution,
    TableLike,
    get,
    get_element,
)
from cfd_tlbx.errors import ConditionNotFound


@pytest.fixture
def mixed_cfd(write_text) -> ConditionalFreqDist:
    """One condition per backend kind, all holding x=2, y=1."""
    return ConditionalFreqDist(
        {
            "eager": CountsDistribution({"x": 2, "y": 1}),
            "counter": FrequencyObjectDistribution(Counter({"x": 2, "y": 1})),
            "file": FileDistribution(write_text("f.txt", "x y x\n")),
        },
    )


class TestGet:
    """Test single and chained lookups."""

    def test_condition_returns_distribution(self, small_cfd) -> None:
        dist = get(small_cfd, "A")
        assert isinstance(dist, CountsDistribution)
        assert dist.as_dict() == {"x": 2, "y": 5}

    def test_chained_lookup(self, small_cfd) -> None:
        assert get(small_cfd, "A", "y") == 5
        assert get(small_cfd, "B", "y") == 0

    def test_missing_condition_raises(self, small_cfd) -> None:
        with pytest.raises(ConditionNotFound) as excinfo:
            get(small_cfd, "nonexistent-condition")
        assert excinfo.value.key == "nonexistent-condition"
        assert isinstance(excinfo.value, KeyError)

    def test_missing_outcome_is_zero(self, small_cfd) -> None:
        assert get(small_cfd, "A", "nonexistent-outcome") == 0

    def test_missing_intermediate_short_circuits(self, small_cfd) -> None:
        with pytest.raises(ConditionNotFound):
            get(small_cfd, "nonexistent-condition", "x")

    @pytest.mark.parametrize("condition", ["eager", "counter", "file"])
    def test_chained_equals_nested_for_every_backend(self, mixed_cfd, condition) -> None:
        for sample in ["x", "y", "z"]:
            assert get(mixed_cfd, condition, sample) == get(get(mixed_cfd, condition), sample)
        assert get(mixed_cfd, condition, "x") == 2

    def test_nested_mappings(self) -> None:
        table = {"A": {"x": 3}}
        assert get(table, "A", "x") == 3
        with pytest.raises(ConditionNotFound):
            get(table, "B")

    def test_mapping_of_distributions(self) -> None:
        table = {"A": CountsDistribution({"x": 3})}
        assert get(table, "A", "missing") == 0

    def test_dataframe_and_series(self, small_cfd) -> None:
        frame = small_cfd.to_frame()
        assert get(frame, "A", "y") == 5
        assert isinstance(get(frame, "B", "x"), int)
        with pytest.raises(ConditionNotFound):
            get(frame, "C")
        with pytest.raises(ConditionNotFound):
            get(pd.Series({"x": 1}), "y")

    def test_unsupported_container(self) -> None:
        with pytest.raises(TypeError, match="No element access"):
            get(42, "x")

    def test_leaf_value_cannot_be_indexed(self, small_cfd) -> None:
        with pytest.raises(TypeError):
            get(small_cfd, "A", "x", "deeper")


class TestOpenDispatch:
    """New container kinds plug in without touching the accessor."""

    def test_table_like_subclass(self) -> None:
        class Constant(TableLike):
            def lookup(self, key: Hashable) -> int:
                return 7

            def items(self) -> Iterator[tuple[Hashable, int]]:
                return iter([])

        assert get({"A": Constant()}, "A", "anything") == 7

    def test_register_new_type(self) -> None:
        class Pairs:
            def __init__(self, pairs):
                self.pairs = pairs

        @get_element.register
        def _(container: Pairs, key: Hashable) -> int:
            return dict(container.pairs).get(key, 0)

        assert get(Pairs([("x", 4)]), "x") == 4
        assert get(ConditionalFreqDist({"A": FrequencyObjectDistribution(Counter(x=1))}), "A", "x") == 1
