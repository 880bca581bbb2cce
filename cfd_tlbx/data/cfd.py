"""Conditional frequency table: condition -> sample-frequency distribution."""

from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from cfd_tlbx.errors import ConditionNotFound

from .access import get
from .distributions import BaseDistribution
from .table_like import TableLike


if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from cfd_tlbx.analysis.tabulator import TabulationResult


KeyFn = Callable[[Hashable], Hashable]


class ConditionalFreqDist(TableLike):
    """Mapping from condition to exactly one :class:`BaseDistribution`.

    The table is filled once (usually by :func:`cfd_tlbx.data.builder.build_cfd`)
    and read afterwards; consumers never mutate it.

    Args:
        distributions: Optional initial ``{condition: distribution}`` mapping
        key: Condition-key equality discipline, applied to condition keys on
            insertion and on every lookup (identity by default). Use e.g.
            ``str.lower`` to treat ``"News"`` and ``"news"`` as one condition.
            The label a condition was added under is what ``conditions()``
            and ``items()`` report.

    Example:
        >>> from cfd_tlbx.data import ConditionalFreqDist, CountsDistribution
        >>> cfd = ConditionalFreqDist(
        ...     {"A": CountsDistribution({"x": 2, "y": 5}), "B": CountsDistribution({"x": 1})},
        ... )
        >>> cfd.conditions()
        ['A', 'B']
        >>> print(cfd.tabulate(samples=["x", "y"]))
          x y
        A 2 5
        B 1 0
    """

    def __init__(
        self,
        distributions: Mapping[Hashable, BaseDistribution] | None = None,
        *,
        key: KeyFn | None = None,
    ) -> None:
        self._key: KeyFn = key if key is not None else (lambda condition: condition)
        self._dists: dict[Hashable, BaseDistribution] = {}
        self._labels: dict[Hashable, Hashable] = {}
        for condition, dist in (distributions or {}).items():
            self.add(condition, dist)

    @property
    def key(self) -> KeyFn:
        """The condition-key equality discipline."""
        return self._key

    def add(self, condition: Hashable, dist: BaseDistribution) -> None:
        """Register the distribution of a new condition under the label ``condition``.

        The distribution is stored as given; its ``name`` is left untouched.

        Raises:
            TypeError: If ``dist`` is not a distribution backend
            ValueError: If the (normalized) condition is already present
        """
        if not isinstance(dist, BaseDistribution):
            raise TypeError(f"Expected a distribution for {condition!r}, got {type(dist).__name__}")
        normalized = self._key(condition)
        if normalized in self._dists:
            raise ValueError(f"Condition {self._labels[normalized]!r} already present")
        self._dists[normalized] = dist
        self._labels[normalized] = condition

    # ------------------------------------------------------------------ read contract
    def lookup(self, key: Hashable) -> BaseDistribution:
        """Return the distribution of ``key``.

        Raises:
            ConditionNotFound: If the condition is not tracked
        """
        try:
            return self._dists[self._key(key)]
        except (KeyError, TypeError):
            raise ConditionNotFound(key) from None

    def items(self) -> Iterator[tuple[Hashable, BaseDistribution]]:
        return iter([(self._labels[normalized], dist) for normalized, dist in self._dists.items()])

    def __getitem__(self, condition: Hashable) -> BaseDistribution:
        return self.lookup(condition)

    def __contains__(self, condition: object) -> bool:
        try:
            return self._key(condition) in self._dists  # type: ignore[arg-type]
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.conditions())

    def __len__(self) -> int:
        return len(self._dists)

    def __repr__(self) -> str:
        return f"<ConditionalFreqDist with {len(self)} conditions>"

    # ------------------------------------------------------------------ derived views
    def conditions(self) -> list[Hashable]:
        """Return the condition labels in natural (insertion) order."""
        return list(self._labels.values())

    @property
    def total(self) -> int:
        """Total number of observations across all conditions."""
        return sum(dist.total for dist in self._dists.values())

    def samples(self, conditions: Iterable[Hashable] | None = None) -> list[Hashable]:
        """Return the union of samples seen under ``conditions``, in first-seen order.

        Conditions that are not tracked contribute nothing.
        """
        seen: dict[Hashable, None] = {}
        for condition in self.conditions() if conditions is None else conditions:
            if condition in self:
                seen.update(dict.fromkeys(self.lookup(condition)))
        return list(seen)

    def to_frame(
        self,
        conditions: Iterable[Hashable] | None = None,
        samples: Iterable[Hashable] | None = None,
        cumulative: bool = False,
    ) -> pd.DataFrame:
        """Return the table as a DataFrame (rows = conditions, columns = samples).

        Args:
            conditions: Row keys (defaults to all conditions)
            samples: Column keys (defaults to every sample seen in the rows)
            cumulative: Replace each cell by the running sum of its row up to it

        Returns:
            Integer DataFrame; rows of untracked conditions are all zero
        """
        rows = self.conditions() if conditions is None else list(conditions)
        cols = self.samples(rows) if samples is None else list(samples)

        values = np.zeros((len(rows), len(cols)), dtype=np.int64)
        for i, row in enumerate(rows):
            if row in self:
                values[i] = [get(self, row, col) for col in cols]
        if cumulative:
            values = np.cumsum(values, axis=1)
        return pd.DataFrame(
            values,
            index=pd.Index(rows, dtype=object, tupleize_cols=False),
            columns=pd.Index(cols, dtype=object, tupleize_cols=False),
        )

    # ------------------------------------------------------------------ shortcuts
    def tabulate(self, **kwargs: Any) -> "TabulationResult":
        """Tabulate the table (see :func:`cfd_tlbx.analysis.tabulator.tabulate`)."""
        from cfd_tlbx.analysis.tabulator import Tabulator  # noqa: PLC0415
        from cfd_tlbx.data.views import Selection  # noqa: PLC0415

        return Tabulator(self, Selection(**kwargs)).fit().result()

    def plot(self, **kwargs: Any) -> "Figure":
        """Plot the table (see :func:`cfd_tlbx.plotting.cfd_plots.plot_cfd`)."""
        from cfd_tlbx.plotting.cfd_plots import plot_cfd  # noqa: PLC0415

        return plot_cfd(self, **kwargs)


__all__ = ["ConditionalFreqDist"]
