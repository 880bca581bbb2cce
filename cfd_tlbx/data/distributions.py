"""Distribution backends: one condition's sample counts behind one read contract."""

import logging
from abc import abstractmethod
from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping, Sequence
from itertools import islice
from pathlib import Path
from typing import Any

import pandas as pd

from cfd_tlbx.errors import SourceUnavailable

from .table_like import TableLike


logger = logging.getLogger(__name__)

Transform = Callable[[Any], Hashable | None]
Tokenizer = Callable[[str], Iterable[str]]


def count_observations(
    observations: Iterable[Hashable],
    transform: Transform | None = None,
    counts: Counter | None = None,
) -> Counter:
    """Count observations after applying ``transform`` to each of them.

    Args:
        observations: Raw observation values (e.g. words)
        transform: Optional per-observation transform. Returning ``None`` drops
            the observation.
        counts: Optional counter to accumulate into (a new one is created otherwise)

    Returns:
        Counter mapping each transformed observation to its count
    """
    counts = Counter() if counts is None else counts
    if transform is None:
        counts.update(observations)
        return counts
    for obs in observations:
        value = transform(obs)
        if value is not None:
            counts[value] += 1
    return counts


def _check_count(sample: Hashable, count: object) -> int:
    value = int(count)  # type: ignore[call-overload]
    if value < 0:
        raise ValueError(f"Negative count {value} for sample {sample!r}")
    return value


class BaseDistribution(TableLike):
    """Abstract base class for a single condition's sample-frequency distribution.

    Every backend must implement:
    1. ``count(sample)``: the count of ``sample`` (0 when never observed)
    2. ``items()``: a fresh iterator of ``(sample, count)`` pairs

    All derived statistics (totals, rank ordering, pandas export) are built on
    these two methods only.
    """

    def __init__(self, name: Hashable | None = None) -> None:
        self.name = name

    @abstractmethod
    def count(self, sample: Hashable) -> int:
        """Return the count of ``sample`` (0 when absent)."""
        ...

    @abstractmethod
    def items(self) -> Iterator[tuple[Hashable, int]]:
        """Return an iterator over ``(sample, count)`` pairs in backend order."""
        ...

    def lookup(self, key: Hashable) -> int:
        """Table-like lookup: samples default to 0."""
        return self.count(key)

    def __getitem__(self, sample: Hashable) -> int:
        return self.count(sample)

    def __contains__(self, sample: object) -> bool:
        try:
            return self.count(sample) > 0  # type: ignore[arg-type]
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Hashable]:
        return (sample for sample, _ in self.items())

    def __len__(self) -> int:
        return self.n_distinct

    @property
    def total(self) -> int:
        """Total number of counted observations."""
        return sum(count for _, count in self.items())

    @property
    def n_distinct(self) -> int:
        """Number of distinct samples with a count."""
        return sum(1 for _ in self.items())

    def as_dict(self) -> dict[Hashable, int]:
        """Materialize the distribution as a plain ``{sample: count}`` dict."""
        return dict(self.items())

    def most_common(self, n: int | None = None) -> list[tuple[Hashable, int]]:
        """Return samples ranked by count (descending), ties kept in enumeration order.

        Args:
            n: Number of entries to return (all when None)
        """
        ranked = sorted(self.items(), key=lambda item: item[1], reverse=True)
        return ranked if n is None else ranked[:n]

    def max(self) -> Hashable | None:
        """Return the most frequent sample, or None for an empty distribution."""
        top = self.most_common(1)
        return top[0][0] if top else None

    def hapaxes(self) -> list[Hashable]:
        """Return samples observed exactly once."""
        return [sample for sample, count in self.items() if count == 1]

    def to_series(self) -> pd.Series:
        """Return the distribution as an int Series indexed by sample."""
        pairs = list(self.items())
        index = pd.Index([sample for sample, _ in pairs], dtype=object, tupleize_cols=False)
        return pd.Series([count for _, count in pairs], index=index, name=self.name, dtype="int64")

    def __repr__(self) -> str:
        head = ", ".join(f"{sample!r}: {count}" for sample, count in islice(self.items(), 10))
        more = ", ..." if self.n_distinct > 10 else ""
        return f"<{type(self).__name__} {self.name!r} with {self.n_distinct} samples: {{{head}{more}}}>"


class CountsDistribution(BaseDistribution):
    """Eager, fully materialized sample counts (insertion ordered).

    The distribution accepts further observations through :meth:`update` until
    :meth:`seal` is called.

    Args:
        counts: Either a mapping ``{sample: count}`` or an iterable of raw observations
        name: Optional label (usually the condition)
    """

    def __init__(
        self,
        counts: Mapping[Hashable, int] | Iterable[Hashable] | None = None,
        *,
        name: Hashable | None = None,
    ) -> None:
        super().__init__(name=name)
        self._counts: dict[Hashable, int] = {}
        self._sealed = False
        if isinstance(counts, Mapping):
            for sample, count in counts.items():
                value = _check_count(sample, count)
                if value:
                    self._counts[sample] = value
        elif counts is not None:
            self.update(counts)

    @property
    def sealed(self) -> bool:
        """Whether further accumulation is rejected."""
        return self._sealed

    def seal(self) -> "CountsDistribution":
        """Freeze the distribution; returns self for chaining."""
        self._sealed = True
        return self

    def update(self, observations: Iterable[Hashable], transform: Transform | None = None) -> "CountsDistribution":
        """Count more observations into this distribution.

        Raises:
            ValueError: If the distribution is sealed
        """
        if self._sealed:
            raise ValueError(f"Distribution {self.name!r} is sealed")
        fresh = count_observations(observations, transform)
        for sample, count in fresh.items():
            self._counts[sample] = self._counts.get(sample, 0) + count
        return self

    def count(self, sample: Hashable) -> int:
        return self._counts.get(sample, 0)

    def items(self) -> Iterator[tuple[Hashable, int]]:
        return iter(list(self._counts.items()))

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    @property
    def n_distinct(self) -> int:
        return len(self._counts)

    def __add__(self, other: BaseDistribution) -> "CountsDistribution":
        if not isinstance(other, BaseDistribution):
            return NotImplemented
        merged = dict(self._counts)
        for sample, count in other.items():
            merged[sample] = merged.get(sample, 0) + count
        return CountsDistribution(merged, name=self.name)


class FrequencyObjectDistribution(BaseDistribution):
    """Adapter around an opaque frequency object.

    Any object exposing ``get(sample, default)`` and ``items()`` qualifies, e.g.
    :class:`collections.Counter` or the Series returned by
    :meth:`pandas.Series.value_counts`. The wrapped object is never mutated.

    Args:
        freq: The frequency object
        name: Optional label (defaults to the object's ``name`` attribute, if any)
    """

    def __init__(self, freq: Any, *, name: Hashable | None = None) -> None:
        if not (callable(getattr(freq, "get", None)) and callable(getattr(freq, "items", None))):
            raise TypeError(f"{type(freq).__name__} does not expose get() and items()")
        super().__init__(name=name if name is not None else getattr(freq, "name", None))
        for sample, count in freq.items():
            _check_count(sample, count)
        self._freq = freq

    @property
    def wrapped(self) -> Any:
        """The underlying frequency object."""
        return self._freq

    def count(self, sample: Hashable) -> int:
        try:
            return int(self._freq.get(sample, 0))
        except (KeyError, TypeError):
            return 0

    def items(self) -> Iterator[tuple[Hashable, int]]:
        return ((sample, int(count)) for sample, count in self._freq.items() if count)


class FileDistribution(BaseDistribution):
    """Lazy distribution computed from one or more text files on first access.

    The full count table is built once (by :meth:`count`, :meth:`items` or any
    derived statistic) and cached; later lookups never re-read the files.

    Attributes:
        paths: Files whose observations are counted together.
        transform: Optional per-observation transform (``None`` result drops it).
        tokenize: Splits a line into observations; ``None`` makes every non-blank
            stripped line one observation.
        encoding: Text encoding of the files.
        n_reads: Number of file reads performed so far (a probe for caching).
    """

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path],
        *,
        transform: Transform | None = None,
        tokenize: Tokenizer | None = str.split,
        encoding: str = "utf-8",
        name: Hashable | None = None,
    ) -> None:
        self.paths = [Path(paths)] if isinstance(paths, str | Path) else [Path(p) for p in paths]
        if not self.paths:
            raise ValueError("FileDistribution requires at least one path")
        super().__init__(name=name if name is not None else self.paths[0].stem)
        self.transform = transform
        self.tokenize = tokenize
        self.encoding = encoding
        self.n_reads = 0
        self._counts: dict[Hashable, int] | None = None

    @property
    def loaded(self) -> bool:
        """Whether the count table has been materialized."""
        return self._counts is not None

    def _observations(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            if self.tokenize is None:
                record = line.strip()
                if record:
                    yield record
            else:
                yield from self.tokenize(line)

    def load(self) -> dict[Hashable, int]:
        """Materialize (once) and return the cached count table.

        Raises:
            SourceUnavailable: If any backing file is missing or unreadable
        """
        if self._counts is not None:
            return self._counts
        counts: Counter = Counter()
        for path in self.paths:
            logger.debug("Reading %s for distribution %r", path, self.name)
            try:
                with path.open(encoding=self.encoding) as fh:
                    self.n_reads += 1
                    count_observations(self._observations(fh), self.transform, counts)
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceUnavailable(f"Cannot read '{path}' for distribution {self.name!r}: {exc}") from exc
        self._counts = dict(counts)
        logger.debug("Distribution %r materialized: %d samples", self.name, len(self._counts))
        return self._counts

    def count(self, sample: Hashable) -> int:
        return self.load().get(sample, 0)

    def items(self) -> Iterator[tuple[Hashable, int]]:
        return iter(list(self.load().items()))

    @property
    def n_distinct(self) -> int:
        return len(self.load())


__all__ = [
    "BaseDistribution",
    "CountsDistribution",
    "FileDistribution",
    "FrequencyObjectDistribution",
    "count_observations",
]
