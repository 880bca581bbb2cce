"""Build a :class:`ConditionalFreqDist` from any supported raw source.

The builder performs no normalization of observations. Case folding, stemming or
filtering belong in ``transform``: counts of ``"Could"`` and ``"could"`` stay apart
unless the transform folds them, which is the usual cause of counts disagreeing
with published, case-normalized reference tables.
"""

import logging
from collections import Counter
from collections.abc import Callable, Hashable, Mapping
from pathlib import Path
from typing import Any

from .cfd import ConditionalFreqDist, KeyFn
from .distributions import (
    BaseDistribution,
    CountsDistribution,
    FileDistribution,
    FrequencyObjectDistribution,
    Transform,
    count_observations,
)
from .sources import DistributionSource, FileSource, ObservationSource, PairSource, RawSource, SourceKind


logger = logging.getLogger(__name__)


def _identity(value: Hashable) -> Hashable:
    return value


def _publish(counts: Mapping[Hashable, Counter], key: KeyFn | None) -> ConditionalFreqDist:
    cfd = ConditionalFreqDist(key=key)
    for condition, counter in counts.items():
        cfd.add(condition, CountsDistribution(counter, name=condition).seal())
    return cfd


def _build_from_observations(
    source: ObservationSource,
    key: KeyFn | None,
    transform: Transform | None,
) -> ConditionalFreqDist:
    normalize = key or _identity
    condition_of = source.condition_of or _identity
    counts: dict[Hashable, Counter] = {}
    first_label: dict[Hashable, Hashable] = {}
    for unit, observations in source.observations.items():
        condition = condition_of(unit)
        normalized = normalize(condition)
        first_label.setdefault(normalized, condition)
        count_observations(observations, transform, counts.setdefault(normalized, Counter()))
    return _publish({first_label[n]: counter for n, counter in counts.items()}, key)


def _build_from_pairs(
    source: PairSource,
    key: KeyFn | None,
    transform: Transform | None,
) -> ConditionalFreqDist:
    normalize = key or _identity
    counts: dict[Hashable, Counter] = {}
    first_label: dict[Hashable, Hashable] = {}
    for condition, observation in source.pairs:
        normalized = normalize(condition)
        first_label.setdefault(normalized, condition)
        count_observations((observation,), transform, counts.setdefault(normalized, Counter()))
    return _publish({first_label[n]: counter for n, counter in counts.items()}, key)


def _build_from_distributions(
    source: DistributionSource,
    key: KeyFn | None,
    transform: Transform | None,
) -> ConditionalFreqDist:
    if transform is not None:
        raise ValueError("Pre-built distributions are used as-is; a transform cannot be applied to them.")
    cfd = ConditionalFreqDist(key=key)
    for condition, dist in source.distributions.items():
        if not isinstance(dist, BaseDistribution):
            dist = FrequencyObjectDistribution(dist, name=condition)
        cfd.add(condition, dist)
    return cfd


def _build_from_files(
    source: FileSource,
    key: KeyFn | None,
    transform: Transform | None,
) -> ConditionalFreqDist:
    normalize = key or _identity
    grouped: dict[Hashable, list[Path]] = {}
    first_label: dict[Hashable, Hashable] = {}

    def _collect(condition: Hashable, paths: list[Path]) -> None:
        normalized = normalize(condition)
        first_label.setdefault(normalized, condition)
        grouped.setdefault(normalized, []).extend(paths)

    if isinstance(source.paths, Mapping):
        for condition, paths in source.paths.items():
            _collect(condition, [Path(paths)] if isinstance(paths, str | Path) else [Path(p) for p in paths])
    else:
        condition_of = source.condition_of or (lambda path: path.stem)
        for path in map(Path, source.paths):
            _collect(condition_of(path), [path])

    cfd = ConditionalFreqDist(key=key)
    for normalized, paths in grouped.items():
        condition = first_label[normalized]
        cfd.add(
            condition,
            FileDistribution(
                paths,
                transform=transform,
                tokenize=source.tokenize,
                encoding=source.encoding,
                name=condition,
            ),
        )
    return cfd


_BUILDERS: dict[SourceKind, Callable[[Any, KeyFn | None, Transform | None], ConditionalFreqDist]] = {
    "observations": _build_from_observations,
    "pairs": _build_from_pairs,
    "distributions": _build_from_distributions,
    "files": _build_from_files,
}


def build_cfd(
    source: RawSource,
    *,
    key: KeyFn | None = None,
    transform: Transform | None = None,
) -> ConditionalFreqDist:
    """Construct a conditional frequency table from a raw source.

    Args:
        source: One of :class:`ObservationSource`, :class:`PairSource`,
            :class:`DistributionSource` or :class:`FileSource`
        key: Condition-key equality discipline (identity by default). Conditions
            equal under ``key`` are merged; the first label seen is kept.
        transform: Per-observation transform applied before counting (identity by
            default). Returning ``None`` drops the observation. File sources apply
            it lazily, on first access of each distribution.

    Returns:
        The populated ConditionalFreqDist

    Raises:
        ValueError: If the source kind is unknown, if a transform is given for
            pre-built distributions, or if two pre-built distributions collide

    Example:
        >>> cfd = build_cfd(
        ...     PairSource((genre, word) for genre, words in corpus.items() for word in words),
        ...     transform=str.lower,
        ... )
        >>> get(cfd, "news", "could")
    """
    try:
        builder = _BUILDERS[source.kind]
    except (AttributeError, KeyError):
        raise ValueError(f"Unsupported raw source: {source!r}") from None

    cfd = builder(source, key, transform)
    logger.info("Built CFD from %s source: %d conditions", source.kind, len(cfd))
    return cfd


__all__ = ["build_cfd"]
