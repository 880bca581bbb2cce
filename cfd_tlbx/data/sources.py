"""Raw-source variants accepted by the CFD builder.

Each variant carries an explicit ``kind`` discriminator; the builder selects its
per-variant function from that tag instead of inspecting the payload type.
"""

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Literal

from .distributions import Tokenizer


SourceKind = Literal["observations", "pairs", "distributions", "files"]


@dataclass(frozen=True)
class ObservationSource:
    """Already-tokenized observations keyed by condition (or by a finer unit).

    Attributes:
        observations: Mapping from key to an iterable of observations (e.g. words).
        condition_of: Optional map from key to condition. Use it when keys are
            finer-grained units (documents) that must be merged into coarser
            conditions (topics, years) before counting.

    Example:
        >>> ObservationSource({"1789-Washington.txt": words}, condition_of=lambda fileid: fileid[:4])
    """

    kind: ClassVar[SourceKind] = "observations"
    observations: Mapping[Hashable, Iterable[Hashable]]
    condition_of: Callable[[Hashable], Hashable] | None = None


@dataclass(frozen=True)
class PairSource:
    """Flat ``(condition, observation)`` pairs.

    Attributes:
        pairs: Iterable of 2-tuples; consumed once by the builder.
    """

    kind: ClassVar[SourceKind] = "pairs"
    pairs: Iterable[tuple[Hashable, Hashable]]


@dataclass(frozen=True)
class DistributionSource:
    """Pre-built distributions (or frequency objects) keyed by condition, used as-is."""

    kind: ClassVar[SourceKind] = "distributions"
    distributions: Mapping[Hashable, Any]


@dataclass(frozen=True)
class FileSource:
    """Named file collection, one lazily counted distribution per condition.

    Attributes:
        paths: Either a mapping ``{condition: path or paths}`` or an iterable of
            paths whose condition is ``condition_of(path)`` (file stem by default).
        condition_of: Map from path to condition for un-keyed path collections.
        tokenize: Line tokenizer; ``None`` makes every non-blank line one observation.
        encoding: Text encoding of the files.
    """

    kind: ClassVar[SourceKind] = "files"
    paths: Mapping[Hashable, str | Path | Sequence[str | Path]] | Iterable[str | Path]
    condition_of: Callable[[Path], Hashable] | None = None
    tokenize: Tokenizer | None = str.split
    encoding: str = "utf-8"


RawSource = ObservationSource | PairSource | DistributionSource | FileSource


__all__ = [
    "DistributionSource",
    "FileSource",
    "ObservationSource",
    "PairSource",
    "RawSource",
    "SourceKind",
]
