"""Data module: distribution backends, the CFD, its builder and loaders."""

from .access import get, get_element
from .builder import build_cfd
from .cfd import ConditionalFreqDist
from .corpus import PlaintextCorpus, load_corpus, wordpunct_tokenize
from .distributions import (
    BaseDistribution,
    CountsDistribution,
    FileDistribution,
    FrequencyObjectDistribution,
    count_observations,
)
from .sources import DistributionSource, FileSource, ObservationSource, PairSource
from .table_like import TableLike
from .views import ResolvedSelection, Selection


__all__ = [
    "BaseDistribution",
    "ConditionalFreqDist",
    "CountsDistribution",
    "DistributionSource",
    "FileDistribution",
    "FileSource",
    "FrequencyObjectDistribution",
    "ObservationSource",
    "PairSource",
    "PlaintextCorpus",
    "ResolvedSelection",
    "Selection",
    "TableLike",
    "build_cfd",
    "count_observations",
    "get",
    "get_element",
    "load_corpus",
    "wordpunct_tokenize",
]
