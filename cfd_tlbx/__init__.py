from .data import (
    ConditionalFreqDist,
    CountsDistribution,
    FileDistribution,
    FrequencyObjectDistribution,
    build_cfd,
    get,
)
from .errors import CFDError, ConditionNotFound, MalformedSelection, RenderSinkFailure, SourceUnavailable


__version__ = "0.1.0"

__all__ = [
    "CFDError",
    "ConditionNotFound",
    "ConditionalFreqDist",
    "CountsDistribution",
    "FileDistribution",
    "FrequencyObjectDistribution",
    "MalformedSelection",
    "RenderSinkFailure",
    "SourceUnavailable",
    "build_cfd",
    "get",
]
