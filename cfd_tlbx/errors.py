"""Error taxonomy shared by the data, analysis and plotting layers."""


class CFDError(Exception):
    """Base class for all errors raised by the CFD toolbox."""


class ConditionNotFound(CFDError, KeyError):
    """A condition key is not tracked by the table.

    Distinguishes an untracked condition from a sample whose count is zero.
    """

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Condition {self.key!r} not found"


class SourceUnavailable(CFDError, OSError):
    """The resource backing a lazy distribution or corpus cannot be read."""


class MalformedSelection(CFDError, ValueError):
    """A tabulation/export selection is syntactically invalid for the table."""


class RenderSinkFailure(CFDError, RuntimeError):
    """The plotting sink rejected or failed on the exported data."""


__all__ = [
    "CFDError",
    "ConditionNotFound",
    "MalformedSelection",
    "RenderSinkFailure",
    "SourceUnavailable",
]
