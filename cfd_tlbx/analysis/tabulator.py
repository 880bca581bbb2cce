"""Aligned text tabulation of a conditional frequency table."""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any, Self

import pandas as pd

from cfd_tlbx.data.cfd import ConditionalFreqDist
from cfd_tlbx.data.views import Selection

from .base_analyser import BaseAnalyser


@dataclass(frozen=True)
class TabulationResult:
    """Selected grid of counts plus its text rendering.

    Attributes:
        frame: Integer DataFrame (rows = conditions, columns = samples), already
            cumulative when requested.
        cumulative: Whether cells hold running row sums.
    """

    frame: pd.DataFrame
    cumulative: bool = False

    def column_widths(self) -> list[int]:
        """Return one fixed width per column, the label column first.

        A width is the larger of the header label and the widest formatted value.
        """
        cells = self.frame.astype(str)
        label_width = max((len(str(c)) for c in self.frame.index), default=0)
        widths = [label_width]
        for j, sample in enumerate(self.frame.columns):
            widest = int(cells.iloc[:, j].str.len().max()) if len(cells) else 0
            widths.append(max(len(str(sample)), widest))
        return widths

    def lines(self) -> list[str]:
        """Return the header line followed by one line per condition."""
        widths = self.column_widths()

        def _line(label: str, values: Iterable[Any]) -> str:
            cells = [label.rjust(widths[0])]
            cells.extend(str(value).rjust(width) for value, width in zip(values, widths[1:], strict=True))
            return " ".join(cells).rstrip()

        header = _line("", (str(s) for s in self.frame.columns))
        body = [_line(str(condition), row) for condition, row in zip(self.frame.index, self.frame.to_numpy().tolist(), strict=True)]
        return [header, *body]

    def render(self) -> str:
        """Return the grid as newline-separated text."""
        return "\n".join(self.lines())

    def __str__(self) -> str:
        return self.render()


class Tabulator(BaseAnalyser):
    """Tabulate selected conditions and samples of a CFD.

    Rows follow the selection's conditions (all conditions in natural order by
    default); columns follow its samples (every sample seen in the rows, first-seen
    order, by default). Cells are ``get(cfd, condition, sample)``; untracked
    conditions render as zeros.

    Example:
        >>> result = Tabulator(cfd, Selection(samples=["x", "y"], cumulative=True)).fit().result()
        >>> print(result)
          x y
        A 2 7
        B 1 1
    """

    def __init__(self, cfd: ConditionalFreqDist, selection: Selection | None = None) -> None:
        super().__init__(cfd, selection)
        self._frame: pd.DataFrame | None = None

    def fit(self) -> Self:
        """Resolve the selection and compute the grid."""
        resolved = self._resolve()
        self._frame = self._cfd.to_frame(resolved.conditions, resolved.samples, cumulative=resolved.cumulative)
        return self

    def result(self) -> TabulationResult:
        resolved = self._check_fitted()
        assert self._frame is not None
        return TabulationResult(frame=self._frame, cumulative=resolved.cumulative)


def tabulate(
    cfd: ConditionalFreqDist,
    conditions: Iterable[Hashable] | None = None,
    samples: Iterable[Hashable] | None = None,
    cumulative: bool = False,
    order_by: Callable[[Any], Any] | None = None,
) -> str:
    """Render ``cfd`` as an aligned text grid.

    Args:
        cfd: The table to render
        conditions: Rows to show (all conditions when None)
        samples: Columns to show (all samples seen in the rows when None)
        cumulative: Show running row sums instead of raw counts
        order_by: Optional sort key for the rows

    Returns:
        Text grid with a header line

    Raises:
        MalformedSelection: If the selection is invalid for ``cfd``
    """
    selection = Selection(conditions=conditions, samples=samples, cumulative=cumulative, order_by=order_by)
    return Tabulator(cfd, selection).fit().result().render()


__all__ = ["TabulationResult", "Tabulator", "tabulate"]
