"""Row-oriented export of a CFD for charting backends."""

import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Self

import pandas as pd

from cfd_tlbx.data.cfd import ConditionalFreqDist
from cfd_tlbx.data.views import Selection

from .base_analyser import BaseAnalyser


logger = logging.getLogger(__name__)

INDEX_COL = "index"
CONDITION_COL = "condition"


@dataclass(frozen=True)
class ExportResult:
    """Rectangular export: one row per condition, one column per sample.

    Attributes:
        table: DataFrame with columns ``index`` (1-based row number), ``condition``
            (string label) and one integer column per sample (``str(sample)``).
        conditions: Condition keys in emission order.
        samples: Sample keys in column order.
        cumulative: Whether sample cells hold running row sums.
    """

    table: pd.DataFrame
    conditions: list[Hashable]
    samples: list[Hashable]
    cumulative: bool = False

    @property
    def sample_columns(self) -> list[str]:
        """Names of the numeric sample columns."""
        return [col for col in self.table.columns if col not in (INDEX_COL, CONDITION_COL)]

    def rows(self) -> list[list[Any]]:
        """Return the header row followed by one row per condition."""
        return [list(self.table.columns), *self.table.astype(object).to_numpy().tolist()]

    def to_tsv(self, path: str | Path) -> Path:
        """Write the export tab-separated with a header row.

        Returns:
            The written path
        """
        path = Path(path)
        self.table.to_csv(path, sep="\t", index=False)
        logger.debug("Exported %d rows x %d samples to %s", len(self.table), len(self.samples), path)
        return path

    # ------------------------------------------------------------------ plotting shortcuts
    def plot(self, **kwargs: Any) -> Any:
        """Render this export through a plot session (see :func:`render_export`)."""
        from cfd_tlbx.plotting.cfd_plots import render_export  # noqa: PLC0415

        return render_export(self, **kwargs)


class CFDExporter(BaseAnalyser):
    """Serialize selected conditions/samples of a CFD into an :class:`ExportResult`.

    Row order is the selection's condition order, sorted by ``order_by`` when one
    is given; cells follow the same lookup and cumulative rules as tabulation.

    Example:
        >>> exported = CFDExporter(cfd, Selection(order_by=str)).fit().result()
        >>> exported.rows()[0]
        ['index', 'condition', 'america', 'citizen']
    """

    def __init__(self, cfd: ConditionalFreqDist, selection: Selection | None = None) -> None:
        super().__init__(cfd, selection)
        self._table: pd.DataFrame | None = None

    def fit(self) -> Self:
        """Resolve the selection and build the export table."""
        resolved = self._resolve()
        frame = self._cfd.to_frame(resolved.conditions, resolved.samples, cumulative=resolved.cumulative)
        labels = [str(sample) for sample in resolved.samples]
        if len(set(labels)) != len(labels) or {INDEX_COL, CONDITION_COL} & set(labels):
            # Distinct samples can share a string label; keep columns unique.
            labels = [f"{label} ({i})" for i, label in enumerate(labels, start=1)]
        self._table = (
            frame.set_axis(labels, axis=1)
            .reset_index(drop=True)
            .assign(
                **{
                    INDEX_COL: range(1, len(frame) + 1),
                    CONDITION_COL: [str(condition) for condition in resolved.conditions],
                },
            )
            .loc[:, [INDEX_COL, CONDITION_COL, *labels]]
        )
        return self

    def result(self) -> ExportResult:
        resolved = self._check_fitted()
        assert self._table is not None
        return ExportResult(
            table=self._table,
            conditions=list(resolved.conditions),
            samples=list(resolved.samples),
            cumulative=resolved.cumulative,
        )


def export(
    cfd: ConditionalFreqDist,
    conditions: Iterable[Hashable] | None = None,
    samples: Iterable[Hashable] | None = None,
    cumulative: bool = False,
    order_by: Callable[[Any], Any] | None = None,
) -> ExportResult:
    """Export ``cfd`` as a row-oriented table.

    Raises:
        MalformedSelection: If the selection is invalid for ``cfd``
    """
    selection = Selection(conditions=conditions, samples=samples, cumulative=cumulative, order_by=order_by)
    return CFDExporter(cfd, selection).fit().result()


__all__ = ["CONDITION_COL", "INDEX_COL", "CFDExporter", "ExportResult", "export"]
