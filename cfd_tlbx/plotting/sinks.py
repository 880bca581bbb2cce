"""Plotting sinks and the explicit plot session handle.

A sink turns a tab-separated export (header row, one row per condition) plus a
small set of display directives into a figure. The export is read back from disk,
so any charting backend able to parse a rectangular table can serve as a sink.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import ExitStack
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import matplotlib.pyplot as plt
import pandas as pd
import plotly.graph_objects as go
from matplotlib.figure import Figure

from cfd_tlbx.analysis.exporter import CONDITION_COL, INDEX_COL
from cfd_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


if TYPE_CHECKING:
    from cfd_tlbx.analysis.exporter import ExportResult


@dataclass(frozen=True)
class PlotDirectives:
    """What to plot against which axis, and how to label it.

    Attributes:
        series: Sample columns to draw, one line each.
        ylabel: Value axis label ("Counts" or "Cumulative Counts").
        xlabel: Condition axis label.
        title: Optional figure title.
        grid: Draw a grid.
        tick_rotation: Rotation of the condition tick labels in degrees.
        index_col: Column holding the numeric x position.
        label_col: Column holding the condition tick labels.
        figsize: Figure size in inches (matplotlib sinks).
    """

    series: Sequence[str] = ()
    ylabel: str = "Counts"
    xlabel: str = "Conditions"
    title: str | None = None
    grid: bool = True
    tick_rotation: int = 90
    index_col: str = INDEX_COL
    label_col: str = CONDITION_COL
    figsize: tuple[int, int] = (10, 6)

    @classmethod
    def for_export(cls, result: "ExportResult", **overrides: Any) -> "PlotDirectives":
        """Directives drawing every sample column of ``result``."""
        base = cls(
            series=tuple(result.sample_columns),
            ylabel="Cumulative Counts" if result.cumulative else "Counts",
        )
        return replace(base, **overrides)

    def required_columns(self) -> list[str]:
        return [self.index_col, self.label_col, *self.series]


def _read_export(path: Path, directives: PlotDirectives) -> pd.DataFrame:
    table = pd.read_csv(path, sep="\t", dtype={directives.label_col: str}, keep_default_na=False)
    missing = [col for col in directives.required_columns() if col not in table.columns]
    if missing:
        raise ValueError(f"Export at {path} lacks columns {missing}")
    return table


class PlotSink(ABC):
    """Rendering backend consuming a tabular export."""

    @abstractmethod
    def render(self, path: Path, directives: PlotDirectives) -> Any:
        """Render the export stored at ``path``.

        Args:
            path: Tab-separated export with a header row
            directives: Display directives

        Returns:
            The backend's figure object
        """
        ...


class MatplotlibSink(PlotSink):
    """Line chart per sample column against the condition axis (matplotlib)."""

    def __init__(self, linewidth: float = 2.0, marker: str | None = "o") -> None:
        self.linewidth = linewidth
        self.marker = marker

    def render(self, path: Path, directives: PlotDirectives) -> Figure:
        table = _read_export(path, directives)
        x = table[directives.index_col]

        fig, ax = plt.subplots(figsize=directives.figsize)
        for col in directives.series:
            ax.plot(x, table[col], label=col, linewidth=self.linewidth, marker=self.marker)

        ax.set_xticks(x)
        ax.set_xticklabels(table[directives.label_col], rotation=directives.tick_rotation)
        ax.set_xlabel(directives.xlabel)
        ax.set_ylabel(directives.ylabel)
        ax.grid(directives.grid)
        if directives.title:
            ax.set_title(directives.title)
        if directives.series:
            ax.legend()
        fig.tight_layout()

        return fig


class PlotlySink(PlotSink):
    """Interactive line chart per sample column (plotly)."""

    def __init__(self, template: str | None = None, width: int = 900, height: int = 550) -> None:
        self.template = template
        self.width = width
        self.height = height

    def render(self, path: Path, directives: PlotDirectives) -> go.Figure:
        table = _read_export(path, directives)

        fig = go.Figure()
        for col in directives.series:
            fig.add_trace(
                go.Scatter(
                    x=table[directives.label_col],
                    y=table[col],
                    mode="lines+markers",
                    name=col,
                ),
            )
        fig.update_xaxes(title=directives.xlabel, tickangle=-directives.tick_rotation, showgrid=directives.grid)
        fig.update_yaxes(title=directives.ylabel, showgrid=directives.grid)
        fig.update_layout(
            title=directives.title,
            width=self.width,
            height=self.height,
            template=self.template or DEFAULT_PLOT_CFG.plotly_template,
        )
        return fig


@dataclass
class PlotSession:
    """Explicit plotting session passed to the plot driver.

    Used as a context manager it applies ``config`` temporarily and, with
    ``close_figures``, closes every matplotlib figure it produced on exit.

    Example:
        >>> with PlotSession(sink=MatplotlibSink()) as session:
        ...     fig = plot_cfd(cfd, samples=["america", "citizen"], session=session)
        ...     fig.savefig("inaugural.png")
    """

    sink: PlotSink = field(default_factory=MatplotlibSink)
    config: PlottingConfig = field(default_factory=lambda: DEFAULT_PLOT_CFG)
    close_figures: bool = True
    figures: list[Any] = field(default_factory=list, init=False)
    _stack: ExitStack | None = field(default=None, init=False, repr=False)

    def __enter__(self) -> "PlotSession":
        self._stack = ExitStack()
        self._stack.enter_context(self.config.apply())
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            if self.close_figures:
                self.close()
        finally:
            if self._stack is not None:
                self._stack.close()
                self._stack = None

    def render(self, path: Path, directives: PlotDirectives) -> Any:
        """Render through the session's sink and track the figure."""
        fig = self.sink.render(path, directives)
        self.figures.append(fig)
        return fig

    def close(self) -> None:
        """Close all matplotlib figures produced in this session."""
        for fig in self.figures:
            if isinstance(fig, Figure):
                plt.close(fig)
        self.figures.clear()


__all__ = ["MatplotlibSink", "PlotDirectives", "PlotSession", "PlotSink", "PlotlySink"]
