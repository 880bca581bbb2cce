"""Shared plotting configuration (style, palette, font sizes) for CFD charts."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import matplotlib as mpl
import plotly.io as pio
import seaborn as sns


_RC_KEYS = (
    "axes.titlesize",
    "axes.labelsize",
    "xtick.labelsize",
    "ytick.labelsize",
    "legend.fontsize",
    "lines.linewidth",
    "figure.dpi",
    "axes.prop_cycle",
    "font.family",
)


@dataclass
class PlottingConfig:
    """Reusable plotting style applied by plot sessions.

    Attributes:
        style: Seaborn axes style.
        palette: Seaborn palette name or explicit colors, one per sample line.
        plotly_template: Template used by the plotly sink.
    """

    style: str = "whitegrid"
    palette: str | list[str] = "tab10"
    font_family: str = "DejaVu Sans"
    font_scale: float = 1.0
    title_size: int = 14
    label_size: int = 12
    tick_size: int = 9
    legend_size: int = 10
    line_width: float = 1.5
    figure_dpi: int = 100
    context: str = "notebook"
    plotly_template: str = "plotly_white"
    seaborn_kwargs: dict[str, Any] = field(default_factory=dict)

    def rc_params(self) -> dict[str, Any]:
        """Return the matplotlib rcParams this config sets."""
        return {
            "axes.titlesize": self.title_size,
            "axes.labelsize": self.label_size,
            "xtick.labelsize": self.tick_size,
            "ytick.labelsize": self.tick_size,
            "legend.fontsize": self.legend_size,
            "lines.linewidth": self.line_width,
            "figure.dpi": self.figure_dpi,
            "axes.prop_cycle": mpl.cycler(color=sns.color_palette(self.palette)),
            "font.family": [self.font_family],
        }

    def _activate(self) -> None:
        sns.set_theme(
            style=self.style,
            palette=sns.color_palette(self.palette),
            context=self.context,
            font_scale=self.font_scale,
            **self.seaborn_kwargs,
        )
        mpl.rcParams.update(self.rc_params())
        pio.templates.default = self.plotly_template

    def apply_global(self) -> None:
        """Apply plotting style globally (no automatic restore).

        For temporary styling use :meth:`apply` instead.
        """
        self._activate()

    @contextmanager
    def apply(self) -> Iterator[None]:
        """Apply style within a context, restoring previous rcParams afterwards."""
        prev = {key: mpl.rcParams[key] for key in _RC_KEYS}
        prev_theme = {key: mpl.rcParams[key] for key in [*sns.axes_style(), *sns.plotting_context()]}
        prev_plotly_template = pio.templates.default
        self._activate()
        try:
            yield
        finally:
            pio.templates.default = prev_plotly_template
            mpl.rcParams.update(prev_theme)
            mpl.rcParams.update(prev)


# Default configuration used by plot sessions
DEFAULT_PLOT_CFG = PlottingConfig()


__all__ = ["DEFAULT_PLOT_CFG", "PlottingConfig"]
