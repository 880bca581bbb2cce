"""Plotting sinks and the CFD plot driver."""

from .cfd_plots import plot_cfd, render_export, transient_export
from .sinks import MatplotlibSink, PlotDirectives, PlotlySink, PlotSession, PlotSink


__all__ = [
    "MatplotlibSink",
    "PlotDirectives",
    "PlotSession",
    "PlotSink",
    "PlotlySink",
    "plot_cfd",
    "render_export",
    "transient_export",
]
