"""Analysis modules consuming conditional frequency tables."""

from .base_analyser import BaseAnalyser
from .exporter import CFDExporter, ExportResult, export
from .tabulator import TabulationResult, Tabulator, tabulate


__all__ = [
    "BaseAnalyser",
    "CFDExporter",
    "ExportResult",
    "TabulationResult",
    "Tabulator",
    "export",
    "tabulate",
]
