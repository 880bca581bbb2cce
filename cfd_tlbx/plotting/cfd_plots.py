"""Plot driver: export a CFD, hand it to a sink, clean up."""

import logging
import os
import tempfile
from collections.abc import Callable, Hashable, Iterable, Iterator
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Any

from cfd_tlbx.analysis.exporter import ExportResult, export
from cfd_tlbx.data.cfd import ConditionalFreqDist
from cfd_tlbx.errors import RenderSinkFailure

from .sinks import PlotDirectives, PlotSession


logger = logging.getLogger(__name__)


@contextmanager
def transient_export(result: ExportResult) -> Iterator[Path]:
    """Write ``result`` to a fresh temporary TSV file, deleted on exit.

    Every call gets its own file, so concurrent renders never share one.
    """
    fd, name = tempfile.mkstemp(prefix="cfd_export_", suffix=".tsv")
    os.close(fd)
    path = Path(name)
    try:
        result.to_tsv(path)
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Removed transient export %s", path)


def render_export(
    result: ExportResult,
    *,
    session: PlotSession | None = None,
    directives: PlotDirectives | None = None,
    **directive_overrides: Any,
) -> Any:
    """Render an export through ``session`` (a temporary one when None).

    Args:
        result: Export to render
        session: Plot session owning the sink; figures of a temporary session are
            left open for the caller
        directives: Display directives (derived from ``result`` when None)
        **directive_overrides: Fields overriding the derived directives
            (e.g. ``title``, ``tick_rotation``, ``grid``)

    Returns:
        The sink's figure

    Raises:
        RenderSinkFailure: If the sink fails; the transient export is removed
            before this propagates
    """
    if directives is None:
        directives = PlotDirectives.for_export(result, **directive_overrides)

    with ExitStack() as stack:
        if session is None:
            session = stack.enter_context(PlotSession(close_figures=False))
        with transient_export(result) as path:
            try:
                return session.render(path, directives)
            except Exception as exc:
                raise RenderSinkFailure(f"{type(session.sink).__name__} failed to render {path.name}: {exc}") from exc


def plot_cfd(
    cfd: ConditionalFreqDist,
    conditions: Iterable[Hashable] | None = None,
    samples: Iterable[Hashable] | None = None,
    cumulative: bool = False,
    order_by: Callable[[Any], Any] | None = None,
    *,
    session: PlotSession | None = None,
    directives: PlotDirectives | None = None,
    **directive_overrides: Any,
) -> Any:
    """Plot selected conditions (x axis) against sample counts (one line per sample).

    Example:
        >>> from cfd_tlbx.data import PairSource, PlaintextCorpus, build_cfd
        >>> corpus = PlaintextCorpus(get_corpus_path("inaugural"))
        >>> cfd = build_cfd(
        ...     PairSource(
        ...         (fileid[:4], target)
        ...         for fileid in corpus.fileids()
        ...         for word in corpus.words(fileid)
        ...         for target in ["america", "citizen"]
        ...         if word.lower().startswith(target)
        ...     ),
        ... )
        >>> fig = plot_cfd(cfd, order_by=str, title="Inaugural addresses")

    Args:
        cfd: Table to plot
        conditions: Conditions to plot (all when None)
        samples: Sample columns to plot (all seen when None)
        cumulative: Plot running row sums
        order_by: Optional sort key for the conditions (e.g. ``str`` for years)
        session: Plot session (temporary matplotlib session when None)
        directives: Explicit display directives
        **directive_overrides: Overrides for the derived directives

    Returns:
        The sink's figure

    Raises:
        MalformedSelection: If the selection is invalid for ``cfd``
        RenderSinkFailure: If the sink fails
    """
    result = export(cfd, conditions=conditions, samples=samples, cumulative=cumulative, order_by=order_by)
    return render_export(result, session=session, directives=directives, **directive_overrides)


__all__ = ["plot_cfd", "render_export", "transient_export"]
