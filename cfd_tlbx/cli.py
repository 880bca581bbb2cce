"""CLI to tabulate (and optionally plot) a plaintext corpus as a CFD.

Conditions come from file ids (a slice of the file name, or the file stem), samples
are the corpus tokens, optionally lowercased.

Example:
    cfd-table _data/inaugural_sample --condition-slice 0:4 --samples america citizen --lower --sort
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from cfd_tlbx.analysis.tabulator import tabulate
from cfd_tlbx.data.builder import build_cfd
from cfd_tlbx.data.corpus import PlaintextCorpus
from cfd_tlbx.errors import CFDError
from cfd_tlbx.plotting.cfd_plots import plot_cfd
from cfd_tlbx.plotting.sinks import PlotSession


logger = logging.getLogger(__name__)


def _parse_slice(text: str) -> slice:
    try:
        start, stop = (int(part) if part else None for part in text.split(":", 1))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected START:STOP, got {text!r}") from None
    return slice(start, stop)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cfd-table", description="Tabulate word counts per condition of a corpus")
    p.add_argument("directory", help="Corpus directory")
    p.add_argument("--pattern", default=r".*\.txt", help="Regex a relative file id must match")
    p.add_argument(
        "--condition-slice",
        type=_parse_slice,
        default=None,
        help="START:STOP slice of the file id used as condition (default: file stem)",
    )
    p.add_argument("--samples", nargs="+", default=None, help="Samples (columns) to show")
    p.add_argument("--lower", action="store_true", help="Lowercase tokens before counting")
    p.add_argument("--cumulative", action="store_true", help="Show running row sums")
    p.add_argument("--sort", action="store_true", help="Order conditions alphabetically")
    p.add_argument("--plot", metavar="OUTPUT", default=None, help="Also save a line chart to OUTPUT")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: Iterable[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    if args.condition_slice is not None:
        window = args.condition_slice

        def condition_of(fileid: str) -> str:
            return fileid[window]
    else:

        def condition_of(fileid: str) -> str:
            return Path(fileid).stem

    try:
        corpus = PlaintextCorpus(args.directory, pattern=args.pattern)
        cfd = build_cfd(
            corpus.as_observation_source(condition_of=condition_of),
            transform=str.lower if args.lower else None,
        )
        order_by = str if args.sort else None
        print(tabulate(cfd, samples=args.samples, cumulative=args.cumulative, order_by=order_by))

        if args.plot:
            with PlotSession() as session:
                fig = plot_cfd(
                    cfd,
                    samples=args.samples,
                    cumulative=args.cumulative,
                    order_by=order_by,
                    session=session,
                    title=Path(args.directory).name,
                )
                fig.savefig(args.plot)
            logger.info("Saved plot to %s", args.plot)
    except CFDError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
