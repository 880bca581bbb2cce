"""Test configuration for the CFD toolbox."""

from pathlib import Path
import sys

import matplotlib
import pytest


matplotlib.use("Agg")

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def small_cfd():
    """Two-condition table: A = {x: 2, y: 5}, B = {x: 1}."""
    from cfd_tlbx.data import ConditionalFreqDist, CountsDistribution

    return ConditionalFreqDist(
        {
            "A": CountsDistribution({"x": 2, "y": 5}),
            "B": CountsDistribution({"x": 1}),
        },
    )


@pytest.fixture
def write_text(tmp_path):
    """Factory writing a text file under tmp_path and returning its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(scope="session")
def inaugural_corpus():
    """Bundled sample of early inaugural addresses."""
    from cfd_tlbx.data import PlaintextCorpus
    from cfd_tlbx.utils import get_corpus_path

    return PlaintextCorpus(get_corpus_path("inaugural"))
