"""Tests for the cfd-table command line."""

import pytest

from cfd_tlbx.cli import main
from cfd_tlbx.utils import get_corpus_path


def test_tabulates_inaugural_sample(capsys) -> None:
    code = main(
        [
            str(get_corpus_path("inaugural")),
            "--condition-slice",
            "0:4",
            "--samples",
            "the",
            "america",
            "--lower",
            "--sort",
        ],
    )
    assert code == 0
    lines = [line.split() for line in capsys.readouterr().out.splitlines()]
    assert lines == [["the", "america"], ["1789", "16", "0"], ["1793", "13", "1"], ["1797", "13", "1"]]


def test_cumulative_and_plot(tmp_path, capsys) -> None:
    out = tmp_path / "chart.png"
    code = main(
        [
            str(get_corpus_path("inaugural")),
            "--condition-slice",
            "0:4",
            "--samples",
            "the",
            "america",
            "--lower",
            "--cumulative",
            "--plot",
            str(out),
        ],
    )
    assert code == 0
    assert out.exists()
    assert capsys.readouterr().out.splitlines()[2].split() == ["1793", "13", "14"]


def test_missing_directory_reports_error(tmp_path, capsys) -> None:
    assert main([str(tmp_path / "nope")]) == 1
    assert "error:" in capsys.readouterr().err


def test_bad_slice_is_usage_error(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path), "--condition-slice", "4"])
    assert excinfo.value.code == 2
