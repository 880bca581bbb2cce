from pathlib import Path
from typing import Literal


__all__ = ["get_corpus_path", "get_data_dir"]


_CORPUS_MAP: dict[str, str] = {
    "inaugural": "inaugural_sample",
}


def get_data_dir() -> Path:
    """Get the path to the bundled data directory.

    Returns:
        Path to the data directory
    """
    data_dir = (Path(__file__).parents[2] / "_data").resolve()
    assert data_dir.exists(), f"Data directory not found at {data_dir}"
    return data_dir


def get_corpus_path(name: Literal["inaugural"] | str) -> Path:  # noqa: PYI051
    """Get the directory of a bundled sample corpus.

    Args:
        name: Key of a known corpus or a directory name inside the data directory

    Returns:
        Full path to the corpus directory

    Supported: inaugural (a few early inaugural addresses, one file per address)
    """
    corpus_dir = get_data_dir() / _CORPUS_MAP.get(name, name)
    assert corpus_dir.is_dir(), f"Corpus '{name}' not found at {corpus_dir}"

    return corpus_dir
