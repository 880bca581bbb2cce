"""Plaintext corpus loading from a directory of text files."""

import logging
import re
from collections.abc import Callable, Hashable
from pathlib import Path

from cfd_tlbx.errors import SourceUnavailable

from .distributions import Tokenizer
from .sources import FileSource, ObservationSource


logger = logging.getLogger(__name__)

_WORDPUNCT = re.compile(r"\w+|[^\w\s]+")


def wordpunct_tokenize(text: str) -> list[str]:
    """Split text into alphanumeric runs and punctuation runs."""
    return _WORDPUNCT.findall(text)


def _check_root(directory: str | Path) -> Path:
    root = Path(directory)
    if not root.is_dir():
        raise SourceUnavailable(f"Corpus directory not found at {root}")
    return root


def load_corpus(
    directory: str | Path,
    predicate: Callable[[str], bool] | None = None,
    encoding: str = "utf-8",
) -> list[tuple[str, str]]:
    """Read every file under ``directory`` whose relative name passes ``predicate``.

    Args:
        directory: Root directory (searched recursively)
        predicate: Filename filter on the POSIX relative path (all files when None)
        encoding: Text encoding of the files

    Returns:
        Sorted list of ``(name, raw_text)`` pairs

    Raises:
        SourceUnavailable: If the directory is missing or a file cannot be read
    """
    root = _check_root(directory)
    docs = []
    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        name = path.relative_to(root).as_posix()
        if predicate is not None and not predicate(name):
            continue
        try:
            docs.append((name, path.read_text(encoding=encoding)))
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable(f"Cannot read corpus file '{path}': {exc}") from exc
    logger.debug("Loaded %d documents from %s", len(docs), root)
    return docs


class PlaintextCorpus:
    """Directory of plaintext documents addressed by relative file id.

    Example:
        >>> from cfd_tlbx.data import PlaintextCorpus, build_cfd
        >>> from cfd_tlbx.utils import get_corpus_path
        >>> corpus = PlaintextCorpus(get_corpus_path("inaugural"))
        >>> cfd = build_cfd(corpus.as_observation_source(condition_of=lambda fileid: fileid[:4]), transform=str.lower)
        >>> cfd.conditions()
        ['1789', '1793', '1797']

    Args:
        root: Corpus directory
        pattern: Regular expression a relative file id must fully match
        encoding: Text encoding of the files
    """

    def __init__(self, root: str | Path, pattern: str = r".*\.txt", encoding: str = "utf-8") -> None:
        self.root = _check_root(root)
        self.pattern = re.compile(pattern)
        self.encoding = encoding

    def fileids(self) -> list[str]:
        """Return the sorted relative ids of matching files."""
        return sorted(
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file() and self.pattern.fullmatch(path.relative_to(self.root).as_posix())
        )

    def abspath(self, fileid: str) -> Path:
        """Return the absolute path of ``fileid``."""
        return self.root / fileid

    def raw(self, fileid: str) -> str:
        """Return the raw text of ``fileid``.

        Raises:
            SourceUnavailable: If the file is missing or unreadable
        """
        path = self.abspath(fileid)
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable(f"Cannot read corpus file '{path}': {exc}") from exc

    def words(self, fileid: str, tokenize: Tokenizer = wordpunct_tokenize) -> list[str]:
        """Return the tokens of ``fileid``."""
        return list(tokenize(self.raw(fileid)))

    def documents(self) -> list[tuple[str, str]]:
        """Return ``(fileid, raw_text)`` pairs for every matching file."""
        return load_corpus(self.root, predicate=self.pattern.fullmatch, encoding=self.encoding)

    def as_observation_source(
        self,
        condition_of: Callable[[str], Hashable] | None = None,
        tokenize: Tokenizer = wordpunct_tokenize,
    ) -> ObservationSource:
        """Tokenize every document now and key it by file id.

        Args:
            condition_of: Map from file id to condition (one condition per file when None)
            tokenize: Document tokenizer
        """
        return ObservationSource(
            observations={fileid: self.words(fileid, tokenize) for fileid in self.fileids()},
            condition_of=condition_of,
        )

    def as_file_source(
        self,
        condition_of: Callable[[str], Hashable] | None = None,
        tokenize: Tokenizer | None = wordpunct_tokenize,
    ) -> FileSource:
        """Describe the corpus as a lazily read file collection.

        Args:
            condition_of: Map from file id to condition (file stem when None)
            tokenize: Line tokenizer (``None``: one observation per non-blank line)
        """
        key_of = condition_of or (lambda fileid: Path(fileid).stem)
        paths: dict[Hashable, list[Path]] = {}
        for fileid in self.fileids():
            paths.setdefault(key_of(fileid), []).append(self.abspath(fileid))
        return FileSource(paths=paths, tokenize=tokenize, encoding=self.encoding)

    def __repr__(self) -> str:
        return f"<PlaintextCorpus in {str(self.root)!r}>"


__all__ = ["PlaintextCorpus", "load_corpus", "wordpunct_tokenize"]
