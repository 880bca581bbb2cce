"""Tests for the plaintext corpus loader."""

import pytest

from cfd_tlbx.data import FileSource, ObservationSource, PlaintextCorpus, load_corpus, wordpunct_tokenize
from cfd_tlbx.errors import SourceUnavailable


@pytest.fixture
def corpus_dir(write_text):
    write_text("news/a.txt", "The cat sat.\n")
    write_text("news/b.txt", "A dog ran.\n")
    write_text("notes.md", "ignored\n")
    return write_text("romance/c.txt", "Love, love!\n").parents[1]


class TestWordpunctTokenize:
    def test_splits_punctuation(self) -> None:
        assert wordpunct_tokenize("Fellow-Citizens of the Senate:") == ["Fellow", "-", "Citizens", "of", "the", "Senate", ":"]


class TestLoadCorpus:
    """Test directory walking with a filename predicate."""

    def test_all_files_sorted(self, corpus_dir) -> None:
        names = [name for name, _ in load_corpus(corpus_dir)]
        assert names == ["news/a.txt", "news/b.txt", "notes.md", "romance/c.txt"]

    def test_predicate(self, corpus_dir) -> None:
        docs = load_corpus(corpus_dir, predicate=lambda name: name.endswith(".txt"))
        assert dict(docs)["news/a.txt"] == "The cat sat.\n"
        assert len(docs) == 3

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(SourceUnavailable):
            load_corpus(tmp_path / "nope")


class TestPlaintextCorpus:
    """Test the corpus reader."""

    def test_fileids_and_words(self, corpus_dir) -> None:
        corpus = PlaintextCorpus(corpus_dir)
        assert corpus.fileids() == ["news/a.txt", "news/b.txt", "romance/c.txt"]
        assert corpus.words("news/a.txt") == ["The", "cat", "sat", "."]
        assert corpus.documents()[0] == ("news/a.txt", "The cat sat.\n")

    def test_missing_root(self, tmp_path) -> None:
        with pytest.raises(SourceUnavailable):
            PlaintextCorpus(tmp_path / "missing")

    def test_missing_file(self, corpus_dir) -> None:
        with pytest.raises(SourceUnavailable):
            PlaintextCorpus(corpus_dir).raw("news/zzz.txt")

    def test_as_observation_source(self, corpus_dir) -> None:
        source = PlaintextCorpus(corpus_dir).as_observation_source(condition_of=lambda fileid: fileid.split("/")[0])
        assert isinstance(source, ObservationSource)
        assert source.condition_of("news/a.txt") == "news"
        assert source.observations["romance/c.txt"] == ["Love", ",", "love", "!"]

    def test_as_file_source(self, corpus_dir) -> None:
        source = PlaintextCorpus(corpus_dir).as_file_source(condition_of=lambda fileid: fileid.split("/")[0])
        assert isinstance(source, FileSource)
        assert list(source.paths) == ["news", "romance"]
        assert len(source.paths["news"]) == 2
