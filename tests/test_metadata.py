"""Tests for EmbeddedMetadata derivation."""

import stat
from datetime import datetime, timezone

import pytest

from embedfs import EmbeddedMetadata, Timestamps, from_mapping

WHEN = datetime(2020, 1, 1, tzinfo=timezone.utc)
LATER = datetime(2021, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def tree():
    return from_mapping({
        "stamped.txt": (b"hello", Timestamps(accessed=LATER, created=WHEN, modified=LATER)),
        "plain.txt": b"hello world",
        "docs": {"guide.md": b"# guide"},
    })


class TestFileMetadata:
    """Test metadata of file entries."""

    def test_length(self, tree):
        assert EmbeddedMetadata(tree.get_file("plain.txt")).len() == 11

    def test_is_dir(self, tree):
        assert EmbeddedMetadata(tree.get_file("plain.txt")).is_dir() is False

    def test_modified_from_timestamps(self, tree):
        meta = EmbeddedMetadata(tree.get_file("stamped.txt"))
        assert meta.modified() == LATER

    def test_modified_missing_raises(self, tree):
        """Test that files embedded without timestamps have no mtime."""
        meta = EmbeddedMetadata(tree.get_file("plain.txt"))
        with pytest.raises(FileNotFoundError) as exc_info:
            meta.modified()
        assert "cannot access metadata for plain.txt" in str(exc_info.value)


class TestDirectoryMetadata:
    """Test metadata of directory entries."""

    def test_zero_length(self, tree):
        """Test that directories report length 0 rather than failing."""
        assert EmbeddedMetadata(tree.get_dir("docs")).len() == 0
        assert EmbeddedMetadata(tree).len() == 0

    def test_is_dir(self, tree):
        assert EmbeddedMetadata(tree.get_dir("docs")).is_dir() is True

    def test_modified_always_raises(self, tree):
        with pytest.raises(FileNotFoundError, match="cannot access metadata for docs"):
            EmbeddedMetadata(tree.get_dir("docs")).modified()

    def test_root_named_as_slash(self, tree):
        """Test that the root shows up as '/' in the error message."""
        with pytest.raises(FileNotFoundError) as exc_info:
            EmbeddedMetadata(tree).modified()
        assert exc_info.value.strerror == "cannot access metadata for /"


class TestStatCompat:
    """Test os.stat_result-compatible properties."""

    def test_file(self, tree):
        meta = EmbeddedMetadata(tree.get_file("stamped.txt"))
        assert stat.S_ISREG(meta.st_mode)
        assert meta.st_size == 5
        assert meta.st_mtime == LATER.timestamp()
        assert meta.st_atime == LATER.timestamp()
        assert meta.st_ctime == WHEN.timestamp()
        assert meta.st_nlink == 1

    def test_directory(self, tree):
        meta = EmbeddedMetadata(tree.get_dir("docs"))
        assert stat.S_ISDIR(meta.st_mode)
        assert meta.st_size == 0
        assert meta.st_mtime == 0.0

    def test_file_without_timestamps(self, tree):
        meta = EmbeddedMetadata(tree.get_file("plain.txt"))
        assert meta.st_mtime == 0.0
        assert meta.st_ctime == 0.0


def test_metadata_is_recomputed(tree):
    """Test that two snapshots of the same entry agree."""
    node = tree.get_file("plain.txt")
    assert EmbeddedMetadata(node).len() == EmbeddedMetadata(node).len()
    assert "plain.txt" in repr(EmbeddedMetadata(node))
