"""Metadata for entries of an embedded tree."""

from __future__ import annotations

import errno
import os
from datetime import datetime

from .tree import DirNode, Entry, FileNode


class EmbeddedMetadata:
    """Metadata for a single embedded file or directory.

    Nothing is cached: every query is derived from the tree entry when it
    is asked for.

    Attributes:
        path: Path of the entry relative to the tree root.
    """

    def __init__(self, entry: Entry) -> None:
        self._entry = entry

    @property
    def path(self) -> str:
        return self._entry.path

    def is_dir(self) -> bool:
        return isinstance(self._entry, DirNode)

    def modified(self) -> datetime:
        """Last modification time of the file.

        Raises:
            FileNotFoundError: For directories and for files embedded
                without timestamps.
        """
        entry = self._entry
        if isinstance(entry, FileNode) and entry.timestamps is not None:
            return entry.timestamps.modified
        raise FileNotFoundError(
            errno.ENOENT, f"cannot access metadata for {entry.path or '/'}", entry.path
        )

    def len(self) -> int:
        """Size in bytes; directories report 0."""
        if isinstance(self._entry, FileNode):
            return len(self._entry.contents)
        return 0

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir() else "file"
        return f"EmbeddedMetadata(path={self.path!r}, kind={kind}, len={self.len()})"

    # os.stat_result-compatible properties, for code that expects the
    # result of os.stat(). Missing timestamps read as 0.0.

    @property
    def st_size(self) -> int:
        return self.len()

    @property
    def st_mode(self) -> int:
        return 0o040555 if self.is_dir() else 0o100444

    @property
    def st_ino(self) -> int:
        return 0

    @property
    def st_dev(self) -> int:
        return 0

    @property
    def st_nlink(self) -> int:
        return 1

    @property
    def st_uid(self) -> int:
        return os.getuid() if hasattr(os, "getuid") else 0

    @property
    def st_gid(self) -> int:
        return os.getgid() if hasattr(os, "getgid") else 0

    def _timestamp(self, name: str) -> float:
        entry = self._entry
        if isinstance(entry, FileNode) and entry.timestamps is not None:
            return getattr(entry.timestamps, name).timestamp()
        return 0.0

    @property
    def st_atime(self) -> float:
        return self._timestamp("accessed")

    @property
    def st_mtime(self) -> float:
        return self._timestamp("modified")

    @property
    def st_ctime(self) -> float:
        return self._timestamp("created")
