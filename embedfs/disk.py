"""Backend serving files from a real directory.

Provides DiskBackend, a drop-in alternative to EmbeddedBackend that reads
from disk on every request. All paths are confined to a root directory.
"""

from __future__ import annotations

import asyncio
import errno
import io
import os
import stat as stat_mod
from datetime import datetime, timezone
from pathlib import Path

from .file import seek_position


class DiskMetadata:
    """Metadata for a file or directory on disk (wraps an os.stat_result)."""

    def __init__(self, st: os.stat_result, path: str) -> None:
        self._stat = st
        self.path = path

    def is_dir(self) -> bool:
        return stat_mod.S_ISDIR(self._stat.st_mode)

    def modified(self) -> datetime:
        return datetime.fromtimestamp(self._stat.st_mtime, tz=timezone.utc)

    def len(self) -> int:
        if self.is_dir():
            return 0
        return self._stat.st_size

    @property
    def st_size(self) -> int:
        return self._stat.st_size

    @property
    def st_mode(self) -> int:
        return self._stat.st_mode

    @property
    def st_atime(self) -> float:
        return self._stat.st_atime

    @property
    def st_mtime(self) -> float:
        return self._stat.st_mtime

    @property
    def st_ctime(self) -> float:
        return self._stat.st_ctime


class DiskFile:
    """An open file on disk.

    Blocking calls run in a worker thread. Seeks follow the same rules as
    EmbeddedFile: past the end is allowed, negative positions are not.
    """

    def __init__(self, handle: io.BufferedReader, path: str) -> None:
        self._handle = handle
        self.path = path

    async def readinto(self, buffer: bytearray | memoryview) -> int:
        return await asyncio.to_thread(self._handle.readinto, buffer) or 0

    async def read(self, size: int = -1) -> bytes:
        return await asyncio.to_thread(self._handle.read, size)

    async def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        length = (await asyncio.to_thread(os.fstat, self._handle.fileno())).st_size
        position = seek_position(self._handle.tell(), length, offset, whence)
        return await asyncio.to_thread(self._handle.seek, position)

    def tell(self) -> int:
        return self._handle.tell()

    async def metadata(self) -> DiskMetadata:
        st = await asyncio.to_thread(os.fstat, self._handle.fileno())
        return DiskMetadata(st, self.path)

    async def aclose(self) -> None:
        """Close the underlying file handle."""
        await asyncio.to_thread(self._handle.close)

    @property
    def closed(self) -> bool:
        return self._handle.closed

    async def __aenter__(self) -> "DiskFile":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


class DiskBackend:
    """Storage backend restricted to a root directory.

    Security features:
    - Rejects paths outside root directory
    - Handles symlinks securely (validates resolved paths)
    - Normalizes all path variations (../, ./, etc.)
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        """Initialize the backend.

        Args:
            root: Absolute path to an existing directory.

        Raises:
            ValueError: If root is not an absolute path or not a directory.
        """
        root_path = Path(root)
        if not root_path.is_absolute():
            raise ValueError(f"Root must be absolute path: {root}")

        self.root = root_path.resolve()
        if not self.root.is_dir():
            raise ValueError(f"Root must be a directory: {root}")

    def _validate_path(self, path: str) -> Path:
        """Resolve a backend path to a real path inside root.

        Raises:
            PermissionError: If path escapes root directory.
        """
        # Treat absolute paths as relative to root (chroot-like)
        relative = path.lstrip("/\\")
        resolved = (self.root / relative).resolve()
        try:
            resolved.relative_to(self.root)
        except ValueError:
            raise PermissionError(
                errno.EACCES, f"Path outside root: {resolved} (root: {self.root})", path
            ) from None
        return resolved

    async def open(self, path: str | os.PathLike[str]) -> DiskFile:
        """Open a file for reading.

        Raises:
            FileNotFoundError: If ``path`` is missing or is a directory.
            PermissionError: If ``path`` escapes the root.
        """
        path = os.fspath(path)
        real_path = self._validate_path(path)

        def _open() -> io.BufferedReader:
            if not real_path.is_file():
                raise FileNotFoundError(errno.ENOENT, f"{path} is not a file.", path)
            return open(real_path, "rb")

        return DiskFile(await asyncio.to_thread(_open), path)

    async def metadata(self, path: str | os.PathLike[str]) -> DiskMetadata:
        """Get metadata for a file or directory.

        Raises:
            FileNotFoundError: If nothing exists at ``path``.
            PermissionError: If ``path`` escapes the root.
        """
        path = os.fspath(path)
        real_path = self._validate_path(path)
        try:
            st = await asyncio.to_thread(os.stat, real_path)
        except (FileNotFoundError, NotADirectoryError):
            raise FileNotFoundError(errno.ENOENT, f"{path} not found.", path) from None
        return DiskMetadata(st, path)

    def __repr__(self) -> str:
        return f"DiskBackend(root={str(self.root)!r})"
