"""Backend, file and metadata interfaces.

Defines the contract shared by every storage backend (EmbeddedBackend,
DiskBackend). A static-file service talks only to these protocols and so
does not care where the bytes physically live.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Metadata(Protocol):
    """Snapshot of one file or directory."""

    def is_dir(self) -> bool:
        """True if the entry is a directory."""
        ...

    def modified(self) -> datetime:
        """Last modification time.

        Raises:
            FileNotFoundError: If the entry has no modification time.
        """
        ...

    def len(self) -> int:
        """Size in bytes (0 for directories)."""
        ...


@runtime_checkable
class File(Protocol):
    """An open, seekable byte stream.

    A file is not internally synchronized: one task at a time.
    """

    async def readinto(self, buffer: bytearray | memoryview) -> int:
        """Read into ``buffer``; returns the byte count (0 at end of stream)."""
        ...

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining bytes if negative)."""
        ...

    async def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the cursor and return the new position.

        Raises:
            OSError: (EINVAL) If the position would be negative or overflow.
        """
        ...

    def tell(self) -> int:
        """Current cursor position."""
        ...

    async def metadata(self) -> Metadata:
        """Metadata of the open file."""
        ...

    async def aclose(self) -> None:
        """Release the file."""
        ...


@runtime_checkable
class Backend(Protocol):
    """Storage backend: maps paths to open files and metadata.

    Required by the static-file service:
    """

    async def open(self, path: str) -> File:
        """Open a file for reading.

        Raises:
            FileNotFoundError: If ``path`` is not a file.
        """
        ...

    async def metadata(self, path: str) -> Metadata:
        """Get metadata for a file or directory.

        Raises:
            FileNotFoundError: If nothing exists at ``path``.
        """
        ...
