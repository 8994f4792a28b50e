"""Seekable read-only stream over an embedded file."""

from __future__ import annotations

import errno
import operator
import os
import sys
from collections.abc import AsyncIterator

from .metadata import EmbeddedMetadata
from .tree import FileNode

# Largest cursor position a seek may produce
MAX_POSITION = sys.maxsize

DEFAULT_CHUNK_SIZE = 64 * 1024


def seek_position(current: int, length: int, offset: int, whence: int) -> int:
    """Compute the cursor position a seek would move to.

    Args:
        current: Current cursor position.
        length: Length of the stream in bytes.
        offset: Seek offset (may be negative for SEEK_CUR/SEEK_END).
        whence: os.SEEK_SET, os.SEEK_CUR or os.SEEK_END.

    Returns:
        The new position. Positions past ``length`` are allowed.

    Raises:
        OSError: (EINVAL) If the position is negative or above MAX_POSITION.
        ValueError: If ``whence`` is not one of the three modes.
    """
    offset = operator.index(offset)
    if whence == os.SEEK_SET:
        position = offset
    elif whence == os.SEEK_CUR:
        position = current + offset
    elif whence == os.SEEK_END:
        position = length + offset
    else:
        raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")

    if not 0 <= position <= MAX_POSITION:
        raise OSError(
            errno.EINVAL, "invalid seek to a negative or overflowing position"
        )
    return position


class EmbeddedFile:
    """An open embedded file: the file's bytes plus a cursor.

    The content is shared with the tree (never copied); only the cursor
    belongs to this object. Reads past the end return nothing, and seeking
    past the end is allowed.

    None of the coroutines ever suspend. A file has no closed state and
    stays usable until it is dropped.

    Example:
        >>> f = await backend.open("hello.txt")
        >>> await f.read(5)
        b'hello'
        >>> await f.seek(-5, os.SEEK_END)
        6
    """

    def __init__(self, node: FileNode) -> None:
        self._node = node
        self._index = 0

    @property
    def path(self) -> str:
        return self._node.path

    async def readinto(self, buffer: bytearray | memoryview) -> int:
        """Copy bytes at the cursor into ``buffer``.

        Copies as many bytes as fit (bounded by what remains) and advances
        the cursor by that amount.

        Returns:
            Number of bytes copied; 0 means end of stream.
        """
        data = self._node.contents
        start = self._index
        if start >= len(data):
            return 0

        view = memoryview(buffer).cast("B")
        count = min(len(view), len(data) - start)
        view[:count] = memoryview(data)[start : start + count]
        self._index = start + count
        return count

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes; all remaining bytes if ``size`` < 0."""
        data = self._node.contents
        start = self._index
        if start >= len(data):
            return b""

        end = len(data) if size < 0 else min(len(data), start + size)
        self._index = end
        return data[start:end]

    async def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the cursor; see seek_position(). The cursor is unchanged on error."""
        self._index = seek_position(
            self._index, len(self._node.contents), offset, whence
        )
        return self._index

    def tell(self) -> int:
        return self._index

    async def metadata(self) -> EmbeddedMetadata:
        return EmbeddedMetadata(self._node)

    async def aiter_chunks(
        self, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """Yield the rest of the file from the cursor in chunks."""
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        while chunk := await self.read(chunk_size):
            yield chunk

    async def aclose(self) -> None:
        """No-op; embedded files hold no resources."""

    async def __aenter__(self) -> "EmbeddedFile":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"EmbeddedFile(path={self.path!r}, position={self._index})"
