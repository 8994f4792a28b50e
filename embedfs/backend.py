"""Backend serving files from an immutable in-memory tree."""

from __future__ import annotations

import errno
import os

from .file import EmbeddedFile
from .metadata import EmbeddedMetadata
from .tree import DirNode


class EmbeddedBackend:
    """Storage backend over an embedded directory tree.

    The backend only references the tree, which is shared and never
    mutated, so backends are cheap to copy and safe to use from many
    tasks at once. Every open() gives an independent file with its own
    cursor.

    Example:
        >>> backend = EmbeddedBackend(from_mapping({"hello.txt": b"hello world"}))
        >>> f = await backend.open("hello.txt")
        >>> await f.read()
        b'hello world'
        >>> (await backend.metadata("hello.txt")).len()
        11
    """

    def __init__(self, tree: DirNode) -> None:
        """Initialize the backend.

        Args:
            tree: Root of the embedded tree. Not copied.
        """
        self.tree = tree

    async def open(self, path: str | os.PathLike[str]) -> EmbeddedFile:
        """Open a file for reading with the cursor at 0.

        Raises:
            FileNotFoundError: If ``path`` is missing or is a directory.
        """
        path = os.fspath(path)
        node = self.tree.get_file(path)
        if node is None:
            raise FileNotFoundError(errno.ENOENT, f"{path} is not a file.", path)
        return EmbeddedFile(node)

    async def metadata(self, path: str | os.PathLike[str]) -> EmbeddedMetadata:
        """Get metadata for a file or directory.

        Raises:
            FileNotFoundError: If nothing exists at ``path``.
        """
        path = os.fspath(path)
        entry = self.tree.get_entry(path)
        if entry is None:
            raise FileNotFoundError(errno.ENOENT, f"{path} not found.", path)
        return EmbeddedMetadata(entry)

    def __repr__(self) -> str:
        return f"EmbeddedBackend(tree={self.tree.path or '/'!r})"
