"""Immutable in-memory directory tree.

A tree is built once (from a mapping, a directory on disk, or resources
shipped inside a Python package) and never mutated afterwards, so a single
instance can be shared by any number of backends and open files.

Paths are ``/``-separated and relative to the tree root. A leading ``/``,
``.`` segments and repeated slashes are ignored; ``""``, ``"."`` and ``"/"``
all name the root.
"""

from __future__ import annotations

import logging
import os
import posixpath
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

logger = logging.getLogger(__name__)

# Never embedded by from_package()
_SKIP_DIRS = frozenset({"__pycache__"})
_SKIP_SUFFIXES = (".pyc", ".pyo")


@dataclass(frozen=True)
class Timestamps:
    """Timestamps recorded for an embedded file (UTC).

    Attributes:
        accessed: Last access time.
        created: Creation time (or inode change time where the platform
            has no birth time).
        modified: Last modification time.
    """

    accessed: datetime
    created: datetime
    modified: datetime

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "Timestamps":
        created = getattr(st, "st_birthtime", st.st_ctime)
        return cls(
            accessed=_utc(st.st_atime),
            created=_utc(created),
            modified=_utc(st.st_mtime),
        )


@dataclass(frozen=True)
class FileNode:
    """A file in the tree: its path, byte content and optional timestamps."""

    path: str
    contents: bytes = field(repr=False)
    timestamps: Timestamps | None = None

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)


@dataclass(frozen=True)
class DirNode:
    """A directory in the tree.

    Attributes:
        path: Path relative to the root ("" for the root itself).
        children: Child files and directories, in a fixed order.
    """

    path: str = ""
    children: tuple[FileNode | DirNode, ...] = ()

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    def get_entry(self, path: str | os.PathLike[str]) -> FileNode | DirNode | None:
        """Look up a file or directory below this directory.

        Args:
            path: Path relative to this directory.

        Returns:
            The matching node, or None if nothing lives at ``path``.
        """
        parts = split_path(path)
        if parts is None:
            return None

        node: FileNode | DirNode = self
        for part in parts:
            if not isinstance(node, DirNode):
                return None
            node = node._child(part)  # type: ignore[assignment]
            if node is None:
                return None
        return node

    def get_file(self, path: str | os.PathLike[str]) -> FileNode | None:
        """Look up a file; directories and missing paths give None."""
        entry = self.get_entry(path)
        return entry if isinstance(entry, FileNode) else None

    def get_dir(self, path: str | os.PathLike[str]) -> DirNode | None:
        """Look up a directory; files and missing paths give None."""
        entry = self.get_entry(path)
        return entry if isinstance(entry, DirNode) else None

    def contains(self, path: str | os.PathLike[str]) -> bool:
        return self.get_entry(path) is not None

    def files(self) -> Iterator[FileNode]:
        """Immediate child files."""
        for child in self.children:
            if isinstance(child, FileNode):
                yield child

    def dirs(self) -> Iterator[DirNode]:
        """Immediate child directories."""
        for child in self.children:
            if isinstance(child, DirNode):
                yield child

    def walk(self) -> Iterator[FileNode | DirNode]:
        """Yield every node below this directory, depth first."""
        for child in self.children:
            yield child
            if isinstance(child, DirNode):
                yield from child.walk()

    def _child(self, name: str) -> FileNode | DirNode | None:
        for child in self.children:
            if child.name == name:
                return child
        return None


Entry = FileNode | DirNode


def split_path(path: str | os.PathLike[str]) -> list[str] | None:
    """Split a tree path into its components.

    Returns:
        The normalized components (empty for the root), or None if the
        path climbs above the root with ``..``.
    """
    parts: list[str] = []
    for part in os.fspath(path).split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                return None
            parts.pop()
        else:
            parts.append(part)
    return parts


# -----------------------------------------------------------------------------
# Builders
# -----------------------------------------------------------------------------


def from_mapping(mapping: Mapping[str, object]) -> DirNode:
    """Build a tree from nested mappings.

    Nested mappings are directories; ``bytes`` or ``str`` values are files
    (strings are encoded as UTF-8). A ``(content, Timestamps)`` tuple gives
    a file with timestamps.

    Example:
        >>> tree = from_mapping({
        ...     "hello.txt": b"hello world",
        ...     "images": {"logo.svg": "<svg/>"},
        ... })
        >>> tree.get_file("images/logo.svg").contents
        b'<svg/>'
    """
    return _dir_from_mapping("", mapping)


def _dir_from_mapping(prefix: str, mapping: Mapping[str, object]) -> DirNode:
    children: list[Entry] = []
    for name in sorted(mapping):
        if not name or "/" in name or name in (".", ".."):
            raise ValueError(f"Invalid entry name: {name!r}")
        path = f"{prefix}/{name}" if prefix else name
        value = mapping[name]

        if isinstance(value, Mapping):
            children.append(_dir_from_mapping(path, value))
            continue

        timestamps = None
        if isinstance(value, tuple):
            value, timestamps = value
        if isinstance(value, str):
            value = value.encode("utf-8")
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Expected bytes, str or mapping for '{path}', got {type(value).__name__}"
            )
        children.append(FileNode(path, bytes(value), timestamps))
    return DirNode(prefix, tuple(children))


def from_path(root: str | os.PathLike[str], with_timestamps: bool = False) -> DirNode:
    """Snapshot a directory on disk into an in-memory tree.

    Entries that resolve outside ``root`` (through symlinks) are skipped,
    as are symlinks back to a directory already being read.

    Args:
        root: Directory to read.
        with_timestamps: Record access/creation/modification times.

    Raises:
        NotADirectoryError: If ``root`` is not a directory.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise NotADirectoryError(f"Not a directory: '{root}'")
    resolved_root = root_path.resolve()
    tree = _dir_from_path(
        root_path, "", with_timestamps, resolved_root, frozenset({resolved_root})
    )
    logger.debug("Embedded %d files from %s", _count_files(tree), root_path)
    return tree


def _dir_from_path(
    real: Path,
    prefix: str,
    with_timestamps: bool,
    root: Path,
    ancestors: frozenset[Path],
) -> DirNode:
    children: list[Entry] = []
    for child in sorted(real.iterdir(), key=lambda p: p.name):
        path = f"{prefix}/{child.name}" if prefix else child.name
        resolved = child.resolve()
        # Symlinks may not leave the root or loop back into an ancestor
        if not resolved.is_relative_to(root):
            logger.debug("Skipping %s: resolves outside root", child)
            continue
        if child.is_dir():
            if resolved in ancestors:
                logger.debug("Skipping %s: symlink loop", child)
                continue
            children.append(
                _dir_from_path(
                    child, path, with_timestamps, root, ancestors | {resolved}
                )
            )
        elif child.is_file():
            timestamps = Timestamps.from_stat(child.stat()) if with_timestamps else None
            children.append(FileNode(path, child.read_bytes(), timestamps))
    return DirNode(prefix, tuple(children))


def from_package(package: str, subdir: str = "") -> DirNode:
    """Snapshot resources shipped inside an importable package.

    Byte-compiled files and ``__pycache__`` directories are skipped.
    Package resources carry no timestamps.

    Args:
        package: Dotted package name (e.g. ``"myapp"``).
        subdir: Resource directory inside the package (e.g. ``"static"``).

    Raises:
        NotADirectoryError: If the resource directory does not exist.
    """
    traversable = resources.files(package)
    for part in split_path(subdir) or []:
        traversable = traversable.joinpath(part)
    if not traversable.is_dir():
        raise NotADirectoryError(f"Not a resource directory: '{package}/{subdir}'")
    tree = _dir_from_traversable(traversable, "")
    logger.debug("Embedded %d files from package %s", _count_files(tree), package)
    return tree


def _dir_from_traversable(real: Traversable, prefix: str) -> DirNode:
    children: list[Entry] = []
    for child in sorted(real.iterdir(), key=lambda p: p.name):
        path = f"{prefix}/{child.name}" if prefix else child.name
        if child.is_dir():
            if child.name not in _SKIP_DIRS:
                children.append(_dir_from_traversable(child, path))
        elif child.is_file() and not child.name.endswith(_SKIP_SUFFIXES):
            children.append(FileNode(path, child.read_bytes()))
    return DirNode(prefix, tuple(children))


def _count_files(tree: DirNode) -> int:
    return sum(1 for node in tree.walk() if isinstance(node, FileNode))


def _utc(ts: float) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)
