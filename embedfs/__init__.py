"""embedfs: Async storage backends for static-content serving."""

from .backend import EmbeddedBackend
from .base import Backend, File, Metadata
from .config import (
    BackendConfig,
    DiskBackendConfig,
    EmbeddedBackendConfig,
    connect_backend,
    create_backend,
)
from .disk import DiskBackend, DiskFile, DiskMetadata
from .file import EmbeddedFile
from .metadata import EmbeddedMetadata
from .tree import DirNode, FileNode, Timestamps, from_mapping, from_package, from_path

__all__ = [
    "Backend",
    "BackendConfig",
    "connect_backend",
    "create_backend",
    "DirNode",
    "DiskBackend",
    "DiskBackendConfig",
    "DiskFile",
    "DiskMetadata",
    "EmbeddedBackend",
    "EmbeddedBackendConfig",
    "EmbeddedFile",
    "EmbeddedMetadata",
    "File",
    "FileNode",
    "from_mapping",
    "from_package",
    "from_path",
    "Metadata",
    "Timestamps",
]
