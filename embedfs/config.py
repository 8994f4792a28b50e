"""Configuration for storage backends.

Provides configuration dataclasses, the connect_backend factory function
for describing a backend (embedded or disk), and create_backend for
building one from its configuration.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from .backend import EmbeddedBackend
from .base import Backend
from .disk import DiskBackend
from .tree import from_package, from_path

logger = logging.getLogger(__name__)


@dataclass
class EmbeddedBackendConfig:
    """Configuration for an embedded (in-memory) backend.

    The tree is snapshotted once, when the backend is created. Exactly one
    of ``root`` and ``package`` is set.

    Attributes:
        type: Always "embedded".
        root: Directory on disk to snapshot.
        package: Importable package whose resources are snapshotted.
        subdir: Resource directory inside ``package``.
        with_timestamps: Record file timestamps when snapshotting ``root``.
    """

    type: Literal["embedded"] = "embedded"
    root: str = ""
    package: str = ""
    subdir: str = ""
    with_timestamps: bool = True


@dataclass
class DiskBackendConfig:
    """Configuration for a disk backend.

    Attributes:
        type: Always "disk".
        root: Absolute path to the directory to serve.
    """

    type: Literal["disk"] = "disk"
    root: str = ""


# Type alias for all backend configs
BackendConfig = EmbeddedBackendConfig | DiskBackendConfig


def connect_backend(
    type: Literal["embedded", "disk"] = "embedded",
    **kwargs,
) -> BackendConfig:
    """Configure a storage backend.

    Args:
        type: Backend type.
            - "embedded": Files held in memory, snapshotted once from a
                          directory or from package resources.
            - "disk": Files read from a directory on every request.
                      Requires 'root' argument.
        **kwargs: Additional configuration for the backend type.
            For type="embedded" (one of root/package is required):
                - root (str): Directory to snapshot.
                - with_timestamps (bool): Record timestamps (default: True).
                - package (str): Package whose resources are snapshotted.
                - subdir (str): Resource directory inside the package.
            For type="disk":
                - root (str): Required. Absolute path to the directory.

    Returns:
        BackendConfig for create_backend().

    Examples:
        Embedded package resources:
        >>> connect_backend(type="embedded", package="myapp", subdir="static")
        EmbeddedBackendConfig(type='embedded', root='', package='myapp', subdir='static', with_timestamps=True)

        Disk directory:
        >>> connect_backend(type="disk", root="/srv/www")
        DiskBackendConfig(type='disk', root='/srv/www')
    """
    if type == "embedded":
        root = kwargs.pop("root", "")
        package = kwargs.pop("package", "")
        subdir = kwargs.pop("subdir", "")
        with_timestamps = kwargs.pop("with_timestamps", True)

        if kwargs:
            raise ValueError(
                f"Unexpected arguments for embedded backend: {list(kwargs.keys())}"
            )

        if bool(root) == bool(package):
            raise ValueError(
                "Embedded backend requires exactly one of 'root' or 'package'"
            )
        if subdir and not package:
            raise ValueError("'subdir' is only valid together with 'package'")

        return EmbeddedBackendConfig(
            root=root,
            package=package,
            subdir=subdir,
            with_timestamps=with_timestamps,
        )

    elif type == "disk":
        root = kwargs.pop("root", "")

        if kwargs:
            raise ValueError(
                f"Unexpected arguments for disk backend: {list(kwargs.keys())}"
            )

        if not root:
            raise ValueError("Disk backend requires 'root' parameter")

        return DiskBackendConfig(root=root)

    else:
        raise ValueError(
            f"Unsupported backend type: {type}. Use 'embedded' or 'disk'."
        )


def create_backend(config: BackendConfig) -> Backend:
    """Build the backend described by ``config``."""
    if isinstance(config, EmbeddedBackendConfig):
        if config.package:
            tree = from_package(config.package, config.subdir)
        else:
            tree = from_path(config.root, with_timestamps=config.with_timestamps)
        backend: Backend = EmbeddedBackend(tree)
    elif isinstance(config, DiskBackendConfig):
        backend = DiskBackend(config.root)
    else:
        raise TypeError(f"Unsupported backend config: {type(config).__name__}")

    logger.debug("Created %r", backend)
    return backend
