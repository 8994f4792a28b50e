"""Tests for backend configuration."""

import pytest

from embedfs import (
    DiskBackend,
    DiskBackendConfig,
    EmbeddedBackend,
    EmbeddedBackendConfig,
    connect_backend,
    create_backend,
)


class TestConnectBackend:
    """Test connect_backend validation."""

    def test_embedded_root(self):
        config = connect_backend(type="embedded", root="/srv/www")
        assert config == EmbeddedBackendConfig(root="/srv/www")

    def test_embedded_package(self):
        config = connect_backend(package="myapp", subdir="static")
        assert isinstance(config, EmbeddedBackendConfig)
        assert config.package == "myapp"
        assert config.subdir == "static"

    def test_embedded_requires_one_source(self):
        with pytest.raises(ValueError, match="exactly one"):
            connect_backend(type="embedded")
        with pytest.raises(ValueError, match="exactly one"):
            connect_backend(type="embedded", root="/a", package="b")

    def test_subdir_needs_package(self):
        with pytest.raises(ValueError, match="subdir"):
            connect_backend(root="/a", subdir="static")

    def test_disk(self):
        assert connect_backend(type="disk", root="/srv") == DiskBackendConfig(root="/srv")

    def test_disk_requires_root(self):
        with pytest.raises(ValueError, match="root"):
            connect_backend(type="disk")

    def test_unexpected_arguments(self):
        with pytest.raises(ValueError, match="Unexpected"):
            connect_backend(type="disk", root="/srv", tracking=True)
        with pytest.raises(ValueError, match="Unexpected"):
            connect_backend(type="embedded", root="/srv", max_size=1)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported"):
            connect_backend(type="s3")


class TestCreateBackend:
    """Test building backends from configs."""

    @pytest.mark.asyncio()
    async def test_embedded_from_root(self, tmp_path):
        (tmp_path / "a.txt").write_bytes(b"alpha")
        backend = create_backend(connect_backend(root=str(tmp_path)))
        assert isinstance(backend, EmbeddedBackend)

        # Snapshot taken at creation
        (tmp_path / "a.txt").write_bytes(b"changed")
        f = await backend.open("a.txt")
        assert await f.read() == b"alpha"
        assert (await f.metadata()).modified() is not None

    def test_disk(self, tmp_path):
        backend = create_backend(connect_backend(type="disk", root=str(tmp_path)))
        assert isinstance(backend, DiskBackend)
        assert backend.root == tmp_path.resolve()

    def test_unknown_config(self):
        with pytest.raises(TypeError):
            create_backend(object())  # type: ignore[arg-type]
