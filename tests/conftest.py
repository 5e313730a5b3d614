"""Pytest configuration and fixtures for tap-tools tests."""

import io
import logging
import tarfile

import pytest

from tap_tools.domain.types import ArchiveEntry, Format, ReleaseAsset

_TAR_MODES = {
    Format.TAR_GZ: "w:gz",
    Format.TAR_XZ: "w:xz",
    Format.TAR_BZ2: "w:bz2",
}


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("tap_tools"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


def build_tarball(
    members: dict[str, bytes | None],
    fmt: Format = Format.TAR_GZ,
) -> bytes:
    """Build a compressed tarball in memory.

    Args:
        members: Path to content; None creates a directory entry
        fmt: Tarball format

    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode=_TAR_MODES[fmt]) as tar:
        for path, content in members.items():
            info = tarfile.TarInfo(path)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                info.mode = 0o755
                tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def entries(*paths: str) -> list[ArchiveEntry]:
    """Build archive entries; a trailing slash marks a directory."""
    return [
        ArchiveEntry(path=path.rstrip("/"), is_dir=path.endswith("/"))
        for path in paths
    ]


def assets(*names: str) -> list[ReleaseAsset]:
    """Build release assets with predictable download URLs."""
    return [
        ReleaseAsset(
            name=name,
            download_url=f"https://example.com/download/{name}",
            size_bytes=1024,
        )
        for name in names
    ]


@pytest.fixture
def tarball_factory():
    """Provide the in-memory tarball builder."""
    return build_tarball


@pytest.fixture
def make_entries():
    """Provide the archive entry builder."""
    return entries


@pytest.fixture
def make_assets():
    """Provide the release asset builder."""
    return assets
