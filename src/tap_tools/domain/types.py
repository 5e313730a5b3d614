"""Domain types for release asset resolution.

Pure value types shared by every pipeline stage. Nothing here performs
I/O; the only environment read is ``Arch.current()``, which callers at the
CLI layer use to pick a default target before handing it to the core.
"""

from __future__ import annotations

import platform
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any


class Platform(Enum):
    """Operating system a release asset targets."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> Platform:
        """Parse a user-supplied platform name.

        Raises:
            ValueError: If the name is not a known platform

        """
        aliases = {"darwin": "macos", "osx": "macos", "win": "windows"}
        normalized = value.strip().lower()
        return cls(aliases.get(normalized, normalized))


class Arch(Enum):
    """CPU architecture a release asset targets."""

    X86_64 = "x86_64"
    ARM64 = "arm64"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> Arch:
        """Parse a user-supplied architecture name.

        Raises:
            ValueError: If the name is not a known architecture

        """
        aliases = {"amd64": "x86_64", "x64": "x86_64", "aarch64": "arm64"}
        normalized = value.strip().lower()
        return cls(aliases.get(normalized, normalized))

    @classmethod
    def current(cls) -> Arch:
        """Detect the host machine architecture."""
        machine = platform.machine().lower()
        if machine in ("x86_64", "amd64"):
            return cls.X86_64
        if machine in ("aarch64", "arm64"):
            return cls.ARM64
        return cls.UNKNOWN


class Format(Enum):
    """Container format of a release asset."""

    TAR_GZ = "tar_gz"
    TAR_XZ = "tar_xz"
    TAR_BZ2 = "tar_bz2"
    ZIP = "zip"
    DEB = "deb"
    RPM = "rpm"
    APPIMAGE = "appimage"
    OTHER = "other"

    @property
    def is_tarball(self) -> bool:
        """Whether this format is a compressed tar archive."""
        return self in (Format.TAR_GZ, Format.TAR_XZ, Format.TAR_BZ2)


@dataclass(slots=True, frozen=True)
class ReleaseAsset:
    """One downloadable file attached to a release.

    Attributes:
        name: Asset filename
        download_url: Direct download URL
        size_bytes: Size reported by the release API

    """

    name: str
    download_url: str
    size_bytes: int = 0

    @classmethod
    def from_api_response(
        cls, asset_data: dict[str, Any]
    ) -> ReleaseAsset | None:
        """Create a ReleaseAsset from GitHub API asset data.

        Returns:
            ReleaseAsset or None if name or download URL is missing

        """
        try:
            name = asset_data.get("name", "")
            download_url = asset_data.get("browser_download_url", "")
            size = asset_data.get("size", 0)

            if not name or not download_url:
                return None

            return cls(
                name=name,
                download_url=download_url,
                size_bytes=int(size),
            )
        except (TypeError, ValueError, AttributeError):
            return None


@dataclass(slots=True, frozen=True)
class ClassifiedAsset:
    """A release asset with platform, arch and format derived from its name.

    ``priority`` is None until the selector assigns it from ``format``.
    """

    asset: ReleaseAsset
    platform: Platform
    arch: Arch
    format: Format
    priority: int | None = None

    @property
    def name(self) -> str:
        """Asset filename."""
        return self.asset.name

    @property
    def download_url(self) -> str:
        """Asset download URL."""
        return self.asset.download_url

    @property
    def size_bytes(self) -> int:
        """Asset size reported by the release API."""
        return self.asset.size_bytes

    def with_priority(self, priority: int) -> ClassifiedAsset:
        """Return a copy carrying the given priority."""
        return replace(self, priority=priority)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible values."""
        return {
            "name": self.name,
            "download_url": self.download_url,
            "size_bytes": self.size_bytes,
            "platform": self.platform.value,
            "arch": self.arch.value,
            "format": self.format.value,
            "priority": self.priority,
        }


@dataclass(slots=True, frozen=True)
class ArchiveEntry:
    """Metadata for one member of an archive; no content is retained."""

    path: str
    size_bytes: int = 0
    is_dir: bool = False

    @property
    def filename(self) -> str:
        """Final path segment."""
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def parent_segments(self) -> tuple[str, ...]:
        """Directory segments leading to the entry, excluding its name."""
        parts = self.path.strip("/").split("/")
        return tuple(parts[:-1])


@dataclass(slots=True, frozen=True)
class InspectionResult:
    """Outcome of listing an archive.

    ``supported`` is False when the format is not decoded by the inspector;
    in that case ``entries`` is empty and detection should be skipped.
    """

    entries: tuple[ArchiveEntry, ...] = ()
    root_dir: str | None = None
    supported: bool = True


@dataclass(slots=True, frozen=True)
class Release:
    """A release as supplied by the release-metadata provider."""

    owner: str
    repo: str
    tag_name: str
    assets: tuple[ReleaseAsset, ...] = field(default_factory=tuple)
    prerelease: bool = False

    @property
    def version(self) -> str:
        """Version string with a leading ``v`` removed."""
        return normalize_version(self.tag_name)

    @classmethod
    def from_api_response(
        cls, owner: str, repo: str, api_data: dict[str, Any]
    ) -> Release:
        """Create Release from GitHub API release data."""
        assets = []
        for asset_data in api_data.get("assets") or []:
            asset = ReleaseAsset.from_api_response(asset_data)
            if asset:
                assets.append(asset)

        return cls(
            owner=owner,
            repo=repo,
            tag_name=api_data.get("tag_name", "") or "",
            assets=tuple(assets),
            prerelease=bool(api_data.get("prerelease", False)),
        )


@dataclass(slots=True, frozen=True)
class PackageDescriptor:
    """Terminal output of the pipeline, handed to the rendering stage."""

    selected_asset: ClassifiedAsset
    sha256: str
    root_dir: str | None = None
    binary_path: str | None = None
    desktop_file_path: str | None = None
    icon_path: str | None = None
    version: str | None = None
    checksum_verified: bool = False

    @property
    def download_url(self) -> str:
        """Download URL of the selected asset."""
        return self.selected_asset.download_url

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible values."""
        data = asdict(self)
        data["selected_asset"] = self.selected_asset.to_dict()
        data["download_url"] = self.download_url
        return data


def normalize_version(tag_name: str) -> str:
    """Strip a leading ``v``/``V`` from a release tag."""
    tag = tag_name.strip()
    if len(tag) > 1 and tag[0] in "vV" and tag[1].isdigit():
        return tag[1:]
    return tag
