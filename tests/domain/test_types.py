"""Tests for domain value types."""

import dataclasses
from unittest.mock import patch

import pytest

from tap_tools.domain.classifier import classify
from tap_tools.domain.types import (
    Arch,
    ArchiveEntry,
    Format,
    PackageDescriptor,
    Platform,
    Release,
    ReleaseAsset,
    normalize_version,
)


class TestEnums:
    """Platform and Arch parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("linux", Platform.LINUX),
            (" Darwin ", Platform.MACOS),
            ("osx", Platform.MACOS),
            ("win", Platform.WINDOWS),
        ],
    )
    def test_platform_parse(self, value, expected):
        """Aliases resolve to the enum."""
        assert Platform.parse(value) == expected

    def test_platform_parse_invalid(self):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError):
            Platform.parse("beos")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("amd64", Arch.X86_64),
            ("AARCH64", Arch.ARM64),
            ("x86_64", Arch.X86_64),
        ],
    )
    def test_arch_parse(self, value, expected):
        """Aliases resolve to the enum."""
        assert Arch.parse(value) == expected

    @pytest.mark.parametrize(
        ("machine", "expected"),
        [
            ("x86_64", Arch.X86_64),
            ("AMD64", Arch.X86_64),
            ("aarch64", Arch.ARM64),
            ("riscv64", Arch.UNKNOWN),
        ],
    )
    def test_arch_current(self, machine, expected):
        """Host machine names map onto Arch."""
        with patch("tap_tools.domain.types.platform.machine") as machine_fn:
            machine_fn.return_value = machine
            assert Arch.current() == expected

    def test_is_tarball(self):
        """Only the three compressed tar formats are tarballs."""
        tarballs = {fmt for fmt in Format if fmt.is_tarball}
        assert tarballs == {Format.TAR_GZ, Format.TAR_XZ, Format.TAR_BZ2}


class TestReleaseAsset:
    """API parsing of assets."""

    def test_from_api_response(self):
        """Valid asset data is parsed."""
        asset = ReleaseAsset.from_api_response(
            {
                "name": "tool.tar.gz",
                "browser_download_url": "https://example.com/tool.tar.gz",
                "size": 42,
            }
        )
        assert asset == ReleaseAsset(
            "tool.tar.gz", "https://example.com/tool.tar.gz", 42
        )

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "", "browser_download_url": "https://x"},
            {"name": "tool"},
            {"name": "tool", "browser_download_url": "u", "size": "big"},
        ],
    )
    def test_invalid_asset_is_none(self, data):
        """Incomplete data yields None."""
        assert ReleaseAsset.from_api_response(data) is None

    def test_frozen(self):
        """Assets are immutable."""
        asset = ReleaseAsset("a", "u")
        with pytest.raises(dataclasses.FrozenInstanceError):
            asset.name = "b"  # type: ignore[misc]


class TestArchiveEntry:
    """Path helpers on entries."""

    def test_filename_and_parents(self):
        """Filename is the last segment; parents exclude it."""
        entry = ArchiveEntry("pkg-1.0/usr/bin/tool")
        assert entry.filename == "tool"
        assert entry.parent_segments == ("pkg-1.0", "usr", "bin")

    def test_top_level_file(self):
        """A top-level file has no parents."""
        assert ArchiveEntry("tool").parent_segments == ()


class TestRelease:
    """Release parsing and versions."""

    def test_from_api_response_skips_invalid_assets(self):
        """Invalid assets are dropped, order is kept."""
        release = Release.from_api_response(
            "o",
            "r",
            {
                "tag_name": "v1.2.3",
                "prerelease": False,
                "assets": [
                    {"name": "b.tar.gz", "browser_download_url": "u1"},
                    {"name": "broken"},
                    {"name": "a.zip", "browser_download_url": "u2"},
                ],
            },
        )
        assert release.tag_name == "v1.2.3"
        assert release.version == "1.2.3"
        assert [asset.name for asset in release.assets] == [
            "b.tar.gz",
            "a.zip",
        ]

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("v1.0", "1.0"),
            ("V2", "2"),
            ("1.0", "1.0"),
            ("version-1", "version-1"),
            ("v", "v"),
        ],
    )
    def test_normalize_version(self, tag, expected):
        """Only a v directly followed by a digit is stripped."""
        assert normalize_version(tag) == expected


class TestPackageDescriptor:
    """Descriptor serialization."""

    def test_to_dict(self):
        """Nested asset is flattened to plain values."""
        selected = classify(
            ReleaseAsset("tool-linux-x64.tar.gz", "https://x/t.tgz", 5)
        ).with_priority(1)
        descriptor = PackageDescriptor(
            selected_asset=selected,
            sha256="ab" * 32,
            root_dir="tool",
            binary_path="tool/bin/tool",
            version="1.0",
        )
        data = descriptor.to_dict()

        assert data["download_url"] == "https://x/t.tgz"
        assert data["selected_asset"]["format"] == "tar_gz"
        assert data["selected_asset"]["platform"] == "linux"
        assert data["selected_asset"]["priority"] == 1
        assert data["binary_path"] == "tool/bin/tool"
        assert data["desktop_file_path"] is None
        assert data["checksum_verified"] is False
