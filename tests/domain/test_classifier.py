"""Tests for filename classification."""

import pytest

from tap_tools.domain.classifier import (
    classify,
    classify_all,
    detect_arch,
    detect_format,
    detect_platform,
    is_auxiliary_asset,
    is_checksum_asset,
    is_signature_asset,
    is_source_asset,
)
from tap_tools.domain.types import Arch, Format, Platform, ReleaseAsset


class TestDetectPlatform:
    """Platform rules, first match wins."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("tool-darwin-amd64.tar.gz", Platform.MACOS),
            ("Tool-macOS.zip", Platform.MACOS),
            ("tool-osx-x64.tar.gz", Platform.MACOS),
            ("Tool-1.0.dmg", Platform.MACOS),
            ("Tool-1.0.pkg", Platform.MACOS),
            ("tool-windows-x64.zip", Platform.WINDOWS),
            ("tool-win64.zip", Platform.WINDOWS),
            ("tool-setup.exe", Platform.WINDOWS),
            ("tool.msi", Platform.WINDOWS),
            ("tool-linux-x86_64.tar.gz", Platform.LINUX),
            ("tool_1.0_amd64.deb", Platform.LINUX),
            ("tool-1.0.x86_64.rpm", Platform.LINUX),
            ("Tool-1.0.AppImage", Platform.LINUX),
            ("tool-ubuntu-22.04.tar.gz", Platform.LINUX),
            ("tool-x86_64-unknown-linux-musl.tar.gz", Platform.LINUX),
            ("tool-1.0.zip", Platform.UNKNOWN),
            ("tool", Platform.UNKNOWN),
        ],
    )
    def test_platform_rules(self, filename, expected):
        """Each token or extension maps to its platform."""
        assert detect_platform(filename) == expected

    def test_macos_rule_precedes_linux(self):
        """Ordered rules: a darwin token wins over a .deb-like suffix."""
        assert detect_platform("tool-darwin.deb") == Platform.MACOS


class TestDetectArch:
    """Architecture rules."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("tool-linux-x86_64.tar.gz", Arch.X86_64),
            ("tool-linux-x86-64.tar.gz", Arch.X86_64),
            ("tool_amd64.deb", Arch.X86_64),
            ("tool-win-x64.zip", Arch.X86_64),
            ("tool-linux-aarch64.tar.gz", Arch.ARM64),
            ("tool-darwin-arm64.tar.gz", Arch.ARM64),
            ("tool-armv8.tar.gz", Arch.ARM64),
            ("tool-linux.tar.gz", Arch.UNKNOWN),
        ],
    )
    def test_arch_rules(self, filename, expected):
        """Arch tokens map to the closed Arch enum."""
        assert detect_arch(filename) == expected


class TestDetectFormat:
    """Format rules keyed on suffix."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("tool.tar.gz", Format.TAR_GZ),
            ("tool.tgz", Format.TAR_GZ),
            ("tool.tar.xz", Format.TAR_XZ),
            ("tool.txz", Format.TAR_XZ),
            ("tool.tar.bz2", Format.TAR_BZ2),
            ("tool.tbz2", Format.TAR_BZ2),
            ("tool.zip", Format.ZIP),
            ("tool.deb", Format.DEB),
            ("tool.rpm", Format.RPM),
            ("Tool.AppImage", Format.APPIMAGE),
            ("tool.gz", Format.OTHER),
            ("tool", Format.OTHER),
        ],
    )
    def test_format_rules(self, filename, expected):
        """Most specific suffix wins; bare .gz is not a tarball."""
        assert detect_format(filename) == expected


class TestClassify:
    """classify() is total and keeps the asset."""

    def test_classify_asset(self):
        """Platform, arch and format are derived from the name."""
        asset = ReleaseAsset(
            name="tool-1.0-linux-x64.tar.gz",
            download_url="https://example.com/tool.tar.gz",
            size_bytes=10,
        )
        classified = classify(asset)

        assert classified.asset is asset
        assert classified.platform == Platform.LINUX
        assert classified.arch == Arch.X86_64
        assert classified.format == Format.TAR_GZ
        assert classified.priority is None
        assert classified.download_url == asset.download_url

    def test_classify_plain_filename(self):
        """A bare string is wrapped with an empty URL."""
        classified = classify("tool-darwin-arm64.zip")
        assert classified.name == "tool-darwin-arm64.zip"
        assert classified.download_url == ""
        assert classified.platform == Platform.MACOS

    @pytest.mark.parametrize("filename", ["", "...", "💥", "a" * 500])
    def test_classify_never_raises(self, filename):
        """Odd inputs degrade to unknown/other."""
        classified = classify(filename)
        assert classified.platform == Platform.UNKNOWN
        assert classified.arch == Arch.UNKNOWN
        assert classified.format == Format.OTHER

    def test_classify_all_preserves_order(self):
        """Output order matches input order."""
        names = ["b-linux.tar.gz", "a-darwin.zip", "c.deb"]
        assert [asset.name for asset in classify_all(names)] == names


class TestAuxiliaryAssets:
    """Checksum, signature, metadata and source detection."""

    @pytest.mark.parametrize(
        "filename",
        [
            "checksums.txt",
            "SHA256SUMS",
            "sha256sums.txt",
            "tool-linux.tar.gz.sha256",
            "tool.sha512",
            "md5sums",
        ],
    )
    def test_checksum_assets(self, filename):
        """Checksum files are recognized."""
        assert is_checksum_asset(filename)

    def test_archive_is_not_checksum(self):
        """Ordinary archives are not checksum files."""
        assert not is_checksum_asset("tool-linux.tar.gz")

    @pytest.mark.parametrize(
        "filename", ["tool.tar.gz.sig", "tool.asc", "tool.minisig"]
    )
    def test_signature_assets(self, filename):
        """Detached signatures are recognized."""
        assert is_signature_asset(filename)

    @pytest.mark.parametrize(
        "filename",
        ["tool-1.0-src.tar.gz", "tool_source.zip", "tool-1.0.source.tar.xz"],
    )
    def test_source_assets(self, filename):
        """Source archives are recognized."""
        assert is_source_asset(filename)

    def test_sourcegraph_is_not_source(self):
        """The token must stand alone between separators."""
        assert not is_source_asset("sourcegraph-linux.tar.gz")

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("tool-linux.tar.gz", False),
            ("tool.deb", False),
            ("checksums.txt", True),
            ("tool.tar.gz.asc", True),
            ("sbom.spdx", True),
            ("manifest.json", True),
        ],
    )
    def test_is_auxiliary(self, filename, expected):
        """Auxiliary assets are never install candidates."""
        assert is_auxiliary_asset(filename) is expected
