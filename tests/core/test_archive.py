"""Tests for in-memory archive inspection."""

import gzip
import io
import tarfile

import pytest

from tap_tools.core.archive import (
    find_root_dir,
    is_supported,
    list_entries,
    normalize_member_path,
    read_entry,
)
from tap_tools.domain.types import Format
from tap_tools.exceptions import ArchiveParseError

TARBALL_FORMATS = [Format.TAR_GZ, Format.TAR_XZ, Format.TAR_BZ2]


def _paths(result):
    return [entry.path for entry in result.entries]


class TestListEntries:
    """Listing supported tarballs."""

    @pytest.mark.parametrize("fmt", TARBALL_FORMATS)
    def test_lists_every_tarball_format(self, tarball_factory, fmt):
        """gz, xz and bz2 tarballs are listed in archive order."""
        data = tarball_factory(
            {
                "pkg-1.0/": None,
                "pkg-1.0/bin/pkg": b"\x7fELF binary",
                "pkg-1.0/README": b"read me",
            },
            fmt,
        )
        result = list_entries(data, fmt)

        assert result.supported
        assert _paths(result) == [
            "pkg-1.0",
            "pkg-1.0/bin/pkg",
            "pkg-1.0/README",
        ]
        assert result.root_dir == "pkg-1.0"

    def test_entry_metadata(self, tarball_factory):
        """Sizes and directory flags are reported."""
        data = tarball_factory({"d/": None, "d/f": b"12345"})
        directory, regular = list_entries(data, Format.TAR_GZ).entries

        assert directory.is_dir
        assert directory.size_bytes == 0
        assert not regular.is_dir
        assert regular.size_bytes == 5

    def test_no_common_root(self, tarball_factory):
        """Top-level files from different roots give no root_dir."""
        data = tarball_factory({"bin/pkg": b"x", "README": b"y"})
        result = list_entries(data, Format.TAR_GZ)
        assert result.root_dir is None

    def test_dot_slash_prefixes_are_stripped(self, tarball_factory):
        """Entries written as ./path are normalized."""
        data = tarball_factory(
            {"./": None, "./tool/": None, "./tool/bin/tool": b"x"}
        )
        result = list_entries(data, Format.TAR_GZ)

        assert _paths(result) == ["tool", "tool/bin/tool"]
        assert result.root_dir == "tool"

    def test_symlinks_are_skipped(self):
        """Only regular files and directories are listed."""
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
            real = tarfile.TarInfo("app/bin/app")
            real.size = 3
            tar.addfile(real, io.BytesIO(b"abc"))
            link = tarfile.TarInfo("app/bin/app-link")
            link.type = tarfile.SYMTYPE
            link.linkname = "app"
            tar.addfile(link)

        result = list_entries(buffer.getvalue(), Format.TAR_GZ)
        assert _paths(result) == ["app/bin/app"]

    def test_empty_tarball(self, tarball_factory):
        """An empty but valid tarball lists nothing."""
        result = list_entries(tarball_factory({}), Format.TAR_GZ)
        assert result.supported
        assert result.entries == ()
        assert result.root_dir is None

    @pytest.mark.parametrize(
        "fmt",
        [Format.ZIP, Format.DEB, Format.RPM, Format.APPIMAGE, Format.OTHER],
    )
    def test_unsupported_formats(self, fmt):
        """Other formats report unsupported instead of failing."""
        result = list_entries(b"PK\x03\x04 not decoded", fmt)
        assert not result.supported
        assert result.entries == ()
        assert result.root_dir is None
        assert not is_supported(fmt)

    @pytest.mark.parametrize("fmt", TARBALL_FORMATS)
    def test_corrupt_data_raises(self, fmt):
        """Garbage in a claimed tarball format is an ArchiveParseError."""
        with pytest.raises(ArchiveParseError):
            list_entries(b"this is not an archive at all" * 10, fmt)

    def test_corrupt_tar_inside_valid_gzip(self):
        """A valid gzip stream holding no tar headers fails to parse."""
        with pytest.raises(ArchiveParseError):
            list_entries(gzip.compress(b"x" * 1024), Format.TAR_GZ)

    def test_empty_bytes_raise(self):
        """Zero bytes are not a gzip stream."""
        with pytest.raises(ArchiveParseError):
            list_entries(b"", Format.TAR_GZ)


class TestFindRootDir:
    """Root directory inference on listings."""

    def test_common_root(self, make_entries):
        """A shared top-level directory is the root."""
        found = find_root_dir(
            make_entries("pkg-1.0/bin/pkg", "pkg-1.0/README")
        )
        assert found == "pkg-1.0"

    def test_no_common_prefix(self, make_entries):
        """Different top-level segments give no root."""
        assert find_root_dir(make_entries("bin/pkg", "README")) is None

    def test_single_file_is_not_a_root(self, make_entries):
        """One top-level file is not a directory."""
        assert find_root_dir(make_entries("tool")) is None

    def test_explicit_directory_entry(self, make_entries):
        """A lone directory entry is a root."""
        assert find_root_dir(make_entries("tool/")) == "tool"

    def test_empty(self):
        """No entries, no root."""
        assert find_root_dir([]) is None


class TestReadEntry:
    """Reading one member's content."""

    @pytest.mark.parametrize("fmt", TARBALL_FORMATS)
    def test_reads_member(self, tarball_factory, fmt):
        """The requested file's bytes are returned."""
        desktop = b"[Desktop Entry]\nName=App\nExec=app\n"
        data = tarball_factory(
            {"app/bin/app": b"binary", "app/app.desktop": desktop}, fmt
        )
        assert read_entry(data, fmt, "app/app.desktop") == desktop

    def test_accepts_dot_slash_path(self, tarball_factory):
        """Paths are normalized before matching."""
        data = tarball_factory({"./app/icon.svg": b"<svg/>"})
        assert read_entry(data, Format.TAR_GZ, "./app/icon.svg") == b"<svg/>"

    def test_missing_member(self, tarball_factory):
        """A path not in the archive raises."""
        data = tarball_factory({"app/bin/app": b"x"})
        with pytest.raises(ArchiveParseError) as exc_info:
            read_entry(data, Format.TAR_GZ, "app/missing")
        assert exc_info.value.target == "app/missing"

    def test_directory_is_not_readable(self, tarball_factory):
        """Directories have no content to read."""
        data = tarball_factory({"app/": None, "app/x": b"x"})
        with pytest.raises(ArchiveParseError):
            read_entry(data, Format.TAR_GZ, "app")

    def test_unsupported_format(self):
        """Formats not decoded here cannot be read."""
        with pytest.raises(ArchiveParseError):
            read_entry(b"PK", Format.ZIP, "a")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("./a/b", "a/b"),
        ("././a", "a"),
        ("a/b/", "a/b"),
        ("/abs/path", "abs/path"),
        (".", "."),
    ],
)
def test_normalize_member_path(name, expected):
    """Prefixes and trailing slashes are removed."""
    assert normalize_member_path(name) == expected
