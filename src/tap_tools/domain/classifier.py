"""Filename classification for release assets.

Platform, architecture and format are each decided by an ordered table of
``(predicate, label)`` rules evaluated top to bottom; the first match wins
and a final fallback makes every classifier total. Classification looks at
the filename only and never raises.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from tap_tools.domain.types import (
    Arch,
    ClassifiedAsset,
    Format,
    Platform,
    ReleaseAsset,
)

Predicate = Callable[[str], bool]
T = TypeVar("T")


def _contains_any(*tokens: str) -> Predicate:
    def predicate(name: str) -> bool:
        return any(token in name for token in tokens)

    return predicate


def _ends_with_any(*suffixes: str) -> Predicate:
    def predicate(name: str) -> bool:
        return name.endswith(suffixes)

    return predicate


def _either(*predicates: Predicate) -> Predicate:
    def predicate(name: str) -> bool:
        return any(check(name) for check in predicates)

    return predicate


# Rules operate on the lower-cased filename.
PLATFORM_RULES: tuple[tuple[Predicate, Platform], ...] = (
    (
        _either(
            _contains_any("darwin", "macos", "osx"),
            _ends_with_any(".dmg", ".pkg"),
        ),
        Platform.MACOS,
    ),
    (
        _either(
            _contains_any("windows", "win32", "win64"),
            _ends_with_any(".exe", ".msi"),
        ),
        Platform.WINDOWS,
    ),
    (
        _either(
            _contains_any(
                "linux",
                "ubuntu",
                "debian",
                "fedora",
                "centos",
                "rhel",
                "alpine",
                "opensuse",
                "musl",
            ),
            _ends_with_any(".deb", ".rpm", ".appimage"),
        ),
        Platform.LINUX,
    ),
)

ARCH_RULES: tuple[tuple[Predicate, Arch], ...] = (
    (_contains_any("x86_64", "x86-64", "amd64", "x64"), Arch.X86_64),
    (_contains_any("aarch64", "arm64", "armv8"), Arch.ARM64),
)

# Most specific suffix first so ".tar.gz" never falls through to ".gz".
FORMAT_RULES: tuple[tuple[Predicate, Format], ...] = (
    (_ends_with_any(".tar.gz", ".tgz"), Format.TAR_GZ),
    (_ends_with_any(".tar.xz", ".txz"), Format.TAR_XZ),
    (_ends_with_any(".tar.bz2", ".tbz2", ".tbz"), Format.TAR_BZ2),
    (_ends_with_any(".zip"), Format.ZIP),
    (_ends_with_any(".deb"), Format.DEB),
    (_ends_with_any(".rpm"), Format.RPM),
    (_ends_with_any(".appimage"), Format.APPIMAGE),
)

_CHECKSUM_NAME_PATTERN = re.compile(
    r"(checksums?|sha\d+sums?|md5sums?)(\.txt|\.sha256)?$"
)
_CHECKSUM_SUFFIXES = (
    ".sha256",
    ".sha256sum",
    ".sha512",
    ".sha512sum",
    ".sha1",
    ".md5",
    ".digest",
)
_SIGNATURE_SUFFIXES = (".sig", ".asc", ".minisig", ".pem", ".cert")
_METADATA_SUFFIXES = (".txt", ".json", ".yml", ".yaml", ".sbom", ".spdx")
_SOURCE_PATTERN = re.compile(r"[-_.](src|source|sources)([-_.]|$)")


def _first_match(
    rules: Sequence[tuple[Predicate, T]], name: str, fallback: T
) -> T:
    for predicate, label in rules:
        if predicate(name):
            return label
    return fallback


def detect_platform(filename: str) -> Platform:
    """Classify the target operating system of a filename."""
    return _first_match(PLATFORM_RULES, filename.lower(), Platform.UNKNOWN)


def detect_arch(filename: str) -> Arch:
    """Classify the CPU architecture of a filename."""
    return _first_match(ARCH_RULES, filename.lower(), Arch.UNKNOWN)


def detect_format(filename: str) -> Format:
    """Classify the container format of a filename by its suffix."""
    return _first_match(FORMAT_RULES, filename.lower(), Format.OTHER)


def classify(asset: ReleaseAsset | str) -> ClassifiedAsset:
    """Classify a release asset by its filename.

    A bare filename is accepted and wrapped in a ReleaseAsset with no URL.
    Priority is left unset; the selector assigns it.

    Args:
        asset: Release asset or filename

    Returns:
        ClassifiedAsset with platform, arch and format filled in

    """
    if isinstance(asset, str):
        asset = ReleaseAsset(name=asset, download_url="")

    return ClassifiedAsset(
        asset=asset,
        platform=detect_platform(asset.name),
        arch=detect_arch(asset.name),
        format=detect_format(asset.name),
    )


def classify_all(
    assets: Iterable[ReleaseAsset | str],
) -> list[ClassifiedAsset]:
    """Classify every asset, preserving input order."""
    return [classify(asset) for asset in assets]


def is_checksum_asset(filename: str) -> bool:
    """Check whether a filename looks like a checksum file."""
    name = filename.lower()
    return bool(_CHECKSUM_NAME_PATTERN.search(name)) or name.endswith(
        _CHECKSUM_SUFFIXES
    )


def is_signature_asset(filename: str) -> bool:
    """Check whether a filename is a detached signature or certificate."""
    return filename.lower().endswith(_SIGNATURE_SUFFIXES)


def is_metadata_asset(filename: str) -> bool:
    """Check whether a filename is release metadata (manifests, SBOMs)."""
    return filename.lower().endswith(_METADATA_SUFFIXES)


def is_source_asset(filename: str) -> bool:
    """Check whether a filename looks like a source archive."""
    return bool(_SOURCE_PATTERN.search(filename.lower()))


def is_auxiliary_asset(filename: str) -> bool:
    """Check whether an asset is never an install candidate."""
    return (
        is_checksum_asset(filename)
        or is_signature_asset(filename)
        or is_metadata_asset(filename)
        or is_source_asset(filename)
    )
