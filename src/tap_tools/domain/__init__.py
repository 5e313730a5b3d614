"""Pure domain logic: asset classification, selection and detection."""

from tap_tools.domain.binary import detect_binaries, select_best_binary
from tap_tools.domain.classifier import (
    classify,
    classify_all,
    is_auxiliary_asset,
    is_checksum_asset,
)
from tap_tools.domain.desktop import detect_desktop_file, detect_icon
from tap_tools.domain.naming import (
    ensure_linux_suffix,
    normalize_package_name,
    parse_repo_url,
)
from tap_tools.domain.selection import (
    FORMAT_PRIORITY,
    drop_auxiliary,
    filter_target,
    prioritize,
    select_best,
)
from tap_tools.domain.types import (
    Arch,
    ArchiveEntry,
    ClassifiedAsset,
    Format,
    InspectionResult,
    PackageDescriptor,
    Platform,
    Release,
    ReleaseAsset,
)

__all__ = [
    "FORMAT_PRIORITY",
    "Arch",
    "ArchiveEntry",
    "ClassifiedAsset",
    "Format",
    "InspectionResult",
    "PackageDescriptor",
    "Platform",
    "Release",
    "ReleaseAsset",
    "classify",
    "classify_all",
    "detect_binaries",
    "detect_desktop_file",
    "detect_icon",
    "drop_auxiliary",
    "ensure_linux_suffix",
    "filter_target",
    "is_auxiliary_asset",
    "is_checksum_asset",
    "normalize_package_name",
    "parse_repo_url",
    "prioritize",
    "select_best",
    "select_best_binary",
]
