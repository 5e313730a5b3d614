"""I/O-bearing pipeline stages: fetching, archive inspection, resolution."""

from tap_tools.core.archive import find_root_dir, list_entries, read_entry
from tap_tools.core.checksum import (
    compute_sha256,
    find_checksum_asset,
    parse_checksum_file,
    verify_checksum,
)
from tap_tools.core.fetcher import ContentFetcher, FetchResult
from tap_tools.core.github import ReleaseClient
from tap_tools.core.http_session import create_http_session
from tap_tools.core.pipeline import PackageResolver

__all__ = [
    "ContentFetcher",
    "FetchResult",
    "PackageResolver",
    "ReleaseClient",
    "compute_sha256",
    "create_http_session",
    "find_checksum_asset",
    "find_root_dir",
    "list_entries",
    "parse_checksum_file",
    "read_entry",
    "verify_checksum",
]
