"""SHA-256 hashing and upstream checksum verification.

``compute_sha256`` hashes exactly the bytes that were downloaded. Upstream
checksum files (``checksums.txt``, ``SHA256SUMS`` or per-asset sidecars)
are optional extra evidence: when one lists the selected asset, the two
digests must agree.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterable, Mapping

from tap_tools.constants import (
    SHA256_HEX_LENGTH,
    SIDECAR_CHECKSUM_SUFFIXES,
    UPSTREAM_CHECKSUM_NAMES,
)
from tap_tools.domain.classifier import is_checksum_asset
from tap_tools.domain.types import ReleaseAsset
from tap_tools.exceptions import ChecksumMismatchError
from tap_tools.logger import get_logger

logger = get_logger(__name__)

_HEX_DIGEST = re.compile(rf"^[0-9a-fA-F]{{{SHA256_HEX_LENGTH}}}$")


def compute_sha256(content: bytes) -> str:
    """Return the lowercase hex SHA-256 digest of ``content``."""
    return hashlib.sha256(content).hexdigest()


def _clean_filename(raw: str) -> str:
    name = raw.strip()
    # Binary-mode marker from sha256sum -b
    name = name.removeprefix("*")
    name = name.removeprefix("./")
    return name.rsplit("/", 1)[-1]


def parse_checksum_file(
    text: str, default_name: str | None = None
) -> dict[str, str]:
    """Parse a ``sha256sum``-style checksum listing.

    Supported line forms::

        <hash>  <filename>
        <hash> *<filename>
        <hash> <filename>
        <hash>

    Blank lines and ``#`` comments are skipped, as are lines whose first
    field is not a SHA-256 hex digest. A bare digest line is keyed by
    ``default_name`` (the asset a sidecar file belongs to).

    Args:
        text: Checksum file content
        default_name: Filename for bare digest lines

    Returns:
        Mapping of filename to lowercase hex digest

    """
    checksums: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(maxsplit=1)
        digest = parts[0]
        if not _HEX_DIGEST.match(digest):
            logger.debug("Skipping checksum line: %s", line)
            continue

        if len(parts) == 2:  # noqa: PLR2004
            filename = _clean_filename(parts[1])
        elif default_name:
            filename = default_name
        else:
            continue

        if filename:
            checksums[filename] = digest.lower()

    return checksums


def sidecar_base_name(checksum_name: str) -> str | None:
    """Return the asset a sidecar checksum file belongs to, if any."""
    lowered = checksum_name.lower()
    for suffix in SIDECAR_CHECKSUM_SUFFIXES:
        if lowered.endswith(suffix):
            return checksum_name[: -len(suffix)]
    return None


def find_checksum_asset(
    assets: Iterable[ReleaseAsset], target_name: str
) -> ReleaseAsset | None:
    """Find the release asset holding the checksum for ``target_name``.

    Preference:
        1. Sidecar file for the target (``<target>.sha256``)
        2. Well-known release-wide files, in the order of
           UPSTREAM_CHECKSUM_NAMES
        3. Any other checksum-looking asset that is not a sidecar for a
           different file

    Returns:
        Checksum asset or None when the release publishes none

    """
    asset_list = list(assets)

    for suffix in SIDECAR_CHECKSUM_SUFFIXES:
        sidecar = f"{target_name}{suffix}".lower()
        for asset in asset_list:
            if asset.name.lower() == sidecar:
                return asset

    by_name = {asset.name: asset for asset in asset_list}
    for name in UPSTREAM_CHECKSUM_NAMES:
        if name in by_name:
            return by_name[name]

    for asset in asset_list:
        if (
            is_checksum_asset(asset.name)
            and sidecar_base_name(asset.name) is None
        ):
            return asset

    return None


def verify_checksum(
    filename: str, computed: str, expected: Mapping[str, str]
) -> bool:
    """Compare a computed digest with the upstream entry for ``filename``.

    Args:
        filename: Asset filename
        computed: Digest of the downloaded bytes
        expected: Parsed upstream checksums

    Returns:
        True when verified, False when upstream has no entry for the file

    Raises:
        ChecksumMismatchError: If upstream lists a different digest

    """
    wanted = expected.get(filename)
    if wanted is None:
        logger.debug("No upstream checksum listed for %s", filename)
        return False

    actual = computed.lower()
    if wanted.lower() != actual:
        msg = f"expected {wanted.lower()}, got {actual}"
        raise ChecksumMismatchError(
            msg, target=filename, expected=wanted.lower(), actual=actual
        )

    logger.debug("Checksum verified for %s", filename)
    return True
