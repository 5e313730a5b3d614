"""Asset filtering and selection.

Selection is a pure function of the filtered candidate list: the lowest
format priority wins, then the architecture match, then input order. No
randomness, clock or environment is consulted.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from types import MappingProxyType

from tap_tools.domain.classifier import is_auxiliary_asset
from tap_tools.domain.types import Arch, ClassifiedAsset, Format, Platform
from tap_tools.exceptions import NoCandidateError
from tap_tools.logger import get_logger

logger = get_logger(__name__)

# Lower is better; tarballs tie at the top.
FORMAT_PRIORITY: MappingProxyType[Format, int] = MappingProxyType(
    {
        Format.TAR_GZ: 1,
        Format.TAR_XZ: 1,
        Format.TAR_BZ2: 1,
        Format.DEB: 2,
        Format.ZIP: 3,
        Format.RPM: 4,
        Format.APPIMAGE: 4,
        Format.OTHER: 5,
    }
)

_ARCH_MATCH = 0
_ARCH_UNKNOWN = 1
_ARCH_MISMATCH = 2


def priority_for(fmt: Format) -> int:
    """Return the selection priority of a format (lower is better)."""
    return FORMAT_PRIORITY[fmt]


def prioritize(assets: Iterable[ClassifiedAsset]) -> list[ClassifiedAsset]:
    """Assign the format priority to every asset, preserving order."""
    return [
        asset.with_priority(priority_for(asset.format)) for asset in assets
    ]


def drop_auxiliary(
    assets: Iterable[ClassifiedAsset],
) -> list[ClassifiedAsset]:
    """Remove checksum, signature, metadata and source assets."""
    kept = []
    for asset in assets:
        if is_auxiliary_asset(asset.name):
            logger.debug("Skipping auxiliary asset: %s", asset.name)
            continue
        kept.append(asset)
    return kept


def filter_target(
    platform: Platform, assets: Iterable[ClassifiedAsset]
) -> list[ClassifiedAsset]:
    """Keep assets built for the target platform or of unknown platform.

    Assets classified for any other concrete platform are dropped. Input
    order is preserved; the result may be empty.

    Args:
        platform: Target platform
        assets: Classified assets

    Returns:
        Compatible assets in input order

    """
    kept = []
    for asset in assets:
        if asset.platform in (platform, Platform.UNKNOWN):
            kept.append(asset)
        else:
            logger.debug(
                "Dropping %s asset for %s target: %s",
                asset.platform.value,
                platform.value,
                asset.name,
            )
    return kept


def _arch_rank(asset: ClassifiedAsset, target_arch: Arch) -> int:
    if asset.arch == target_arch:
        return _ARCH_MATCH
    if asset.arch == Arch.UNKNOWN:
        return _ARCH_UNKNOWN
    return _ARCH_MISMATCH


def select_best(
    candidates: Sequence[ClassifiedAsset],
    target_arch: Arch = Arch.X86_64,
) -> ClassifiedAsset:
    """Pick exactly one asset from the filtered candidates.

    Order of preference:
        1. Lowest format priority
        2. Architecture equal to target, then unknown, then mismatched
        3. First occurrence in the candidate list

    Args:
        candidates: Filtered candidates, in release order
        target_arch: Architecture being packaged for

    Returns:
        The selected asset with its priority assigned

    Raises:
        NoCandidateError: If candidates is empty

    """
    if not candidates:
        msg = "no asset matches the target platform"
        raise NoCandidateError(msg)

    ranked = prioritize(candidates)
    index, best = min(
        enumerate(ranked),
        key=lambda item: (
            item[1].priority,
            _arch_rank(item[1], target_arch),
            item[0],
        ),
    )
    logger.debug(
        "Selected candidate %d of %d: %s (format=%s, priority=%s, arch=%s)",
        index + 1,
        len(ranked),
        best.name,
        best.format.value,
        best.priority,
        best.arch.value,
    )
    return best
