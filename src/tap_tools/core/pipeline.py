"""Release asset resolution pipeline.

Runs the stages strictly in order, each feeding the next:

    classify -> drop auxiliary -> filter target -> select best
        -> fetch + hash -> verify upstream checksum -> list entries
        -> detect binary -> detect desktop file and icon

Asset, network and archive failures propagate unwrapped. Detection misses
leave the matching descriptor field as None.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tap_tools.core.archive import list_entries
from tap_tools.core.checksum import (
    find_checksum_asset,
    parse_checksum_file,
    sidecar_base_name,
    verify_checksum,
)
from tap_tools.core.fetcher import ContentFetcher
from tap_tools.domain.binary import detect_binaries, select_best_binary
from tap_tools.domain.classifier import classify_all
from tap_tools.domain.desktop import detect_desktop_file, detect_icon
from tap_tools.domain.selection import (
    drop_auxiliary,
    filter_target,
    select_best,
)
from tap_tools.domain.types import (
    Arch,
    ClassifiedAsset,
    InspectionResult,
    PackageDescriptor,
    Platform,
    Release,
    ReleaseAsset,
)
from tap_tools.exceptions import DownloadError
from tap_tools.logger import get_logger

logger = get_logger(__name__)


class PackageResolver:
    """Resolves release assets into a PackageDescriptor.

    Target platform and architecture are fixed per resolver so the core
    never consults the environment.

    Usage:
        fetcher = ContentFetcher(session, max_bytes=512 * 1024 * 1024)
        resolver = PackageResolver(fetcher, Platform.LINUX, Arch.X86_64)
        descriptor = await resolver.resolve_release(release, "tool")
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        target_platform: Platform = Platform.LINUX,
        target_arch: Arch = Arch.X86_64,
    ) -> None:
        """Initialize the resolver.

        Args:
            fetcher: Content fetcher used for asset and checksum downloads
            target_platform: Platform being packaged for
            target_arch: Architecture being packaged for

        """
        self.fetcher = fetcher
        self.target_platform = target_platform
        self.target_arch = target_arch

    def select(self, assets: Iterable[ReleaseAsset | str]) -> ClassifiedAsset:
        """Classify, filter and select one asset without any I/O.

        Raises:
            NoCandidateError: If no asset suits the target platform

        """
        classified = drop_auxiliary(classify_all(assets))
        candidates = filter_target(self.target_platform, classified)
        logger.debug(
            "%d of %d asset(s) remain for %s",
            len(candidates),
            len(classified),
            self.target_platform.value,
        )
        return select_best(candidates, self.target_arch)

    async def resolve(
        self,
        assets: Iterable[ReleaseAsset],
        package_name: str,
        checksums: Mapping[str, str] | None = None,
        version: str | None = None,
    ) -> PackageDescriptor:
        """Run the full pipeline over a release's assets.

        Args:
            assets: Release assets in release order
            package_name: Name used to pick the binary
            checksums: Optional upstream filename to SHA-256 mapping
            version: Optional release version recorded on the descriptor

        Returns:
            PackageDescriptor for the selected asset

        Raises:
            NoCandidateError: If no asset suits the target platform
            DownloadError: If the selected asset cannot be fetched
            ChecksumMismatchError: If upstream lists a different digest
            ArchiveParseError: If a supported archive fails to decode

        """
        selected = self.select(assets)
        return await self._resolve_selected(
            selected, package_name, checksums, version
        )

    async def resolve_release(
        self, release: Release, package_name: str
    ) -> PackageDescriptor:
        """Resolve a release, cross-checking its published checksums."""
        selected = self.select(release.assets)
        checksums = await self._load_upstream_checksums(
            release.assets, selected.name
        )
        return await self._resolve_selected(
            selected, package_name, checksums, release.version
        )

    async def _load_upstream_checksums(
        self, assets: Iterable[ReleaseAsset], target_name: str
    ) -> dict[str, str] | None:
        checksum_asset = find_checksum_asset(assets, target_name)
        if checksum_asset is None:
            logger.debug("Release publishes no checksum file")
            return None

        try:
            text = await self.fetcher.fetch_text(checksum_asset.download_url)
        except DownloadError as e:
            logger.warning("Skipping upstream checksum verification: %s", e)
            return None

        checksums = parse_checksum_file(
            text, default_name=sidecar_base_name(checksum_asset.name)
        )
        logger.debug(
            "Loaded %d checksum(s) from %s",
            len(checksums),
            checksum_asset.name,
        )
        return checksums

    async def _resolve_selected(
        self,
        selected: ClassifiedAsset,
        package_name: str,
        checksums: Mapping[str, str] | None,
        version: str | None,
    ) -> PackageDescriptor:
        logger.info("Selected asset: %s", selected.name)
        result = await self.fetcher.fetch(selected.download_url)

        verified = False
        if checksums:
            verified = verify_checksum(
                selected.name, result.sha256, checksums
            )

        inspection = list_entries(result.content, selected.format)
        return self._describe(
            selected,
            result.sha256,
            inspection,
            package_name,
            version,
            verified,
        )

    def _describe(  # noqa: PLR0913
        self,
        selected: ClassifiedAsset,
        sha256: str,
        inspection: InspectionResult,
        package_name: str,
        version: str | None,
        checksum_verified: bool,
    ) -> PackageDescriptor:
        binary_path = desktop_path = icon_path = None

        if inspection.supported:
            binary = select_best_binary(
                detect_binaries(inspection.entries), package_name
            )
            desktop = detect_desktop_file(inspection.entries)
            icon = detect_icon(inspection.entries)
            binary_path = binary.path if binary else None
            desktop_path = desktop.path if desktop else None
            icon_path = icon.path if icon else None
            if binary is None:
                logger.warning(
                    "No binary detected in %s; descriptor left without one",
                    selected.name,
                )
        else:
            logger.info(
                "Skipping archive inspection for %s format",
                selected.format.value,
            )

        return PackageDescriptor(
            selected_asset=selected,
            sha256=sha256,
            root_dir=inspection.root_dir,
            binary_path=binary_path,
            desktop_file_path=desktop_path,
            icon_path=icon_path,
            version=version,
            checksum_verified=checksum_verified,
        )
