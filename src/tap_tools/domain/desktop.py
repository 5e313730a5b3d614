"""Desktop integration detection inside archive listings.

Finds a ``.desktop`` launcher and the best icon. Both are optional: a miss
returns None and the pipeline carries on.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from types import MappingProxyType

from tap_tools.domain.types import ArchiveEntry
from tap_tools.logger import get_logger

logger = get_logger(__name__)

DESKTOP_SUFFIX = ".desktop"

# Lower rank is preferred.
ICON_FORMAT_RANK: MappingProxyType[str, int] = MappingProxyType(
    {".svg": 0, ".png": 1, ".xpm": 2}
)

SIZE_PATTERN = re.compile(r"(\d+)x(\d+)", re.IGNORECASE)

# Icons must sit in an icon directory or mention "icon" in their path.
ICON_DIRECTORIES: tuple[str, ...] = ("icons/", "icon/", "pixmaps/")
ICON_KEYWORD = "icon"


def _files(entries: Iterable[ArchiveEntry]) -> list[ArchiveEntry]:
    return [entry for entry in entries if not entry.is_dir]


def detect_desktop_file(
    entries: Iterable[ArchiveEntry],
) -> ArchiveEntry | None:
    """Find the desktop-entry file; the shortest path wins."""
    matches = [
        (index, entry)
        for index, entry in enumerate(_files(entries))
        if entry.path.lower().endswith(DESKTOP_SUFFIX)
    ]
    if not matches:
        logger.debug("No .desktop file found")
        return None

    _, entry = min(matches, key=lambda item: (len(item[1].path), item[0]))
    return entry


def icon_size_hint(path: str) -> int | None:
    """Largest ``WxH`` dimension mentioned in a path, if any.

    ``icons/hicolor/512x512/apps/app.png`` gives 512.
    """
    sizes = [
        max(int(width), int(height))
        for width, height in SIZE_PATTERN.findall(path)
    ]
    return max(sizes) if sizes else None


def _in_icon_location(path: str) -> bool:
    lowered = path.lower()
    return ICON_KEYWORD in lowered or any(
        directory in lowered for directory in ICON_DIRECTORIES
    )


def _icon_extension(path: str) -> str | None:
    lowered = path.lower()
    for extension in ICON_FORMAT_RANK:
        if lowered.endswith(extension):
            return extension
    return None


def detect_icon(entries: Iterable[ArchiveEntry]) -> ArchiveEntry | None:
    """Find the best icon in an archive listing.

    Only files under ``icons/``, ``icon/`` or ``pixmaps/``, or with
    "icon" in their path, are considered.

    Preference:
        1. Format: ``.svg`` over ``.png`` over ``.xpm``
        2. Largest ``WxH`` size hint in the path; hinted paths beat
           unhinted ones
        3. Shortest path, then archive order

    Returns:
        Selected icon entry or None when the archive has no icon

    """
    ranked = []
    for index, entry in enumerate(_files(entries)):
        extension = _icon_extension(entry.path)
        if extension is None or not _in_icon_location(entry.path):
            continue
        size = icon_size_hint(entry.path)
        ranked.append(
            (
                ICON_FORMAT_RANK[extension],
                -(size if size is not None else -1),
                len(entry.path),
                index,
                entry,
            )
        )

    if not ranked:
        logger.debug("No icon found")
        return None

    best = min(ranked, key=lambda item: item[:4])
    logger.debug("Selected icon: %s", best[4].path)
    return best[4]
