"""Binary detection inside archive listings.

Finds the executable a formula or cask should link, using only entry
paths: documentation, data files and shell completions are excluded. When
anything lives under a ``bin`` directory everything else is dropped;
otherwise only files that look like bare executables remain.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from fnmatch import fnmatch
from os.path import splitext

from tap_tools.domain.types import ArchiveEntry
from tap_tools.logger import get_logger

logger = get_logger(__name__)

# Matched case-insensitively against the filename only.
NON_BINARY_PATTERNS: tuple[str, ...] = (
    "license*",
    "licence*",
    "readme*",
    "changelog*",
    "changes*",
    "copying*",
    "authors*",
    "notice*",
    "patents*",
    "version*",
    "manifest*",
    "todo*",
    "*.txt",
    "*.md",
    "*.rst",
    "*.pdf",
    "*.html",
    "*.xml",
    "*.json",
    "*.yml",
    "*.yaml",
    "*.toml",
    "*.conf",
    "*.cfg",
    "*.ini",
    "*.desktop",
    "*.png",
    "*.svg",
    "*.xpm",
    "*.ico",
    "*.1",
    "*.service",
    "*.sh",
    "*.bash",
    "*.zsh",
    "*.fish",
    "_*",
)

# Directory segments holding completions, man pages and docs.
SUPPORT_DIRECTORIES: frozenset[str] = frozenset(
    {
        "autocomplete",
        "completion",
        "completions",
        "bash_completion",
        "bash-completion",
        "bash_completion.d",
        "zsh",
        "fish",
        "man",
        "man1",
        "man5",
        "man8",
        "doc",
        "docs",
    }
)

BIN_DIRECTORY = "bin"

# Outside a bin directory only these extensions look executable.
LOOSE_BINARY_EXTENSIONS: frozenset[str] = frozenset({"", ".bin", ".elf"})


def _is_non_binary_name(filename: str) -> bool:
    lowered = filename.lower()
    return any(fnmatch(lowered, pattern) for pattern in NON_BINARY_PATTERNS)


def _in_support_directory(entry: ArchiveEntry) -> bool:
    return any(
        segment.lower() in SUPPORT_DIRECTORIES
        for segment in entry.parent_segments
    )


def _in_bin_directory(entry: ArchiveEntry) -> bool:
    return BIN_DIRECTORY in entry.parent_segments


def _has_binary_extension(entry: ArchiveEntry) -> bool:
    return splitext(entry.filename)[1].lower() in LOOSE_BINARY_EXTENSIONS


def detect_binaries(entries: Iterable[ArchiveEntry]) -> list[ArchiveEntry]:
    """Narrow archive entries down to likely executables.

    Filters, in order:
        1. Drop directories
        2. Drop documentation, data files and completion/man/doc paths
        3. If any survivor lives under a ``bin`` directory, drop the rest
        4. Otherwise keep only extensionless, ``.bin`` and ``.elf`` files

    Args:
        entries: Archive listing

    Returns:
        Candidate binaries in archive order (possibly empty)

    """
    candidates = [
        entry
        for entry in entries
        if not entry.is_dir
        and not _is_non_binary_name(entry.filename)
        and not _in_support_directory(entry)
    ]

    in_bin = [entry for entry in candidates if _in_bin_directory(entry)]
    if in_bin:
        candidates = in_bin
    else:
        candidates = [
            entry for entry in candidates if _has_binary_extension(entry)
        ]

    logger.debug("Detected %d binary candidate(s)", len(candidates))
    return candidates


def _match_length(filename: str, package_name: str) -> int:
    """Length of the overlap when one name contains the other."""
    if package_name in filename:
        return len(package_name)
    if filename in package_name:
        return len(filename)
    return 0


def select_best_binary(
    candidates: Sequence[ArchiveEntry], package_name: str
) -> ArchiveEntry | None:
    """Pick the binary to install from detected candidates.

    Preference:
        1. Filename equal to the package name (case-insensitive)
        2. Filename and package name containing one another; the longest
           overlap wins, then the shortest path
        3. Shortest path

    Ties at every step go to the earliest candidate.

    Args:
        candidates: Output of detect_binaries()
        package_name: Package or binary name to match

    Returns:
        Selected entry or None when there are no candidates

    """
    if not candidates:
        return None

    wanted = package_name.strip().lower()

    if wanted:
        for entry in candidates:
            if entry.filename.lower() == wanted:
                return entry

        partial = [
            (_match_length(entry.filename.lower(), wanted), index, entry)
            for index, entry in enumerate(candidates)
        ]
        partial = [item for item in partial if item[0] > 0]
        if partial:
            _, _, entry = min(
                partial,
                key=lambda item: (-item[0], len(item[2].path), item[1]),
            )
            return entry

    _, entry = min(
        enumerate(candidates),
        key=lambda item: (len(item[1].path), item[0]),
    )
    return entry
