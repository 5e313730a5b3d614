"""In-memory archive inspection.

Compressed tarballs are read as a forward-only stream straight from the
downloaded bytes; nothing is extracted to disk and only member metadata is
kept. Formats the inspector does not decode produce an unsupported result
instead of an error so detection can be skipped.
"""

from __future__ import annotations

import io
import lzma
import tarfile
import zlib
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from types import MappingProxyType

from tap_tools.domain.types import ArchiveEntry, Format, InspectionResult
from tap_tools.exceptions import ArchiveParseError
from tap_tools.logger import get_logger

logger = get_logger(__name__)

# Pipe modes force sequential reads over the decompression stream.
STREAM_MODES: MappingProxyType[Format, str] = MappingProxyType(
    {
        Format.TAR_GZ: "r|gz",
        Format.TAR_XZ: "r|xz",
        Format.TAR_BZ2: "r|bz2",
    }
)

_DECODE_ERRORS = (
    tarfile.TarError,
    EOFError,
    OSError,
    lzma.LZMAError,
    zlib.error,
)


def is_supported(fmt: Format) -> bool:
    """Whether the inspector can decode the given format."""
    return fmt in STREAM_MODES


def normalize_member_path(name: str) -> str:
    """Strip ``./`` prefixes and trailing slashes from a member name."""
    path = name
    while path.startswith("./"):
        path = path[2:]
    return path.strip("/")


@contextmanager
def _open_stream(data: bytes, fmt: Format) -> Iterator[tarfile.TarFile]:
    try:
        with tarfile.open(
            fileobj=io.BytesIO(data), mode=STREAM_MODES[fmt]
        ) as tar:
            yield tar
    except _DECODE_ERRORS as e:
        msg = f"{fmt.value} stream is corrupt: {e}"
        raise ArchiveParseError(msg) from e


def _iter_members(
    tar: tarfile.TarFile,
) -> Iterator[tuple[str, tarfile.TarInfo]]:
    for member in tar:
        if not (member.isfile() or member.isdir()):
            logger.debug("Skipping special member: %s", member.name)
            continue
        path = normalize_member_path(member.name)
        if not path or path == ".":
            continue
        yield path, member


def find_root_dir(entries: Sequence[ArchiveEntry]) -> str | None:
    """Return the single top-level directory shared by every entry.

    The segment only counts as a root directory when it actually is one:
    something must be nested beneath it or it must be listed as a
    directory. An archive holding one bare file has no root.
    """
    tops: set[str] = set()
    is_directory = False
    for entry in entries:
        head, sep, _ = entry.path.partition("/")
        tops.add(head)
        if sep or entry.is_dir:
            is_directory = True
        if len(tops) > 1:
            return None

    if len(tops) == 1 and is_directory:
        return tops.pop()
    return None


def list_entries(data: bytes, fmt: Format) -> InspectionResult:
    """List archive members without extracting them.

    Args:
        data: Complete archive bytes, as downloaded
        fmt: Container format of the asset

    Returns:
        InspectionResult with entries in archive order and the inferred
        root directory; ``supported`` is False for formats not decoded here

    Raises:
        ArchiveParseError: If a supported format fails to decode

    """
    if not is_supported(fmt):
        logger.debug("Archive inspection not supported for %s", fmt.value)
        return InspectionResult(supported=False)

    entries: list[ArchiveEntry] = []
    with _open_stream(data, fmt) as tar:
        for path, member in _iter_members(tar):
            entries.append(
                ArchiveEntry(
                    path=path,
                    size_bytes=member.size if member.isfile() else 0,
                    is_dir=member.isdir(),
                )
            )

    root_dir = find_root_dir(entries)
    logger.debug(
        "Listed %d archive entries (root: %s)", len(entries), root_dir
    )
    return InspectionResult(
        entries=tuple(entries), root_dir=root_dir, supported=True
    )


def read_entry(data: bytes, fmt: Format, path: str) -> bytes:
    """Read one regular file out of an archive held in memory.

    Args:
        data: Complete archive bytes
        fmt: Container format (must be a supported tarball)
        path: Member path as reported by list_entries()

    Returns:
        Content of the member

    Raises:
        ArchiveParseError: If the format is unsupported, the stream is
            corrupt or no regular file has that path

    """
    if not is_supported(fmt):
        msg = f"cannot read entries from {fmt.value} assets"
        raise ArchiveParseError(msg, target=path)

    wanted = normalize_member_path(path)
    with _open_stream(data, fmt) as tar:
        for member_path, member in _iter_members(tar):
            if member_path != wanted or not member.isfile():
                continue
            handle = tar.extractfile(member)
            if handle is None:
                break
            return handle.read()

    msg = "no such file in archive"
    raise ArchiveParseError(msg, target=path)
