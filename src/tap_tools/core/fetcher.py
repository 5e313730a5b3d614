"""Content fetcher for release assets.

Downloads one asset fully into memory and hashes exactly the bytes it
returns. One attempt only: any transport error or non-success status is a
DownloadError, and retry policy belongs to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass

import aiohttp

from tap_tools.constants import CHUNK_SIZE
from tap_tools.core.checksum import compute_sha256
from tap_tools.exceptions import DownloadError
from tap_tools.logger import get_logger

logger = get_logger(__name__)

_BYTES_PER_MB = 1024 * 1024


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Downloaded bytes and their SHA-256 hex digest."""

    content: bytes
    sha256: str

    @property
    def size_bytes(self) -> int:
        """Number of bytes downloaded."""
        return len(self.content)


class ContentFetcher:
    """Fetches asset bytes over HTTP with an in-memory size cap."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        max_bytes: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            session: aiohttp session for downloads
            max_bytes: Refuse bodies larger than this (None disables the cap)
            headers: Extra request headers

        """
        self.session = session
        self.max_bytes = max_bytes
        self.headers = dict(headers or {})

    @classmethod
    def with_limit_mb(
        cls, session: aiohttp.ClientSession, max_mb: int
    ) -> ContentFetcher:
        """Create a fetcher capped at ``max_mb`` mebibytes."""
        return cls(session, max_bytes=max_mb * _BYTES_PER_MB)

    def _check_size(self, size: int, url: str) -> None:
        if self.max_bytes is not None and size > self.max_bytes:
            msg = (
                f"asset exceeds size limit "
                f"({size:,} > {self.max_bytes:,} bytes)"
            )
            raise DownloadError(msg, target=url)

    @staticmethod
    def _declared_length(response: aiohttp.ClientResponse, url: str) -> int:
        raw = response.headers.get("Content-Length") or 0
        try:
            return int(raw)
        except ValueError as e:
            msg = f"invalid Content-Length {raw!r}"
            raise DownloadError(msg, target=url) from e

    async def fetch_bytes(self, url: str) -> bytes:
        """Download a URL into memory.

        Raises:
            DownloadError: On transport failure, non-success status, a
                malformed Content-Length or when the body exceeds the size
                cap

        """
        logger.debug("Fetching %s", url)
        try:
            async with self.session.get(url, headers=self.headers) as response:
                if response.status != 200:  # noqa: PLR2004
                    msg = f"HTTP {response.status}"
                    raise DownloadError(msg, target=url)

                self._check_size(self._declared_length(response, url), url)

                chunks: list[bytes] = []
                received = 0
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    received += len(chunk)
                    self._check_size(received, url)
                    chunks.append(chunk)
        except (aiohttp.ClientError, TimeoutError) as e:
            msg = f"{type(e).__name__}: {e}"
            raise DownloadError(msg, target=url) from e

        content = b"".join(chunks)
        logger.debug("Fetched %s bytes from %s", f"{len(content):,}", url)
        return content

    async def fetch(self, url: str) -> FetchResult:
        """Download a URL and hash the returned bytes.

        Args:
            url: Asset download URL

        Returns:
            FetchResult whose sha256 covers exactly ``content``

        Raises:
            DownloadError: If the download fails

        """
        content = await self.fetch_bytes(url)
        return FetchResult(content=content, sha256=compute_sha256(content))

    async def fetch_text(self, url: str) -> str:
        """Download a small text resource such as a checksum file."""
        content = await self.fetch_bytes(url)
        return content.decode("utf-8", errors="replace")
