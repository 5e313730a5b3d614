"""GitHub API client for release metadata.

Adapts the GitHub releases endpoint into ``Release`` values. This is the
release-metadata collaborator of the resolver: it performs one request per
lookup and leaves retry policy to the caller.
"""

from __future__ import annotations

from typing import Any

import aiohttp
import orjson

from tap_tools.constants import (
    DEFAULT_API_BASE_URL,
    GITHUB_API_ACCEPT,
    GITHUB_API_VERSION,
)
from tap_tools.domain.types import Release
from tap_tools.exceptions import ReleaseFetchError
from tap_tools.logger import get_logger

logger = get_logger(__name__)

HTTP_NOT_FOUND = 404
RATE_LIMIT_WARNING_THRESHOLD = 10


class ReleaseClient:
    """Fetches release metadata from the GitHub REST API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_base_url: str = DEFAULT_API_BASE_URL,
        token: str | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            session: aiohttp session for making requests
            api_base_url: API root, without trailing slash
            token: Optional GitHub token for authenticated requests

        """
        self.session = session
        self.api_base_url = api_base_url.rstrip("/")
        self.token = token

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": GITHUB_API_ACCEPT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def release_url(self, owner: str, repo: str, tag: str | None) -> str:
        """Build the endpoint URL for the latest or a tagged release."""
        base = f"{self.api_base_url}/repos/{owner}/{repo}/releases"
        if tag:
            return f"{base}/tags/{tag}"
        return f"{base}/latest"

    @staticmethod
    def _log_rate_limit(headers: Any) -> None:
        remaining = headers.get("X-RateLimit-Remaining")
        if remaining is None:
            return
        try:
            left = int(remaining)
        except (TypeError, ValueError):
            return
        if left < RATE_LIMIT_WARNING_THRESHOLD:
            logger.warning(
                "GitHub API rate limit low: %d requests remaining", left
            )

    async def _fetch_json(self, url: str, target: str) -> dict[str, Any]:
        logger.debug("Requesting %s", url)
        try:
            async with self.session.get(
                url, headers=self._headers()
            ) as response:
                if response.status == HTTP_NOT_FOUND:
                    msg = "release not found"
                    raise ReleaseFetchError(msg, target=target)
                if response.status != 200:  # noqa: PLR2004
                    msg = f"HTTP {response.status}"
                    raise ReleaseFetchError(msg, target=target)
                self._log_rate_limit(response.headers)
                body = await response.read()
        except (aiohttp.ClientError, TimeoutError) as e:
            msg = f"{type(e).__name__}: {e}"
            raise ReleaseFetchError(msg, target=target) from e

        try:
            data = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            msg = f"invalid JSON response: {e}"
            raise ReleaseFetchError(msg, target=target) from e

        if not isinstance(data, dict):
            msg = "unexpected response shape"
            raise ReleaseFetchError(msg, target=target)
        return data

    async def get_release(
        self, owner: str, repo: str, tag: str | None = None
    ) -> Release:
        """Fetch one release.

        Args:
            owner: Repository owner
            repo: Repository name
            tag: Release tag, or None for the latest stable release

        Returns:
            Release with its downloadable assets

        Raises:
            ReleaseFetchError: If the release is missing or the request fails

        """
        target = f"{owner}/{repo}@{tag}" if tag else f"{owner}/{repo}"
        data = await self._fetch_json(
            self.release_url(owner, repo, tag), target
        )
        release = Release.from_api_response(owner, repo, data)
        if not release.tag_name:
            msg = "response has no tag_name"
            raise ReleaseFetchError(msg, target=target)

        logger.debug(
            "Fetched release %s for %s with %d asset(s)",
            release.tag_name,
            target,
            len(release.assets),
        )
        return release
