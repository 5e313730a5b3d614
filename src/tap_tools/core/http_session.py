"""HTTP session utilities for tap-tools.

Creates aiohttp sessions with an explicit bounded timeout so a hung
connection cannot stall a run forever.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from tap_tools.config import GlobalConfig
from tap_tools.constants import DEFAULT_TIMEOUT_SECONDS, USER_AGENT


def build_timeout(timeout_seconds: int) -> aiohttp.ClientTimeout:
    """Build the client timeout used for API calls and downloads.

    Args:
        timeout_seconds: Base timeout; connect uses it directly, reads get
            three times as long and the whole request sixty times.

    """
    return aiohttp.ClientTimeout(
        total=timeout_seconds * 60,
        sock_read=timeout_seconds * 3,
        sock_connect=timeout_seconds,
    )


@asynccontextmanager
async def create_http_session(
    global_config: GlobalConfig,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Create configured HTTP session.

    Args:
        global_config: Global configuration dictionary

    Yields:
        Configured aiohttp.ClientSession

    """
    network_cfg = global_config.get("network", {})
    timeout_seconds = int(
        network_cfg.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    )

    # Stages run one request at a time
    connector = aiohttp.TCPConnector(limit=4, limit_per_host=2)

    async with aiohttp.ClientSession(
        timeout=build_timeout(timeout_seconds),
        connector=connector,
        headers={"User-Agent": USER_AGENT},
    ) as session:
        yield session
