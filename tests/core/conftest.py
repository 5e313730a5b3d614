"""Pytest configuration and fixtures for core module tests.

HTTP responses are AsyncMock objects standing in for aiohttp responses.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio


async def async_chunk_gen(chunks: list[bytes]):
    for chunk in chunks:
        yield chunk


def make_response(
    content: bytes = b"",
    status: int = 200,
    headers: dict[str, str] | None = None,
    chunk_size: int | None = None,
) -> AsyncMock:
    """Build a mock aiohttp response usable with ``async with``."""
    response = AsyncMock()
    response.__aenter__.return_value = response
    response.status = status
    response.headers = (
        headers
        if headers is not None
        else {"Content-Length": str(len(content))}
    )
    if chunk_size:
        chunks = [
            content[i : i + chunk_size]
            for i in range(0, len(content), chunk_size)
        ]
    else:
        chunks = [content] if content else []
    response.content.iter_chunked = lambda size: async_chunk_gen(chunks)
    response.read = AsyncMock(return_value=content)
    return response


@pytest_asyncio.fixture
def mock_session() -> MagicMock:
    """Provide a mock aiohttp.ClientSession.

    Returns:
        MagicMock configured for async context manager protocol.

    """
    return MagicMock()


@pytest.fixture
def response_factory():
    """Provide the mock response builder."""
    return make_response
