"""HTTP download support for indexers built on aiohttp."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import aiohttp

from indexer_tester.adapters.base import Download
from indexer_tester.errors import DownloadFailedError

log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


@asynccontextmanager
async def open_download(
    session: aiohttp.ClientSession,
    link: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AsyncGenerator[Download, None]:
    """Open a result link over HTTP.

    The response is released when the context exits.

    Raises:
        DownloadFailedError: If the request fails or returns a non-2xx status

    """
    log.debug("Downloading %s", link)
    try:
        response = await session.get(link)
    except aiohttp.ClientError as exc:
        raise DownloadFailedError(f"Failed to download {link}: {exc}") from exc

    async with response:
        if not 200 <= response.status < 300:
            raise DownloadFailedError(
                f"Failed to download {link}: {response.status} {response.reason}"
            )
        yield Download(
            content=response.content.iter_chunked(chunk_size),
            size=response.content_length,
        )
