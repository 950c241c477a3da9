"""Validation of search results returned by an indexer."""

import logging
from collections.abc import Sequence

from yarl import URL

from indexer_tester.adapters.base import Indexer
from indexer_tester.errors import DownloadFailedError, InvalidResultError
from indexer_tester.models.query import ResultItem

log = logging.getLogger(__name__)

# Links with these schemes reference an identifier, not a retrievable document.
NO_FETCH_SCHEMES = frozenset(["magnet"])


async def assert_valid_results(
    results: Sequence[ResultItem],
    indexer: Indexer,
    *,
    download: bool = False,
) -> None:
    """Check that every result has its required fields set.

    Args:
        results: Results returned by a search
        indexer: Indexer used to fetch result links
        download: Also fetch and fully read every fetchable result link

    Raises:
        InvalidResultError: If a result has an empty title, link or site,
            or a non-positive size
        DownloadFailedError: If a result link cannot be fetched or read

    """
    for index, result in enumerate(results, start=1):
        if not result.title:
            raise InvalidResultError(index, "title")
        if result.size <= 0:
            raise InvalidResultError(index, "size", "zero")
        if not result.link:
            raise InvalidResultError(index, "link", "blank")
        if not result.site:
            raise InvalidResultError(index, "site", "blank")

        if download:
            await assert_downloadable(index, result, indexer)


async def assert_downloadable(index: int, result: ResultItem, indexer: Indexer) -> None:
    """Fetch a result link and drain its content.

    The content is discarded. The stream is closed before returning, even if
    reading it fails.
    """
    try:
        scheme = URL(result.link).scheme
    except ValueError as exc:
        raise InvalidResultError(index, "link", "invalid") from exc

    if scheme in NO_FETCH_SCHEMES:
        log.debug("Result row %d has %s link, not fetching", index, scheme)
        return

    received = 0
    try:
        async with indexer.download(result.link) as download:
            async for chunk in download.content:
                received += len(chunk)
    except DownloadFailedError:
        raise
    except Exception as exc:
        reason = str(exc) or type(exc).__name__
        raise DownloadFailedError(
            f"Result row {index} download failed: {reason}"
        ) from exc

    log.debug("Result row %d downloaded %d byte(s)", index, received)
