"""Tests for result validation."""

import pytest

from indexer_tester.errors import DownloadFailedError, InvalidResultError
from indexer_tester.testing.factories import ResultItemFactory
from indexer_tester.testing.fakes import FakeIndexer
from indexer_tester.validator import assert_valid_results


@pytest.fixture
def indexer() -> FakeIndexer:
    """Create an indexer with no content."""
    return FakeIndexer()


@pytest.mark.parametrize(
    ("overrides", "field", "message"),
    [
        ({"title": ""}, "title", "Result row 2 has empty title"),
        ({"size": 0}, "size", "Result row 2 has zero size"),
        ({"size": -5}, "size", "Result row 2 has zero size"),
        ({"link": ""}, "link", "Result row 2 has blank link"),
        ({"site": ""}, "site", "Result row 2 has blank site"),
    ],
)
async def test_rejects_result_missing_required_field(
    indexer: FakeIndexer, overrides: dict[str, object], field: str, message: str
) -> None:
    """Cites the 1-based index and field of the first invalid result."""
    results = [
        ResultItemFactory.build(),
        ResultItemFactory.build(**overrides),
        ResultItemFactory.build(),
    ]

    with pytest.raises(InvalidResultError) as exc_info:
        await assert_valid_results(results, indexer)

    assert exc_info.value.index == 2
    assert exc_info.value.field == field
    assert str(exc_info.value) == message


async def test_accepts_valid_results_without_downloading(
    indexer: FakeIndexer,
) -> None:
    """Valid results pass and no link is fetched when download is disabled."""
    results = ResultItemFactory.batch(3)

    await assert_valid_results(results, indexer)

    assert indexer.downloads == []


async def test_accepts_empty_results(indexer: FakeIndexer) -> None:
    """An empty result set is valid."""
    await assert_valid_results([], indexer, download=True)


async def test_never_fetches_magnet_links(indexer: FakeIndexer) -> None:
    """Magnet links are presumed valid without fetching."""
    result = ResultItemFactory.build(
        link="magnet:?xt=urn:btih:c12fe1c06bba254a9dc9f519b335aa7c1367a88a"
    )

    await assert_valid_results([result], indexer, download=True)

    assert indexer.downloads == []


async def test_downloads_and_closes_every_link() -> None:
    """Fetches each non-magnet link, drains it and releases the stream."""
    first = ResultItemFactory.build(link="https://tracker.test/1.torrent")
    second = ResultItemFactory.build(link="https://tracker.test/2.torrent")
    indexer = FakeIndexer(
        contents={
            first.link: [b"d8:announce", b"e"],
            second.link: [b"d4:infoe"],
        }
    )

    await assert_valid_results([first, second], indexer, download=True)

    assert indexer.downloads == [first.link, second.link]
    assert indexer.closed == [first.link, second.link]


async def test_raises_when_link_cannot_be_fetched() -> None:
    """Wraps fetch errors as DownloadFailedError, keeping the cause."""
    result = ResultItemFactory.build()
    cause = ConnectionError("connection reset")
    indexer = FakeIndexer(download_error=cause)

    with pytest.raises(DownloadFailedError, match="connection reset") as exc_info:
        await assert_valid_results([result], indexer, download=True)

    assert "Result row 1" in str(exc_info.value)
    assert exc_info.value.__cause__ is cause


async def test_raises_when_stream_cannot_be_drained() -> None:
    """A read error mid-stream fails the result and still closes the stream."""
    result = ResultItemFactory.build(link="https://tracker.test/broken.torrent")
    indexer = FakeIndexer(
        contents={result.link: [b"d8:announce", OSError("truncated")]}
    )

    with pytest.raises(DownloadFailedError, match="truncated"):
        await assert_valid_results([result], indexer, download=True)

    assert indexer.closed == [result.link]


async def test_passes_download_failed_error_through() -> None:
    """DownloadFailedError raised by the indexer is not rewrapped."""
    error = DownloadFailedError("404 Not Found")
    indexer = FakeIndexer(download_error=error)

    with pytest.raises(DownloadFailedError) as exc_info:
        await assert_valid_results(
            [ResultItemFactory.build()], indexer, download=True
        )

    assert exc_info.value is error


async def test_stops_at_first_invalid_result() -> None:
    """Results after an invalid one are neither checked nor downloaded."""
    valid = ResultItemFactory.build(link="https://tracker.test/ok.torrent")
    invalid = ResultItemFactory.build(title="")
    later = ResultItemFactory.build(link="https://tracker.test/later.torrent")
    indexer = FakeIndexer(contents={valid.link: [b"ok"], later.link: [b"ok"]})

    with pytest.raises(InvalidResultError):
        await assert_valid_results([valid, invalid, later], indexer, download=True)

    assert indexer.downloads == [valid.link]
