"""End-to-end conformance runs against the static indexer."""

import io

from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from indexer_tester.adapters.static import StaticIndexer, StaticIndexerConfig
from indexer_tester.errors import ConfigMissingError, DownloadFailedError
from indexer_tester.models.query import SearchMode
from indexer_tester.tester import TesterOptions, run_conformance
from indexer_tester.testing.factories import ResultItemFactory

TORRENT_URL = "http://tracker.test/download/1.torrent"
MAGNET_URL = "magnet:?xt=urn:btih:c12fe1c06bba254a9dc9f519b335aa7c1367a88a"


def make_config(**overrides: object) -> StaticIndexerConfig:
    """Create a config with one downloadable and one magnet result."""
    values: dict[str, object] = {
        "id": "demo",
        "link": "http://tracker.test/",
        "search_modes": [SearchMode(key="search"), SearchMode(key="tv-search")],
        "results": [
            ResultItemFactory.build(title="Big Buck Bunny", link=TORRENT_URL),
            ResultItemFactory.build(title="Sintel", link=MAGNET_URL),
        ],
    }
    values.update(overrides)
    return StaticIndexerConfig.model_validate(values)


async def test_passes_with_downloads(aioresponses: aioresponses_cls) -> None:
    """Every step passes and only the torrent link is fetched."""
    aioresponses.get(TORRENT_URL, status=200, body=b"d8:announce3:urle", repeat=True)
    output = io.StringIO()

    async with StaticIndexer.from_config(make_config()) as indexer:
        result = await run_conformance(
            indexer, TesterOptions(download=True), output=output
        )

    assert result.succeeded
    assert len(result.outcomes) == 4
    assert output.getvalue().splitlines()[-1] == "→ Indexer demo is OK"


async def test_fails_on_unreachable_link(aioresponses: aioresponses_cls) -> None:
    """A link answering with an error status fails the first search probe."""
    aioresponses.get(TORRENT_URL, status=500)
    output = io.StringIO()

    async with StaticIndexer.from_config(make_config()) as indexer:
        result = await run_conformance(
            indexer, TesterOptions(download=True), output=output
        )

    assert isinstance(result.error, DownloadFailedError)
    assert len(result.outcomes) == 1
    assert "→ Indexer demo FAILED with" in output.getvalue()


async def test_fails_on_missing_credentials() -> None:
    """An indexer requiring login without credentials fails the config check."""
    config = make_config(require_login=True, password=SecretStr(""), username="")
    output = io.StringIO()

    async with StaticIndexer.from_config(config) as indexer:
        result = await run_conformance(indexer, output=output)

    assert isinstance(result.error, ConfigMissingError)
    assert [outcome.label for outcome in result.outcomes] == [
        "Testing required config is available"
    ]
