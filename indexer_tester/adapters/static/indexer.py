"""Static indexer serving a configured list of results."""

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from indexer_tester.adapters.base import Download, Indexer
from indexer_tester.adapters.http import open_download
from indexer_tester.adapters.static.config import StaticIndexerConfig
from indexer_tester.errors import ConfigMissingError, LoginFailedError
from indexer_tester.models.query import (
    Capabilities,
    IndexerInfo,
    Query,
    ResultItem,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class StaticIndexer(Indexer):
    """Indexer answering searches from its configuration.

    Results are matched on their title against the query keywords. Links
    are downloaded over HTTP, which makes this indexer useful for checking
    that a set of published files is reachable.
    """

    config: StaticIndexerConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: StaticIndexerConfig
    ) -> AsyncGenerator["StaticIndexer", None]:
        """Create indexer with managed session lifecycle."""
        async with aiohttp.ClientSession() as session:
            yield cls(config=config, session=session)

    @property
    def requires_login(self) -> bool:
        """Whether credentials are required."""
        return self.config.require_login

    async def info(self) -> IndexerInfo:
        """Return configured id and link."""
        return IndexerInfo(id=self.config.id, link=self.config.link)

    async def capabilities(self) -> Capabilities:
        """Return configured search modes."""
        return Capabilities(search_modes=self.config.search_modes)

    async def check_has_config(self) -> None:
        """Raise if a credential is blank."""
        if not self.config.username:
            raise ConfigMissingError("Missing required config field 'username'")
        if not self.config.password.get_secret_value():
            raise ConfigMissingError("Missing required config field 'password'")

    async def login(self) -> None:
        """Accept any non-blank credentials."""
        if not self.config.username or not self.config.password.get_secret_value():
            raise LoginFailedError("Login failed: no credentials configured")
        log.debug("Logged in to %s as %s", self.config.id, self.config.username)

    async def search(self, query: Query) -> Sequence[ResultItem]:
        """Return configured results whose title contains the keywords."""
        keywords = query.keywords.lower()
        matches = [
            result
            for result in self.config.results
            if keywords in result.title.lower()
            and (
                not query.categories
                or result.category is None
                or result.category in query.categories
            )
        ]
        if query.limit:
            matches = matches[: query.limit]

        log.debug(
            "Search type=%s keywords=%r returned %d result(s)",
            query.type,
            keywords,
            len(matches),
        )
        return matches

    def download(self, link: str) -> AbstractAsyncContextManager[Download]:
        """Fetch the link over HTTP."""
        return open_download(self.session, link)

    async def ratio(self) -> str:
        """Return the configured ratio."""
        return self.config.ratio
