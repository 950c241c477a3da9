"""Abstract base class for indexers under test."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from indexer_tester.models.query import (
    Capabilities,
    IndexerInfo,
    Query,
    ResultItem,
)


@dataclass(frozen=True, kw_only=True)
class Download:
    """Content returned for a result link.

    The stream is only valid while the context manager returned by
    ``Indexer.download`` is open.
    """

    content: AsyncIterator[bytes]
    size: int | None = None


@dataclass(frozen=True, kw_only=True)
class Indexer(ABC):
    """Abstract base for search-provider adapters.

    The conformance tester only reads from and invokes an indexer; it never
    mutates it. Implementations may raise the errors from
    ``indexer_tester.errors`` directly; any other exception is reported under
    the kind of the step that triggered it.
    """

    @property
    @abstractmethod
    def requires_login(self) -> bool:
        """Whether the indexer declares a required login configuration."""

    @abstractmethod
    async def info(self) -> IndexerInfo:
        """Return descriptive metadata for reporting."""

    @abstractmethod
    async def capabilities(self) -> Capabilities:
        """Return the declared search modes."""

    @abstractmethod
    async def check_has_config(self) -> None:
        """Verify that the required credential fields are present.

        Raises:
            ConfigMissingError: If a required field is missing

        """

    @abstractmethod
    async def login(self) -> None:
        """Log in to the site.

        Raises:
            LoginFailedError: On bad or missing credentials

        """

    @abstractmethod
    async def search(self, query: Query) -> Sequence[ResultItem]:
        """Execute a search.

        Args:
            query: Query built for a single conformance step

        Returns:
            Matching results

        Raises:
            SearchFailedError: On transport or parsing errors

        """

    @abstractmethod
    def download(self, link: str) -> AbstractAsyncContextManager[Download]:
        """Open the content behind a result link.

        The returned context manager must release the underlying stream on
        exit, whether or not the content was fully read.

        Raises:
            DownloadFailedError: If the link cannot be fetched

        """

    @abstractmethod
    async def ratio(self) -> str:
        """Return the account ratio reported by the site.

        Raises:
            RatioFailedError: If the ratio cannot be retrieved

        """
