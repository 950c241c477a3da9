"""Errors raised by conformance steps."""

from collections.abc import Iterator
from contextlib import contextmanager


class IndexerTestError(Exception):
    """Base class for conformance step failures."""


class ConfigMissingError(IndexerTestError):
    """Raised when required login configuration is absent."""


class LoginFailedError(IndexerTestError):
    """Raised when the indexer fails to log in."""


class SearchFailedError(IndexerTestError):
    """Raised when a search request fails."""


class InvalidResultError(IndexerTestError):
    """Raised when a search result is missing a required field."""

    def __init__(self, index: int, field: str, problem: str = "empty") -> None:
        """Create an error for the 1-based result ``index`` and ``field``."""
        super().__init__(f"Result row {index} has {problem} {field}")
        self.index = index
        self.field = field


class DownloadFailedError(IndexerTestError):
    """Raised when a result link cannot be fetched or fully read."""


class UnexpectedResultsError(IndexerTestError):
    """Raised when a query that must not match anything returns results."""

    def __init__(self, count: int) -> None:
        """Create an error for ``count`` unexpected results."""
        super().__init__(f"Expected no results, got {count}")
        self.count = count


class RatioFailedError(IndexerTestError):
    """Raised when the indexer fails to report a ratio."""


@contextmanager
def reraise_as(kind: type[IndexerTestError]) -> Iterator[None]:
    """Re-raise foreign exceptions from indexer calls as ``kind``.

    Conformance errors pass through unchanged. Any other exception keeps
    its message and is chained as the cause.
    """
    try:
        yield
    except IndexerTestError:
        raise
    except Exception as exc:
        raise kind(str(exc) or type(exc).__name__) from exc
