"""Models for indexer metadata, search queries and search results."""

from collections.abc import Sequence
from datetime import datetime

from pydantic import Field

from indexer_tester.models.base import Model

CATEGORY_TV_SD = 5030
CATEGORY_TV_HD = 5040

SEARCH_MODE_TV = "tv-search"


class IndexerInfo(Model):
    """Descriptive metadata of an indexer, used only for reporting."""

    id: str = Field(..., description="Indexer identifier")
    link: str = Field(..., description="Base URL of the indexed site")


class SearchMode(Model):
    """A kind of query supported by an indexer."""

    key: str = Field(..., description="Mode name (e.g., 'search', 'tv-search')")
    categories: Sequence[int] = Field(
        default_factory=tuple,
        description="Category identifiers applicable to this mode",
    )


class Capabilities(Model):
    """Capabilities declared by an indexer."""

    search_modes: Sequence[SearchMode] = Field(
        default_factory=tuple, description="Supported search modes"
    )


class Query(Model):
    """A search request issued against an indexer."""

    type: str = Field(default="search", description="Search mode key")
    limit: int = Field(default=0, ge=0, description="Result limit (0 means no limit)")
    categories: Sequence[int] = Field(
        default_factory=tuple, description="Category filter"
    )
    q: str = Field(default="", description="Free-text filter")
    series: str = Field(default="", description="Series name filter")

    @property
    def keywords(self) -> str:
        """Combined free-text and series filter."""
        return " ".join(part for part in (self.series, self.q) if part)


class ResultItem(Model):
    """A single search hit returned by an indexer.

    Required fields are not constrained here so that malformed results
    can be represented and reported by the validator.
    """

    title: str = ""
    size: int = 0
    link: str = ""
    site: str = ""
    guid: str | None = None
    comments: str | None = None
    category: int | None = None
    seeders: int | None = None
    peers: int | None = None
    publish_date: datetime | None = None
