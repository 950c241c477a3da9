"""Configuration for the static indexer."""

from collections.abc import Sequence

from pydantic import BaseModel, Field, SecretStr

from indexer_tester.models.query import ResultItem, SearchMode


class StaticIndexerConfig(BaseModel):
    """Configuration for the static indexer."""

    id: str = "static"
    link: str = "http://localhost/"
    search_modes: Sequence[SearchMode] = Field(
        default_factory=lambda: [SearchMode(key="search")]
    )
    results: Sequence[ResultItem] = Field(default_factory=list)
    require_login: bool = False
    username: str = ""
    password: SecretStr = SecretStr("")
    ratio: str = "1.0"
