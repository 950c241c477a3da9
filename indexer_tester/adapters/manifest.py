"""Indexer manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from indexer_tester.adapters.base import Indexer


@dataclass(frozen=True, kw_only=True)
class IndexerManifest[ConfigT: BaseModel]:
    """Manifest describing an indexer plugin.

    The manifest contains references to the configuration class and the
    indexer factory function for lazy loading of indexers based on their key.
    """

    config_cls: type[ConfigT]
    indexer_factory: Callable[[ConfigT], AbstractAsyncContextManager[Indexer]]
