"""Static indexer module."""

from indexer_tester.adapters.static.config import StaticIndexerConfig
from indexer_tester.adapters.static.indexer import StaticIndexer
from indexer_tester.adapters.static.manifest import static_manifest

__all__ = ["StaticIndexer", "StaticIndexerConfig", "static_manifest"]
