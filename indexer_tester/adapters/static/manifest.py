"""Static indexer manifest."""

from indexer_tester.adapters.manifest import IndexerManifest
from indexer_tester.adapters.static.config import StaticIndexerConfig
from indexer_tester.adapters.static.indexer import StaticIndexer

static_manifest = IndexerManifest(
    config_cls=StaticIndexerConfig,
    indexer_factory=StaticIndexer.from_config,
)
