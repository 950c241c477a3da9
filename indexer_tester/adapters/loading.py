"""Loading of indexers from entry points."""

from importlib.metadata import entry_points
from typing import Any

from indexer_tester.adapters.manifest import IndexerManifest

ENTRY_POINT_GROUP = "indexer_tester.indexers"


class IndexerNotFoundError(Exception):
    """Raised when an indexer is not found."""


def load_indexer_manifest(key: str) -> IndexerManifest[Any]:
    """Load an indexer manifest by key.

    Args:
        key: The indexer key as registered in pyproject.toml (e.g., "static")

    Returns:
        The indexer manifest instance

    Raises:
        IndexerNotFoundError: If no indexer with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: IndexerManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise IndexerNotFoundError(
        f"Indexer '{key}' not found. Available indexers: {available}"
    )
