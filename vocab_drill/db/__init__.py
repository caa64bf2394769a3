"""Storage media for persisted review stats."""

import logging

from vocab_drill.config import DrillSettings, get_settings

from .kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore, StorageError
from .cosmos import (
    CosmosKeyValueStore,
    close_client,
    get_database,
    get_stats_container,
)

logger = logging.getLogger(__name__)


def get_key_value_store(settings: DrillSettings | None = None, partition_key: str = "default") -> KeyValueStore:
    """Build the key-value store selected by DRILL_STORAGE_BACKEND."""
    settings = settings or get_settings()
    backend = settings.storage_backend

    if backend == "memory":
        logger.info("Using in-memory review stat storage (not persisted across processes)")
        return MemoryKeyValueStore()
    if backend == "file":
        logger.info("Using file review stat storage in %s", settings.storage_dir)
        return FileKeyValueStore(settings.storage_dir)
    if backend == "cosmos":
        logger.info("Using Cosmos DB review stat storage (partition %s)", partition_key)
        return CosmosKeyValueStore(partition_key=partition_key)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "CosmosKeyValueStore",
    "StorageError",
    "get_key_value_store",
    "get_database",
    "get_stats_container",
    "close_client",
]
