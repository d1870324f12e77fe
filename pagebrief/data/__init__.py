"""
Key-value storage backends.
"""

import logging

from ..config.settings import StorageConfig
from .base import KeyValueStore
from .memory import MemoryKeyValueStore
from .sqlite import SQLiteKeyValueStore

logger = logging.getLogger(__name__)


def create_store(config: StorageConfig) -> KeyValueStore:
    """Create the store selected by the storage configuration."""
    if config.backend == "sqlite":
        return SQLiteKeyValueStore(config.sqlite_path)
    if config.backend == "memory":
        logger.warning("Using in-memory storage; metrics and history are not persisted")
        return MemoryKeyValueStore()
    raise ValueError(f"Unsupported storage backend: {config.backend}")


__all__ = [
    'KeyValueStore',
    'MemoryKeyValueStore',
    'SQLiteKeyValueStore',
    'create_store',
]
