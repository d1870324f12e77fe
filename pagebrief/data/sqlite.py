"""
SQLite key-value store using aiosqlite.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional

import aiosqlite

from ..exceptions import StorageError
from ..models.base import utc_now
from .base import KeyValueStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""


class SQLiteKeyValueStore(KeyValueStore):
    """Key-value store persisted in a single SQLite table."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Open the connection and create the table if needed."""
        async with self._lock:
            if self._connection is not None:
                return

            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            try:
                conn = await aiosqlite.connect(self.db_path)
                # Enable WAL mode for concurrent readers
                await conn.execute("PRAGMA journal_mode=WAL")
                await conn.execute(_SCHEMA)
                await conn.commit()
            except (aiosqlite.Error, OSError) as e:
                raise StorageError(
                    f"Failed to open key-value store at {self.db_path}: {e}",
                    operation="connect",
                    cause=e,
                )

            self._connection = conn
            logger.info(f"Opened SQLite key-value store at {self.db_path}")

    async def disconnect(self) -> None:
        """Close the connection."""
        async with self._lock:
            if self._connection is None:
                return
            await self._connection.close()
            self._connection = None

    @asynccontextmanager
    async def _get_connection(self):
        if self._connection is None:
            await self.connect()
        yield self._connection

    async def get(self, key: str, default: Optional[Any] = None) -> Any:
        try:
            async with self._get_connection() as conn:
                async with conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)) as cursor:
                    row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to read {key}: {e}", operation="get", key=key, cause=e)

        if row is None:
            return default

        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt value stored for {key}", operation="get", key=key, cause=e)

    async def set(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for {key} is not JSON-serializable", operation="set", key=key, cause=e)

        try:
            async with self._get_connection() as conn:
                await conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                                   updated_at = excluded.updated_at
                    """,
                    (key, encoded, utc_now().isoformat()),
                )
                await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to write {key}: {e}", operation="set", key=key, cause=e)

    async def delete(self, key: str) -> bool:
        try:
            async with self._get_connection() as conn:
                cursor = await conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                await conn.commit()
                return cursor.rowcount > 0
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to delete {key}: {e}", operation="delete", key=key, cause=e)
