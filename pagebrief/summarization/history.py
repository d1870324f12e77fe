"""
Recent summary history, newest first.
"""

import logging
from typing import List, Optional

from ..config.constants import HISTORY_KEY, HISTORY_LIMIT
from ..data.base import KeyValueStore
from ..exceptions import StorageError
from ..models.history import SummaryHistoryEntry
from ..models.summary import SummarizeResult

logger = logging.getLogger(__name__)


class SummaryHistory:
    """Bounded list of past summaries kept in the key-value store."""

    def __init__(self, store: KeyValueStore, limit: int = HISTORY_LIMIT):
        self.store = store
        self.limit = limit

    async def _load(self) -> List[dict]:
        data = await self.store.get(HISTORY_KEY, [])
        return data if isinstance(data, list) else []

    async def add(self, url: str, title: str, result: SummarizeResult) -> Optional[SummaryHistoryEntry]:
        """Prepend a completed result, dropping entries beyond the limit."""
        entry = SummaryHistoryEntry(
            url=url,
            title=title,
            summary=result.summary_text,
            model=result.used_provider_id,
            time=result.time_label,
            metrics=result.metrics.to_dict(),
        )

        try:
            entries = await self._load()
            entries.insert(0, entry.to_dict())
            await self.store.set(HISTORY_KEY, entries[:self.limit])
        except StorageError as e:
            logger.error(f"Failed to save summary history: {e}")
            return None

        return entry

    async def list(self, limit: Optional[int] = None) -> List[SummaryHistoryEntry]:
        try:
            entries = await self._load()
        except StorageError as e:
            logger.error(f"Failed to read summary history: {e}")
            return []

        if limit is not None:
            entries = entries[:limit]
        return [SummaryHistoryEntry.from_dict(item) for item in entries if isinstance(item, dict)]

    async def get(self, entry_id: str) -> Optional[SummaryHistoryEntry]:
        for entry in await self.list():
            if entry.id == entry_id:
                return entry
        return None

    async def clear(self) -> None:
        try:
            await self.store.delete(HISTORY_KEY)
        except StorageError as e:
            logger.error(f"Failed to clear summary history: {e}")
