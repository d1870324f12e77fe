"""
In-memory key-value store.
"""

import copy
from typing import Any, Dict, Optional

from .base import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; values are deep-copied on the way in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    async def get(self, key: str, default: Optional[Any] = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def __len__(self) -> int:
        return len(self._data)
