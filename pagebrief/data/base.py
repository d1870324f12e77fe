"""
Abstract key-value storage interface.

Preferences, credentials, model metrics and summary history all live in a
KeyValueStore. Values must be JSON-serializable.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional


class KeyValueStore(ABC):
    """Abstract async key-value store."""

    @abstractmethod
    async def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Read a value.

        Args:
            key: Storage key
            default: Returned when the key is absent

        Returns:
            The stored value or default

        Raises:
            StorageError: The backend could not be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """
        Write a value, replacing any existing one.

        Raises:
            StorageError: The backend could not be written
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        pass

    async def get_many(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Read several keys; absent keys are omitted from the result."""
        missing = object()
        result = {}
        for key in keys:
            value = await self.get(key, missing)
            if value is not missing:
                result[key] = value
        return result

    async def connect(self) -> None:
        """Open backend resources. No-op for in-memory stores."""
        pass

    async def disconnect(self) -> None:
        """Release backend resources."""
        pass

    async def __aenter__(self) -> "KeyValueStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
