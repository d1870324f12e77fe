"""
Network access grants for remote provider origins.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Set


class NetworkPermissions(ABC):
    """Answers whether requests to a provider origin have been granted."""

    @abstractmethod
    async def has_origin(self, origin: str) -> bool:
        """Check whether the origin pattern (e.g. "https://api.openai.com/*") is granted."""
        pass


class StaticPermissions(NetworkPermissions):
    """In-process set of granted origins, seeded from configuration."""

    def __init__(self, granted: Optional[Iterable[str]] = None):
        self._granted: Set[str] = set(granted or [])

    async def has_origin(self, origin: str) -> bool:
        return origin in self._granted
