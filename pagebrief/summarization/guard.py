"""
Per-target "already processing" flag.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Set

from ..exceptions import AlreadyProcessingError

logger = logging.getLogger(__name__)


class ProcessingGuard:
    """Tracks targets (e.g. browser tabs) with a summary in flight.

    Not a lock: a second request for a busy target is rejected, not queued.
    """

    def __init__(self):
        self._active: Set[str] = set()

    def try_acquire(self, target_id: str) -> bool:
        if target_id in self._active:
            return False
        self._active.add(target_id)
        return True

    def release(self, target_id: str) -> None:
        self._active.discard(target_id)

    def is_processing(self, target_id: str) -> bool:
        return target_id in self._active

    @asynccontextmanager
    async def hold(self, target_id: str) -> AsyncIterator[None]:
        """Hold the flag for the duration of the block.

        Raises:
            AlreadyProcessingError: The target is already being processed
        """
        if not self.try_acquire(target_id):
            logger.info(f"Ignoring request for {target_id}: already processing")
            raise AlreadyProcessingError(target_id)
        try:
            yield
        finally:
            self.release(target_id)

    def __len__(self) -> int:
        return len(self._active)
