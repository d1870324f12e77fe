"""
User preferences stored in the key-value store.
"""

import logging
from typing import Optional

from ..config.constants import (
    ENABLE_FALLBACK_KEY, LANGUAGE_KEY, SELECTED_MODEL_KEY, SUMMARY_LENGTH_KEY,
)
from ..config.settings import UserPreferences
from ..data.base import KeyValueStore
from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Stored preferences layered over the configured defaults."""

    def __init__(self, store: KeyValueStore, defaults: Optional[UserPreferences] = None):
        self.store = store
        self.defaults = defaults or UserPreferences()

    async def load(self) -> UserPreferences:
        """Current preferences; unreadable storage yields the defaults."""
        try:
            stored = await self.store.get_many([
                SELECTED_MODEL_KEY, ENABLE_FALLBACK_KEY, LANGUAGE_KEY, SUMMARY_LENGTH_KEY,
            ])
        except StorageError as e:
            logger.error(f"Failed to read preferences, using defaults: {e}")
            stored = {}

        enable_fallback = stored.get(ENABLE_FALLBACK_KEY)
        return UserPreferences(
            selected_model=stored.get(SELECTED_MODEL_KEY) or self.defaults.selected_model,
            enable_fallback=(
                enable_fallback if isinstance(enable_fallback, bool)
                else self.defaults.enable_fallback
            ),
            language=stored.get(LANGUAGE_KEY) or self.defaults.language,
            summary_length=stored.get(SUMMARY_LENGTH_KEY) or self.defaults.summary_length,
        )

    async def set_selected_model(self, model_id: str) -> None:
        await self.store.set(SELECTED_MODEL_KEY, model_id)
        logger.info(f"Selected model set to {model_id}")

    async def set_enable_fallback(self, enabled: bool) -> None:
        await self.store.set(ENABLE_FALLBACK_KEY, enabled)

    async def set_language(self, language: str) -> None:
        await self.store.set(LANGUAGE_KEY, language)

    async def set_summary_length(self, length: str) -> None:
        await self.store.set(SUMMARY_LENGTH_KEY, length)
