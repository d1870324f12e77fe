"""
Credential resolver for the remote provider families.

For each family the key comes from:
1. The configured key reference (env:, file: or store:), if it yields a value
2. The key loaded from the environment at startup
3. Empty string, which the invoker reports as a missing API key
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from ..config.settings import ProviderCredentials, mask_key
from ..exceptions import StorageError
from ..models.base import utc_now
from .backends import get_backend_for_ref

logger = logging.getLogger(__name__)

REMOTE_FAMILIES = ("openai", "gemini", "anthropic")
CACHE_TTL = timedelta(minutes=5)


class CredentialResolver:
    """Resolves the API keys used for one summarization call."""

    def __init__(self,
                 defaults: Optional[ProviderCredentials] = None,
                 key_refs: Optional[Dict[str, str]] = None,
                 backend_config: Optional[Dict[str, Any]] = None):
        """
        Initialize the resolver.

        Args:
            defaults: Keys loaded from the environment
            key_refs: Family value -> key reference
            backend_config: Configuration for the storage backends
        """
        self.defaults = defaults or ProviderCredentials()
        self.key_refs: Dict[str, str] = dict(key_refs or {})
        self.backend_config = backend_config or {}
        self._key_cache: Dict[str, Tuple[str, datetime]] = {}

    async def resolve(self) -> ProviderCredentials:
        """Resolve keys for every remote family."""
        keys = {}
        for family in REMOTE_FAMILIES:
            keys[family] = await self.resolve_family(family)

        return ProviderCredentials(
            openai_api_key=keys["openai"],
            gemini_api_key=keys["gemini"],
            anthropic_api_key=keys["anthropic"],
        )

    async def resolve_family(self, family: str) -> str:
        key_ref = self.key_refs.get(family)
        if key_ref:
            try:
                key = await self._fetch_key(key_ref)
            except (StorageError, ValueError, OSError) as e:
                logger.warning(f"Failed to fetch {family} key from {key_ref}: {e}")
                key = None
            if key:
                return key
            logger.debug(f"Key reference {key_ref} is empty; using default {family} key")

        return self.defaults.for_family(family)

    async def _fetch_key(self, key_ref: str) -> Optional[str]:
        if key_ref in self._key_cache:
            cached_key, expiry = self._key_cache[key_ref]
            if utc_now() < expiry:
                return cached_key

        backend = get_backend_for_ref(key_ref, self.backend_config)
        key = await backend.get_key(key_ref)

        if key:
            self._key_cache[key_ref] = (key, utc_now() + CACHE_TTL)

        return key

    async def set_credential(self, family: str, api_key: str, key_ref: Optional[str] = None) -> str:
        """
        Store an API key for a family.

        Args:
            family: "openai", "gemini" or "anthropic"
            api_key: API key value
            key_ref: Optional key reference; defaults to the store backend
                when one is configured, else an environment variable

        Returns:
            Key reference that was used
        """
        if family not in REMOTE_FAMILIES:
            raise ValueError(f"Unknown provider family: {family}")

        if not key_ref:
            if self.backend_config.get("store") is not None:
                key_ref = f"store:{family}"
            else:
                key_ref = f"env:PAGEBRIEF_{family.upper()}_API_KEY"

        backend = get_backend_for_ref(key_ref, self.backend_config)
        await backend.set_key(key_ref, api_key)

        self.key_refs[family] = key_ref
        self._key_cache.pop(key_ref, None)

        logger.info(f"Set {family} API key {mask_key(api_key)} with ref {key_ref}")
        return key_ref

    async def remove_credential(self, family: str) -> bool:
        """Remove the stored key for a family. Returns True if one was deleted."""
        key_ref = self.key_refs.pop(family, None)
        if not key_ref:
            return False

        backend = get_backend_for_ref(key_ref, self.backend_config)
        result = await backend.delete_key(key_ref)
        self._key_cache.pop(key_ref, None)

        logger.info(f"Removed {family} API key with ref {key_ref}")
        return result

    def clear_caches(self) -> None:
        self._key_cache.clear()
