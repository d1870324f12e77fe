"""
Credential storage backends.

Key references select the backend by prefix:
- env:VARIABLE_NAME   environment variable
- file:filename       Fernet-encrypted file under the keys directory
- store:name          entry in the application's key-value store
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from cryptography.fernet import Fernet, InvalidToken

from ..data.base import KeyValueStore

logger = logging.getLogger(__name__)

MASTER_KEY_ENV = "PAGEBRIEF_MASTER_KEY"
STORE_KEY_PREFIX = "credential:"


class CredentialBackend(ABC):
    """Abstract base class for API key storage backends."""

    prefix: str = ""

    def _parse_ref(self, key_ref: str) -> str:
        if self.prefix and key_ref.startswith(self.prefix):
            return key_ref[len(self.prefix):]
        return key_ref

    @abstractmethod
    async def get_key(self, key_ref: str) -> Optional[str]:
        """
        Retrieve an API key.

        Args:
            key_ref: Key reference (format depends on backend)

        Returns:
            API key value or None if not found
        """
        pass

    @abstractmethod
    async def set_key(self, key_ref: str, key_value: str) -> bool:
        """Store an API key. Returns True if successful."""
        pass

    @abstractmethod
    async def delete_key(self, key_ref: str) -> bool:
        """Delete an API key. Returns True if it existed."""
        pass


class EnvVarBackend(CredentialBackend):
    """Environment variable backend, e.g. env:OPENAI_API_KEY."""

    prefix = "env:"

    async def get_key(self, key_ref: str) -> Optional[str]:
        var_name = self._parse_ref(key_ref)
        value = os.environ.get(var_name)
        if value:
            logger.debug(f"Retrieved key from env var: {var_name}")
        return value

    async def set_key(self, key_ref: str, key_value: str) -> bool:
        var_name = self._parse_ref(key_ref)
        os.environ[var_name] = key_value
        logger.info(f"Set key in env var: {var_name}")
        return True

    async def delete_key(self, key_ref: str) -> bool:
        var_name = self._parse_ref(key_ref)
        if var_name in os.environ:
            del os.environ[var_name]
            logger.info(f"Deleted key from env var: {var_name}")
            return True
        return False


class EncryptedFileBackend(CredentialBackend):
    """
    Encrypted file backend, e.g. file:openai.enc.

    Uses Fernet symmetric encryption with a master key read from the
    environment.
    """

    prefix = "file:"

    def __init__(self, keys_dir: Path, master_key_env: str = MASTER_KEY_ENV):
        self.keys_dir = keys_dir
        self.master_key_env = master_key_env
        self._fernet: Optional[Fernet] = None

    def _get_fernet(self) -> Fernet:
        if self._fernet is None:
            master_key = os.environ.get(self.master_key_env)
            if not master_key:
                raise ValueError(f"Master key not found in environment: {self.master_key_env}")
            try:
                self._fernet = Fernet(master_key.encode())
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid master key format: {e}")
        return self._fernet

    def _path_for(self, key_ref: str) -> Path:
        return self.keys_dir / self._parse_ref(key_ref)

    async def get_key(self, key_ref: str) -> Optional[str]:
        file_path = self._path_for(key_ref)
        if not file_path.exists():
            return None

        try:
            decrypted = self._get_fernet().decrypt(file_path.read_bytes())
        except InvalidToken:
            logger.error(f"Failed to decrypt key file {file_path}: wrong master key or corrupt file")
            return None

        logger.debug(f"Retrieved key from file: {file_path}")
        return decrypted.decode()

    async def set_key(self, key_ref: str, key_value: str) -> bool:
        file_path = self._path_for(key_ref)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        encrypted = self._get_fernet().encrypt(key_value.encode())
        file_path.write_bytes(encrypted)
        file_path.chmod(0o600)
        logger.info(f"Saved encrypted key to file: {file_path}")
        return True

    async def delete_key(self, key_ref: str) -> bool:
        file_path = self._path_for(key_ref)
        if file_path.exists():
            file_path.unlink()
            logger.info(f"Deleted encrypted key file: {file_path}")
            return True
        return False


class StoreBackend(CredentialBackend):
    """Key-value store backend, e.g. store:openai."""

    prefix = "store:"

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _storage_key(self, key_ref: str) -> str:
        return f"{STORE_KEY_PREFIX}{self._parse_ref(key_ref)}"

    async def get_key(self, key_ref: str) -> Optional[str]:
        value = await self.store.get(self._storage_key(key_ref))
        return value if isinstance(value, str) else None

    async def set_key(self, key_ref: str, key_value: str) -> bool:
        await self.store.set(self._storage_key(key_ref), key_value)
        return True

    async def delete_key(self, key_ref: str) -> bool:
        return await self.store.delete(self._storage_key(key_ref))


def get_backend_for_ref(key_ref: str, config: Dict[str, Any]) -> CredentialBackend:
    """
    Get the appropriate backend for a key reference.

    Args:
        key_ref: Key reference (e.g. "env:VAR", "file:name", "store:name")
        config: Backend configuration ("keys_dir", "master_key_env", "store")

    Returns:
        Backend instance; references without a known prefix use env vars
    """
    if key_ref.startswith("file:"):
        keys_dir = Path(config.get("keys_dir", "./data/keys"))
        return EncryptedFileBackend(keys_dir, config.get("master_key_env", MASTER_KEY_ENV))

    if key_ref.startswith("store:"):
        store = config.get("store")
        if store is None:
            raise ValueError("No key-value store configured for store: key references")
        return StoreBackend(store)

    return EnvVarBackend()
