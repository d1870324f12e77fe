"""
API key storage and resolution for the remote provider families.
"""

from .backends import (
    CredentialBackend,
    EnvVarBackend,
    EncryptedFileBackend,
    StoreBackend,
    get_backend_for_ref,
)
from .resolver import CredentialResolver, REMOTE_FAMILIES

__all__ = [
    'CredentialBackend',
    'EnvVarBackend',
    'EncryptedFileBackend',
    'StoreBackend',
    'get_backend_for_ref',
    'CredentialResolver',
    'REMOTE_FAMILIES',
]
