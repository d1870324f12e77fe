"""
Exception hierarchy for PageBrief.
"""

from .base import PageBriefError, create_error_context
from .provider import (
    ProviderError,
    ConfigurationError,
    CredentialError,
    ProviderPermissionError,
    TransportError,
    ProtocolError,
    CapabilityUnsupportedError,
)
from .storage import StorageError, AlreadyProcessingError

__all__ = [
    'PageBriefError',
    'create_error_context',
    'ProviderError',
    'ConfigurationError',
    'CredentialError',
    'ProviderPermissionError',
    'TransportError',
    'ProtocolError',
    'CapabilityUnsupportedError',
    'StorageError',
    'AlreadyProcessingError',
]
