"""
Provider invocation errors.

Each class maps to one failure mode of a provider attempt. They are raised
inside invokers and converted to InvocationFailure values at the invoker
boundary, so the pipeline never sees them as exceptions.
"""

from typing import Any, Dict, Optional

from .base import PageBriefError


class ProviderError(PageBriefError):
    """Failure of a single provider attempt."""

    default_code = "PROVIDER_ERROR"

    def __init__(self,
                 provider: str,
                 message: str,
                 error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None,
                 retryable: bool = False,
                 cause: Optional[Exception] = None):
        context = dict(context or {})
        context.setdefault("provider", provider)
        super().__init__(
            message=message,
            error_code=error_code or self.default_code,
            context=context,
            retryable=retryable,
            cause=cause,
        )
        self.provider = provider


class ConfigurationError(ProviderError):
    """Unknown model id. Terminal, never retried."""

    default_code = "UNKNOWN_MODEL"

    def __init__(self, model_id: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            provider=model_id,
            message="Unknown model",
            context={**(context or {}), "model_id": model_id},
        )
        self.model_id = model_id


class CredentialError(ProviderError):
    """Missing or empty API key for a remote provider."""

    default_code = "MISSING_API_KEY"

    def __init__(self, provider: str):
        super().__init__(
            provider=provider,
            message=f"No API key configured for {provider}",
        )


class ProviderPermissionError(ProviderError):
    """Network access to the provider's origin has not been granted."""

    default_code = "PERMISSION_DENIED"

    def __init__(self, provider: str, origin: str):
        super().__init__(
            provider=provider,
            message=(
                f"Permission to access {provider} was denied. "
                f"Please re-grant access to {origin} in the settings and try again."
            ),
            context={"origin": origin},
        )
        self.origin = origin


class TransportError(ProviderError):
    """Network, DNS or timeout failure below the HTTP layer."""

    default_code = "TRANSPORT_ERROR"

    def __init__(self, provider: str, message: str, cause: Optional[Exception] = None):
        super().__init__(
            provider=provider,
            message=message,
            retryable=True,
            cause=cause,
        )


class ProtocolError(ProviderError):
    """Non-2xx status or a response body that does not match the envelope."""

    default_code = "PROTOCOL_ERROR"

    def __init__(self,
                 provider: str,
                 message: str,
                 status_code: Optional[int] = None,
                 cause: Optional[Exception] = None):
        super().__init__(
            provider=provider,
            message=message,
            context={"status_code": status_code} if status_code is not None else None,
            retryable=status_code is not None and status_code >= 500,
            cause=cause,
        )
        self.status_code = status_code

    @classmethod
    def for_status(cls, provider: str, status_code: int) -> "ProtocolError":
        return cls(
            provider,
            f"{provider} API request failed with status {status_code}",
            status_code=status_code,
        )

    @classmethod
    def invalid_format(cls, provider: str, cause: Optional[Exception] = None) -> "ProtocolError":
        return cls(provider, f"Invalid response format from {provider}", cause=cause)


class CapabilityUnsupportedError(ProviderError):
    """The on-device model is not available on this runtime."""

    default_code = "LOCAL_UNSUPPORTED"

    def __init__(self, provider: str, message: Optional[str] = None):
        super().__init__(
            provider=provider,
            message=message or "On-device summarization is not supported on this runtime",
        )
