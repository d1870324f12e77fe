"""
Provider invoker abstractions.

Every backend family implements ProviderInvoker. Implementations raise the
typed errors from pagebrief.exceptions; ProviderInvoker.invoke() converts
them (and anything unexpected) into InvocationFailure values so callers
always receive an InvocationResult.

Example usage:
    invoker = OpenAIInvoker(permissions=StaticPermissions([OPENAI_ORIGIN]))
    result = await invoker.invoke(
        content, "en", credentials, model="gpt-3.5-turbo"
    )
    if result.succeeded:
        print(result.summary_text)
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import httpx

from ..config.constants import DEFAULT_HTTP_TIMEOUT
from ..config.settings import ProviderCredentials, SummaryLength
from ..exceptions import (
    ProviderError, CredentialError, ProviderPermissionError,
    TransportError, ProtocolError,
)
from ..models.provider import ProviderFamily
from ..models.summary import (
    InvocationResult, InvocationSuccess, InvocationFailure, ProgressEvent,
)
from .permissions import NetworkPermissions

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


class ProviderInvoker(ABC):
    """One invocation strategy per backend family."""

    family: ProviderFamily

    async def invoke(self,
                     content: str,
                     language: str,
                     credentials: ProviderCredentials,
                     *,
                     model: Optional[str] = None,
                     length: SummaryLength = SummaryLength.MEDIUM,
                     on_progress: Optional[ProgressCallback] = None) -> InvocationResult:
        """Summarize content and report the outcome as a value.

        Args:
            content: Page text to summarize
            language: Effective output language (already resolved)
            credentials: API keys for the remote families
            model: Wire model id (None for the on-device family)
            length: Requested summary length
            on_progress: Optional callback for sub-step progress

        Returns:
            InvocationSuccess or InvocationFailure; never raises
        """
        try:
            summary = await self._summarize(
                content, language, credentials, model, length, on_progress
            )
        except ProviderError as e:
            logger.warning(f"{self.family.label} attempt failed ({e.error_code}): {e.message}")
            return InvocationFailure(error_reason=e.message, error_kind=e.error_code)
        except Exception as e:
            logger.error(f"{self.family.label} attempt failed unexpectedly: {e}", exc_info=True)
            return InvocationFailure(
                error_reason=str(e) or type(e).__name__,
                error_kind="UNEXPECTED_ERROR",
            )

        return InvocationSuccess(summary_text=summary)

    @abstractmethod
    async def _summarize(self,
                         content: str,
                         language: str,
                         credentials: ProviderCredentials,
                         model: Optional[str],
                         length: SummaryLength,
                         on_progress: Optional[ProgressCallback]) -> str:
        """Produce the summary text or raise a ProviderError."""
        pass


class RemoteProviderInvoker(ProviderInvoker):
    """Shared flow for the remote HTTP families.

    Subclasses set ``origin`` and implement ``_request``, which returns the
    raw summary text extracted from the family's response envelope.
    """

    origin: str

    def __init__(self,
                 permissions: NetworkPermissions,
                 http_client: Optional[httpx.AsyncClient] = None,
                 timeout: float = DEFAULT_HTTP_TIMEOUT):
        self.permissions = permissions
        self.timeout = timeout
        self._http_client = http_client

    async def _summarize(self, content, language, credentials, model, length, on_progress) -> str:
        api_key = credentials.for_family(self.family.value)
        if not api_key:
            raise CredentialError(self.family.label)

        if not await self.permissions.has_origin(self.origin):
            raise ProviderPermissionError(self.family.label, self.origin)

        text = await self._request(api_key, model, content, language, length)
        return text.strip()

    @abstractmethod
    async def _request(self,
                       api_key: str,
                       model: str,
                       content: str,
                       language: str,
                       length: SummaryLength) -> str:
        """Issue the HTTP call and return the reply text."""
        pass

    async def _post_json(self, url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded JSON reply.

        Raises:
            TransportError: Connection, DNS or timeout failure
            ProtocolError: Non-2xx status or a body that is not JSON
        """
        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, headers=headers, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(self.family.label, f"{self.family.label} request timed out", cause=e)
        except httpx.TransportError as e:
            raise TransportError(self.family.label, f"{self.family.label} request failed: {e}", cause=e)

        if not response.is_success:
            raise ProtocolError.for_status(self.family.label, response.status_code)

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ProtocolError.invalid_format(self.family.label, cause=e)
