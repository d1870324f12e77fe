"""
Anthropic Messages API invoker.
"""

import logging
from typing import Any, Optional

import anthropic
import httpx
from anthropic import AsyncAnthropic

from ..config.constants import ANTHROPIC_ORIGIN, DEFAULT_HTTP_TIMEOUT
from ..config.settings import SummaryLength
from ..exceptions import ProtocolError, TransportError
from ..models.provider import ProviderFamily
from .base import RemoteProviderInvoker
from .permissions import NetworkPermissions
from .prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)

ANTHROPIC_API_VERSION = "2023-06-01"


class AnthropicInvoker(RemoteProviderInvoker):
    """Summarizes through the Anthropic Messages API.

    SDK retries are disabled; a failed call fails the attempt and the
    pipeline moves on to the next fallback.
    """

    family = ProviderFamily.ANTHROPIC
    origin = ANTHROPIC_ORIGIN

    def __init__(self,
                 permissions: NetworkPermissions,
                 http_client: Optional[httpx.AsyncClient] = None,
                 timeout: float = DEFAULT_HTTP_TIMEOUT,
                 base_url: Optional[str] = None):
        super().__init__(permissions, http_client=http_client, timeout=timeout)
        self.base_url = base_url

    def _create_client(self, api_key: str) -> AsyncAnthropic:
        client_kwargs = {
            "api_key": api_key,
            "timeout": self.timeout,
            "max_retries": 0,
            "default_headers": {"anthropic-version": ANTHROPIC_API_VERSION},
        }
        if self.base_url:
            client_kwargs["base_url"] = self.base_url
        if self._http_client is not None:
            client_kwargs["http_client"] = self._http_client
        return AsyncAnthropic(**client_kwargs)

    async def _request(self, api_key: str, model: str, content: str,
                       language: str, length: SummaryLength) -> str:
        client = self._create_client(api_key)
        label = self.family.label

        logger.debug(f"Anthropic request: model={model}, language={language}")
        try:
            response = await client.messages.create(
                model=model,
                max_tokens=length.max_tokens,
                temperature=0.3,
                system=build_system_prompt(language),
                messages=[
                    {
                        "role": "user",
                        "content": build_user_prompt(content, length),
                    }
                ],
            )
        except anthropic.APITimeoutError as e:
            raise TransportError(label, f"{label} request timed out", cause=e)
        except anthropic.APIConnectionError as e:
            raise TransportError(label, f"{label} request failed: {e}", cause=e)
        except anthropic.APIStatusError as e:
            raise ProtocolError.for_status(label, e.status_code)
        except anthropic.APIResponseValidationError as e:
            raise ProtocolError.invalid_format(label, cause=e)
        finally:
            if self._http_client is None:
                await client.close()

        return self._extract_text(response)

    def _extract_text(self, response: Any) -> str:
        blocks = getattr(response, "content", None)
        if not blocks:
            raise ProtocolError.invalid_format(self.family.label)

        text = getattr(blocks[0], "text", None)
        if not isinstance(text, str) or not text:
            raise ProtocolError.invalid_format(self.family.label)
        return text
