"""
OpenAI chat completions invoker.
"""

import logging

from ..config.constants import OPENAI_ORIGIN
from ..config.settings import SummaryLength
from ..exceptions import ProtocolError
from ..models.provider import ProviderFamily
from .base import RemoteProviderInvoker
from .prompts import build_chat_prompt

logger = logging.getLogger(__name__)

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIInvoker(RemoteProviderInvoker):
    """Summarizes through the OpenAI chat completions API."""

    family = ProviderFamily.OPENAI
    origin = OPENAI_ORIGIN

    async def _request(self, api_key: str, model: str, content: str,
                       language: str, length: SummaryLength) -> str:
        payload = {
            "model": model,
            "messages": [
                {
                    "role": "user",
                    "content": build_chat_prompt(content, language, length),
                }
            ],
            "max_tokens": length.max_tokens,
            "temperature": 0.3,
        }
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"OpenAI request: model={model}, language={language}")
        data = await self._post_json(OPENAI_API_URL, headers, payload)

        try:
            text = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProtocolError.invalid_format(self.family.label, cause=e)

        if not isinstance(text, str):
            raise ProtocolError.invalid_format(self.family.label)
        return text
