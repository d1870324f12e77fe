"""
Google Gemini generateContent invoker.
"""

import logging

from ..config.constants import GEMINI_ORIGIN
from ..config.settings import SummaryLength
from ..exceptions import ProtocolError
from ..models.provider import ProviderFamily
from .base import RemoteProviderInvoker
from .prompts import build_language_first_prompt

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiInvoker(RemoteProviderInvoker):
    """Summarizes through the Gemini generateContent API."""

    family = ProviderFamily.GEMINI
    origin = GEMINI_ORIGIN

    @staticmethod
    def endpoint_for(model: str) -> str:
        return f"{GEMINI_API_BASE}/{model}:generateContent"

    async def _request(self, api_key: str, model: str, content: str,
                       language: str, length: SummaryLength) -> str:
        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": build_language_first_prompt(content, language, length)}
                    ]
                }
            ],
            "generationConfig": {
                "temperature": 0.3,
                "maxOutputTokens": length.max_tokens,
            },
        }
        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }

        logger.debug(f"Gemini request: model={model}, language={language}")
        data = await self._post_json(self.endpoint_for(model), headers, payload)

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProtocolError.invalid_format(self.family.label, cause=e)

        if not isinstance(text, str):
            raise ProtocolError.invalid_format(self.family.label)
        return text
