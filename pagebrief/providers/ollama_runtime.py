"""
Ollama-backed platform capabilities for the on-device family.

Example usage:
    platform = OllamaPlatform(OllamaConfig(base_url="http://localhost:11434"))
    invoker = LocalInvoker(platform)
"""

import json
import logging
from typing import Any, Dict, Optional, Set

import httpx

from ..config.constants import MIN_LOCAL_RUNTIME_VERSION
from ..config.settings import OllamaConfig
from ..exceptions import ProtocolError, TransportError
from ..models.provider import ProviderFamily
from .local import (
    DownloadMonitor, PlatformCapabilities, SummarizerOptions, SummarizerSession,
    TranslationAvailability, TranslatorSession,
)

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    "en": "English", "es": "Spanish", "fr": "French", "de": "German",
    "it": "Italian", "pt": "Portuguese", "ja": "Japanese", "ko": "Korean",
    "zh": "Chinese", "ru": "Russian", "ar": "Arabic", "hi": "Hindi",
    "nl": "Dutch", "pl": "Polish", "tr": "Turkish", "sv": "Swedish",
}


def _language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)


def _model_matches(available: Set[str], model: str) -> bool:
    if model in available:
        return True
    if ":" not in model:
        return f"{model}:latest" in available
    return False


class OllamaSummarizerSession(SummarizerSession):

    def __init__(self, platform: "OllamaPlatform", options: SummarizerOptions):
        self.platform = platform
        self.options = options

    def build_prompt(self, text: str) -> str:
        count = self.options.length.bullet_count
        return (
            f"Extract the {count} most important key points from the text below. "
            f"Answer in {_language_name(self.options.output_language)} as a "
            f"{self.options.format} bulleted list with exactly {count} items "
            "and nothing else.\n"
            "\n"
            f"{text}"
        )

    async def summarize(self, text: str) -> str:
        return await self.platform.generate(
            self.platform.config.summary_model, self.build_prompt(text)
        )

    async def destroy(self) -> None:
        logger.debug("Released Ollama summarizer session")


class OllamaTranslatorSession(TranslatorSession):

    def __init__(self, platform: "OllamaPlatform", source: str, target: str):
        self.platform = platform
        self.source = source
        self.target = target

    async def translate(self, text: str) -> str:
        prompt = (
            f"Translate the following {_language_name(self.source)} text into "
            f"{_language_name(self.target)}. Keep the markdown formatting and "
            "reply with the translation only.\n"
            "\n"
            f"{text}"
        )
        return await self.platform.generate(self.platform.config.translation_model, prompt)

    async def destroy(self) -> None:
        logger.debug(f"Released Ollama translator session ({self.source} -> {self.target})")


class OllamaPlatform(PlatformCapabilities):
    """PlatformCapabilities served by a local Ollama daemon."""

    def __init__(self, config: OllamaConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._http_client = http_client

    @property
    def label(self) -> str:
        return ProviderFamily.LOCAL.label

    async def list_models(self) -> Optional[Set[str]]:
        """Names of pulled models, or None when the daemon is unreachable."""
        try:
            data = await self._request("GET", "/api/tags")
        except (TransportError, ProtocolError) as e:
            logger.debug(f"Ollama daemon not available at {self.base_url}: {e.message}")
            return None

        models = data.get("models", []) if isinstance(data, dict) else []
        return {m.get("name", "") for m in models if isinstance(m, dict)}

    async def summarizer_supported(self) -> bool:
        if not self.config.enabled:
            return False
        if self.config.runtime_version < MIN_LOCAL_RUNTIME_VERSION:
            logger.info(
                f"Local runtime version {self.config.runtime_version} is below "
                f"{MIN_LOCAL_RUNTIME_VERSION}; on-device summarization disabled"
            )
            return False

        available = await self.list_models()
        if available is None:
            return False
        return _model_matches(available, self.config.summary_model)

    async def create_summarizer(self, options: SummarizerOptions) -> SummarizerSession:
        return OllamaSummarizerSession(self, options)

    async def translation_availability(self, source: str, target: str) -> TranslationAvailability:
        available = await self.list_models()
        if available is None:
            return TranslationAvailability.UNAVAILABLE
        if _model_matches(available, self.config.translation_model):
            return TranslationAvailability.AVAILABLE
        return TranslationAvailability.DOWNLOADABLE

    async def create_translator(self,
                                source: str,
                                target: str,
                                monitor: Optional[DownloadMonitor] = None) -> TranslatorSession:
        available = await self.list_models() or set()
        if not _model_matches(available, self.config.translation_model):
            await self.pull_model(self.config.translation_model, monitor)
        return OllamaTranslatorSession(self, source, target)

    async def generate(self, model: str, prompt: str) -> str:
        payload = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": 0.3},
        }
        data = await self._request("POST", "/api/generate", payload)
        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise ProtocolError.invalid_format(self.label)
        return text

    async def pull_model(self, model: str, monitor: Optional[DownloadMonitor] = None) -> None:
        """Download a model, reporting the completed fraction to monitor."""
        logger.info(f"Pulling Ollama model {model}")
        payload = {"model": model, "stream": True}

        try:
            if self._http_client is not None:
                await self._stream_pull(self._http_client, payload, monitor)
            else:
                async with httpx.AsyncClient(timeout=None) as client:
                    await self._stream_pull(client, payload, monitor)
        except httpx.HTTPError as e:
            raise TransportError(self.label, f"Model download failed: {e}", cause=e)

        logger.info(f"Pulled Ollama model {model}")

    async def _stream_pull(self,
                           client: httpx.AsyncClient,
                           payload: Dict[str, Any],
                           monitor: Optional[DownloadMonitor]) -> None:
        async with client.stream("POST", f"{self.base_url}/api/pull", json=payload) as response:
            if not response.is_success:
                raise ProtocolError.for_status(self.label, response.status_code)

            async for line in response.aiter_lines():
                if not line.strip():
                    continue
                try:
                    event = json.loads(line)
                except json.JSONDecodeError as e:
                    raise ProtocolError.invalid_format(self.label, cause=e)

                if event.get("error"):
                    raise ProtocolError(self.label, f"Model download failed: {event['error']}")

                total = event.get("total")
                completed = event.get("completed")
                if monitor is not None and total and completed is not None:
                    monitor(completed / total)

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            if self._http_client is not None:
                response = await self._http_client.request(method, url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    response = await client.request(method, url, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(self.label, "Ollama request timed out", cause=e)
        except httpx.TransportError as e:
            raise TransportError(self.label, f"Ollama request failed: {e}", cause=e)

        if not response.is_success:
            raise ProtocolError.for_status(self.label, response.status_code)

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ProtocolError.invalid_format(self.label, cause=e)
