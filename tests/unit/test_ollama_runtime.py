"""
Tests for the Ollama-backed platform capabilities.
"""

import json

import httpx
import pytest

from pagebrief.config.settings import OllamaConfig, SummaryLength
from pagebrief.exceptions import ProtocolError
from pagebrief.providers import OllamaPlatform, SummarizerOptions, TranslationAvailability


class OllamaDaemon:
    """In-process stand-in for the Ollama HTTP API."""

    def __init__(self, models=("llama3.2:latest",), pull_events=None, reachable=True):
        self.models = list(models)
        self.pull_events = pull_events or [
            {"status": "pulling manifest"},
            {"status": "downloading", "total": 200, "completed": 50},
            {"status": "downloading", "total": 200, "completed": 200},
            {"status": "success"},
        ]
        self.reachable = reachable
        self.prompts = []
        self.pulled = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        if not self.reachable:
            raise httpx.ConnectError("daemon down", request=request)

        if request.url.path == "/api/tags":
            return httpx.Response(200, json={"models": [{"name": name} for name in self.models]})

        body = json.loads(request.content)
        if request.url.path == "/api/generate":
            self.prompts.append((body["model"], body["prompt"]))
            return httpx.Response(200, json={"model": body["model"], "response": "- translated", "done": True})

        if request.url.path == "/api/pull":
            self.pulled.append(body["model"])
            self.models.append(body["model"])
            lines = "\n".join(json.dumps(event) for event in self.pull_events) + "\n"
            return httpx.Response(200, content=lines.encode())

        return httpx.Response(404)

    def platform(self, **overrides) -> OllamaPlatform:
        config = OllamaConfig(**overrides)
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handle))
        return OllamaPlatform(config, http_client=client)


class TestOllamaPlatform:
    """Tests for OllamaPlatform."""

    @pytest.mark.asyncio
    async def test_supported_when_model_pulled(self):
        platform = OllamaDaemon().platform(summary_model="llama3.2")
        assert await platform.summarizer_supported() is True

    @pytest.mark.asyncio
    async def test_unsupported_below_runtime_version(self):
        platform = OllamaDaemon().platform(runtime_version=137)
        assert await platform.summarizer_supported() is False

    @pytest.mark.asyncio
    async def test_unsupported_when_disabled(self):
        platform = OllamaDaemon().platform(enabled=False)
        assert await platform.summarizer_supported() is False

    @pytest.mark.asyncio
    async def test_unsupported_when_daemon_down(self):
        platform = OllamaDaemon(reachable=False).platform()
        assert await platform.summarizer_supported() is False
        assert await platform.list_models() is None

    @pytest.mark.asyncio
    async def test_unsupported_when_model_missing(self):
        platform = OllamaDaemon(models=["mistral:latest"]).platform(summary_model="llama3.2")
        assert await platform.summarizer_supported() is False

    @pytest.mark.asyncio
    async def test_summarizer_prompt_uses_bullet_count(self):
        daemon = OllamaDaemon()
        platform = daemon.platform()
        session = await platform.create_summarizer(SummarizerOptions(length=SummaryLength.SHORT))

        text = await session.summarize("Body text")
        await session.destroy()

        assert text == "- translated"
        model, prompt = daemon.prompts[0]
        assert model == "llama3.2"
        assert "exactly 3 items" in prompt
        assert "English" in prompt
        assert prompt.endswith("Body text")

    @pytest.mark.asyncio
    async def test_translation_availability(self):
        daemon = OllamaDaemon(models=["llama3.2:latest"])
        assert await daemon.platform().translation_availability("en", "fr") is TranslationAvailability.AVAILABLE

        missing = daemon.platform(translation_model="aya:8b")
        assert await missing.translation_availability("en", "fr") is TranslationAvailability.DOWNLOADABLE

        down = OllamaDaemon(reachable=False).platform()
        assert await down.translation_availability("en", "fr") is TranslationAvailability.UNAVAILABLE

    @pytest.mark.asyncio
    async def test_translator_pulls_missing_model_with_progress(self):
        daemon = OllamaDaemon()
        platform = daemon.platform(translation_model="aya:8b")
        fractions = []

        translator = await platform.create_translator("en", "fr", monitor=fractions.append)
        text = await translator.translate("- point")

        assert daemon.pulled == ["aya:8b"]
        assert fractions == [0.25, 1.0]
        assert text == "- translated"
        model, prompt = daemon.prompts[-1]
        assert model == "aya:8b"
        assert "into French" in prompt

    @pytest.mark.asyncio
    async def test_pull_error_event_raises(self):
        daemon = OllamaDaemon(pull_events=[{"error": "model not found"}])
        platform = daemon.platform()

        with pytest.raises(ProtocolError):
            await platform.pull_model("nonexistent")
