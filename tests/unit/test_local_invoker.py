"""
Tests for the on-device invoker and its translation pass.
"""

import pytest

from pagebrief.config.settings import ProviderCredentials, SummaryLength
from pagebrief.models.summary import ProgressStep
from pagebrief.providers import LocalInvoker, TranslationAvailability

from .fakes import FakePlatform


async def _invoke(platform, language="en", length=SummaryLength.MEDIUM):
    events = []
    result = await LocalInvoker(platform).invoke(
        "Some page content", language, ProviderCredentials(),
        length=length, on_progress=events.append,
    )
    return result, events


class TestLocalInvoker:
    """Tests for LocalInvoker."""

    @pytest.mark.asyncio
    async def test_english_summary_needs_no_credentials(self):
        platform = FakePlatform()
        result, events = await _invoke(platform)

        assert result.succeeded
        assert result.summary_text == "- first point\n- second point"
        assert platform.translator_pairs == []
        assert platform.destroyed == ["summarizer"]
        assert [e.percent_complete for e in events] == [20, 50]
        assert events[0].step is ProgressStep.INITIALIZING

    @pytest.mark.asyncio
    async def test_summarizer_options(self):
        platform = FakePlatform()
        await _invoke(platform, length=SummaryLength.LONG)

        options = platform.options[0]
        assert options.type == "key-points"
        assert options.format == "markdown"
        assert options.length is SummaryLength.LONG
        assert options.output_language == "en"

    @pytest.mark.asyncio
    async def test_unsupported_runtime(self):
        platform = FakePlatform(supported=False)
        result, events = await _invoke(platform)

        assert not result.succeeded
        assert result.error_kind == "LOCAL_UNSUPPORTED"
        assert platform.options == []
        assert events == []

    @pytest.mark.asyncio
    async def test_summarizer_error_fails_attempt_and_destroys_session(self):
        platform = FakePlatform(summarize_error=RuntimeError("model crashed"))
        result, _ = await _invoke(platform)

        assert not result.succeeded
        assert "model crashed" in result.error_reason
        assert platform.destroyed == ["summarizer"]

    @pytest.mark.asyncio
    async def test_available_translation(self):
        platform = FakePlatform(availability=TranslationAvailability.AVAILABLE)
        result, events = await _invoke(platform, language="fr")

        assert result.succeeded
        assert result.summary_text.startswith("[fr] ")
        assert platform.translator_pairs == [("en", "fr")]
        assert platform.destroyed == ["summarizer", "translator"]
        assert [e.percent_complete for e in events] == [20, 50, 60, 80]
        assert events[-1].step is ProgressStep.TRANSLATING_SUMMARY

    @pytest.mark.asyncio
    async def test_downloadable_translation_reports_download(self):
        platform = FakePlatform(
            availability=TranslationAvailability.DOWNLOADABLE,
            download_steps=(0.5, 1.0),
        )
        result, events = await _invoke(platform, language="es")

        assert result.succeeded
        assert result.summary_text.startswith("[es] ")

        downloads = [e for e in events if e.step is ProgressStep.DOWNLOADING_LANGUAGE_MODEL]
        assert [e.percent_complete for e in downloads] == [60, 75, 90]
        assert [e.detail for e in downloads[1:]] == ["50%", "100%"]
        assert events[-1].step is ProgressStep.TRANSLATING_SUMMARY
        assert events[-1].percent_complete == 90

    @pytest.mark.asyncio
    async def test_unavailable_translation_keeps_english(self):
        platform = FakePlatform(availability=TranslationAvailability.UNAVAILABLE)
        result, _ = await _invoke(platform, language="ko")

        assert result.succeeded
        assert result.summary_text == "- first point\n- second point"
        assert platform.translator_pairs == []

    @pytest.mark.asyncio
    async def test_translation_error_degrades_to_english(self):
        platform = FakePlatform(translate_error=RuntimeError("translator crashed"))
        result, _ = await _invoke(platform, language="it")

        assert result.succeeded
        assert result.summary_text == "- first point\n- second point"
        assert platform.destroyed == ["summarizer", "translator"]
