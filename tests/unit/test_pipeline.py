"""
End-to-end tests for the summarization pipeline.
"""

import json

import pytest

from pagebrief.config.constants import METRICS_KEY, UNABLE_TO_SUMMARIZE
from pagebrief.config.settings import ProviderCredentials
from pagebrief.data import MemoryKeyValueStore
from pagebrief.models.summary import ProgressStep
from pagebrief.providers import TranslationAvailability
from pagebrief.summarization import PipelineOptions, ProgressReporter

from .fakes import (
    ANTHROPIC_HOST, GEMINI_HOST, OPENAI_HOST, FakePlatform, RoutingTransport,
    all_keys, anthropic_reply, connect_error_handler, gemini_reply, json_handler,
    make_pipeline, openai_reply,
)


def _percents(events):
    return [event.percent_complete for event in events]


def _assert_monotonic(events):
    percents = _percents(events)
    assert percents == sorted(percents)
    assert percents[-1] == 100


class TestPipelineScenarios:
    """Primary, fallback and total-failure flows."""

    @pytest.mark.asyncio
    async def test_local_primary_succeeds(self):
        events = []
        pipeline = make_pipeline(platform=FakePlatform())

        result = await pipeline.summarize("Page content", on_progress=events.append)

        assert result.succeeded
        assert result.used_provider_id == "chrome-builtin"
        assert result.summary_text == "- first point\n- second point"
        assert len(result.metrics.attempts) == 1
        assert result.metrics.attempts[0].succeeded is True
        assert events[0].step is ProgressStep.EXTRACTING_CONTENT
        assert events[0].percent_complete == 10
        assert events[-1].step is ProgressStep.COMPLETE
        assert events[-1].percent_complete == 100
        _assert_monotonic(events)

    @pytest.mark.asyncio
    async def test_local_failure_falls_back_to_remote(self):
        transport = RoutingTransport({OPENAI_HOST: json_handler(openai_reply(" <ul><li>x</li></ul> "))})
        pipeline = make_pipeline(
            platform=FakePlatform(summarize_error=RuntimeError("on-device failure")),
            transport=transport,
        )
        events = []

        result = await pipeline.summarize("Page content", on_progress=events.append)

        assert result.used_provider_id == "gpt-3.5-turbo"
        assert result.summary_text == "<ul><li>x</li></ul>"
        attempts = result.metrics.attempts
        assert len(attempts) == 2
        assert attempts[0].provider_id == "chrome-builtin"
        assert attempts[0].succeeded is False
        assert "on-device failure" in attempts[0].error_message
        assert attempts[1].provider_id == "gpt-3.5-turbo"
        assert attempts[1].succeeded is True
        assert transport.hosts() == [OPENAI_HOST]

        trying = [e for e in events if e.step is ProgressStep.TRYING_MODEL]
        assert [e.current_provider_id for e in trying] == ["gpt-3.5-turbo"]
        assert trying[0].detail == "GPT-3.5 Turbo"
        assert 90 in _percents(events)
        _assert_monotonic(events)

    @pytest.mark.asyncio
    async def test_missing_key_without_fallback(self):
        transport = RoutingTransport({OPENAI_HOST: json_handler(openai_reply("never"))})
        store = MemoryKeyValueStore({"selectedModel": "gpt-4o", "enableFallback": False})
        pipeline = make_pipeline(
            transport=transport,
            credentials=ProviderCredentials(openai_api_key=""),
            store=store,
        )

        result = await pipeline.summarize("Page content")

        assert not result.succeeded
        assert result.summary_text == UNABLE_TO_SUMMARIZE
        assert result.used_provider_id == "none"
        assert result.attributed_provider_id == "gpt-4o"
        assert len(result.metrics.attempts) == 1
        assert transport.requests == []

        metrics = await store.get(METRICS_KEY)
        assert metrics["gpt-4o"]["totalRequests"] == 1
        assert metrics["gpt-4o"]["successfulRequests"] == 0

    @pytest.mark.asyncio
    async def test_all_families_fail(self):
        transport = RoutingTransport({
            GEMINI_HOST: connect_error_handler,
            ANTHROPIC_HOST: json_handler(anthropic_reply("unused"), status_code=500),
        })
        pipeline = make_pipeline(
            platform=FakePlatform(supported=False),
            transport=transport,
            credentials=ProviderCredentials(gemini_api_key="g-key", anthropic_api_key="a-key"),
        )
        events = []

        result = await pipeline.summarize("Page content", on_progress=events.append)

        assert result.summary_text == UNABLE_TO_SUMMARIZE
        assert result.used_provider_id == "none"
        assert result.attributed_provider_id == "chrome-builtin"
        assert [a.provider_id for a in result.metrics.attempts] == [
            "chrome-builtin", "gpt-3.5-turbo", "gemini-2.0-flash-exp", "claude-3-haiku",
        ]
        assert not any(a.succeeded for a in result.metrics.attempts)
        _assert_monotonic(events)
        assert events[-1].succeeded is False

    @pytest.mark.asyncio
    async def test_first_success_short_circuits(self):
        transport = RoutingTransport({
            OPENAI_HOST: json_handler({}, status_code=401),
            GEMINI_HOST: json_handler(gemini_reply("gemini summary")),
            ANTHROPIC_HOST: json_handler(anthropic_reply("never")),
        })
        pipeline = make_pipeline(platform=FakePlatform(supported=False), transport=transport)

        result = await pipeline.summarize("Page content")

        assert result.used_provider_id == "gemini-2.0-flash-exp"
        assert len(result.metrics.attempts) == 3
        assert ANTHROPIC_HOST not in transport.hosts()

    @pytest.mark.asyncio
    async def test_unknown_model_is_terminal(self):
        transport = RoutingTransport({OPENAI_HOST: json_handler(openai_reply("never"))})
        pipeline = make_pipeline(transport=transport)

        result = await pipeline.summarize("Page content", forced_model_id="gpt-99")

        assert result.used_provider_id == "none"
        assert len(result.metrics.attempts) == 1
        assert result.metrics.attempts[0].error_message == "Unknown model"
        assert transport.requests == []


class TestPipelineConfiguration:
    """Preference handling and policy options."""

    @pytest.mark.asyncio
    async def test_forced_model_overrides_preference(self):
        transport = RoutingTransport({ANTHROPIC_HOST: json_handler(anthropic_reply("claude says"))})
        pipeline = make_pipeline(transport=transport, stored={"selectedModel": "gpt-4o"})

        result = await pipeline.summarize("Page content", forced_model_id="claude-3.5-sonnet")

        assert result.used_provider_id == "claude-3.5-sonnet"
        body = json.loads(transport.requests[0].content)
        assert body["model"] == "claude-3-5-sonnet-20240620"

    @pytest.mark.asyncio
    async def test_stored_preferences_drive_request(self):
        transport = RoutingTransport({OPENAI_HOST: json_handler(openai_reply("ok"))})
        pipeline = make_pipeline(transport=transport, stored={
            "selectedModel": "gpt-4", "language": "pt", "summaryLength": "short",
        })

        await pipeline.summarize("Page content")

        body = json.loads(transport.requests[0].content)
        assert body["model"] == "gpt-4"
        assert body["max_tokens"] == 1000
        assert "following language: pt" in body["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_unsupported_language_requests_english(self):
        transport = RoutingTransport({OPENAI_HOST: json_handler(openai_reply("ok"))})
        pipeline = make_pipeline(transport=transport, stored={"selectedModel": "gpt-4", "language": "PT"})

        await pipeline.summarize("Page content")

        body = json.loads(transport.requests[0].content)
        assert "following language: en" in body["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_explicit_fallback_flag_overrides_preference(self):
        transport = RoutingTransport({GEMINI_HOST: json_handler(gemini_reply("ok"))})
        pipeline = make_pipeline(
            transport=transport,
            credentials=ProviderCredentials(gemini_api_key="g-key"),
            stored={"selectedModel": "gpt-4o", "enableFallback": True},
        )

        result = await pipeline.summarize("Page content", enable_fallback=False)

        assert result.used_provider_id == "none"
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_attempt_timeout_moves_to_next_candidate(self):
        transport = RoutingTransport({OPENAI_HOST: json_handler(openai_reply("fast answer"))})
        pipeline = make_pipeline(
            platform=FakePlatform(summarize_delay=1.0),
            transport=transport,
            options=PipelineOptions(attempt_timeout_seconds=0.05),
        )

        result = await pipeline.summarize("Page content")

        assert result.used_provider_id == "gpt-3.5-turbo"
        assert "timed out" in result.metrics.attempts[0].error_message

    @pytest.mark.asyncio
    async def test_metrics_recorded_under_used_provider(self):
        store = MemoryKeyValueStore()
        transport = RoutingTransport({OPENAI_HOST: json_handler(openai_reply("ok"))})
        pipeline = make_pipeline(
            platform=FakePlatform(supported=False), transport=transport, store=store,
        )

        result = await pipeline.summarize("Page content")

        metrics = await store.get(METRICS_KEY)
        assert set(metrics) == {"gpt-3.5-turbo"}
        assert metrics["gpt-3.5-turbo"]["totalTime"] == result.metrics.total_elapsed_seconds
        assert result.elapsed_seconds == round(result.elapsed_seconds, 2)

    @pytest.mark.asyncio
    async def test_corrupt_stored_metrics_do_not_break_summary(self):
        store = MemoryKeyValueStore({METRICS_KEY: {
            "chrome-builtin": None,
            "gpt-4o": {"totalRequests": None},
        }})
        pipeline = make_pipeline(store=store)
        events = []

        result = await pipeline.summarize("Page content", on_progress=events.append)

        assert result.succeeded
        assert result.used_provider_id == "chrome-builtin"
        assert events[0].estimated_seconds_remaining == pytest.approx(5.0 * 0.9)
        metrics = await store.get(METRICS_KEY)
        assert metrics["chrome-builtin"]["totalRequests"] == 1


class TestProgressReporting:
    """Progress events stay non-decreasing."""

    @pytest.mark.asyncio
    async def test_translation_sub_events_are_clamped(self):
        platform = FakePlatform(availability=TranslationAvailability.DOWNLOADABLE)
        pipeline = make_pipeline(platform=platform, stored={"language": "fr"})
        events = []

        result = await pipeline.summarize("Page content", on_progress=events.append)

        assert result.summary_text.startswith("[fr] ")
        assert any(e.step is ProgressStep.DOWNLOADING_LANGUAGE_MODEL for e in events)
        assert all(e.current_provider_id == "chrome-builtin" for e in events)
        assert all(e.estimated_seconds_remaining >= 0 for e in events)
        _assert_monotonic(events)

    @pytest.mark.asyncio
    async def test_callback_errors_do_not_abort(self):
        def broken(event):
            raise RuntimeError("ui went away")

        pipeline = make_pipeline(platform=FakePlatform())
        result = await pipeline.summarize("Page content", on_progress=broken)

        assert result.succeeded

    def test_reporter_clamps_and_records(self):
        received = []
        reporter = ProgressReporter(received.append)
        reporter.emit(ProgressStep.EXTRACTING_CONTENT, 10, 4.5, "gpt-4o")
        reporter.emit(ProgressStep.PROCESSING_RESPONSE, 70, 1.5, "gpt-4o")
        reporter.emit(ProgressStep.TRYING_MODEL, 35, -1.0, "gpt-4o")

        assert _percents(received) == [10, 70, 70]
        assert received[-1].estimated_seconds_remaining == 0
        assert reporter.events == received
        assert reporter.last_percent == 70
