"""
Tests for the summary service.
"""

import asyncio

import pytest

from pagebrief.data import MemoryKeyValueStore
from pagebrief.exceptions import AlreadyProcessingError, ConfigurationError
from pagebrief.summarization import (
    MetricsStore, PreferenceStore, SummaryHistory, SummaryService,
)

from .fakes import (
    ANTHROPIC_HOST, FakePlatform, RoutingTransport, anthropic_reply, json_handler, make_pipeline,
)


def _service(platform=None, transport=None):
    store = MemoryKeyValueStore()
    return SummaryService(
        pipeline=make_pipeline(platform=platform or FakePlatform(), transport=transport, store=store),
        history=SummaryHistory(store),
        preferences=PreferenceStore(store),
        metrics_store=MetricsStore(store),
    )


class TestSummaryService:
    """Tests for SummaryService."""

    @pytest.mark.asyncio
    async def test_result_kept_per_target(self):
        service = _service()

        result = await service.summarize("Page", "tab-1", url="https://a.example", title="A")

        assert service.last_result("tab-1") is result
        assert service.last_result("tab-2") is None
        service.forget_target("tab-1")
        assert service.last_result("tab-1") is None

    @pytest.mark.asyncio
    async def test_failed_summary_saved_to_history(self):
        service = _service()

        result = await service.summarize("Page", "tab-1", force_model="nope")

        assert not result.succeeded
        entries = await service.list_history()
        assert len(entries) == 1
        assert entries[0].model == "none"

    @pytest.mark.asyncio
    async def test_concurrent_request_for_same_target_rejected(self):
        service = _service(platform=FakePlatform(summarize_delay=0.05))

        first = asyncio.ensure_future(service.summarize("Page", "tab-1"))
        await asyncio.sleep(0.01)
        with pytest.raises(AlreadyProcessingError):
            await service.summarize("Page", "tab-1")
        await first

        assert not service.is_processing("tab-1")

    @pytest.mark.asyncio
    async def test_other_targets_not_blocked(self):
        service = _service(platform=FakePlatform(summarize_delay=0.02))

        results = await asyncio.gather(
            service.summarize("Page", "tab-1"),
            service.summarize("Page", "tab-2"),
        )

        assert all(result.succeeded for result in results)

    @pytest.mark.asyncio
    async def test_switch_model_changes_next_summary(self):
        transport = RoutingTransport({ANTHROPIC_HOST: json_handler(anthropic_reply("From Claude"))})
        service = _service(platform=FakePlatform(supported=False), transport=transport)

        await service.switch_model("claude-3-haiku")
        result = await service.summarize("Page", "tab-1")

        assert result.used_provider_id == "claude-3-haiku"
        assert result.summary_text == "From Claude"

    @pytest.mark.asyncio
    async def test_switch_to_unknown_model(self):
        service = _service()
        with pytest.raises(ConfigurationError):
            await service.switch_model("gpt-99")
