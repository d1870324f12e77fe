"""
Tests for fallback planning.
"""

import pytest

from pagebrief.models.provider import ProviderFamily
from pagebrief.providers import MODEL_CONFIGS, FallbackPlanner, ProviderRegistry


class TestFallbackPlanner:
    """Tests for FallbackPlanner.plan_fallbacks."""

    def test_local_primary_order(self):
        planner = FallbackPlanner()
        assert planner.plan_fallbacks("chrome-builtin", True) == [
            "gpt-3.5-turbo", "gemini-2.0-flash-exp", "claude-3-haiku",
        ]

    def test_openai_primary_order(self):
        planner = FallbackPlanner()
        assert planner.plan_fallbacks("gpt-4o", True) == [
            "gemini-2.0-flash-exp", "claude-3-haiku", "chrome-builtin",
        ]

    def test_gemini_primary_order(self):
        assert FallbackPlanner().plan_fallbacks("gemini-2.5-pro", True) == [
            "gpt-3.5-turbo", "claude-3-haiku", "chrome-builtin",
        ]

    def test_anthropic_primary_order(self):
        assert FallbackPlanner().plan_fallbacks("claude-3-opus", True) == [
            "gpt-3.5-turbo", "gemini-2.0-flash-exp", "chrome-builtin",
        ]

    def test_local_candidate_dropped_when_unsupported(self):
        planner = FallbackPlanner()
        assert planner.plan_fallbacks("gpt-4", False) == [
            "gemini-2.0-flash-exp", "claude-3-haiku",
        ]

    @pytest.mark.parametrize("model_id", ["unknown-model", "", None])
    def test_unknown_primary_has_no_fallbacks(self, model_id):
        assert FallbackPlanner().plan_fallbacks(model_id, True) == []

    @pytest.mark.parametrize("local_supported", [True, False])
    def test_never_includes_primary_family(self, local_supported):
        registry = ProviderRegistry()
        planner = FallbackPlanner(registry)
        for model_id, config in MODEL_CONFIGS.items():
            candidates = planner.plan_fallbacks(model_id, local_supported)
            families = [registry.lookup(c).family for c in candidates]
            assert config.family not in families
            if not local_supported:
                assert ProviderFamily.LOCAL not in families

    def test_custom_table_skips_same_family_entries(self):
        order = {ProviderFamily.OPENAI: ["gpt-4", "claude-3-haiku"]}
        planner = FallbackPlanner(order=order)
        assert planner.plan_fallbacks("gpt-4o", True) == ["claude-3-haiku"]
