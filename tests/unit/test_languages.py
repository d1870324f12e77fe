"""
Tests for per-family language resolution.
"""

import pytest

from pagebrief.models.provider import ProviderFamily
from pagebrief.providers import LANGUAGE_SUPPORT, LanguageSupportResolver


class TestLanguageSupportResolver:
    """Tests for LanguageSupportResolver.resolve."""

    def test_supported_languages_pass_through(self):
        resolver = LanguageSupportResolver()
        for family, languages in LANGUAGE_SUPPORT.items():
            for language in languages:
                decision = resolver.resolve(family, language)
                assert decision.supported is True
                assert decision.needs_fallback is False
                assert decision.effective_language == language

    @pytest.mark.parametrize("family", list(ProviderFamily))
    def test_english_never_needs_fallback(self, family):
        decision = LanguageSupportResolver().resolve(family, "en")
        assert decision.effective_language == "en"
        assert decision.needs_fallback is False

    def test_english_floor_when_family_set_lacks_it(self):
        resolver = LanguageSupportResolver({ProviderFamily.OPENAI: frozenset(["fr"])})
        decision = resolver.resolve(ProviderFamily.OPENAI, "en")
        assert decision.supported is False
        assert decision.effective_language == "en"
        assert decision.needs_fallback is False

    def test_unsupported_language_falls_back_to_english(self):
        decision = LanguageSupportResolver().resolve(ProviderFamily.GEMINI, "xx")
        assert decision.supported is False
        assert decision.effective_language == "en"
        assert decision.needs_fallback is True

    @pytest.mark.parametrize("language", ["", None])
    def test_missing_language_falls_back(self, language):
        decision = LanguageSupportResolver().resolve(ProviderFamily.OPENAI, language)
        assert decision.supported is False
        assert decision.effective_language == "en"
        assert decision.needs_fallback is True

    def test_codes_are_case_sensitive(self):
        decision = LanguageSupportResolver().resolve(ProviderFamily.ANTHROPIC, "FR")
        assert decision.supported is False
        assert decision.effective_language == "en"
        assert decision.needs_fallback is True

    @pytest.mark.parametrize("family", ["mistral", None, ""])
    def test_unknown_family_has_no_fallback_penalty(self, family):
        decision = LanguageSupportResolver().resolve(family, "fr")
        assert decision.supported is False
        assert decision.effective_language == "en"
        assert decision.needs_fallback is False

    def test_accepts_family_value_strings(self):
        decision = LanguageSupportResolver().resolve("chrome", "de")
        assert decision.supported is True
        assert decision.effective_language == "de"
