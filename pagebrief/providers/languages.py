"""
Per-family output language support.
"""

from typing import Dict, FrozenSet, Optional, Union

from ..config.constants import DEFAULT_LANGUAGE
from ..models.provider import LanguageDecision, ProviderFamily

_COMMON_LANGUAGES = frozenset([
    'en', 'es', 'fr', 'de', 'it', 'pt', 'ru', 'ja', 'ko', 'zh', 'ar', 'hi',
    'nl', 'sv', 'da', 'no', 'fi', 'pl', 'tr', 'he', 'th', 'vi', 'id', 'ms',
    'tl', 'cs', 'sk', 'hu', 'ro', 'bg', 'hr', 'sl', 'et', 'lv', 'lt', 'mt',
    'el', 'uk', 'be', 'sr', 'mk', 'bs', 'sq', 'is', 'ga', 'cy', 'gd', 'kw',
    'br', 'co', 'gl', 'eu', 'ca', 'oc', 'an', 'ast', 'ext', 'lad', 'lld',
    'lij', 'lmo', 'nap', 'pms', 'sc', 'scn', 'vec', 'wa', 'fur', 'rm', 'sw',
    'af', 'zu', 'xh', 'st', 'tn', 'ts', 'ss', 've', 'nr', 'nso',
])

# The on-device family reaches these through its translation pass
LANGUAGE_SUPPORT: Dict[ProviderFamily, FrozenSet[str]] = {
    ProviderFamily.LOCAL: _COMMON_LANGUAGES,
    ProviderFamily.OPENAI: _COMMON_LANGUAGES,
    ProviderFamily.GEMINI: _COMMON_LANGUAGES,
    ProviderFamily.ANTHROPIC: _COMMON_LANGUAGES,
}


def _as_family(family: Union[ProviderFamily, str, None]) -> Optional[ProviderFamily]:
    if isinstance(family, ProviderFamily):
        return family
    try:
        return ProviderFamily(family)
    except ValueError:
        return None


class LanguageSupportResolver:
    """Decides which language to request from a provider family.

    Codes are compared exactly: "EN" or "pt-BR" are not normalized and are
    treated as unsupported.
    """

    def __init__(self, support: Optional[Dict[ProviderFamily, FrozenSet[str]]] = None):
        self._support = support if support is not None else LANGUAGE_SUPPORT

    def supported_languages(self, family: Union[ProviderFamily, str]) -> FrozenSet[str]:
        resolved = _as_family(family)
        if resolved is None:
            return frozenset()
        return self._support.get(resolved, frozenset())

    def is_supported(self, family: Union[ProviderFamily, str], language: Optional[str]) -> bool:
        return bool(language) and language in self.supported_languages(family)

    def resolve(self, family: Union[ProviderFamily, str, None],
                requested_language: Optional[str]) -> LanguageDecision:
        resolved = _as_family(family)
        if resolved is None or resolved not in self._support:
            return LanguageDecision(
                supported=False,
                effective_language=DEFAULT_LANGUAGE,
                needs_fallback=False,
            )

        if self.is_supported(resolved, requested_language):
            return LanguageDecision(
                supported=True,
                effective_language=requested_language,
                needs_fallback=False,
            )

        return LanguageDecision(
            supported=False,
            effective_language=DEFAULT_LANGUAGE,
            needs_fallback=requested_language != DEFAULT_LANGUAGE,
        )
