"""
Summarization providers: registry, language support, fallback planning
and one invoker per backend family.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from ..config.constants import DEFAULT_HTTP_TIMEOUT
from ..models.provider import ProviderFamily
from .anthropic_client import AnthropicInvoker
from .base import ProviderInvoker, RemoteProviderInvoker, ProgressCallback
from .fallback import FALLBACK_ORDER, FallbackPlanner
from .gemini_client import GeminiInvoker
from .languages import LANGUAGE_SUPPORT, LanguageSupportResolver
from .local import (
    LocalInvoker, PlatformCapabilities, SummarizerOptions, SummarizerSession,
    TranslationAvailability, TranslatorSession,
)
from .ollama_runtime import OllamaPlatform
from .openai_client import OpenAIInvoker
from .permissions import NetworkPermissions, StaticPermissions
from .registry import FAMILY_DEFAULTS, MODEL_CONFIGS, ProviderRegistry


@dataclass
class InvokerSet:
    """One invoker per backend family."""
    local: LocalInvoker
    openai: OpenAIInvoker
    gemini: GeminiInvoker
    anthropic: AnthropicInvoker

    def for_family(self, family: ProviderFamily) -> ProviderInvoker:
        mapping: Dict[ProviderFamily, ProviderInvoker] = {
            ProviderFamily.LOCAL: self.local,
            ProviderFamily.OPENAI: self.openai,
            ProviderFamily.GEMINI: self.gemini,
            ProviderFamily.ANTHROPIC: self.anthropic,
        }
        return mapping[family]


def build_invokers(capabilities: PlatformCapabilities,
                   permissions: NetworkPermissions,
                   http_client: Optional[httpx.AsyncClient] = None,
                   timeout: float = DEFAULT_HTTP_TIMEOUT) -> InvokerSet:
    """Create the invoker for every family sharing one permission source."""
    return InvokerSet(
        local=LocalInvoker(capabilities, provider_id=FAMILY_DEFAULTS[ProviderFamily.LOCAL]),
        openai=OpenAIInvoker(permissions, http_client=http_client, timeout=timeout),
        gemini=GeminiInvoker(permissions, http_client=http_client, timeout=timeout),
        anthropic=AnthropicInvoker(permissions, http_client=http_client, timeout=timeout),
    )


__all__ = [
    'ProviderInvoker',
    'RemoteProviderInvoker',
    'ProgressCallback',
    'LocalInvoker',
    'PlatformCapabilities',
    'SummarizerOptions',
    'SummarizerSession',
    'TranslatorSession',
    'TranslationAvailability',
    'OllamaPlatform',
    'OpenAIInvoker',
    'GeminiInvoker',
    'AnthropicInvoker',
    'NetworkPermissions',
    'StaticPermissions',
    'ProviderRegistry',
    'MODEL_CONFIGS',
    'FAMILY_DEFAULTS',
    'LanguageSupportResolver',
    'LANGUAGE_SUPPORT',
    'FallbackPlanner',
    'FALLBACK_ORDER',
    'InvokerSet',
    'build_invokers',
]
