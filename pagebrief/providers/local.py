"""
On-device summarization.

The runtime's summarizer and translator are reached through the injected
PlatformCapabilities interface, so the invoker never probes the platform
itself and tests can substitute a fake.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..config.constants import DEFAULT_LANGUAGE
from ..config.settings import ProviderCredentials, SummaryLength
from ..exceptions import CapabilityUnsupportedError
from ..models.provider import ProviderFamily
from ..models.summary import ProgressEvent, ProgressStep
from .base import ProviderInvoker, ProgressCallback

logger = logging.getLogger(__name__)

# Receives the downloaded fraction of a language model, 0.0 to 1.0
DownloadMonitor = Callable[[float], None]


class TranslationAvailability(Enum):
    """Availability of a translation model for a language pair."""
    AVAILABLE = "available"
    DOWNLOADABLE = "downloadable"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class SummarizerOptions:
    """Options passed when creating an on-device summarizer."""
    type: str = "key-points"
    format: str = "markdown"
    length: SummaryLength = SummaryLength.MEDIUM
    output_language: str = DEFAULT_LANGUAGE


class SummarizerSession(ABC):
    """A created summarizer; must be destroyed after use."""

    @abstractmethod
    async def summarize(self, text: str) -> str:
        pass

    @abstractmethod
    async def destroy(self) -> None:
        pass


class TranslatorSession(ABC):
    """A created translator; must be destroyed after use."""

    @abstractmethod
    async def translate(self, text: str) -> str:
        pass

    @abstractmethod
    async def destroy(self) -> None:
        pass


class PlatformCapabilities(ABC):
    """On-device AI primitives offered by the runtime."""

    @abstractmethod
    async def summarizer_supported(self) -> bool:
        """True when the runtime version and summarizer availability allow use."""
        pass

    @abstractmethod
    async def create_summarizer(self, options: SummarizerOptions) -> SummarizerSession:
        pass

    @abstractmethod
    async def translation_availability(self, source: str, target: str) -> TranslationAvailability:
        pass

    @abstractmethod
    async def create_translator(self,
                                source: str,
                                target: str,
                                monitor: Optional[DownloadMonitor] = None) -> TranslatorSession:
        """Create a translator, downloading the model first when needed."""
        pass


class LocalInvoker(ProviderInvoker):
    """Summarizes with the on-device model, then optionally translates.

    The summarizer always writes English. Any other language is produced by
    a second translation pass that falls back to the English text when the
    translator is missing or fails.
    """

    family = ProviderFamily.LOCAL

    def __init__(self, capabilities: PlatformCapabilities, provider_id: str = "chrome-builtin"):
        self.capabilities = capabilities
        self.provider_id = provider_id

    async def is_supported(self) -> bool:
        try:
            return await self.capabilities.summarizer_supported()
        except Exception as e:
            logger.warning(f"On-device capability check failed: {e}")
            return False

    async def _summarize(self,
                         content: str,
                         language: str,
                         credentials: ProviderCredentials,
                         model: Optional[str],
                         length: SummaryLength,
                         on_progress: Optional[ProgressCallback]) -> str:
        if not await self.is_supported():
            raise CapabilityUnsupportedError(self.family.label)

        self._emit(on_progress, ProgressStep.INITIALIZING, 20)
        session = await self.capabilities.create_summarizer(
            SummarizerOptions(length=length, output_language=DEFAULT_LANGUAGE)
        )
        try:
            self._emit(on_progress, ProgressStep.EXTRACTING_CONTENT, 50)
            summary = await session.summarize(content)
        finally:
            await session.destroy()

        if language and language != DEFAULT_LANGUAGE:
            summary = await self._translate(summary, language, on_progress)

        return summary.strip()

    async def _translate(self,
                         summary: str,
                         language: str,
                         on_progress: Optional[ProgressCallback]) -> str:
        self._emit(on_progress, ProgressStep.CHECKING_TRANSLATION_MODEL, 60)

        try:
            availability = await self.capabilities.translation_availability(
                DEFAULT_LANGUAGE, language
            )

            if availability is TranslationAvailability.AVAILABLE:
                self._emit(on_progress, ProgressStep.TRANSLATING_SUMMARY, 80)
                translator = await self.capabilities.create_translator(DEFAULT_LANGUAGE, language)
            elif availability is TranslationAvailability.DOWNLOADABLE:
                self._emit(on_progress, ProgressStep.DOWNLOADING_LANGUAGE_MODEL, 60)

                def monitor(fraction: float) -> None:
                    percent = round(max(0.0, min(1.0, fraction)) * 100)
                    self._emit(
                        on_progress,
                        ProgressStep.DOWNLOADING_LANGUAGE_MODEL,
                        60 + percent * 0.3,
                        detail=f"{percent}%",
                    )

                translator = await self.capabilities.create_translator(
                    DEFAULT_LANGUAGE, language, monitor=monitor
                )
                self._emit(on_progress, ProgressStep.TRANSLATING_SUMMARY, 90)
            else:
                logger.info(f"No translation model for en -> {language}; keeping English summary")
                return summary

            try:
                return await translator.translate(summary)
            finally:
                await translator.destroy()

        except Exception as e:
            logger.debug(f"Translation to {language} failed, keeping English summary: {e}")
            return summary

    def _emit(self,
              on_progress: Optional[ProgressCallback],
              step: ProgressStep,
              percent: float,
              detail: Optional[str] = None) -> None:
        if on_progress is None:
            return
        on_progress(ProgressEvent(
            step=step,
            percent_complete=percent,
            estimated_seconds_remaining=0.0,
            current_provider_id=self.provider_id,
            detail=detail,
        ))
