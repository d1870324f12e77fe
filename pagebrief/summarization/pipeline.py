"""
Summarization pipeline coordinating provider attempts, fallbacks,
progress reporting and metrics.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from ..config.constants import DEFAULT_MODEL_ID, NO_PROVIDER, UNABLE_TO_SUMMARIZE
from ..config.settings import ProviderCredentials, SummaryLength, UserPreferences
from ..credentials import CredentialResolver
from ..exceptions import ConfigurationError, TransportError
from ..models.summary import (
    AttemptRecord, InvocationFailure, InvocationResult, ProgressEvent,
    ProgressStep, SummarizationMetrics, SummarizeResult,
)
from ..providers import (
    FallbackPlanner, InvokerSet, LanguageSupportResolver, ProviderRegistry,
)
from .metrics_store import MetricsStore
from .preferences import PreferenceStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


@dataclass
class PipelineOptions:
    """Orchestration policy.

    attempt_timeout_seconds bounds each provider attempt; None leaves
    attempts unbounded.
    """
    attempt_timeout_seconds: Optional[float] = None


class ProgressReporter:
    """Delivers progress events with a non-decreasing percentage.

    Errors raised by the callback are logged and do not affect the call.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.events: List[ProgressEvent] = []
        self._last_percent = 0.0

    @property
    def last_percent(self) -> float:
        return self._last_percent

    def emit(self,
             step: ProgressStep,
             percent: float,
             remaining: float,
             provider_id: str,
             succeeded: Optional[bool] = None,
             detail: Optional[str] = None) -> None:
        self.report(ProgressEvent(
            step=step,
            percent_complete=percent,
            estimated_seconds_remaining=remaining,
            current_provider_id=provider_id,
            succeeded=succeeded,
            detail=detail,
        ))

    def report(self, event: ProgressEvent) -> None:
        percent = min(100.0, max(float(event.percent_complete), self._last_percent))
        remaining = max(0.0, float(event.estimated_seconds_remaining))
        event = replace(event, percent_complete=percent, estimated_seconds_remaining=remaining)
        self._last_percent = percent
        self.events.append(event)

        if self.callback is None:
            return
        try:
            self.callback(event)
        except Exception as e:
            logger.warning(f"Progress callback raised: {e}")


class SummarizationPipeline:
    """Runs one summarize call from preferred provider to final result."""

    def __init__(self,
                 invokers: InvokerSet,
                 metrics_store: MetricsStore,
                 preferences: PreferenceStore,
                 credentials: CredentialResolver,
                 registry: Optional[ProviderRegistry] = None,
                 languages: Optional[LanguageSupportResolver] = None,
                 planner: Optional[FallbackPlanner] = None,
                 options: Optional[PipelineOptions] = None,
                 default_model_id: str = DEFAULT_MODEL_ID):
        self.invokers = invokers
        self.metrics_store = metrics_store
        self.preferences = preferences
        self.credentials = credentials
        self.registry = registry or ProviderRegistry()
        self.languages = languages or LanguageSupportResolver()
        self.planner = planner or FallbackPlanner(self.registry)
        self.options = options or PipelineOptions()
        self.default_model_id = default_model_id

    async def summarize(self,
                        content: str,
                        forced_model_id: Optional[str] = None,
                        on_progress: Optional[ProgressCallback] = None,
                        enable_fallback: Optional[bool] = None) -> SummarizeResult:
        """Summarize content, falling back through other providers on failure.

        Args:
            content: Extracted page text
            forced_model_id: Model to use instead of the stored preference
            on_progress: Receives progress events
            enable_fallback: Overrides the stored fallback preference

        Returns:
            SummarizeResult; a failed call carries the apology text and
            used_provider_id "none"
        """
        start = time.monotonic()
        reporter = ProgressReporter(on_progress)

        prefs = await self.preferences.load()
        credentials = await self.credentials.resolve()
        length = SummaryLength.parse(prefs.summary_length)
        fallback_enabled = prefs.enable_fallback if enable_fallback is None else enable_fallback

        preferred = forced_model_id or prefs.selected_model or self.default_model_id
        estimate = await self.metrics_store.estimate_seconds(preferred)
        metrics = SummarizationMetrics()

        logger.info(f"Summarizing {len(content)} chars with {preferred} (fallback={fallback_enabled})")

        reporter.emit(ProgressStep.EXTRACTING_CONTENT, 10, estimate * 0.9, preferred)

        result = await self._attempt(preferred, content, prefs, credentials, length, reporter, estimate)
        metrics.add_attempt(self._record(preferred, result, start))
        used_model = preferred
        succeeded = result.succeeded

        if succeeded:
            reporter.emit(ProgressStep.PROCESSING_RESPONSE, 70, estimate * 0.3, preferred, succeeded=True)
        else:
            reporter.emit(ProgressStep.TRYING_FALLBACK_MODELS, 20, estimate * 0.8, preferred, succeeded=False)

        if not succeeded and fallback_enabled:
            local_supported = await self.invokers.local.is_supported()
            candidates = self.planner.plan_fallbacks(preferred, local_supported)
            logger.info(f"{preferred} failed; trying fallbacks {candidates}")

            for i, model_id in enumerate(candidates):
                attempt_start = time.monotonic()
                config = self.registry.lookup(model_id)
                reporter.emit(
                    ProgressStep.TRYING_MODEL,
                    20 + i * 15,
                    estimate * (0.8 - i * 0.1),
                    model_id,
                    detail=config.display_name if config else model_id,
                )

                result = await self._attempt(model_id, content, prefs, credentials, length, reporter, estimate)
                metrics.add_attempt(self._record(model_id, result, attempt_start))

                if result.succeeded:
                    used_model = model_id
                    succeeded = True
                    reporter.emit(ProgressStep.PROCESSING_RESPONSE, 90, estimate * 0.1, model_id, succeeded=True)
                    break

        reporter.emit(ProgressStep.FINALIZING_SUMMARY, 95, 0.5, used_model, succeeded=succeeded)

        total = round(time.monotonic() - start, 2)
        metrics.total_elapsed_seconds = total
        await self.metrics_store.record_attempt(used_model, metrics)

        reporter.emit(ProgressStep.COMPLETE, 100, 0, used_model, succeeded=succeeded)

        if succeeded:
            logger.info(f"Summary produced by {used_model} in {total:.2f}s")
            return SummarizeResult(
                summary_text=result.summary_text,
                used_provider_id=used_model,
                elapsed_seconds=total,
                metrics=metrics,
                attributed_provider_id=used_model,
            )

        logger.warning(f"All {len(metrics.attempts)} attempts failed for {preferred}")
        return SummarizeResult(
            summary_text=UNABLE_TO_SUMMARIZE,
            used_provider_id=NO_PROVIDER,
            elapsed_seconds=total,
            metrics=metrics,
            attributed_provider_id=used_model,
        )

    async def _attempt(self,
                       model_id: str,
                       content: str,
                       prefs: UserPreferences,
                       credentials: ProviderCredentials,
                       length: SummaryLength,
                       reporter: ProgressReporter,
                       estimate: float) -> InvocationResult:
        config = self.registry.lookup(model_id)
        if config is None:
            error = ConfigurationError(model_id)
            logger.error(f"{error.message}: {model_id}")
            return InvocationFailure(error_reason=error.message, error_kind=error.error_code)

        decision = self.languages.resolve(config.family, prefs.language)
        if decision.needs_fallback:
            logger.info(
                f"{config.display_name} does not support '{prefs.language}'; "
                f"requesting {decision.effective_language}"
            )

        def forward(event: ProgressEvent) -> None:
            reporter.report(replace(
                event,
                estimated_seconds_remaining=estimate * (1 - event.percent_complete / 100),
                current_provider_id=model_id,
            ))

        invoker = self.invokers.for_family(config.family)
        call = invoker.invoke(
            content,
            decision.effective_language,
            credentials,
            model=config.wire_model_id,
            length=length,
            on_progress=forward,
        )

        timeout = self.options.attempt_timeout_seconds
        if timeout is None:
            return await call

        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError:
            error = TransportError(
                config.family.label,
                f"{config.family.label} request timed out after {timeout:g}s",
            )
            logger.warning(f"{model_id}: {error.message}")
            return InvocationFailure(error_reason=error.message, error_kind=error.error_code)

    @staticmethod
    def _record(model_id: str, result: InvocationResult, since: float) -> AttemptRecord:
        return AttemptRecord(
            provider_id=model_id,
            succeeded=result.succeeded,
            elapsed_millis=round((time.monotonic() - since) * 1000, 1),
            error_message=None if result.succeeded else result.error_reason,
        )
