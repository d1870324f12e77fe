"""
Summarization data models: invocation outcomes, attempt traces,
progress events and the final result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .base import BaseModel


@dataclass(frozen=True)
class InvocationSuccess:
    """A provider produced a summary."""
    summary_text: str

    @property
    def succeeded(self) -> bool:
        return True


@dataclass(frozen=True)
class InvocationFailure:
    """A provider attempt failed; error_kind is the failing error's code."""
    error_reason: str
    error_kind: str = "PROVIDER_ERROR"

    @property
    def succeeded(self) -> bool:
        return False


InvocationResult = Union[InvocationSuccess, InvocationFailure]


@dataclass
class AttemptRecord(BaseModel):
    """One provider try within a single summarize call."""
    provider_id: str
    succeeded: bool
    elapsed_millis: float
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "model": self.provider_id,
            "success": self.succeeded,
            "time": self.elapsed_millis,
        }
        if self.error_message is not None:
            data["error"] = self.error_message
        return data


@dataclass
class SummarizationMetrics(BaseModel):
    """Ordered attempt trace plus total wall-clock time for one call."""
    attempts: List[AttemptRecord] = field(default_factory=list)
    total_elapsed_seconds: float = 0.0

    def add_attempt(self, record: AttemptRecord) -> None:
        self.attempts.append(record)

    @property
    def last_attempt(self) -> Optional[AttemptRecord]:
        return self.attempts[-1] if self.attempts else None

    @property
    def succeeded(self) -> bool:
        last = self.last_attempt
        return bool(last and last.succeeded)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attempts": [attempt.to_dict() for attempt in self.attempts],
            "totalTime": self.total_elapsed_seconds,
        }


class ProgressStep(Enum):
    """Closed set of progress step labels."""
    EXTRACTING_CONTENT = "extractingContent"
    INITIALIZING = "initializing"
    PROCESSING_RESPONSE = "processingResponse"
    TRYING_FALLBACK_MODELS = "tryingFallbackModels"
    TRYING_MODEL = "tryingModel"
    CHECKING_TRANSLATION_MODEL = "checkingTranslationModel"
    DOWNLOADING_LANGUAGE_MODEL = "downloadingLanguageModel"
    TRANSLATING_SUMMARY = "translatingSummary"
    FINALIZING_SUMMARY = "finalizingSummary"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ProgressEvent(BaseModel):
    """Transient progress notification delivered to the caller."""
    step: ProgressStep
    percent_complete: float
    estimated_seconds_remaining: float
    current_provider_id: str
    succeeded: Optional[bool] = None
    detail: Optional[str] = None

    @property
    def step_label(self) -> str:
        return self.step.value


@dataclass
class SummarizeResult(BaseModel):
    """Normalized result of one summarize call.

    used_provider_id is "none" when every attempt failed;
    attributed_provider_id is the id the metrics were recorded under.
    """
    summary_text: str
    used_provider_id: str
    elapsed_seconds: float
    metrics: SummarizationMetrics
    attributed_provider_id: str = ""

    @property
    def succeeded(self) -> bool:
        return self.metrics.succeeded

    @property
    def time_label(self) -> str:
        return f"{self.elapsed_seconds:.2f}"
