"""
Summarization orchestration: pipeline, metrics, history and request guard.
"""

from .guard import ProcessingGuard
from .history import SummaryHistory
from .metrics_store import MetricsStore
from .pipeline import PipelineOptions, ProgressReporter, SummarizationPipeline
from .preferences import PreferenceStore
from .service import SummaryService

__all__ = [
    'ProcessingGuard',
    'SummaryHistory',
    'MetricsStore',
    'PipelineOptions',
    'ProgressReporter',
    'SummarizationPipeline',
    'PreferenceStore',
    'SummaryService',
]
