"""
Data models for PageBrief.
"""

from .base import BaseModel, generate_id, utc_now
from .provider import ProviderFamily, ModelConfig, LanguageDecision
from .summary import (
    InvocationSuccess, InvocationFailure, InvocationResult,
    AttemptRecord, SummarizationMetrics,
    ProgressStep, ProgressEvent, SummarizeResult,
)
from .metrics import ProviderStats
from .history import SummaryHistoryEntry

__all__ = [
    'BaseModel',
    'generate_id',
    'utc_now',
    'ProviderFamily',
    'ModelConfig',
    'LanguageDecision',
    'InvocationSuccess',
    'InvocationFailure',
    'InvocationResult',
    'AttemptRecord',
    'SummarizationMetrics',
    'ProgressStep',
    'ProgressEvent',
    'SummarizeResult',
    'ProviderStats',
    'SummaryHistoryEntry',
]
