"""
Caller-side summarization service.

Wraps the pipeline with the per-target processing guard, the per-target
result state and summary history.
"""

import logging
from typing import Dict, List, Optional

from ..exceptions import ConfigurationError
from ..models.history import SummaryHistoryEntry
from ..models.metrics import ProviderStats
from ..models.provider import ModelConfig
from ..models.summary import SummarizeResult
from ..providers import ProviderRegistry
from .guard import ProcessingGuard
from .history import SummaryHistory
from .metrics_store import MetricsStore
from .pipeline import ProgressCallback, SummarizationPipeline
from .preferences import PreferenceStore

logger = logging.getLogger(__name__)


class SummaryService:
    """Entry point used by the HTTP API."""

    def __init__(self,
                 pipeline: SummarizationPipeline,
                 history: SummaryHistory,
                 preferences: PreferenceStore,
                 metrics_store: MetricsStore,
                 registry: Optional[ProviderRegistry] = None,
                 guard: Optional[ProcessingGuard] = None):
        self.pipeline = pipeline
        self.history = history
        self.preferences = preferences
        self.metrics_store = metrics_store
        self.registry = registry or ProviderRegistry()
        self.guard = guard or ProcessingGuard()
        self._results: Dict[str, SummarizeResult] = {}

    async def summarize(self,
                        content: str,
                        target_id: str,
                        force_model: Optional[str] = None,
                        url: str = "",
                        title: str = "",
                        on_progress: Optional[ProgressCallback] = None) -> SummarizeResult:
        """Summarize content for a target such as a browser tab.

        Raises:
            AlreadyProcessingError: A summary is already in flight for target_id
        """
        async with self.guard.hold(target_id):
            result = await self.pipeline.summarize(
                content,
                forced_model_id=force_model,
                on_progress=on_progress,
            )

        self._results[target_id] = result
        await self.history.add(url, title, result)
        return result

    def is_processing(self, target_id: str) -> bool:
        return self.guard.is_processing(target_id)

    def last_result(self, target_id: str) -> Optional[SummarizeResult]:
        return self._results.get(target_id)

    def forget_target(self, target_id: str) -> None:
        """Drop state for a target that was closed or navigated away."""
        self._results.pop(target_id, None)

    def list_models(self) -> List[ModelConfig]:
        return self.registry.list_models()

    async def switch_model(self, model_id: str) -> ModelConfig:
        """Store model_id as the preferred model.

        Raises:
            ConfigurationError: model_id is not a known model
        """
        config = self.registry.lookup(model_id)
        if config is None:
            raise ConfigurationError(model_id)
        await self.preferences.set_selected_model(model_id)
        return config

    async def get_metrics(self) -> Dict[str, ProviderStats]:
        return await self.metrics_store.get_all_stats()

    async def reset_metrics(self) -> None:
        await self.metrics_store.reset()

    async def list_history(self, limit: Optional[int] = None) -> List[SummaryHistoryEntry]:
        return await self.history.list(limit)

    async def clear_history(self) -> None:
        await self.history.clear()
