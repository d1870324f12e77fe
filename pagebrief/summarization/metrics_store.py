"""
Persisted per-provider performance metrics.

All stats live in one map under the "modelMetrics" key. Updates are
read-modify-write without locking; two calls finishing at the same moment
for the same provider may lose one update.
"""

import logging
from typing import Dict, Optional

from ..config.constants import DEFAULT_ESTIMATE_SECONDS, METRICS_KEY
from ..data.base import KeyValueStore
from ..exceptions import StorageError
from ..models.base import utc_now
from ..models.metrics import ProviderStats
from ..models.summary import SummarizationMetrics

logger = logging.getLogger(__name__)


class MetricsStore:
    """Rolling per-provider statistics used for progress estimates."""

    def __init__(self, store: KeyValueStore, default_estimate: float = DEFAULT_ESTIMATE_SECONDS):
        self.store = store
        self.default_estimate = default_estimate

    async def _load(self) -> Dict[str, dict]:
        data = await self.store.get(METRICS_KEY, {})
        return data if isinstance(data, dict) else {}

    async def record_attempt(self, provider_id: str, metrics: SummarizationMetrics) -> None:
        """Fold one completed summarize call into provider_id's stats.

        Storage failures are logged and never raised.
        """
        try:
            all_stats = await self._load()
            stats = ProviderStats.from_dict(all_stats.get(provider_id))
            stats.record(
                elapsed_seconds=metrics.total_elapsed_seconds,
                succeeded=metrics.succeeded,
                timestamp=utc_now().isoformat(),
            )
            all_stats[provider_id] = stats.to_dict()
            await self.store.set(METRICS_KEY, all_stats)
            logger.debug(
                f"Recorded metrics for {provider_id}: {stats.total_requests} requests, "
                f"avg {stats.average_time_seconds:.2f}s"
            )
        except StorageError as e:
            logger.error(f"Failed to store metrics for {provider_id}: {e}")

    async def estimate_seconds(self, provider_id: str) -> float:
        """Average time for provider_id, or the default before any runs."""
        stats = await self.get_stats(provider_id)
        if stats is None or stats.total_requests == 0:
            return self.default_estimate
        return stats.average_time_seconds

    async def get_stats(self, provider_id: str) -> Optional[ProviderStats]:
        try:
            all_stats = await self._load()
        except StorageError as e:
            logger.error(f"Failed to read metrics for {provider_id}: {e}")
            return None

        data = all_stats.get(provider_id)
        if not isinstance(data, dict):
            return None
        return ProviderStats.from_dict(data)

    async def get_all_stats(self) -> Dict[str, ProviderStats]:
        try:
            all_stats = await self._load()
        except StorageError as e:
            logger.error(f"Failed to read metrics: {e}")
            return {}

        return {
            provider_id: ProviderStats.from_dict(data)
            for provider_id, data in all_stats.items()
            if isinstance(data, dict)
        }

    async def reset(self) -> None:
        """Clear every provider's stats."""
        try:
            await self.store.delete(METRICS_KEY)
            logger.info("Model metrics cleared")
        except StorageError as e:
            logger.error(f"Failed to clear metrics: {e}")
