"""
Persisted per-provider statistics.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import BaseModel


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) and number >= 0 else 0.0


@dataclass
class ProviderStats(BaseModel):
    """Rolling statistics for one provider id.

    average_time_seconds == cumulative_time_seconds / total_requests
    whenever total_requests > 0.
    """
    total_requests: int = 0
    successful_requests: int = 0
    cumulative_time_seconds: float = 0.0
    average_time_seconds: float = 0.0
    last_used: Optional[str] = None

    def record(self, elapsed_seconds: float, succeeded: bool, timestamp: str) -> None:
        """Fold one completed summarize call into the stats."""
        self.total_requests += 1
        self.cumulative_time_seconds += elapsed_seconds
        self.average_time_seconds = self.cumulative_time_seconds / self.total_requests
        if succeeded:
            self.successful_requests += 1
        self.last_used = timestamp

    @property
    def success_rate(self) -> float:
        if not self.total_requests:
            return 0.0
        return self.successful_requests / self.total_requests

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRequests": self.total_requests,
            "successfulRequests": self.successful_requests,
            "totalTime": self.cumulative_time_seconds,
            "avgTime": self.average_time_seconds,
            "lastUsed": self.last_used,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ProviderStats":
        """Parse a stored entry; missing or malformed fields read as zero."""
        if not isinstance(data, dict):
            return cls()
        last_used = data.get("lastUsed")
        return cls(
            total_requests=int(_number(data.get("totalRequests"))),
            successful_requests=int(_number(data.get("successfulRequests"))),
            cumulative_time_seconds=_number(data.get("totalTime")),
            average_time_seconds=_number(data.get("avgTime")),
            last_used=last_used if isinstance(last_used, str) else None,
        )
