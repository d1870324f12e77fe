"""
Summary history entries.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .base import BaseModel, generate_id, utc_now


@dataclass
class SummaryHistoryEntry(BaseModel):
    """A summary shown to the user, kept for the history view."""
    url: str
    title: str
    summary: str
    model: str
    time: str
    metrics: Optional[Dict[str, Any]] = None
    id: str = field(default_factory=generate_id)
    timestamp: str = field(default_factory=lambda: utc_now().isoformat())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SummaryHistoryEntry":
        return cls(
            id=data.get("id") or generate_id(),
            timestamp=data.get("timestamp") or utc_now().isoformat(),
            url=data.get("url", ""),
            title=data.get("title", ""),
            summary=data.get("summary", ""),
            model=data.get("model", ""),
            time=str(data.get("time", "")),
            metrics=data.get("metrics"),
        )
