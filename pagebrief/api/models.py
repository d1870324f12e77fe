"""
API request and response schemas.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SummarizeRequest(BaseModel):
    """Request to summarize extracted page content."""
    content: str = Field(..., min_length=1)
    target_id: str = Field(..., min_length=1, description="Opaque id of the page or tab")
    force_model: Optional[str] = None
    url: str = ""
    title: str = ""


class ProgressEventResponse(BaseModel):
    step: str
    percent_complete: float
    estimated_seconds_remaining: float
    current_provider_id: str
    succeeded: Optional[bool] = None
    detail: Optional[str] = None


class SummarizeResponse(BaseModel):
    summary: str
    model: str
    attributed_model: str
    time: str
    succeeded: bool
    metrics: Dict[str, Any]
    progress: List[ProgressEventResponse] = Field(default_factory=list)


class ModelResponse(BaseModel):
    id: str
    name: str
    family: str
    wire_model_id: Optional[str] = None
    cost: float


class SwitchModelRequest(BaseModel):
    model: str = Field(..., min_length=1)


class ProviderStatsResponse(BaseModel):
    totalRequests: int
    successfulRequests: int
    totalTime: float
    avgTime: float
    lastUsed: Optional[str] = None


class HistoryEntryResponse(BaseModel):
    id: str
    timestamp: str
    url: str
    title: str
    summary: str
    model: str
    time: str
    metrics: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    error: str
    message: str
