"""
FastAPI application exposing the summarization service.
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..data.base import KeyValueStore
from ..exceptions import AlreadyProcessingError, ConfigurationError, PageBriefError
from ..models.summary import ProgressEvent
from ..summarization import SummaryService
from .models import (
    ErrorResponse, HistoryEntryResponse, ModelResponse, ProgressEventResponse,
    ProviderStatsResponse,
    SummarizeRequest, SummarizeResponse, SwitchModelRequest,
)

logger = logging.getLogger(__name__)


def _progress_response(event: ProgressEvent) -> ProgressEventResponse:
    return ProgressEventResponse(
        step=event.step_label,
        percent_complete=event.percent_complete,
        estimated_seconds_remaining=event.estimated_seconds_remaining,
        current_provider_id=event.current_provider_id,
        succeeded=event.succeeded,
        detail=event.detail,
    )


def create_app(service: SummaryService,
               store: Optional[KeyValueStore] = None,
               cors_origins: Optional[List[str]] = None) -> FastAPI:
    """Build the API around a configured SummaryService.

    Args:
        service: Summarization service
        store: Key-value store opened on startup and closed on shutdown
        cors_origins: Origins allowed to call the API
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("PageBrief API starting up")
        if store is not None:
            await store.connect()
        yield
        if store is not None:
            await store.disconnect()
        logger.info("PageBrief API shutting down")

    app = FastAPI(
        title="PageBrief API",
        description="Multi-provider page summarization",
        version=__version__,
        lifespan=lifespan,
    )

    if cors_origins:
        logger.info(f"CORS allowed origins: {cors_origins}")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.exception_handler(AlreadyProcessingError)
    async def already_processing_handler(request: Request, exc: AlreadyProcessingError):
        return JSONResponse(
            status_code=409,
            content=ErrorResponse(error=exc.error_code, message=exc.message).model_dump(),
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=exc.error_code, message=f"{exc.message}: {exc.model_id}").model_dump(),
        )

    @app.exception_handler(PageBriefError)
    async def pagebrief_error_handler(request: Request, exc: PageBriefError):
        logger.error(f"Request failed: {exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=exc.error_code, message=exc.message).model_dump(),
        )

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "version": __version__}

    @app.post(
        "/summaries",
        response_model=SummarizeResponse,
        responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["Summaries"],
    )
    async def create_summary(body: SummarizeRequest):
        events: List[ProgressEvent] = []
        result = await service.summarize(
            body.content,
            body.target_id,
            force_model=body.force_model,
            url=body.url,
            title=body.title,
            on_progress=events.append,
        )
        return SummarizeResponse(
            summary=result.summary_text,
            model=result.used_provider_id,
            attributed_model=result.attributed_provider_id,
            time=result.time_label,
            succeeded=result.succeeded,
            metrics=result.metrics.to_dict(),
            progress=[_progress_response(event) for event in events],
        )

    @app.get("/models", response_model=List[ModelResponse], tags=["Models"])
    async def list_models():
        return [
            ModelResponse(
                id=config.model_id,
                name=config.display_name,
                family=config.family.value,
                wire_model_id=config.wire_model_id,
                cost=config.unit_cost,
            )
            for config in service.list_models()
        ]

    @app.put("/preferences/model", responses={400: {"model": ErrorResponse}}, tags=["Models"])
    async def switch_model(body: SwitchModelRequest):
        config = await service.switch_model(body.model)
        return {"model": config.model_id, "name": config.display_name}

    @app.get("/metrics", response_model=Dict[str, ProviderStatsResponse], tags=["Metrics"])
    async def get_metrics():
        stats = await service.get_metrics()
        return {provider_id: item.to_dict() for provider_id, item in stats.items()}

    @app.delete("/metrics", status_code=204, tags=["Metrics"])
    async def reset_metrics():
        await service.reset_metrics()

    @app.get("/history", response_model=List[HistoryEntryResponse], tags=["History"])
    async def list_history(limit: Optional[int] = None):
        entries = await service.list_history(limit)
        return [entry.to_dict() for entry in entries]

    @app.delete("/history", status_code=204, tags=["History"])
    async def clear_history():
        await service.clear_history()

    return app
