"""
Application wiring for PageBrief.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .api import create_app
from .config import AppConfig, ConfigManager
from .credentials import CredentialResolver
from .data import KeyValueStore, create_store
from .logging_config import setup_logging
from .providers import (
    FallbackPlanner, LanguageSupportResolver, OllamaPlatform, ProviderRegistry,
    StaticPermissions, build_invokers,
)
from .summarization import (
    MetricsStore, PipelineOptions, PreferenceStore, ProcessingGuard,
    SummarizationPipeline, SummaryHistory, SummaryService,
)

logger = logging.getLogger(__name__)


class PageBriefApp:
    """Builds the service graph from configuration and serves the API."""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config
        self.store: Optional[KeyValueStore] = None
        self.service: Optional[SummaryService] = None
        self.app: Optional[FastAPI] = None

    def initialize(self, use_dotenv: bool = True) -> FastAPI:
        if self.config is None:
            self.config = ConfigManager().load_config(use_dotenv=use_dotenv)
        config = self.config

        setup_logging(config.log_level, config.log_file)
        logger.info("Initializing PageBrief...")

        self.store = create_store(config.storage)
        registry = ProviderRegistry()

        invokers = build_invokers(
            capabilities=OllamaPlatform(config.ollama),
            permissions=StaticPermissions(config.granted_origins),
            timeout=config.http_timeout_seconds,
        )
        credentials = CredentialResolver(
            defaults=config.credentials,
            key_refs=config.credential_refs,
            backend_config={"store": self.store},
        )
        metrics_store = MetricsStore(self.store)
        preferences = PreferenceStore(self.store, defaults=config.preferences)

        pipeline = SummarizationPipeline(
            invokers=invokers,
            metrics_store=metrics_store,
            preferences=preferences,
            credentials=credentials,
            registry=registry,
            languages=LanguageSupportResolver(),
            planner=FallbackPlanner(registry),
            options=PipelineOptions(attempt_timeout_seconds=config.attempt_timeout_seconds),
            default_model_id=config.default_model,
        )

        self.service = SummaryService(
            pipeline=pipeline,
            history=SummaryHistory(self.store),
            preferences=preferences,
            metrics_store=metrics_store,
            registry=registry,
            guard=ProcessingGuard(),
        )

        self.app = create_app(self.service, store=self.store, cors_origins=config.server.cors_origins)
        logger.info("PageBrief initialized")
        return self.app

    def run(self) -> None:
        app = self.app or self.initialize()
        server = self.config.server
        logger.info(f"Starting PageBrief API on {server.host}:{server.port}")
        uvicorn.run(
            app,
            host=server.host,
            port=server.port,
            log_level=self.config.log_level.value.lower(),
        )
