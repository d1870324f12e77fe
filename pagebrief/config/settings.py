"""
Configuration data classes for PageBrief.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .constants import (
    DEFAULT_MODEL_ID, DEFAULT_LANGUAGE, DEFAULT_SUMMARY_LENGTH, DEFAULT_HTTP_TIMEOUT,
    OPENAI_ORIGIN, GEMINI_ORIGIN, ANTHROPIC_ORIGIN,
)


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SummaryLength(Enum):
    """Summary length options with bullet count and output token budget."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def bullet_count(self) -> int:
        return {"short": 3, "medium": 5, "long": 7}[self.value]

    @property
    def max_tokens(self) -> int:
        return {"short": 1000, "medium": 2000, "long": 3000}[self.value]

    @classmethod
    def parse(cls, value: Optional[str]) -> "SummaryLength":
        """Parse a stored length, defaulting to MEDIUM for unknown values."""
        try:
            return cls(value)
        except ValueError:
            return cls.MEDIUM


def mask_key(key: Optional[str]) -> str:
    """Mask an API key for logs."""
    if not key:
        return "<unset>"
    if len(key) <= 10:
        return "***"
    return f"{key[:6]}...{key[-4:]}"


@dataclass
class ProviderCredentials:
    """API keys for the remote provider families."""
    openai_api_key: str = ""
    gemini_api_key: str = ""
    anthropic_api_key: str = ""

    def for_family(self, family: str) -> str:
        """Key for a family value ("openai", "gemini", "anthropic")."""
        return getattr(self, f"{family}_api_key", "") or ""

    def __repr__(self) -> str:
        return (
            f"ProviderCredentials(openai={mask_key(self.openai_api_key)}, "
            f"gemini={mask_key(self.gemini_api_key)}, "
            f"anthropic={mask_key(self.anthropic_api_key)})"
        )


@dataclass
class UserPreferences:
    """User-selectable summarization preferences."""
    selected_model: Optional[str] = None
    enable_fallback: bool = True
    language: str = DEFAULT_LANGUAGE
    summary_length: str = DEFAULT_SUMMARY_LENGTH


@dataclass
class StorageConfig:
    """Key-value storage configuration."""
    backend: str = "memory"
    sqlite_path: str = "data/pagebrief.db"


@dataclass
class OllamaConfig:
    """Local Ollama daemon used as the on-device runtime."""
    enabled: bool = True
    base_url: str = "http://localhost:11434"
    summary_model: str = "llama3.2"
    translation_model: str = "llama3.2"
    runtime_version: int = 138
    timeout: float = 120.0


@dataclass
class ServerConfig:
    """HTTP API server configuration."""
    host: str = "127.0.0.1"
    port: int = 8765
    cors_origins: List[str] = field(default_factory=list)


@dataclass
class AppConfig:
    """Top-level application configuration."""
    credentials: ProviderCredentials = field(default_factory=ProviderCredentials)
    preferences: UserPreferences = field(default_factory=UserPreferences)
    storage: StorageConfig = field(default_factory=StorageConfig)
    ollama: OllamaConfig = field(default_factory=OllamaConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: LogLevel = LogLevel.INFO
    log_file: Optional[str] = None
    default_model: str = DEFAULT_MODEL_ID
    granted_origins: List[str] = field(
        default_factory=lambda: [OPENAI_ORIGIN, GEMINI_ORIGIN, ANTHROPIC_ORIGIN]
    )
    credential_refs: dict = field(default_factory=dict)  # family -> key ref
    attempt_timeout_seconds: Optional[float] = None
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT
