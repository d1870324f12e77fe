"""
Environment variable handling for PageBrief configuration.
"""

import os
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .settings import (
    AppConfig, ProviderCredentials, UserPreferences, StorageConfig,
    OllamaConfig, ServerConfig, LogLevel,
)
from .constants import (
    DEFAULT_MODEL_ID, DEFAULT_LANGUAGE, DEFAULT_SUMMARY_LENGTH, DEFAULT_HTTP_TIMEOUT,
    OPENAI_ORIGIN, GEMINI_ORIGIN, ANTHROPIC_ORIGIN,
)

REMOTE_FAMILIES = ("openai", "gemini", "anthropic")


class EnvironmentLoader:
    """Loads configuration from environment variables."""

    @staticmethod
    def load_config(use_dotenv: bool = True) -> AppConfig:
        """Load configuration from environment variables."""
        if use_dotenv:
            load_dotenv(override=True)

        credentials = ProviderCredentials(
            openai_api_key=os.getenv('OPENAI_API_KEY', ''),
            gemini_api_key=os.getenv('GEMINI_API_KEY', ''),
            anthropic_api_key=os.getenv('ANTHROPIC_API_KEY', ''),
        )

        default_model = os.getenv('PAGEBRIEF_DEFAULT_MODEL', DEFAULT_MODEL_ID)
        preferences = UserPreferences(
            selected_model=os.getenv('PAGEBRIEF_SELECTED_MODEL') or None,
            enable_fallback=EnvironmentLoader._parse_bool(
                os.getenv('PAGEBRIEF_ENABLE_FALLBACK'), default=True
            ),
            language=os.getenv('PAGEBRIEF_LANGUAGE', DEFAULT_LANGUAGE),
            summary_length=os.getenv('PAGEBRIEF_SUMMARY_LENGTH', DEFAULT_SUMMARY_LENGTH).lower(),
        )

        storage = StorageConfig(
            backend=os.getenv('PAGEBRIEF_STORAGE_BACKEND', 'sqlite').lower(),
            sqlite_path=os.getenv('PAGEBRIEF_DB_PATH', 'data/pagebrief.db'),
        )

        ollama = OllamaConfig(
            enabled=EnvironmentLoader._parse_bool(os.getenv('PAGEBRIEF_OLLAMA_ENABLED'), default=True),
            base_url=os.getenv('OLLAMA_BASE_URL', 'http://localhost:11434'),
            summary_model=os.getenv('PAGEBRIEF_OLLAMA_MODEL', 'llama3.2'),
            translation_model=os.getenv(
                'PAGEBRIEF_TRANSLATION_MODEL',
                os.getenv('PAGEBRIEF_OLLAMA_MODEL', 'llama3.2'),
            ),
            runtime_version=int(os.getenv('PAGEBRIEF_RUNTIME_VERSION', '138')),
            timeout=float(os.getenv('PAGEBRIEF_OLLAMA_TIMEOUT', '120')),
        )

        server = ServerConfig(
            host=os.getenv('PAGEBRIEF_HOST', '127.0.0.1'),
            port=int(os.getenv('PAGEBRIEF_PORT', '8765')),
            cors_origins=EnvironmentLoader._parse_list(os.getenv('PAGEBRIEF_CORS_ORIGINS', '')),
        )

        log_level = LogLevel.INFO
        try:
            log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        except ValueError:
            pass  # Use default

        granted = EnvironmentLoader._parse_list(os.getenv('PAGEBRIEF_GRANTED_ORIGINS', ''))

        return AppConfig(
            credentials=credentials,
            preferences=preferences,
            storage=storage,
            ollama=ollama,
            server=server,
            log_level=log_level,
            log_file=os.getenv('PAGEBRIEF_LOG_FILE') or None,
            default_model=default_model,
            granted_origins=granted or [OPENAI_ORIGIN, GEMINI_ORIGIN, ANTHROPIC_ORIGIN],
            credential_refs=EnvironmentLoader._load_credential_refs(),
            attempt_timeout_seconds=EnvironmentLoader._parse_optional_float(
                os.getenv('PAGEBRIEF_ATTEMPT_TIMEOUT')
            ),
            http_timeout_seconds=float(os.getenv('PAGEBRIEF_HTTP_TIMEOUT', str(DEFAULT_HTTP_TIMEOUT))),
        )

    @staticmethod
    def _load_credential_refs() -> Dict[str, str]:
        """Load per-family key references, e.g. PAGEBRIEF_OPENAI_KEY_REF=file:openai.enc."""
        refs = {}
        for family in REMOTE_FAMILIES:
            ref = os.getenv(f'PAGEBRIEF_{family.upper()}_KEY_REF')
            if ref:
                refs[family] = ref
        return refs

    @staticmethod
    def _parse_list(value: str, delimiter: str = ',') -> List[str]:
        """Parse a comma-separated string into a list."""
        if not value:
            return []
        return [item.strip() for item in value.split(delimiter) if item.strip()]

    @staticmethod
    def _parse_bool(value: Optional[str], default: bool) -> bool:
        if value is None or value == '':
            return default
        return value.strip().lower() in ('1', 'true', 'yes', 'on')

    @staticmethod
    def _parse_optional_float(value: Optional[str]) -> Optional[float]:
        if not value:
            return None
        parsed = float(value)
        return parsed if parsed > 0 else None
