"""
Configuration management for PageBrief.
"""

import logging
from typing import Optional

from .settings import (
    AppConfig, ProviderCredentials, UserPreferences, StorageConfig,
    OllamaConfig, ServerConfig, LogLevel, SummaryLength, mask_key,
)
from .environment import EnvironmentLoader
from .validation import ConfigValidator, ConfigValidationError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads and validates the application configuration."""

    def __init__(self):
        self._config: Optional[AppConfig] = None

    def load_config(self, use_dotenv: bool = True) -> AppConfig:
        """Load configuration from the environment and validate it.

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        config = EnvironmentLoader.load_config(use_dotenv=use_dotenv)
        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigValidationError(
                f"Configuration validation failed with {len(errors)} error(s)", errors
            )

        logger.info(
            f"Configuration loaded: default_model={config.default_model}, "
            f"storage={config.storage.backend}, credentials={config.credentials!r}"
        )
        self._config = config
        return config

    @property
    def config(self) -> Optional[AppConfig]:
        return self._config


__all__ = [
    'ConfigManager',
    'AppConfig',
    'ProviderCredentials',
    'UserPreferences',
    'StorageConfig',
    'OllamaConfig',
    'ServerConfig',
    'LogLevel',
    'SummaryLength',
    'mask_key',
    'EnvironmentLoader',
    'ConfigValidator',
    'ConfigValidationError',
]
