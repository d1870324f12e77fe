"""
Configuration validation for PageBrief.
"""

import re
from typing import List

from .settings import AppConfig, SummaryLength


class ConfigValidator:
    """Validates configuration settings."""

    @staticmethod
    def validate_config(config: AppConfig) -> List[str]:
        """Validate the entire application configuration."""
        errors = []

        errors.extend(ConfigValidator._validate_models(config))
        errors.extend(ConfigValidator._validate_preferences(config))
        errors.extend(ConfigValidator._validate_storage(config))
        errors.extend(ConfigValidator._validate_server(config))
        errors.extend(ConfigValidator._validate_timeouts(config))

        for origin in config.granted_origins:
            if not ConfigValidator._is_valid_origin_pattern(origin):
                errors.append(f"Invalid granted origin: {origin}")

        return errors

    @staticmethod
    def _validate_models(config: AppConfig) -> List[str]:
        from ..providers.registry import ProviderRegistry

        errors = []
        registry = ProviderRegistry()
        if registry.lookup(config.default_model) is None:
            errors.append(f"Unknown default model: {config.default_model}")

        selected = config.preferences.selected_model
        if selected and registry.lookup(selected) is None:
            errors.append(f"Unknown selected model: {selected}")
        return errors

    @staticmethod
    def _validate_preferences(config: AppConfig) -> List[str]:
        errors = []
        valid_lengths = [length.value for length in SummaryLength]
        if config.preferences.summary_length not in valid_lengths:
            errors.append(
                f"Invalid summary length: {config.preferences.summary_length}. "
                f"Valid lengths: {', '.join(valid_lengths)}"
            )
        if not config.preferences.language:
            errors.append("Language must not be empty")
        return errors

    @staticmethod
    def _validate_storage(config: AppConfig) -> List[str]:
        errors = []
        if config.storage.backend not in ['memory', 'sqlite']:
            errors.append(f"Invalid storage backend: {config.storage.backend}")
        if config.storage.backend == 'sqlite' and not config.storage.sqlite_path:
            errors.append("SQLite path is required when using the sqlite storage backend")
        return errors

    @staticmethod
    def _validate_server(config: AppConfig) -> List[str]:
        errors = []
        if not (1 <= config.server.port <= 65535):
            errors.append(f"Server port {config.server.port} is not in valid range (1-65535)")
        for origin in config.server.cors_origins:
            if origin != '*' and not re.match(r'^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$', origin):
                errors.append(f"Invalid CORS origin: {origin}")
        return errors

    @staticmethod
    def _validate_timeouts(config: AppConfig) -> List[str]:
        errors = []
        if config.http_timeout_seconds <= 0:
            errors.append("HTTP timeout must be positive")
        if config.attempt_timeout_seconds is not None and config.attempt_timeout_seconds <= 0:
            errors.append("Attempt timeout must be positive when set")
        return errors

    @staticmethod
    def _is_valid_origin_pattern(origin: str) -> bool:
        """Origins look like https://host/* (the trailing wildcard is optional)."""
        return bool(re.match(r'^https://[a-zA-Z0-9.-]+(?::[0-9]+)?/\*?$', origin))


class ConfigValidationError(Exception):
    """Exception raised for configuration validation errors."""

    def __init__(self, message: str, errors: List[str]):
        super().__init__(message)
        self.errors = errors
