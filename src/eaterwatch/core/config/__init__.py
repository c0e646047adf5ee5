"""Configuration loading and validation."""

from .models import (
    DEFAULT_TARGET_URL,
    AppConfig,
    ArchiveConfig,
    CanonicalAlias,
    ExtractionConfig,
    FetchConfig,
    LoggingConfig,
    NormalizationConfig,
)
from .loader import ConfigError, load_app_config

__all__ = [
    "DEFAULT_TARGET_URL",
    # Config models
    "AppConfig",
    "ArchiveConfig",
    "CanonicalAlias",
    "ExtractionConfig",
    "FetchConfig",
    "LoggingConfig",
    "NormalizationConfig",
    # Loaders
    "ConfigError",
    "load_app_config",
]
