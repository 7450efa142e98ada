"""
Tenant Cache - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    DEFAULT_FILE_EXTENSION,
    DEFAULT_KEY_PREFIX,
    CacheConfig,
    CacheMethod,
    CacheSettings,
    LoggingSettings,
    LogLevel,
    TenantCacheSettings,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main settings
    "TenantCacheSettings",
    # Enums
    "CacheMethod",
    "LogLevel",
    # Config sections
    "CacheConfig",
    "CacheSettings",
    "LoggingSettings",
    # Defaults
    "DEFAULT_KEY_PREFIX",
    "DEFAULT_FILE_EXTENSION",
]
