"""
Tenant Cache - Configuration Loader

Loads settings from environment variables and .env files.
Keeps one loaded settings instance per process; pass settings explicitly to
create_cache_from_settings() when a different configuration is needed.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import DEFAULT_FILE_EXTENSION, DEFAULT_KEY_PREFIX, TenantCacheSettings

logger = logging.getLogger(__name__)

_config_instance: TenantCacheSettings | None = None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> TenantCacheSettings:
    """
    Load settings from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if settings were already loaded

    Returns:
        Validated TenantCacheSettings instance

    Raises:
        ConfigurationError: If the settings are malformed
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    config_dict = {
        "cache": {
            "method": os.getenv("TENANT_CACHE_METHOD", "file"),
            "storage_dir": os.getenv("TENANT_CACHE_DIR"),
            # Kept as text: the cache validator reports non-numeric TTLs itself
            "ttl_seconds": os.getenv("TENANT_CACHE_TTL_SECONDS", "3600"),
            "key_prefix": os.getenv("TENANT_CACHE_KEY_PREFIX", DEFAULT_KEY_PREFIX),
            "file_extension": os.getenv("TENANT_CACHE_FILE_EXTENSION", DEFAULT_FILE_EXTENSION),
            "redis_url": os.getenv("REDIS_URL"),
            "redis_socket_timeout": os.getenv("REDIS_SOCKET_TIMEOUT", "5"),
        },
        "logging": {
            "log_path": os.getenv("LOG_PATH", "/tmp"),
            "logger_name": os.getenv("LOG_NAME", "tenant_cache"),
            "max_files": os.getenv("LOG_MAX_FILES", "10"),
            "level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "json_format": os.getenv("LOG_JSON", "false").lower() == "true",
        },
    }

    try:
        _config_instance = TenantCacheSettings(**config_dict)  # type: ignore[arg-type]
        logger.info(
            f"Configuration loaded successfully (cache method: {_config_instance.cache.method})",
            extra={"cache_method": _config_instance.cache.method},
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> TenantCacheSettings:
    """
    Get the current settings instance, loading it on first access.

    Returns:
        Current TenantCacheSettings instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> TenantCacheSettings:
    """
    Force reload settings.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded TenantCacheSettings instance
    """
    return load_config(env_file=env_file, reload=True)
