"""
Tenant Cache - Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.

Two layers:
- CacheConfig: the immutable, validated configuration a TenantCache runs with.
  Built by tenant_cache.cache.validation.validate_config, never edited afterwards.
- TenantCacheSettings: raw settings read from the environment. Cache options are
  kept loosely typed here so the construction-time validator can report the
  precise failure kind (invalid method, missing directory, bad TTL...).
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_KEY_PREFIX = "th_"
DEFAULT_FILE_EXTENSION = "json"


class CacheMethod(str, Enum):
    """Supported cache backends."""

    FILE = "file"
    REDIS = "redis"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CacheConfig(BaseModel):
    """Validated cache configuration, immutable after construction."""

    method: CacheMethod = Field(description="Cache backend to use")
    storage_dir: Path | None = Field(default=None, description="Directory for cache files (file backend only)")
    ttl_seconds: float = Field(description="Entry lifetime in seconds (<= 0 = no expiry, redis backend only)")
    key_prefix: str = Field(default=DEFAULT_KEY_PREFIX, description="Prefix for every derived cache key")
    file_extension: str = Field(default=DEFAULT_FILE_EXTENSION, description="Extension of cache files")

    model_config = ConfigDict(frozen=True)

    @field_validator("file_extension")
    @classmethod
    def validate_file_extension(cls, v: str) -> str:
        """Strip a leading dot and reject empty or path-like extensions."""
        v = v.strip().lstrip(".")
        if not v or "/" in v or "\\" in v or "*" in v:
            raise ValueError("file_extension must be a plain, non-empty extension such as 'json'")
        return v


class CacheSettings(BaseModel):
    """Cache options as read from the environment (validated at cache construction)."""

    method: str = Field(default=CacheMethod.FILE.value, description="Cache backend: 'file' or 'redis'")
    storage_dir: str | None = Field(default=None, description="Directory for cache files")
    ttl_seconds: Any = Field(default=3600, description="Entry lifetime in seconds")
    key_prefix: str = Field(default=DEFAULT_KEY_PREFIX, description="Cache key prefix")
    file_extension: str = Field(default=DEFAULT_FILE_EXTENSION, description="Extension of cache files")

    # Redis-specific settings (only used when method=redis)
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    redis_socket_timeout: float = Field(default=5.0, gt=0, description="Redis socket timeout in seconds")

    def as_options(self) -> dict[str, Any]:
        """Return the cache construction options understood by TenantCache."""
        return {
            "method": self.method,
            "storage_dir": self.storage_dir,
            "ttl_seconds": self.ttl_seconds,
            "key_prefix": self.key_prefix,
            "file_extension": self.file_extension,
        }


class LoggingSettings(BaseModel):
    """Settings for the rotating event log."""

    log_path: str = Field(default="/tmp", description="Directory holding the log files")
    logger_name: str = Field(default="tenant_cache", description="Logger name, also used as the file name")
    max_files: int = Field(default=10, ge=1, description="Number of rotated log files to keep")
    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum level written to the log")
    json_format: bool = Field(default=False, description="Write JSON lines instead of plain text")


class TenantCacheSettings(BaseModel):
    """Root settings for the tenant cache."""

    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
