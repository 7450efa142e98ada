"""
Tenant Cache - Configuration Validator

Turns raw cache options into an immutable CacheConfig. Runs once, when a
TenantCache is constructed. Checks run in a fixed order and the first failure
is raised:

1. method is a recognized backend            -> InvalidMethodError
2. file method has a storage directory       -> MissingStorageDirError
3. file method's directory is writable       -> StorageDirNotWritableError
4. ttl is present and numeric                -> InvalidTTLError

The only side effect is the writability probe (os.access).
"""

import logging
import math
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..config.schemas import DEFAULT_FILE_EXTENSION, DEFAULT_KEY_PREFIX, CacheConfig, CacheMethod
from ..errors import (
    ConfigurationError,
    InvalidMethodError,
    InvalidTTLError,
    MissingStorageDirError,
    StorageDirNotWritableError,
)

logger = logging.getLogger(__name__)

# Alternative option names accepted for compatibility with older configs
_OPTION_ALIASES = {
    "file_dir": "storage_dir",
    "ttl": "ttl_seconds",
}


def normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map aliased option names onto canonical ones (canonical names win)."""
    normalized: dict[str, Any] = {}
    for name, value in options.items():
        canonical = _OPTION_ALIASES.get(name, name)
        if canonical != name and canonical in options:
            continue
        normalized[canonical] = value
    return normalized


def parse_method(value: Any) -> CacheMethod | None:
    """Return the CacheMethod for value, or None if it is not recognized."""
    if isinstance(value, CacheMethod):
        return value
    if not isinstance(value, str):
        return None
    try:
        return CacheMethod(value.strip().lower())
    except ValueError:
        return None


def parse_ttl(value: Any) -> float | None:
    """Return value as a finite float, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        ttl = float(value)
    elif isinstance(value, str):
        try:
            ttl = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return ttl if math.isfinite(ttl) else None


def is_writable_dir(path: str | os.PathLike[str]) -> bool:
    """True if path is an existing directory the process can write to."""
    return os.path.isdir(path) and os.access(path, os.W_OK)


def validate_config(config: CacheConfig | Mapping[str, Any]) -> CacheConfig:
    """
    Validate cache options and build the immutable configuration.

    Args:
        config: A CacheConfig, or a mapping with the options ``method``,
            ``storage_dir`` (alias ``file_dir``), ``ttl_seconds`` (alias ``ttl``),
            ``key_prefix`` and ``file_extension``

    Returns:
        Validated CacheConfig

    Raises:
        ConfigurationError: One of its subclasses for the first failed check
    """
    if isinstance(config, CacheConfig):
        options = config.model_dump()
    else:
        options = normalize_options(config)

    raw_method = options.get("method")
    method = parse_method(raw_method)
    if method is None:
        raise InvalidMethodError(raw_method, [m.value for m in CacheMethod])

    storage_dir = options.get("storage_dir")
    if storage_dir is not None and not str(storage_dir).strip():
        storage_dir = None

    if method == CacheMethod.FILE:
        if storage_dir is None:
            raise MissingStorageDirError()
        if not is_writable_dir(storage_dir):
            raise StorageDirNotWritableError(str(storage_dir))

    raw_ttl = options.get("ttl_seconds")
    ttl_seconds = parse_ttl(raw_ttl)
    if ttl_seconds is None:
        raise InvalidTTLError(raw_ttl)

    key_prefix = options.get("key_prefix")
    file_extension = options.get("file_extension")

    try:
        validated = CacheConfig(
            method=method,
            storage_dir=Path(storage_dir) if storage_dir is not None else None,
            ttl_seconds=ttl_seconds,
            key_prefix=DEFAULT_KEY_PREFIX if key_prefix is None else key_prefix,
            file_extension=DEFAULT_FILE_EXTENSION if file_extension is None else file_extension,
        )
    except ValidationError as e:
        raise ConfigurationError(
            "Cache configuration validation failed",
            details={"validation_errors": e.errors(include_context=False)},
        ) from e

    logger.debug(
        "Cache configuration validated",
        extra={"method": validated.method.value, "ttl_seconds": validated.ttl_seconds},
    )
    return validated
