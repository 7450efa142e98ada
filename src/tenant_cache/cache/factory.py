"""
Tenant Cache - Cache Factory

Selects and builds the storage backend for a validated configuration.
Backends are chosen once, when a TenantCache is constructed; call sites never
branch on the cache method.

Examples:
    from tenant_cache.cache.factory import create_cache

    cache = create_cache({"method": "file", "storage_dir": "/tmp/c", "ttl_seconds": 60})

    # Redis: the connection is opened and owned by the caller
    client = open_redis_client("redis://localhost:6379/0")
    cache = create_cache({"method": "redis", "ttl_seconds": 0}, redis_client=client)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from redis import Redis

from ..config import CacheConfig, CacheMethod, TenantCacheSettings, get_config
from ..errors import MissingStorageDirError, MissingStoreClientError, UnknownBackendError
from ..observability.events import EventRecorder
from .backends.file import FileCacheBackend
from .backends.redis import RedisCacheBackend
from .interface import CacheBackendInterface

if TYPE_CHECKING:
    from .tenant import TenantCache

logger = logging.getLogger(__name__)

BackendBuilder = Callable[[CacheConfig, Any], CacheBackendInterface]


def _build_file_backend(config: CacheConfig, redis_client: Any) -> CacheBackendInterface:
    """Internal helper to construct a file cache backend."""
    if config.storage_dir is None:
        raise MissingStorageDirError()
    return FileCacheBackend(
        storage_dir=config.storage_dir,
        ttl_seconds=config.ttl_seconds,
        extension=config.file_extension,
    )


def _build_redis_backend(config: CacheConfig, redis_client: Any) -> CacheBackendInterface:
    """Internal helper to construct a redis cache backend over an injected client."""
    if redis_client is None:
        raise MissingStoreClientError(config.method.value)
    return RedisCacheBackend(client=redis_client, ttl_seconds=config.ttl_seconds)


# Backend builders keyed by method
_backend_builders: dict[CacheMethod, BackendBuilder] = {
    CacheMethod.FILE: _build_file_backend,
    CacheMethod.REDIS: _build_redis_backend,
}


def register_backend(method: CacheMethod, builder: BackendBuilder) -> None:
    """
    Register (or replace) the builder used for a cache method.

    Args:
        method: Cache method the builder serves
        builder: Callable taking (config, redis_client) and returning a backend
    """
    _backend_builders[method] = builder
    logger.debug("Registered cache backend builder for '%s'", method.value)


def create_backend(config: CacheConfig, redis_client: Any = None) -> CacheBackendInterface:
    """
    Build the backend for a validated configuration.

    Args:
        config: Validated cache configuration
        redis_client: Connected store client (required for the redis method)

    Returns:
        Configured backend instance

    Raises:
        ConfigurationError: If no builder exists or a required client is missing
    """
    builder = _backend_builders.get(config.method)
    if builder is None:
        raise UnknownBackendError(config.method.value, [m.value for m in _backend_builders])

    backend = builder(config, redis_client)
    logger.info(
        "Created cache backend: %s",
        config.method.value,
        extra={"method": config.method.value, "backend": type(backend).__name__},
    )
    return backend


def create_cache(
    config: CacheConfig | Mapping[str, Any],
    redis_client: Any = None,
    event_recorder: EventRecorder | None = None,
) -> TenantCache:
    """
    Create a TenantCache.

    Args:
        config: CacheConfig or mapping of cache options
        redis_client: Connected store client (redis method only)
        event_recorder: Optional collaborator receiving request/response events

    Returns:
        Ready-to-use TenantCache

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    from .tenant import TenantCache

    return TenantCache(config, redis_client=redis_client, event_recorder=event_recorder)


def create_cache_from_settings(
    settings: TenantCacheSettings | None = None,
    redis_client: Any = None,
    event_recorder: EventRecorder | None = None,
) -> TenantCache:
    """
    Create a TenantCache from loaded settings.

    Args:
        settings: Settings to use (loaded from the environment if not provided)
        redis_client: Connected store client; when omitted for the redis method,
            one is opened from ``settings.cache.redis_url`` and the caller owns it
            (reachable as ``cache.backend.client``)
        event_recorder: Optional collaborator receiving request/response events
    """
    if settings is None:
        settings = get_config()

    cache_settings = settings.cache
    if redis_client is None and cache_settings.method.strip().lower() == CacheMethod.REDIS.value:
        if cache_settings.redis_url:
            redis_client = open_redis_client(cache_settings.redis_url, cache_settings.redis_socket_timeout)

    return create_cache(cache_settings.as_options(), redis_client=redis_client, event_recorder=event_recorder)


def open_redis_client(redis_url: str, socket_timeout: float = 5.0) -> Redis:
    """
    Open a Redis client for callers that do not manage their own.

    The connection is lazy (established on first command) and is owned by the
    caller, who must close it.
    """
    if not redis_url:
        raise ValueError("redis_url is required")
    return Redis.from_url(redis_url, socket_timeout=socket_timeout)
