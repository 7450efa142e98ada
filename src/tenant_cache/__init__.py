"""
Tenant Cache

Tenant-aware caching facade storing JSON-serializable values under namespaced
keys, with time-based expiry and file or Redis storage.
"""

__version__ = "1.0.0"

from .cache import AsyncTenantCache, TenantCache, create_cache, create_cache_from_settings
from .config import CacheConfig, CacheMethod
from .errors import (
    ConfigurationError,
    InvalidMethodError,
    InvalidTTLError,
    MissingStorageDirError,
    MissingStoreClientError,
    StorageDirNotWritableError,
    TenantCacheError,
)
from .observability import EventKind, EventLogger, EventRecorder

__all__ = [
    "TenantCache",
    "AsyncTenantCache",
    "create_cache",
    "create_cache_from_settings",
    "CacheConfig",
    "CacheMethod",
    "EventKind",
    "EventLogger",
    "EventRecorder",
    "TenantCacheError",
    "ConfigurationError",
    "InvalidMethodError",
    "MissingStorageDirError",
    "StorageDirNotWritableError",
    "InvalidTTLError",
    "MissingStoreClientError",
]
