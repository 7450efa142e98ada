"""
Tenant Cache - Cache Module

Provides the tenant-aware cache facade with pluggable backends.

- tenant.py: TenantCache facade (key derivation + backend dispatch)
- factory.py: Backend selection and cache construction
- interface.py: Abstract interface all backends must implement
- backends/: File and Redis backend implementations

Usage:
    from tenant_cache.cache import create_cache

    cache = create_cache({"method": "file", "storage_dir": "/tmp/c", "ttl_seconds": 60})
    cache.save("tenantA", "/users/1", {"name": "Bob"})
    value = cache.get("tenantA", "/users/1")
"""

from .aio import AsyncTenantCache
from .factory import (
    create_backend,
    create_cache,
    create_cache_from_settings,
    open_redis_client,
    register_backend,
)
from .interface import CacheBackendInterface
from .keys import form_key, tenant_key_prefix
from .tenant import TenantCache
from .validation import validate_config

__all__ = [
    # Facades
    "TenantCache",
    "AsyncTenantCache",
    # Factory functions
    "create_cache",
    "create_cache_from_settings",
    "create_backend",
    "register_backend",
    "open_redis_client",
    # Interface
    "CacheBackendInterface",
    # Keys and validation
    "form_key",
    "tenant_key_prefix",
    "validate_config",
]
