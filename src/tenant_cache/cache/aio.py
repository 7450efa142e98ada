"""
Tenant Cache - Async Wrapper

Exposes TenantCache operations as coroutines for asyncio applications. Each
call runs the synchronous operation in a worker thread; semantics are
unchanged.

Usage:
    cache = AsyncTenantCache(TenantCache(options))
    await cache.save("tenantA", "/users/1", {"name": "Bob"})
"""

import asyncio
from typing import Any

from .tenant import TenantCache


class AsyncTenantCache:
    """Asyncio facade over a TenantCache."""

    def __init__(self, cache: TenantCache) -> None:
        self.cache = cache

    def form_key(self, tenant_handle: str, resource_uri: str) -> str:
        return self.cache.form_key(tenant_handle, resource_uri)

    async def save(self, tenant_handle: str, resource_uri: str, value: Any) -> bool:
        return await asyncio.to_thread(self.cache.save, tenant_handle, resource_uri, value)

    async def get(self, tenant_handle: str, resource_uri: str) -> Any | None:
        return await asyncio.to_thread(self.cache.get, tenant_handle, resource_uri)

    async def clear_by_key(self, key: str) -> bool:
        return await asyncio.to_thread(self.cache.clear_by_key, key)

    async def clear_tenant_cache(self, tenant_handle: str) -> bool:
        return await asyncio.to_thread(self.cache.clear_tenant_cache, tenant_handle)

    async def clear_all(self) -> bool:
        return await asyncio.to_thread(self.cache.clear_all)
