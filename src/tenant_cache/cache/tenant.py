"""
Tenant Cache - Cache Facade

TenantCache stores values under keys derived from (tenant handle, resource URI)
and dispatches every operation to the backend chosen at construction.

Usage:
    from tenant_cache import TenantCache

    cache = TenantCache({"method": "file", "storage_dir": "/tmp/c", "ttl_seconds": 60})
    cache.save("tenantA", "/users/1", {"name": "Bob"})
    cache.get("tenantA", "/users/1")  # {"name": "Bob"}

Runtime operations never raise for backend failures: writes and deletes
return False, reads return None.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

from ..config import CacheConfig
from ..observability.events import EventKind, EventRecorder
from .factory import create_backend
from .interface import CacheBackendInterface
from .keys import form_key, tenant_key_prefix
from .validation import validate_config

logger = logging.getLogger(__name__)


class TenantCache:
    """
    Tenant-aware cache facade.

    The instance owns its configuration and backend object but not the storage
    directory or the Redis connection, which stay with the caller.
    """

    def __init__(
        self,
        config: CacheConfig | Mapping[str, Any],
        redis_client: Any = None,
        event_recorder: EventRecorder | None = None,
    ) -> None:
        """
        Validate the configuration and select the backend.

        Args:
            config: CacheConfig, or a mapping of cache options
            redis_client: Connected redis.Redis client (redis method only)
            event_recorder: Optional collaborator receiving request/response events

        Raises:
            ConfigurationError: On the first failed configuration check
        """
        self._config = validate_config(config)
        self._backend = create_backend(self._config, redis_client)
        self._event_recorder = event_recorder

        self._key_prefix = self._config.key_prefix
        self._prefix_lock = threading.Lock()

        logger.info(
            "Tenant cache ready (method: %s)",
            self._config.method.value,
            extra={"method": self._config.method.value, "key_prefix": self._key_prefix},
        )

    # ------------ Keys ------------

    def set_key_prefix(self, prefix: str) -> TenantCache:
        """
        Change the prefix used by subsequent key derivations.

        Entries stored under the old prefix are left untouched.
        """
        with self._prefix_lock:
            self._key_prefix = prefix
        return self

    def get_key_prefix(self) -> str:
        with self._prefix_lock:
            return self._key_prefix

    def form_key(self, tenant_handle: str, resource_uri: str) -> str:
        """Derive the cache key for a tenant's resource."""
        return form_key(self.get_key_prefix(), tenant_handle, resource_uri)

    # ------------ Operations ------------

    def save(self, tenant_handle: str, resource_uri: str, value: Any) -> bool:
        """
        Store value for a tenant's resource.

        Returns:
            True on success, False if the backend failed
        """
        key = self.form_key(tenant_handle, resource_uri)
        self._record(EventKind.REQUEST_RECEIVED, operation="save", tenant=tenant_handle, uri=resource_uri, key=key)
        success = self._backend.save(key, value)
        self._record(EventKind.RESPONSE_RECEIVED, operation="save", key=key, success=success)
        return success

    def get(self, tenant_handle: str, resource_uri: str) -> Any | None:
        """
        Fetch the cached value for a tenant's resource.

        Returns:
            The value, or None if absent, expired or unreadable
        """
        key = self.form_key(tenant_handle, resource_uri)
        self._record(EventKind.REQUEST_RECEIVED, operation="get", tenant=tenant_handle, uri=resource_uri, key=key)
        value = self._backend.get(key)
        self._record(EventKind.RESPONSE_RECEIVED, operation="get", key=key, hit=value is not None)
        return value

    def clear_by_key(self, key: str) -> bool:
        """Remove an entry by its already-derived key; missing keys are a no-op."""
        self._record(EventKind.REQUEST_RECEIVED, operation="clear_by_key", key=key)
        success = self._backend.delete(key)
        self._record(EventKind.RESPONSE_RECEIVED, operation="clear_by_key", key=key, success=success)
        return success

    def clear_tenant_cache(self, tenant_handle: str) -> bool:
        """Remove every entry stored for a tenant under the current prefix."""
        prefix = tenant_key_prefix(self.get_key_prefix(), tenant_handle)
        self._record(EventKind.REQUEST_RECEIVED, operation="clear_tenant_cache", tenant=tenant_handle, prefix=prefix)
        success = self._backend.delete_tenant(prefix)
        self._record(EventKind.RESPONSE_RECEIVED, operation="clear_tenant_cache", prefix=prefix, success=success)
        return success

    def clear_all(self) -> bool:
        """
        Remove every entry in the backend.

        Not scoped by prefix or tenant: the file backend removes every cache
        file in the directory and the redis backend flushes its database.
        """
        self._record(EventKind.REQUEST_RECEIVED, operation="clear_all")
        success = self._backend.clear()
        self._record(EventKind.RESPONSE_RECEIVED, operation="clear_all", success=success)
        return success

    # ------------ Introspection ------------

    def get_config(self) -> CacheConfig:
        """Return the validated configuration."""
        return self._config

    @property
    def backend(self) -> CacheBackendInterface:
        return self._backend

    def get_stats(self) -> dict[str, Any]:
        """Backend statistics plus the active key prefix."""
        stats = self._backend.get_stats()
        stats["key_prefix"] = self.get_key_prefix()
        return stats

    def _record(self, kind: EventKind, **payload: Any) -> None:
        if self._event_recorder is None:
            return
        try:
            self._event_recorder.record_event(kind, payload)
        except Exception as e:
            logger.warning(
                f"Event recorder failed for {kind.value}: {e}",
                extra={"event_kind": kind.value, "error": str(e)},
                exc_info=True,
            )
