"""
Tenant Cache - Backend Interface

Defines the abstract interface that all cache backends must implement.
Backends work on already-derived keys; key derivation lives in the facade.
"""

from abc import ABC, abstractmethod
from typing import Any


class CacheBackendInterface(ABC):
    """
    Abstract base class for cache backends.

    All operations are best-effort: I/O failures are logged and reported
    through the return value, never raised to the caller.
    """

    @abstractmethod
    def save(self, key: str, value: Any) -> bool:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Derived cache key
            value: JSON-serializable value

        Returns:
            True if stored successfully, False otherwise
        """
        pass

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """
        Retrieve a value.

        Args:
            key: Derived cache key

        Returns:
            Cached value if present and fresh, None otherwise (including
            unreadable or corrupted entries)
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a single entry. Removing a missing entry is a no-op.

        Args:
            key: Cache key, used verbatim

        Returns:
            False only if the backend failed
        """
        pass

    @abstractmethod
    def delete_tenant(self, tenant_prefix: str) -> bool:
        """
        Remove every entry whose key is tenant_prefix followed by a URI digest.

        Keys that merely start with tenant_prefix (another tenant whose handle
        extends this one) are left alone. Not transactional: entries created
        while the delete runs may survive.

        Args:
            tenant_prefix: Literal ``<key_prefix><tenant>_`` (no wildcards)

        Returns:
            False if the backend failed
        """
        pass

    @abstractmethod
    def clear(self) -> bool:
        """
        Remove every entry held by the backend, regardless of key prefix.

        Returns:
            False if the backend failed
        """
        pass

    @abstractmethod
    def get_stats(self) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache statistics (hits, misses, sets, deletes...)
        """
        pass
