"""
Tenant Cache - Core Error Types

Defines the exception hierarchy for the tenant cache.
All exceptions inherit from TenantCacheError for consistent error handling.

Configuration errors are the only exceptions raised by the cache itself, and
only while a cache is being constructed. Runtime operations report failures
through their return values (False / None) instead of raising.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes attached to configuration errors.

    Lets callers branch on the failure kind without matching message text.
    """

    # Construction-time validation
    INVALID_METHOD = "INVALID_METHOD"
    MISSING_STORAGE_DIR = "MISSING_STORAGE_DIR"
    STORAGE_DIR_NOT_WRITABLE = "STORAGE_DIR_NOT_WRITABLE"
    INVALID_TTL = "INVALID_TTL"
    MISSING_STORE_CLIENT = "MISSING_STORE_CLIENT"

    # Settings loading
    INVALID_SETTINGS = "INVALID_SETTINGS"

    # Backend lookup
    UNKNOWN_BACKEND = "UNKNOWN_BACKEND"


class TenantCacheError(Exception):
    """Base exception for all tenant cache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TenantCacheError):
    """Raised when cache configuration is invalid or missing."""

    error_code: ErrorCode = ErrorCode.INVALID_SETTINGS

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        error_details = dict(details or {})
        error_details.setdefault("error_code", self.error_code.value)
        super().__init__(message, error_details)


class InvalidMethodError(ConfigurationError):
    """Raised when the configured backend method is not recognized."""

    error_code = ErrorCode.INVALID_METHOD

    def __init__(self, method: Any, supported: list[str]):
        message = f"Invalid cache method {method!r}. Must be one of: {', '.join(supported)}"
        super().__init__(message, {"method": repr(method), "supported": supported})


class MissingStorageDirError(ConfigurationError):
    """Raised when the file backend is selected without a storage directory."""

    error_code = ErrorCode.MISSING_STORAGE_DIR

    def __init__(self) -> None:
        super().__init__("storage_dir must be specified for the file cache method")


class StorageDirNotWritableError(ConfigurationError):
    """Raised when the storage directory is missing or not writable."""

    error_code = ErrorCode.STORAGE_DIR_NOT_WRITABLE

    def __init__(self, storage_dir: str):
        message = f"Cache directory is not writable: {storage_dir}"
        super().__init__(message, {"storage_dir": storage_dir})


class InvalidTTLError(ConfigurationError):
    """Raised when the TTL is missing or not a number."""

    error_code = ErrorCode.INVALID_TTL

    def __init__(self, ttl: Any):
        super().__init__("TTL must be a number", {"ttl": repr(ttl)})


class MissingStoreClientError(ConfigurationError):
    """Raised when the redis backend is selected but no client was injected."""

    error_code = ErrorCode.MISSING_STORE_CLIENT

    def __init__(self, method: str):
        message = f"A connected store client must be injected for the {method!r} cache method"
        super().__init__(message, {"method": method})


class UnknownBackendError(ConfigurationError):
    """Raised when no backend builder is registered for a method."""

    error_code = ErrorCode.UNKNOWN_BACKEND

    def __init__(self, method: str, registered: list[str]):
        message = f"No cache backend registered for method {method!r}"
        super().__init__(message, {"method": method, "registered": registered})
