"""
Tenant Cache - Cache Backends

Exports available cache backend implementations.
"""

from .file import FileCacheBackend
from .redis import RedisCacheBackend

__all__ = [
    "FileCacheBackend",
    "RedisCacheBackend",
]
