"""
Tenant Cache - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from redis import Redis


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def redis_client(test_redis_url: str) -> Generator[Redis, None, None]:
    """
    Create a live Redis client for testing.

    Automatically skips tests if Redis is not available.
    Clears the test database before and after each test.
    """
    client = Redis.from_url(test_redis_url, socket_timeout=2)

    try:
        client.ping()
    except Exception as e:
        client.close()
        pytest.skip(f"Redis not available for testing: {e}")

    client.flushdb()
    yield client

    try:
        client.flushdb()
    finally:
        client.close()


@pytest.fixture
def mock_redis() -> MagicMock:
    """A redis.Redis stand-in with server-like default return values."""
    client = MagicMock(spec=Redis)
    client.set.return_value = True
    client.setex.return_value = True
    client.psetex.return_value = True
    client.get.return_value = None
    client.delete.return_value = 1
    client.scan_iter.return_value = iter([])
    client.flushdb.return_value = True
    client.ping.return_value = True
    return client


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for cache files."""
    directory = tmp_path / "cache"
    directory.mkdir()
    return directory


@pytest.fixture
def file_cache_options(cache_dir: Path) -> dict[str, Any]:
    """Options for a file-backed cache with a 60 second TTL."""
    return {"method": "file", "storage_dir": str(cache_dir), "ttl_seconds": 60}


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for cache testing."""
    return {
        "simple_string": "hello",
        "unicode_string": "héllo wörld ✓",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_loaded_config() -> Generator[None, None, None]:
    """Drop the loaded settings after each test to prevent state leakage."""
    yield
    from tenant_cache.config import loader

    loader._config_instance = None
