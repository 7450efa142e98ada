"""
Tenant Cache - Redis Cache Backend

Redis cache implementation over a caller-owned connection:
- JSON serialization for values
- Native Redis TTL (SETEX/PSETEX), or no expiry when ttl_seconds <= 0
- Tenant sweeps via SCAN + batched DEL, matching one URI digest after the tenant prefix
- clear() flushes the connection's whole logical database

The client is injected already connected; this backend never opens or closes it.

Example:
    client = Redis.from_url("redis://localhost:6379/0")
    backend = RedisCacheBackend(client, ttl_seconds=3600)
    backend.save("th_acme_5d41402abc4b2a76b9719d911017c592", {"msg": "hello"})
    value = backend.get("th_acme_5d41402abc4b2a76b9719d911017c592")
"""

from __future__ import annotations

import logging
import re
from typing import Any

from redis import Redis

from ..interface import CacheBackendInterface
from ..keys import digest_pattern
from ..serialization import from_json, to_json

logger = logging.getLogger(__name__)

# Characters with special meaning in Redis glob-style MATCH patterns
_MATCH_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_match_pattern(literal: str) -> str:
    """Escape a literal string for use in a Redis MATCH/KEYS pattern."""
    return _MATCH_SPECIAL.sub(r"\\\1", literal)


class RedisCacheBackend(CacheBackendInterface):
    """
    Redis cache backend with JSON serialization and native TTL.

    Notes:
    - Keys are stored exactly as derived; the tenant prefix is part of the key.
    - Values are stored as UTF-8 JSON strings.
    - Expiry is enforced by Redis; get() performs no local staleness check.
    """

    def __init__(
        self,
        client: Redis,
        ttl_seconds: float,
        scan_batch_size: int = 1000,
    ) -> None:
        """
        Initialize Redis cache backend.

        Args:
            client: Connected redis.Redis client, owned by the caller
            ttl_seconds: Entry lifetime in seconds (<= 0 => no expiry)
            scan_batch_size: COUNT hint for SCAN and size of DEL batches
        """
        if client is None:
            raise ValueError("client is required")

        self.client = client
        self.ttl_seconds = float(ttl_seconds)
        self.scan_batch_size = max(1, int(scan_batch_size))

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0

    # ------------ Helpers ------------

    def _store(self, key: str, payload: str) -> Any:
        """Write payload with the configured expiry policy."""
        if self.ttl_seconds <= 0:
            return self.client.set(key, payload)
        if self.ttl_seconds.is_integer():
            return self.client.setex(key, int(self.ttl_seconds), payload)
        # Fractional TTLs need millisecond precision
        return self.client.psetex(key, max(1, round(self.ttl_seconds * 1000)), payload)

    def _delete_batch(self, keys: list[Any]) -> int:
        deleted = int(self.client.delete(*keys))
        self._deletes += deleted
        return deleted

    # ------------ Core Interface ------------

    def save(self, key: str, value: Any) -> bool:
        """Store a value, with or without expiry depending on ttl_seconds."""
        try:
            payload = to_json(value)
            # redis-py returns True or 'OK' depending on decode_responses
            success = bool(self._store(key, payload))
            if success:
                self._sets += 1
            return success
        except (TypeError, ValueError) as e:
            logger.error(
                f"Failed to serialize value for key '{key}': {e}",
                extra={"key": key, "value_type": type(value).__name__, "error": str(e)},
            )
            return False
        except Exception as e:
            logger.error(
                f"Failed to set key '{key}' in Redis: {e}",
                extra={"key": key, "ttl_seconds": self.ttl_seconds, "error": str(e)},
                exc_info=True,
            )
            return False

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        try:
            data = self.client.get(key)
        except Exception as e:
            logger.error(
                f"Failed to get key '{key}' from Redis: {e}",
                extra={"key": key, "error": str(e)},
                exc_info=True,
            )
            self._misses += 1
            return None

        value = from_json(data, key)
        if value is None:
            self._misses += 1
        else:
            self._hits += 1
        return value

    def delete(self, key: str) -> bool:
        """Delete a single key; deleting a missing key succeeds."""
        try:
            self._delete_batch([key])
            return True
        except Exception as e:
            logger.error(
                f"Failed to delete key '{key}' from Redis: {e}",
                extra={"key": key, "error": str(e)},
                exc_info=True,
            )
            return False

    def delete_tenant(self, tenant_prefix: str) -> bool:
        """
        Delete every key made of tenant_prefix plus a URI digest.

        Implementation: SCAN MATCH "<tenant_prefix>[0-9a-f]...", DEL in batches.
        Keys written between the scan and the delete may survive.
        """
        pattern = f"{escape_match_pattern(tenant_prefix)}{digest_pattern()}"
        try:
            total_deleted = 0
            batch: list[Any] = []
            for key in self.client.scan_iter(match=pattern, count=self.scan_batch_size):
                batch.append(key)
                if len(batch) >= self.scan_batch_size:
                    total_deleted += self._delete_batch(batch)
                    batch = []
            if batch:
                total_deleted += self._delete_batch(batch)

            logger.info(
                f"Deleted {total_deleted} key(s) matching '{pattern}'",
                extra={"pattern": pattern},
            )
            return True
        except Exception as e:
            logger.error(
                f"Failed to delete keys matching '{pattern}': {e}",
                extra={"pattern": pattern, "error": str(e)},
                exc_info=True,
            )
            return False

    def clear(self) -> bool:
        """Flush the connection's entire logical database (not prefix scoped)."""
        try:
            result = bool(self.client.flushdb())
            logger.info("Flushed Redis database")
            return result
        except Exception as e:
            logger.error(f"Failed to flush Redis database: {e}", extra={"error": str(e)}, exc_info=True)
            return False

    def get_stats(self) -> dict[str, Any]:
        """Return cache statistics and basic connectivity info."""
        stats: dict[str, Any] = {
            "backend": "redis",
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": 0.0,
            "sets": self._sets,
            "deletes": self._deletes,
            "connected": False,
        }

        total_requests = self._hits + self._misses
        stats["hit_rate"] = round((self._hits / total_requests) * 100, 2) if total_requests else 0.0

        try:
            stats["connected"] = bool(self.client.ping())
        except Exception as e:
            logger.warning(f"Failed to ping Redis: {e}", extra={"error": str(e)})

        return stats
