"""
Tenant Cache - File Cache Backend

Stores one JSON file per entry at ``<storage_dir>/<key>.<extension>``.

Notes:
- Files hold the JSON payload only; freshness comes from the file's
  modification time (fresh iff ``now - mtime < ttl_seconds``). Touching a file
  therefore resets its apparent age.
- Stale files are not removed by get(); they are overwritten by the next
  save() or swept by delete_tenant()/clear().
- Writes go to a temporary file in the same directory and are renamed over the
  target, so readers never see a partially written entry.
- No cross-process locking: concurrent saves of one key race, last rename wins.

Example:
    backend = FileCacheBackend(storage_dir="/var/cache/app", ttl_seconds=60)
    backend.save("th_acme_5d41402abc4b2a76b9719d911017c592", {"name": "Bob"})
"""

from __future__ import annotations

import glob
import logging
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..interface import CacheBackendInterface
from ..keys import digest_pattern
from ..serialization import from_json, to_json

logger = logging.getLogger(__name__)

_TEMP_PREFIX = ".tc-"
_TEMP_SUFFIX = ".tmp"


class FileCacheBackend(CacheBackendInterface):
    """
    Filesystem cache backend with mtime-based expiry.

    The storage directory is owned by the caller; the backend never creates
    or removes it.
    """

    def __init__(
        self,
        storage_dir: str | os.PathLike[str],
        ttl_seconds: float,
        extension: str = "json",
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize file cache backend.

        Args:
            storage_dir: Existing, writable directory for cache files
            ttl_seconds: Entry lifetime; entries with age >= ttl are misses
            extension: File extension of cache files (without the dot)
            clock: Source of the current time, compared against file mtimes
        """
        self.storage_dir = Path(storage_dir)
        self.ttl_seconds = float(ttl_seconds)
        self.extension = extension.lstrip(".")
        self._clock = clock

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0

    # ------------ Helpers ------------

    def path_for(self, key: str) -> Path:
        """Return the file holding key. Raises ValueError for path-like keys."""
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Cache key cannot be used as a file name: {key!r}")
        return self.storage_dir / f"{key}.{self.extension}"

    def _glob(self, key_pattern: str) -> list[str]:
        return glob.glob(os.path.join(glob.escape(str(self.storage_dir)), f"{key_pattern}.{self.extension}"))

    def _unlink_all(self, paths: list[str]) -> bool:
        """Remove each file; keeps going after a failure and reports it."""
        ok = True
        for path in paths:
            try:
                os.unlink(path)
                self._deletes += 1
            except FileNotFoundError:
                continue
            except OSError as e:
                ok = False
                logger.error(
                    f"Failed to remove cache file '{path}': {e}",
                    extra={"path": path, "error": str(e)},
                )
        return ok

    # ------------ Core Interface ------------

    def save(self, key: str, value: Any) -> bool:
        """Serialize value and atomically replace the entry's file."""
        try:
            path = self.path_for(key)
        except ValueError as e:
            logger.warning(f"Refusing to save cache key '{key}': {e}", extra={"key": key})
            return False

        tmp_path: str | None = None
        try:
            payload = to_json(value)

            fd, tmp_path = tempfile.mkstemp(dir=self.storage_dir, prefix=_TEMP_PREFIX, suffix=_TEMP_SUFFIX)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            # mkstemp creates 0600 files
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
            tmp_path = None

            self._sets += 1
            return True
        except (TypeError, ValueError) as e:
            logger.error(
                f"Failed to serialize value for key '{key}': {e}",
                extra={"key": key, "value_type": type(value).__name__, "error": str(e)},
            )
            return False
        except OSError as e:
            logger.error(
                f"Failed to write cache file for key '{key}': {e}",
                extra={"key": key, "storage_dir": str(self.storage_dir), "error": str(e)},
                exc_info=True,
            )
            return False
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if missing, stale or unreadable."""
        try:
            path = self.path_for(key)
            mtime = path.stat().st_mtime
            if self._clock() - mtime >= self.ttl_seconds:
                logger.debug("Cache entry expired", extra={"key": key, "ttl_seconds": self.ttl_seconds})
                self._misses += 1
                return None
            data = path.read_bytes()
        except FileNotFoundError:
            self._misses += 1
            return None
        except (OSError, ValueError) as e:
            logger.error(
                f"Failed to read cache file for key '{key}': {e}",
                extra={"key": key, "storage_dir": str(self.storage_dir), "error": str(e)},
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
        """Remove the entry's file if present."""
        try:
            path = self.path_for(key)
        except ValueError as e:
            logger.warning(f"Refusing to delete cache key '{key}': {e}", extra={"key": key})
            return False
        return self._unlink_all([str(path)])

    def delete_tenant(self, tenant_prefix: str) -> bool:
        """Remove every cache file named tenant_prefix plus a URI digest."""
        if "/" in tenant_prefix or "\\" in tenant_prefix:
            logger.warning(
                f"Refusing to delete cache files for prefix '{tenant_prefix}'",
                extra={"prefix": tenant_prefix},
            )
            return False
        return self._unlink_all(self._glob(f"{glob.escape(tenant_prefix)}{digest_pattern()}"))

    def clear(self) -> bool:
        """Remove every cache file in the directory, whatever its key prefix."""
        paths = self._glob("*")
        ok = self._unlink_all(paths)
        logger.info(
            f"Cleared {len(paths)} cache file(s) from '{self.storage_dir}'",
            extra={"storage_dir": str(self.storage_dir)},
        )
        return ok

    def get_stats(self) -> dict[str, Any]:
        """Return cache statistics and the number of files on disk."""
        total_requests = self._hits + self._misses
        return {
            "backend": "file",
            "storage_dir": str(self.storage_dir),
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round((self._hits / total_requests) * 100, 2) if total_requests else 0.0,
            "sets": self._sets,
            "deletes": self._deletes,
            "entries": len(self._glob("*")),
        }
