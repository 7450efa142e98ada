"""
Tenant Cache - File Cache Backend Tests

Tests storage layout, mtime-based expiry, sweeps and error handling of the
filesystem backend. Time is controlled through the backend's clock.
"""

import os
from pathlib import Path
from typing import Any

import pytest

from tenant_cache.cache.backends.file import FileCacheBackend
from tenant_cache.cache.keys import uri_digest


class FakeClock:
    """Settable time source."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def set_mtime(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


class TestFileCacheBackend:
    """Test suite for FileCacheBackend."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock(1_000_000.0)

    @pytest.fixture
    def cache(self, cache_dir: Path, clock: FakeClock) -> FileCacheBackend:
        """Create a file cache with a 60 second TTL and a fake clock."""
        return FileCacheBackend(storage_dir=cache_dir, ttl_seconds=60, clock=clock)

    def _save_at(self, cache: FileCacheBackend, key: str, value: Any, mtime: float) -> Path:
        assert cache.save(key, value) is True
        path = cache.path_for(key)
        set_mtime(path, mtime)
        return path

    def test_initialization(self, cache_dir: Path) -> None:
        """Test cache initialization with custom parameters."""
        cache = FileCacheBackend(storage_dir=str(cache_dir), ttl_seconds=30, extension=".cache")

        assert cache.storage_dir == cache_dir
        assert cache.ttl_seconds == 30.0
        assert cache.extension == "cache"

        stats = cache.get_stats()
        assert stats["backend"] == "file"
        assert stats["hits"] == 0
        assert stats["entries"] == 0

    def test_save_writes_plain_json_file(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """One file per entry, holding only the JSON payload."""
        assert cache.save("th_acme_abc", {"name": "Bob"}) is True

        path = cache_dir / "th_acme_abc.json"
        assert path.exists()
        assert path.read_text(encoding="utf-8") == '{"name":"Bob"}'
        assert list(cache_dir.iterdir()) == [path]

    def test_save_and_get(self, cache: FileCacheBackend, clock: FakeClock) -> None:
        """Test basic save and get operations."""
        self._save_at(cache, "k1", {"name": "Bob"}, clock.now)

        assert cache.get("k1") == {"name": "Bob"}

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["sets"] == 1

    def test_various_types(self, cache: FileCacheBackend, clock: FakeClock, sample_cache_data: dict[str, Any]) -> None:
        """Test storing different data types."""
        for key, value in sample_cache_data.items():
            self._save_at(cache, key, value, clock.now)

        for key, expected in sample_cache_data.items():
            assert cache.get(key) == expected

    def test_unicode_kept_verbatim(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """Non-ASCII text is written unescaped."""
        cache.save("u", "héllo")
        assert (cache_dir / "u.json").read_text(encoding="utf-8") == '"héllo"'

    def test_get_missing(self, cache: FileCacheBackend) -> None:
        """Getting a key that doesn't exist returns None."""
        assert cache.get("nonexistent") is None
        assert cache.get_stats()["misses"] == 1

    def test_overwrite(self, cache: FileCacheBackend, clock: FakeClock) -> None:
        """A second save replaces the first."""
        self._save_at(cache, "k", "first", clock.now)
        self._save_at(cache, "k", "second", clock.now)
        assert cache.get("k") == "second"

    def test_expiry_boundary(self, cache: FileCacheBackend, clock: FakeClock) -> None:
        """Age == ttl is expired; age just under ttl is fresh."""
        saved_at = clock.now
        self._save_at(cache, "k", "v", mtime=saved_at)

        clock.now = saved_at + 60 - 0.001
        assert cache.get("k") == "v"

        clock.now = saved_at + 60
        assert cache.get("k") is None

    def test_expired_file_not_deleted(self, cache: FileCacheBackend, clock: FakeClock) -> None:
        """get() treats stale entries as absent but leaves the file."""
        path = self._save_at(cache, "k", "v", mtime=clock.now - 120)

        assert cache.get("k") is None
        assert path.exists()

    def test_touch_refreshes_entry(self, cache: FileCacheBackend, clock: FakeClock) -> None:
        """Freshness follows the file's mtime."""
        path = self._save_at(cache, "k", "v", mtime=clock.now - 120)
        assert cache.get("k") is None

        set_mtime(path, clock.now)
        assert cache.get("k") == "v"

    def test_zero_ttl_always_expired(self, cache_dir: Path) -> None:
        """With ttl <= 0 the file backend never returns a value."""
        clock = FakeClock(500.0)
        cache = FileCacheBackend(storage_dir=cache_dir, ttl_seconds=0, clock=clock)
        self._save_at(cache, "k", "v", mtime=clock.now)

        assert cache.get("k") is None

    def test_corrupted_payload_is_a_miss(self, cache: FileCacheBackend, cache_dir: Path, clock: FakeClock) -> None:
        """Undecodable content reads as a miss, not an error."""
        path = cache_dir / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        set_mtime(path, clock.now)

        assert cache.get("bad") is None
        assert cache.get_stats()["misses"] == 1

    def test_invalid_utf8_is_a_miss(self, cache: FileCacheBackend, cache_dir: Path, clock: FakeClock) -> None:
        """Binary garbage reads as a miss."""
        path = cache_dir / "bin.json"
        path.write_bytes(b"\xff\xfe\x00")
        set_mtime(path, clock.now)

        assert cache.get("bin") is None

    def test_unserializable_value(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """Values that can't be encoded fail the save and leave no files behind."""
        assert cache.save("k", {"obj": object()}) is False
        assert list(cache_dir.iterdir()) == []

    def test_write_failure_returns_false(self, cache: FileCacheBackend, monkeypatch: pytest.MonkeyPatch) -> None:
        """I/O errors are reported through the return value."""

        def broken_replace(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)

        assert cache.save("k", "v") is False
        assert list(cache.storage_dir.iterdir()) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A vanished storage directory gives False / None, not exceptions."""
        cache = FileCacheBackend(storage_dir=tmp_path / "gone", ttl_seconds=60)

        assert cache.save("k", "v") is False
        assert cache.get("k") is None
        assert cache.delete("k") is True
        assert cache.clear() is True

    def test_path_like_keys_rejected(self, cache: FileCacheBackend, tmp_path: Path) -> None:
        """Keys cannot escape the storage directory."""
        assert cache.save("../escape", "v") is False
        assert not (tmp_path / "escape.json").exists()
        assert cache.get("a/b") is None
        assert cache.delete("..") is False

    def test_delete(self, cache: FileCacheBackend, cache_dir: Path, clock: FakeClock) -> None:
        """Test deleting keys."""
        self._save_at(cache, "k", "v", clock.now)

        assert cache.delete("k") is True
        assert not (cache_dir / "k.json").exists()
        assert cache.get("k") is None

    def test_delete_is_idempotent(self, cache: FileCacheBackend) -> None:
        """Deleting a missing key is a no-op, twice over."""
        assert cache.delete("never-saved") is True
        assert cache.delete("never-saved") is True

    def test_delete_tenant(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """Only files named tenant prefix plus one digest are removed."""
        digest = uri_digest("/a")
        keys = [
            f"th_acme_{digest}",
            f"th_acme_{uri_digest('/b')}",
            f"th_acmeco_{digest}",
            f"th_acme_corp_{digest}",
            f"th_globex_{digest}",
            f"xx_acme_{digest}",
        ]
        for key in keys:
            cache.save(key, key)

        assert cache.delete_tenant("th_acme_") is True

        remaining = sorted(p.name for p in cache_dir.iterdir())
        assert remaining == sorted(f"{key}.json" for key in keys[2:])

    def test_delete_tenant_ignores_non_digest_suffixes(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """Files whose remainder is not exactly one digest are kept."""
        digest = uri_digest("/a")
        cache.save(f"th_acme_{digest}", 1)
        cache.save(f"th_acme_{digest}x", 2)
        cache.save("th_acme_1", 3)

        cache.delete_tenant("th_acme_")

        assert sorted(p.name for p in cache_dir.iterdir()) == sorted(["th_acme_1.json", f"th_acme_{digest}x.json"])

    def test_delete_tenant_escapes_glob_characters(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """Glob metacharacters in a tenant handle match literally."""
        digest = uri_digest("/a")
        cache.save(f"th_a*_{digest}", "star")
        cache.save(f"th_ab_{digest}", "other")

        cache.delete_tenant("th_a*_")

        assert sorted(p.name for p in cache_dir.iterdir()) == [f"th_ab_{digest}.json"]

    def test_long_key_within_name_limit(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """A key whose file name fits the filesystem limit can be saved."""
        key = f"th_{'t' * 210}_{uri_digest('/a')}"
        assert len(f"{key}.json") <= 255

        assert cache.save(key, "v") is True
        assert cache.get(key) == "v"
        assert [p.name for p in cache_dir.iterdir()] == [f"{key}.json"]

    def test_clear_removes_all_cache_files(self, cache: FileCacheBackend, cache_dir: Path) -> None:
        """clear() ignores prefixes but keeps files with other extensions."""
        cache.save("th_acme_1", 1)
        cache.save("other_prefix_2", 2)
        (cache_dir / "notes.txt").write_text("keep me")

        assert cache.clear() is True
        assert [p.name for p in cache_dir.iterdir()] == ["notes.txt"]

    def test_custom_extension(self, cache_dir: Path) -> None:
        """Files use the configured extension and clear() only touches those."""
        cache = FileCacheBackend(storage_dir=cache_dir, ttl_seconds=60, extension="cache")
        cache.save("k", "v")
        (cache_dir / "foreign.json").write_text("{}")

        assert (cache_dir / "k.cache").exists()
        cache.clear()
        assert [p.name for p in cache_dir.iterdir()] == ["foreign.json"]

    def test_stats_entries(self, cache: FileCacheBackend) -> None:
        """Stats count cache files on disk."""
        cache.save("a", 1)
        cache.save("b", 2)

        stats = cache.get_stats()
        assert stats["entries"] == 2
        assert stats["sets"] == 2
