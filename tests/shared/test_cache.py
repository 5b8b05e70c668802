"""Tests for shared/cache.py."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from shared.cache import CacheEntry, QueryCache


class TestQueryCache:
    def test_set_and_get(self):
        cache = QueryCache()
        cache.set("/api/skills", {"Music": []})
        assert cache.get("/api/skills") == {"Music": []}
        assert "/api/skills" in cache

    def test_missing_key(self):
        assert QueryCache().get("/api/skills") is None

    def test_invalidate_drops_prefix_and_children(self):
        """Invalidating a key should drop the key and everything under it."""
        cache = QueryCache()
        cache.set("/api/swap-requests", [])
        cache.set("/api/swap-requests/1", {})
        cache.set("/api/swap-requests-archive", [])
        cache.set("/api/skills", {})

        removed = cache.invalidate("/api/swap-requests")

        assert removed == 2
        assert "/api/swap-requests" not in cache
        assert "/api/swap-requests/1" not in cache
        assert "/api/swap-requests-archive" in cache
        assert "/api/skills" in cache

    def test_stale_entries_are_ignored(self):
        """Entries older than the stale time should read as missing."""
        cache = QueryCache(stale_time_seconds=30)
        cache._entries["/api/skills"] = CacheEntry(
            value={},
            stored_at=datetime.now(timezone.utc) - timedelta(seconds=31),
        )
        assert cache.get("/api/skills") is None

    def test_clear(self):
        cache = QueryCache()
        cache.set("/api/skills", {})
        cache.clear()
        assert "/api/skills" not in cache

    @pytest.mark.asyncio
    async def test_get_or_fetch_fetches_once(self):
        """A cached value should be reused instead of refetched."""
        cache = QueryCache()
        fetch = AsyncMock(return_value=[1, 2])

        assert await cache.get_or_fetch("/api/swap-requests", fetch) == [1, 2]
        assert await cache.get_or_fetch("/api/swap-requests", fetch) == [1, 2]

        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_or_fetch_after_invalidate(self):
        """Invalidation should force a refetch."""
        cache = QueryCache()
        fetch = AsyncMock(side_effect=[["old"], ["new"]])

        await cache.get_or_fetch("/api/swap-requests", fetch)
        cache.invalidate("/api/swap-requests")

        assert await cache.get_or_fetch("/api/swap-requests", fetch) == ["new"]
        assert fetch.await_count == 2
