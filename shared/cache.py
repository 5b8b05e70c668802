"""
Query cache for API responses.

Responses are cached under their request path (e.g., "/api/swap-requests")
and dropped either when they go stale or when a mutation invalidates
their key prefix.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    stored_at: datetime


class QueryCache:
    """
    In-memory cache keyed by request path.

    Invalidating "/api/swap-requests" also drops "/api/swap-requests/<id>"
    and any deeper key, but not "/api/swap-requests-archive".
    """

    def __init__(self, stale_time_seconds: Optional[float] = None):
        """
        Initialize the cache.

        Args:
            stale_time_seconds: Age after which an entry is ignored.
                                None keeps entries until invalidated.
        """
        self._entries: dict[str, CacheEntry] = {}
        self._stale_time = stale_time_seconds

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def _is_fresh(self, entry: CacheEntry) -> bool:
        if self._stale_time is None:
            return True
        age = (datetime.now(timezone.utc) - entry.stored_at).total_seconds()
        return age < self._stale_time

    def get(self, key: str) -> Optional[Any]:
        """Get a cached value, or None if missing or stale."""
        entry = self._entries.get(key)
        if entry is None or not self._is_fresh(entry):
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=datetime.now(timezone.utc))

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for key, fetching and storing it on a miss."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await fetch()
        self.set(key, value)
        return value

    def invalidate(self, prefix: str) -> int:
        """
        Drop every entry whose key is prefix or lives under it.

        Returns:
            Number of entries removed
        """
        prefix = prefix.rstrip("/")
        doomed = [
            key for key in self._entries
            if key == prefix or key.startswith(prefix + "/")
        ]
        for key in doomed:
            del self._entries[key]
        if doomed:
            logger.debug(f"Invalidated {len(doomed)} cached queries under {prefix}")
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()
