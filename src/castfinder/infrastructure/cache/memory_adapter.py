"""In-process TTL cache - lives exactly as long as the process."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    inserted_at: float


class InMemoryResultCache:
    """Dict-backed cache with lazy TTL expiry.

    - An entry is fresh while ``now - inserted_at < ttl``; freshness is only
      evaluated on read, nothing is swept in the background.
    - Stale entries stay in memory until a later ``set()`` for the same key
      overwrites them.
    - Concurrent writers to one key resolve last-write-wins.  The lock only
      guards single dict operations and is never held across an ``await``,
      so the adapter is safe from the event loop and from worker threads.

    Args:
        ttl_seconds: Entry lifetime (default: 5 minutes).
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

        log.info("memory_cache_init", ttl=ttl_seconds)

    def __len__(self) -> int:
        """Number of stored entries, stale ones included."""
        return len(self._entries)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.inserted_at < self.ttl_seconds

    # --- ResultCachePort implementation ---
    async def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
        hit = entry is not None and self._is_fresh(entry)
        log.debug("cache_get", key=key, hit=hit, stale=entry is not None and not hit)
        return entry.payload if hit else None

    async def set(self, key: str, value: Any) -> None:
        entry = CacheEntry(key=key, payload=value, inserted_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        log.debug("cache_set", key=key, ttl=self.ttl_seconds)

