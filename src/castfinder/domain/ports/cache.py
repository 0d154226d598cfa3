"""Cache Port - Interface for the in-process result cache."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResultCachePort(Protocol):
    """Port for an async key-value cache with a fixed TTL.

    Expiry is evaluated lazily on read.  Writers racing on the same key
    resolve last-write-wins.

    Implementations:
      - InMemoryResultCache (process-local dict)
    """

    async def get(self, key: str) -> Any:
        """Retrieve value. None = not found / expired."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store value, replacing any previous (possibly stale) entry."""
        ...
