"""Cache Infrastructure - Backend-Implementations."""

from .memory_adapter import CacheEntry, InMemoryResultCache

__all__ = [
    "CacheEntry",
    "InMemoryResultCache",
]
