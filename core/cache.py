# core/cache.py

"""
Simple in-memory caching utilities.

Caches are plain objects handed to the components that use them, so each
app (or test) owns its own instance instead of sharing module globals.
"""

from typing import Optional, Any, Hashable
from datetime import datetime, timedelta
from threading import Lock
from core.logging_config import logger


class CacheEntry:
    """Represents a cached value with an optional expiration time."""

    def __init__(self, value: Any, ttl_seconds: Optional[int] = None):
        self.value = value
        if ttl_seconds is None:
            self.expires_at = None
        else:
            self.expires_at = datetime.now() + timedelta(seconds=ttl_seconds)

    def is_expired(self) -> bool:
        """Check if the cache entry has expired."""
        if self.expires_at is None:
            return False
        return datetime.now() >= self.expires_at


class SimpleCache:
    """
    Simple in-memory cache with optional TTL support.

    Thread-safe for concurrent access.
    """

    def __init__(self, default_ttl_seconds: Optional[int] = None, name: str = "cache"):
        self._cache: dict[Hashable, CacheEntry] = {}
        self._lock = Lock()
        self.default_ttl_seconds = default_ttl_seconds
        self.name = name

    def get(self, key: Hashable) -> Optional[Any]:
        """
        Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found or expired
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if entry.is_expired():
                del self._cache[key]
                logger.debug(f"{self.name}: expired {key!r}")
                return None

            return entry.value

    def set(self, key: Hashable, value: Any, ttl_seconds: Optional[int] = None):
        """
        Set a value in the cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl_seconds: Time to live in seconds (default: the cache's default; None = no expiry)
        """
        if ttl_seconds is None:
            ttl_seconds = self.default_ttl_seconds
        with self._lock:
            self._cache[key] = CacheEntry(value, ttl_seconds)

    def delete(self, key: Hashable):
        """
        Delete a value from the cache.

        Args:
            key: Cache key
        """
        with self._lock:
            self._cache.pop(key, None)

    def clear(self):
        """Clear all cache entries."""
        with self._lock:
            self._cache.clear()

    def cleanup_expired(self):
        """Remove all expired entries from the cache."""
        with self._lock:
            expired_keys = [
                key for key, entry in self._cache.items()
                if entry.is_expired()
            ]
            for key in expired_keys:
                del self._cache[key]

    def keys(self) -> list:
        """Keys of entries that have not expired."""
        with self._lock:
            return [key for key, entry in self._cache.items() if not entry.is_expired()]

    def size(self) -> int:
        """Get the number of entries in the cache."""
        with self._lock:
            return len(self._cache)
