# tests/test_cache.py

"""
Tests for caching functionality.
"""

from datetime import datetime, timedelta

from core.cache import CacheEntry, SimpleCache


def test_cache_set_and_get():
    """Test setting and getting values from cache."""
    cache = SimpleCache()

    cache.set("test_key", "test_value", ttl_seconds=60)

    assert cache.get("test_key") == "test_value"


def test_cache_expiration():
    """Test that cache entries expire correctly."""
    cache = SimpleCache()
    cache.set("expiring_key", "expired_value", ttl_seconds=60)

    # Value should be available immediately
    assert cache.get("expiring_key") == "expired_value"

    # Push the expiry into the past instead of sleeping
    cache._cache["expiring_key"].expires_at = datetime.now() - timedelta(seconds=1)

    assert cache.get("expiring_key") is None
    assert cache.size() == 0


def test_cache_without_ttl_never_expires():
    entry = CacheEntry("value")

    assert entry.expires_at is None
    assert entry.is_expired() is False


def test_cache_default_ttl_applies():
    cache = SimpleCache(default_ttl_seconds=30)
    cache.set("key", "value")

    expires_at = cache._cache["key"].expires_at
    assert expires_at is not None
    assert expires_at <= datetime.now() + timedelta(seconds=30)


def test_cache_delete():
    """Test deleting cache entries."""
    cache = SimpleCache()
    cache.set("delete_key", "delete_value")
    assert cache.get("delete_key") == "delete_value"

    cache.delete("delete_key")
    cache.delete("never_set")

    assert cache.get("delete_key") is None


def test_cache_clear():
    """Test clearing all cache entries."""
    cache = SimpleCache()
    cache.set("key1", "value1")
    cache.set("key2", "value2")

    cache.clear()

    assert cache.get("key1") is None
    assert cache.get("key2") is None
    assert cache.size() == 0


def test_cache_keys_skip_expired():
    cache = SimpleCache()
    cache.set("live", 1)
    cache.set("stale", 2, ttl_seconds=60)
    cache._cache["stale"].expires_at = datetime.now() - timedelta(seconds=1)

    assert cache.keys() == ["live"]

    cache.cleanup_expired()
    assert cache.size() == 1
