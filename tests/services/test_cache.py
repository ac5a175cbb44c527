"""Tests for the response cache."""

from traktkit.services.cache import CacheEntry, ResponseCache, cache_key


class TestCacheKey:
    """Test cache key hashing."""

    def test_stable(self):
        """Test that identical requests share a key."""
        assert cache_key("GET", "https://api.trakt.tv/genres/movies") == cache_key(
            "get", "https://api.trakt.tv/genres/movies"
        )

    def test_distinct(self):
        """Test that method, URL and body all affect the key."""
        keys = {
            cache_key("GET", "https://api.trakt.tv/genres/movies"),
            cache_key("GET", "https://api.trakt.tv/genres/shows"),
            cache_key("POST", "https://api.trakt.tv/genres/movies"),
            cache_key("POST", "https://api.trakt.tv/genres/movies", '{"a":1}'),
        }
        assert len(keys) == 4

    def test_authorization_affects_key(self):
        """Test that requests made with different tokens get different keys."""
        url = "https://api.trakt.tv/sync/history"
        assert cache_key("GET", url, authorization="Bearer alice") != cache_key(
            "GET", url, authorization="Bearer bob"
        )
        assert cache_key("GET", url, authorization="Bearer alice") != cache_key("GET", url)

    def test_sha256_hex(self):
        """Test the key format."""
        key = cache_key("GET", "https://api.trakt.tv/networks")
        assert len(key) == 64
        int(key, 16)


class TestCacheEntry:
    """Test entry expiry."""

    def test_no_retention(self):
        """Test that entries without retention never expire."""
        assert not CacheEntry("value", created_at=0).is_expired(None, now=10**9)

    def test_retention(self):
        """Test the retention boundary."""
        entry = CacheEntry("value", created_at=100.0)
        assert not entry.is_expired(60, now=160.0)
        assert entry.is_expired(60, now=160.5)


class TestResponseCache:
    """Test ResponseCache."""

    def test_set_get(self):
        """Test storing and reading a value."""
        cache = ResponseCache()
        cache.set("key", "value")

        assert cache.get("key") == "value"
        assert "key" in cache
        assert len(cache) == 1

    def test_missing(self):
        """Test a miss."""
        assert ResponseCache().get("key") is None

    def test_expired_entries_are_evicted(self):
        """Test that reading an expired entry removes it."""
        store = {"key": CacheEntry("value", created_at=0.0)}
        cache = ResponseCache(store, retention=1)

        assert cache.get("key") is None
        assert "key" not in store

    def test_evict_and_clear(self):
        """Test explicit removal."""
        cache = ResponseCache()
        cache.set("a", 1)
        cache.set("b", 2)

        cache.evict("a")
        cache.evict("missing")
        assert cache.get("a") is None
        assert cache.get("b") == 2

        cache.clear()
        assert len(cache) == 0

    def test_injected_store(self):
        """Test that values are written to the injected mapping."""
        store = {}
        cache = ResponseCache(store)
        cache.set("key", "value")

        assert store["key"].value == "value"
