"""Tests for the session lookup cache."""

from podtracker.services.cache import SessionCache


class TestSessionCache:
    def test_get_and_set(self) -> None:
        cache: SessionCache[int] = SessionCache()
        cache.set("Sol Ring", 1)

        assert cache.get("Sol Ring") == 1
        assert cache.get("Mana Crypt") is None
        assert cache.get("Mana Crypt", 0) == 0

    def test_keys_are_case_insensitive(self) -> None:
        cache: SessionCache[int] = SessionCache()
        cache.set("Sol Ring", 1)

        assert "sol ring" in cache
        assert cache.get("SOL RING") == 1

    def test_cached_none_is_a_hit(self) -> None:
        """A remembered miss is distinguishable from an unknown key."""
        cache: SessionCache[str | None] = SessionCache()
        cache.set("Unknown Card", None)

        assert "Unknown Card" in cache
        assert cache.get("Unknown Card", "fallback") is None

    def test_evicts_oldest_when_full(self) -> None:
        cache: SessionCache[int] = SessionCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)

        assert "a" not in cache
        assert len(cache) == 2

    def test_clear(self) -> None:
        cache: SessionCache[int] = SessionCache()
        cache.set("a", 1)
        cache.clear()

        assert len(cache) == 0
        assert "a" not in cache
