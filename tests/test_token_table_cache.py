"""Tests for TokenTableCache copy-then-swap publication.

Python 3.13+.
"""

from __future__ import annotations

from i18nbundler.resources.cache import TokenTableCache
from i18nbundler.resources.resolver import EffectiveTokenTable


def _table(locale: str, generation: int = 0, **entries: str) -> EffectiveTokenTable:
    return EffectiveTokenTable(locale, entries, generation=generation)


class TestTokenTableCache:
    """Test publication, generations and statistics."""

    def test_empty_cache(self) -> None:
        """A fresh cache holds nothing."""
        cache = TokenTableCache()

        assert cache.get("en") is None
        assert len(cache) == 0
        assert "en" not in cache

    def test_publish_and_get(self) -> None:
        """A published table is returned by identity."""
        cache = TokenTableCache()
        table = _table("en", a="1")

        assert cache.publish(table, cache.generation("en"))
        assert cache.get("en") is table
        assert "en" in cache
        assert cache.locales() == ("en",)

    def test_stale_build_refused(self) -> None:
        """A build started before an invalidation is not published."""
        cache = TokenTableCache()
        started = cache.generation("en")

        cache.invalidate("en")

        assert not cache.publish(_table("en"), started)
        assert cache.get("en") is None

    def test_global_invalidation_makes_builds_stale(self) -> None:
        """invalidate() without a locale bumps every generation."""
        cache = TokenTableCache()
        started_en = cache.generation("en")
        started_de = cache.generation("de")

        cache.invalidate()

        assert not cache.publish(_table("en"), started_en)
        assert not cache.publish(_table("de"), started_de)

    def test_invalidate_one_locale_keeps_others(self) -> None:
        """Per-locale invalidation leaves other tables published."""
        cache = TokenTableCache()
        cache.publish(_table("en"), 0)
        cache.publish(_table("de"), 0)

        cache.invalidate("en")

        assert cache.get("en") is None
        assert cache.get("de") is not None

    def test_readers_keep_old_table(self) -> None:
        """A reference obtained before a swap stays complete."""
        cache = TokenTableCache()
        old = _table("en", a="old", b="old")
        cache.publish(old, 0)
        held = cache.get("en")

        cache.invalidate("en")
        cache.publish(_table("en", 1, a="new"), cache.generation("en"))

        assert held is old
        assert dict(held) == {"a": "old", "b": "old"}
        assert dict(cache.get("en") or {}) == {"a": "new"}

    def test_stats_and_clear(self) -> None:
        """Hits and misses are counted; clear() resets them."""
        cache = TokenTableCache()
        cache.get("en")
        cache.publish(_table("en"), 0)
        cache.get("en")

        assert cache.stats() == {"size": 1, "hits": 1, "misses": 1}

        cache.clear()

        assert cache.stats() == {"size": 0, "hits": 0, "misses": 0}
