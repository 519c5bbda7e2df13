"""TokenTableCache: explicit, injectable cache of published token tables.

The cache is a plain object owned by whoever constructs the resolver. It is
not a process-wide singleton, so tests can build isolated instances.

Publication discipline (copy-then-swap):
    A table is merged completely before ``publish`` is called. ``publish``
    copies the locale map, inserts the new table and swaps the map reference
    under the write lock. Readers holding the previous table keep a complete,
    immutable object.

Generations:
    Every locale carries a generation counter bumped by ``invalidate``. A
    build records the generation it started from; if an invalidation lands
    while the build is running, ``publish`` refuses the stale table.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from i18nbundler.core import RWLock

if TYPE_CHECKING:
    from i18nbundler.resources.resolver import EffectiveTokenTable
    from i18nbundler.resources.types import LocaleCode

__all__ = ["TokenTableCache"]


class TokenTableCache:
    """Per-locale cache of EffectiveTokenTable instances.

    One cache serves one resolver: entries are keyed by locale only.

    Example:
        >>> cache = TokenTableCache()
        >>> resolver = ResourceResolver(store, [blade], cache=cache)
        >>> table = resolver.resolve("en")
        >>> cache.get("en") is table
        True
    """

    __slots__ = ("_epoch", "_generations", "_hits", "_lock", "_misses", "_tables")

    def __init__(self) -> None:
        self._lock = RWLock()
        self._tables: dict[LocaleCode, EffectiveTokenTable] = {}
        self._generations: dict[LocaleCode, int] = {}
        self._epoch = 0
        self._hits = 0
        self._misses = 0

    def get(self, locale: LocaleCode) -> EffectiveTokenTable | None:
        """Return the published table for a locale, or None."""
        with self._lock.read():
            table = self._tables.get(locale)
        # Counters are advisory; unsynchronized increments are acceptable.
        if table is None:
            self._misses += 1
        else:
            self._hits += 1
        return table

    def generation(self, locale: LocaleCode) -> int:
        """Current generation of a locale (0 before any invalidation)."""
        with self._lock.read():
            return self._generation(locale)

    def publish(self, table: EffectiveTokenTable, generation: int) -> bool:
        """Publish a fully built table.

        Args:
            table: Completely merged table
            generation: Generation observed when the build started

        Returns:
            True if published; False if an invalidation made the build stale
        """
        with self._lock.write():
            if self._generation(table.locale) != generation:
                return False
            tables = dict(self._tables)
            tables[table.locale] = table
            self._tables = tables
            return True

    def invalidate(self, locale: LocaleCode | None = None) -> None:
        """Drop the table of one locale, or of every locale when None."""
        with self._lock.write():
            if locale is None:
                self._epoch += 1
                self._tables = {}
                return
            tables = dict(self._tables)
            tables.pop(locale, None)
            self._generations[locale] = self._generations.get(locale, 0) + 1
            self._tables = tables

    def clear(self) -> None:
        """Drop every table and reset statistics."""
        self.invalidate()
        self._hits = 0
        self._misses = 0

    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with a published table."""
        with self._lock.read():
            return tuple(self._tables)

    def stats(self) -> dict[str, int]:
        """Cache statistics: size, hits, misses."""
        with self._lock.read():
            size = len(self._tables)
        return {"size": size, "hits": self._hits, "misses": self._misses}

    def _generation(self, locale: LocaleCode) -> int:
        # Caller holds the lock. Both counters only grow, so the sum changes
        # whenever either a per-locale or a global invalidation happens.
        return self._epoch + self._generations.get(locale, 0)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._tables)

    def __contains__(self, locale: object) -> bool:
        with self._lock.read():
            return locale in self._tables
