"""ResourceResolver: merges scope resources into one table per locale.

Override precedence is expressed as data, not inheritance: the scope
closure (given scopes plus their ancestors) is grouped by level rank and
folded Aspect -> BladeSet -> Blade, each layer overwriting same-key entries
of the layers before it.

Duplicate rules:
    - A key defined twice within one scope+locale file set is a
      configuration error (DuplicateTokenError), regardless of file order.
    - A key defined by two different scopes of the same rank has no
      specificity winner and is rejected the same way.
    - A key defined at several ranks is an intended override: the most
      specific wins and nothing is raised.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from itertools import groupby
from typing import TYPE_CHECKING

from i18nbundler.diagnostics import DuplicateTokenError, ErrorTemplate
from i18nbundler.resources.cache import TokenTableCache
from i18nbundler.resources.scope import Scope

if TYPE_CHECKING:
    from i18nbundler.resources.store import ResourceStore
    from i18nbundler.resources.types import LocaleCode, TokenKey, Translation

__all__ = ["EffectiveTokenTable", "ResourceResolver"]

logger = logging.getLogger(__name__)


class EffectiveTokenTable(Mapping[str, str]):
    """Immutable, fully merged token table for one locale.

    Built once and shared by any number of concurrent readers without
    locking. Contains only entries defined for its own locale.

    Example:
        >>> table = resolver.resolve("en")
        >>> table["app.title"]
        'Orders'
        >>> table.origin("app.title").qualified_name
        'default.orders.grid'
    """

    __slots__ = ("_entries", "_generation", "_locale", "_origins")

    def __init__(
        self,
        locale: LocaleCode,
        entries: Mapping[TokenKey, Translation],
        origins: Mapping[TokenKey, Scope] | None = None,
        *,
        generation: int = 0,
    ) -> None:
        self._locale = locale
        self._entries: dict[TokenKey, Translation] = dict(entries)
        self._origins: dict[TokenKey, Scope] = dict(origins) if origins is not None else {}
        self._generation = generation

    @property
    def locale(self) -> LocaleCode:
        """Locale this table was merged for."""
        return self._locale

    @property
    def generation(self) -> int:
        """Cache generation the table was built from."""
        return self._generation

    def origin(self, key: TokenKey) -> Scope | None:
        """Scope whose definition won for this key (None if unknown)."""
        return self._origins.get(key)

    def as_dict(self) -> dict[TokenKey, Translation]:
        """Return a mutable copy of the entries."""
        return dict(self._entries)

    def __getitem__(self, key: TokenKey) -> Translation:
        return self._entries[key]

    def __iter__(self) -> Iterator[TokenKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"EffectiveTokenTable(locale={self._locale!r}, tokens={len(self._entries)})"


class ResourceResolver:
    """Builds and caches EffectiveTokenTable instances.

    Registers itself with the store so that a change to any contributing
    scope invalidates the affected locale.

    Example:
        >>> app = Scope.aspect("default")
        >>> grid = app.bladeset("orders").blade("grid")
        >>> loader = MemoryResourceLoader()
        >>> loader.add(app, "en", "app.title=Trading")
        >>> loader.add(grid, "en", "app.title=Orders")
        >>> resolver = ResourceResolver(ResourceStore(loader, ["en"]), [grid])
        >>> resolver.resolve("en")["app.title"]
        'Orders'
    """

    __slots__ = ("_cache", "_scopes", "_store")

    def __init__(
        self,
        store: ResourceStore,
        scopes: Scope | Iterable[Scope],
        *,
        cache: TokenTableCache | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            store: Resource store supplying parsed files
            scopes: Most specific scopes to merge; ancestors are added
            cache: Injectable table cache (a fresh one by default)

        Raises:
            ValueError: If no scope is given
        """
        roots = (scopes,) if isinstance(scopes, Scope) else tuple(scopes)
        if not roots:
            msg = "At least one scope is required"
            raise ValueError(msg)

        closure = {node for scope in roots for node in scope.lineage()}
        self._scopes: tuple[Scope, ...] = tuple(
            sorted(closure, key=lambda s: (s.level.rank, s.qualified_name))
        )
        self._store = store
        self._cache = cache if cache is not None else TokenTableCache()
        store.add_listener(self._on_resource_change)

    @property
    def scopes(self) -> tuple[Scope, ...]:
        """Contributing scopes ordered by precedence (least specific first)."""
        return self._scopes

    @property
    def cache(self) -> TokenTableCache:
        """The table cache used by this resolver."""
        return self._cache

    @property
    def store(self) -> ResourceStore:
        """The underlying resource store."""
        return self._store

    def resolve(self, locale: LocaleCode) -> EffectiveTokenTable:
        """Return the effective token table for a locale.

        Raises:
            UnsupportedLocaleError: If the locale is not declared
            DuplicateTokenError: If a key is defined twice at one precedence
            ResourceNotFoundError: If an i18n scope has no resources at all
        """
        canonical = self._store.canonical_locale(locale)

        cached = self._cache.get(canonical)
        if cached is not None:
            logger.debug("Token table cache hit for locale %s", canonical)
            return cached

        generation = self._cache.generation(canonical)
        table = self._build(canonical, generation)
        if self._cache.publish(table, generation):
            logger.info(
                "Published token table for locale %s (%d tokens, generation %d)",
                canonical,
                len(table),
                generation,
            )
        else:
            logger.debug("Discarded stale token table for locale %s", canonical)
        return table

    def invalidate(self, locale: LocaleCode | None = None) -> None:
        """Drop the cached table of one locale, or of all locales."""
        canonical = self._store.canonical_locale(locale) if locale is not None else None
        self._cache.invalidate(canonical)
        logger.debug("Invalidated token table(s) for locale %s", canonical or "*")

    def close(self) -> None:
        """Stop listening to store change notifications."""
        self._store.remove_listener(self._on_resource_change)

    def _on_resource_change(self, scope: Scope, locale: LocaleCode | None) -> None:
        if scope not in self._scopes:
            return
        if locale is not None and not self._store.is_supported(locale):
            return
        self.invalidate(locale)

    def _build(self, locale: LocaleCode, generation: int) -> EffectiveTokenTable:
        merged: dict[TokenKey, Translation] = {}
        origins: dict[TokenKey, Scope] = {}

        for _, group in groupby(self._scopes, key=lambda s: s.level.rank):
            layer: dict[TokenKey, Translation] = {}
            layer_origins: dict[TokenKey, Scope] = {}

            for scope in group:
                for key, value in self._scope_entries(scope, locale).items():
                    if key in layer_origins:
                        other = layer_origins[key]
                        raise DuplicateTokenError(
                            ErrorTemplate.conflicting_token(
                                key, locale, other.qualified_name, scope.qualified_name
                            ),
                            token_key=key,
                            locale_code=locale,
                            scope_name=other.qualified_name,
                            other_scope_name=scope.qualified_name,
                        )
                    layer[key] = value
                    layer_origins[key] = scope

            merged.update(layer)
            origins.update(layer_origins)

        return EffectiveTokenTable(locale, merged, origins, generation=generation)

    def _scope_entries(self, scope: Scope, locale: LocaleCode) -> dict[TokenKey, Translation]:
        entries: dict[TokenKey, Translation] = {}
        for resource in self._store.scope_files(scope, locale):
            for entry in resource.entries:
                if entry.key in entries:
                    raise DuplicateTokenError(
                        ErrorTemplate.duplicate_token(
                            entry.key,
                            locale,
                            scope.qualified_name,
                            source_path=resource.source_path,
                            line=entry.line,
                        ),
                        token_key=entry.key,
                        locale_code=locale,
                        scope_name=scope.qualified_name,
                    )
                entries[entry.key] = entry.value
        return entries

