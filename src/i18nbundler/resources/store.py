"""ResourceStore: loads and indexes raw per-locale property resources.

The store is the leaf of the i18n stack. It asks a ResourceLoader for the
files of each (scope, locale) pair, parses them, and hands them to the
resolver tagged with their owning scope. It performs no merging.

Loading is per scope and eager across locales: the first time a scope is
touched, its files for every supported locale are loaded so that an
i18n-enabled scope with no resources at all is reported immediately.

Change notification:
    The collaborator that watches files calls ``invalidate(scope, locale)``.
    Cached files of that scope are dropped and every registered listener
    (typically a ResourceResolver) is notified.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from i18nbundler.diagnostics import (
    ErrorTemplate,
    ResourceError,
    ResourceNotFoundError,
    UnsupportedLocaleError,
)
from i18nbundler.enums import LoadStatus
from i18nbundler.locale_utils import locale_key
from i18nbundler.resources.loading import LoadSummary, ResourceLoader, ResourceLoadResult
from i18nbundler.resources.properties import PropertyEntry, PropertyJunk, parse_properties
from i18nbundler.resources.scope import Scope
from i18nbundler.resources.types import LocaleCode

__all__ = ["ChangeListener", "ResourceFile", "ResourceStore"]

logger = logging.getLogger(__name__)

type ChangeListener = Callable[[Scope, LocaleCode | None], None]


@dataclass(frozen=True, slots=True)
class ResourceFile:
    """One parsed property file owned by a (scope, locale) pair.

    Attributes:
        scope: Owning scope (drives override precedence)
        locale: Locale code as declared by the application
        source_path: Human-readable path for diagnostics
        entries: Entries in file order, duplicates preserved
        junk: Unparseable lines
    """

    scope: Scope
    locale: LocaleCode
    source_path: str
    entries: tuple[PropertyEntry, ...]
    junk: tuple[PropertyJunk, ...] = ()

    def keys(self) -> tuple[str, ...]:
        """Return entry keys in file order."""
        return tuple(entry.key for entry in self.entries)


class ResourceStore:
    """Loads, caches and indexes resource files per (scope, locale).

    Thread Safety:
        Scope loads are serialized by an internal lock. A scope's file map
        is built completely before it is published.

    Example:
        >>> loader = MemoryResourceLoader()
        >>> app = Scope.aspect("default")
        >>> loader.add(app, "en", "app.title=Orders")
        >>> store = ResourceStore(loader, ["en", "de"])
        >>> [f.keys() for f in store.files_for(app, "en")]
        [('app.title',)]
    """

    __slots__ = ("_files", "_listeners", "_load_results", "_loader", "_lock", "_supported")

    def __init__(self, loader: ResourceLoader, supported_locales: Iterable[LocaleCode]) -> None:
        """Initialize the store.

        Args:
            loader: Collaborator that reads resource files
            supported_locales: Declared supported locales

        Raises:
            ValueError: If no supported locale is given
        """
        supported = tuple(dict.fromkeys(supported_locales))
        if not supported:
            msg = "At least one supported locale is required"
            raise ValueError(msg)

        self._loader = loader
        self._supported: dict[str, LocaleCode] = {locale_key(loc): loc for loc in supported}
        self._files: dict[Scope, dict[LocaleCode, tuple[ResourceFile, ...]]] = {}
        self._load_results: dict[tuple[str, LocaleCode], ResourceLoadResult] = {}
        self._listeners: list[ChangeListener] = []
        self._lock = threading.RLock()

    @property
    def loader(self) -> ResourceLoader:
        """The underlying resource loader."""
        return self._loader

    @property
    def supported_locales(self) -> tuple[LocaleCode, ...]:
        """Declared supported locales, in declaration order."""
        return tuple(self._supported.values())

    def canonical_locale(self, locale: LocaleCode) -> LocaleCode:
        """Map a locale to its declared spelling.

        Raises:
            UnsupportedLocaleError: If the locale is not declared
        """
        try:
            return self._supported[locale_key(locale)]
        except KeyError:
            raise UnsupportedLocaleError(
                ErrorTemplate.unsupported_locale(locale, self.supported_locales),
                locale_code=locale,
                supported=self.supported_locales,
            ) from None

    def is_supported(self, locale: LocaleCode) -> bool:
        """Check whether a locale is declared."""
        return locale_key(locale) in self._supported

    def scope_files(self, scope: Scope, locale: LocaleCode) -> tuple[ResourceFile, ...]:
        """Return the files owned by exactly this scope for a locale.

        Raises:
            UnsupportedLocaleError: If the locale is not declared
            ResourceNotFoundError: If an i18n-enabled scope has no files at all
            ResourceError: If a file cannot be read
        """
        canonical = self.canonical_locale(locale)
        if not scope.i18n:
            return ()
        return self._scope_map(scope)[canonical]

    def files_for(self, scope: Scope, locale: LocaleCode) -> tuple[ResourceFile, ...]:
        """Return files visible to a scope: its ancestors' and its own, root first.

        Each file carries its owning scope for precedence resolution.
        """
        files: list[ResourceFile] = []
        for node in scope.lineage():
            files.extend(self.scope_files(node, locale))
        return tuple(files)

    def discover_locales(self, scope: Scope) -> frozenset[LocaleCode]:
        """Locales for which the loader sees resources in this scope."""
        return self._loader.discover_locales(scope)

    def undeclared_locales(self, scope: Scope) -> frozenset[LocaleCode]:
        """Locales with resources in this scope that the application does not declare."""
        return frozenset(loc for loc in self.discover_locales(scope) if not self.is_supported(loc))

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callback invoked with (scope, locale) on invalidation."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """Unregister a previously added callback."""
        with self._lock:
            self._listeners.remove(listener)

    def invalidate(self, scope: Scope | None = None, locale: LocaleCode | None = None) -> None:
        """Drop cached files and notify listeners.

        Args:
            scope: Scope whose files changed; None drops every scope
            locale: Locale whose files changed; None means all locales
        """
        with self._lock:
            if scope is None:
                scopes = tuple(self._files)
                self._files.clear()
            else:
                scopes = (scope,)
                self._files.pop(scope, None)
            listeners = tuple(self._listeners)

        logger.debug("Invalidated resources for %d scope(s), locale=%s", len(scopes), locale)
        for changed in scopes:
            for listener in listeners:
                listener(changed, locale)

    def get_load_summary(self) -> LoadSummary:
        """Summary of the latest load attempt for every (scope, locale) pair."""
        with self._lock:
            return LoadSummary(results=tuple(self._load_results.values()))

    def _scope_map(self, scope: Scope) -> dict[LocaleCode, tuple[ResourceFile, ...]]:
        with self._lock:
            cached = self._files.get(scope)
            if cached is not None:
                return cached

            loaded = {locale: self._load(scope, locale) for locale in self.supported_locales}
            if not any(loaded.values()):
                raise ResourceNotFoundError(
                    ErrorTemplate.resource_not_found(scope.qualified_name, self.supported_locales),
                    scope_name=scope.qualified_name,
                )

            self._files[scope] = loaded
            logger.info(
                "Loaded %d resource file(s) for scope '%s'",
                sum(len(files) for files in loaded.values()),
                scope.qualified_name,
            )
            return loaded

    def _load(self, scope: Scope, locale: LocaleCode) -> tuple[ResourceFile, ...]:
        result_key = (scope.qualified_name, locale)
        try:
            sources = self._loader.load(scope, locale)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            self._load_results[result_key] = ResourceLoadResult(
                scope_name=scope.qualified_name,
                locale=locale,
                status=LoadStatus.ERROR,
                error=e,
            )
            logger.error(
                "Failed to load resources for '%s' (%s): %s", scope.qualified_name, locale, e
            )
            raise ResourceError(
                ErrorTemplate.resource_load_failed(
                    scope.qualified_name, locale, scope.relative_dir, str(e)
                )
            ) from e

        files: list[ResourceFile] = []
        junk: list[tuple[str, PropertyJunk]] = []
        for source in sources:
            parsed = parse_properties(source.text)
            for line in parsed.junk:
                logger.warning(
                    "Ignored malformed line %d in %s: %r",
                    line.line,
                    source.source_path,
                    line.content,
                )
                junk.append((source.source_path, line))
            files.append(
                ResourceFile(
                    scope=scope,
                    locale=locale,
                    source_path=source.source_path,
                    entries=parsed.entries,
                    junk=parsed.junk,
                )
            )

        self._load_results[result_key] = ResourceLoadResult(
            scope_name=scope.qualified_name,
            locale=locale,
            status=LoadStatus.SUCCESS if files else LoadStatus.NOT_FOUND,
            source_paths=tuple(f.source_path for f in files),
            junk_entries=tuple(junk),
        )
        return tuple(files)
