"""Resource loading infrastructure for ResourceStore.

Provides the protocol for property resource loaders, a filesystem
implementation with path-traversal security, an in-memory implementation,
and result/summary data structures for tracking load attempts.

Components:
    ResourceLoader - Protocol for loading property resources (structural typing)
    ResourceSource - One loaded file: path description plus text
    PathResourceLoader - Disk-based loader with path-traversal prevention
    MemoryResourceLoader - In-memory loader for tests and generated resources
    ResourceLoadResult - Immutable result of one (scope, locale) load attempt
    LoadSummary - Immutable aggregate of all load results

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from i18nbundler.constants import I18N_RESOURCE_DIR, PROPERTIES_SUFFIX
from i18nbundler.enums import LoadStatus
from i18nbundler.locale_utils import locale_key
from i18nbundler.resources.types import LocaleCode, PropertiesSource

if TYPE_CHECKING:
    from i18nbundler.resources.properties import PropertyJunk
    from i18nbundler.resources.scope import Scope

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceLoader",
    "ResourceSource",
    # Concrete loaders
    "PathResourceLoader",
    "MemoryResourceLoader",
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
]


@dataclass(frozen=True, slots=True)
class ResourceSource:
    """Raw text of one resource file.

    Attributes:
        source_path: Human-readable path used in diagnostics
        text: File contents
    """

    source_path: str
    text: PropertiesSource


class ResourceLoader(Protocol):
    """Protocol for loading property resources for (scope, locale) pairs.

    This is a Protocol (structural typing) rather than ABC so that the
    collaborator that owns the scope trees can supply its own loader.

    Example:
        >>> class StaticLoader:
        ...     def load(self, scope, locale):
        ...         return (ResourceSource(f"{scope.qualified_name}/{locale}", "a=b"),)
        ...     def discover_locales(self, scope):
        ...         return frozenset({"en"})
    """

    def load(self, scope: Scope, locale: LocaleCode) -> tuple[ResourceSource, ...]:
        """Load every resource file of one scope for one locale.

        Returns:
            Loaded files in a stable order; empty when the scope has none

        Raises:
            OSError: If a file exists but cannot be read
            UnicodeDecodeError: If a file is not valid UTF-8
            ValueError: If the locale is unsafe for path construction
        """
        ...

    def discover_locales(self, scope: Scope) -> frozenset[LocaleCode]:
        """Return every locale for which the scope has resources."""
        ...


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """File system resource loader.

    Layout per scope, relative to ``root_dir``::

        <scope.relative_dir>/resources/i18n/<locale>.properties
        <scope.relative_dir>/resources/i18n/<locale>/*.properties

    Files within a locale directory are read in sorted order.

    Security:
        Locale codes containing path separators or ".." are rejected.
        All resolved paths are validated against the fixed root directory.

    Attributes:
        root_dir: Application root directory
    """

    root_dir: str | Path
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory."""
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Validate locale code for path traversal attacks.

        Raises:
            ValueError: If locale contains unsafe path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path resolves inside base_dir."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def i18n_dir(self, scope: Scope) -> Path:
        """Return the i18n resource directory of a scope.

        Raises:
            ValueError: If the scope directory escapes the root directory
        """
        directory = self._resolved_root / scope.relative_dir / I18N_RESOURCE_DIR
        if not self._is_safe_path(self._resolved_root, directory):
            msg = f"Path traversal detected: scope directory escapes root: '{scope.relative_dir}'"
            raise ValueError(msg)
        return directory

    def load(self, scope: Scope, locale: LocaleCode) -> tuple[ResourceSource, ...]:
        """Load all property files of a scope for a locale."""
        self._validate_locale(locale)
        base = self.i18n_dir(scope)

        paths: list[Path] = []
        single_file = base / f"{locale}{PROPERTIES_SUFFIX}"
        if single_file.is_file():
            paths.append(single_file)
        locale_dir = base / locale
        if locale_dir.is_dir():
            paths.extend(sorted(p for p in locale_dir.glob(f"*{PROPERTIES_SUFFIX}") if p.is_file()))

        return tuple(
            ResourceSource(source_path=str(path), text=path.read_text(encoding="utf-8"))
            for path in paths
        )

    def discover_locales(self, scope: Scope) -> frozenset[LocaleCode]:
        """List locales present on disk for a scope."""
        base = self.i18n_dir(scope)
        if not base.is_dir():
            return frozenset()

        found: set[LocaleCode] = set()
        for child in base.iterdir():
            if child.is_dir() and any(child.glob(f"*{PROPERTIES_SUFFIX}")):
                found.add(child.name)
            elif child.is_file() and child.suffix == PROPERTIES_SUFFIX:
                found.add(child.stem)
        return frozenset(found)


class MemoryResourceLoader:
    """In-memory resource loader.

    Useful for tests and for resources generated by other build steps.
    Locales are matched case-insensitively with '-' and '_' equivalent.

    Example:
        >>> app = Scope.aspect("default")
        >>> loader = MemoryResourceLoader()
        >>> loader.add(app, "en", "app.title=Orders")
        >>> [s.text for s in loader.load(app, "en")]
        ['app.title=Orders']
    """

    __slots__ = ("_locales", "_sources")

    def __init__(self) -> None:
        self._sources: dict[tuple[str, str], list[ResourceSource]] = defaultdict(list)
        self._locales: dict[str, set[LocaleCode]] = defaultdict(set)

    def add(
        self,
        scope: Scope,
        locale: LocaleCode,
        text: PropertiesSource,
        *,
        source_path: str | None = None,
    ) -> None:
        """Register one resource file for a scope and locale."""
        files = self._sources[(scope.qualified_name, locale_key(locale))]
        if source_path is None:
            source_path = f"memory:{scope.qualified_name}/{locale}/{len(files)}"
        files.append(ResourceSource(source_path=source_path, text=text))
        self._locales[scope.qualified_name].add(locale)

    def replace(self, scope: Scope, locale: LocaleCode, text: PropertiesSource) -> None:
        """Atomically replace every file of a scope and locale with a single file."""
        source = ResourceSource(source_path=f"memory:{scope.qualified_name}/{locale}/0", text=text)
        self._sources[(scope.qualified_name, locale_key(locale))] = [source]
        self._locales[scope.qualified_name].add(locale)

    def load(self, scope: Scope, locale: LocaleCode) -> tuple[ResourceSource, ...]:
        """Return registered files for a scope and locale."""
        return tuple(self._sources.get((scope.qualified_name, locale_key(locale)), ()))

    def discover_locales(self, scope: Scope) -> frozenset[LocaleCode]:
        """Return locales registered for a scope."""
        return frozenset(self._locales.get(scope.qualified_name, ()))


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading resources for one (scope, locale) pair.

    Attributes:
        scope_name: Qualified scope name
        locale: Locale code
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        source_paths: Paths of the files that were read
        junk_entries: Unparseable lines across those files
    """

    scope_name: str
    locale: LocaleCode
    status: LoadStatus
    error: Exception | None = None
    source_paths: tuple[str, ...] = ()
    junk_entries: tuple[tuple[str, PropertyJunk], ...] = ()

    @property
    def is_success(self) -> bool:
        """Check if resources loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if no resource exists for this pair (expected for partial locales)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if loading failed with an error."""
        return self.status == LoadStatus.ERROR

    @property
    def has_junk(self) -> bool:
        """Check if any file had unparseable lines."""
        return len(self.junk_entries) > 0


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Load outcome of every (scope, locale) pair a store has read.

    A scope with files for only some locales is normal (a blade may not be
    translated yet), so missing locales are listed per scope by
    ``untranslated()`` rather than counted as failures.

    Example:
        >>> summary = store.get_load_summary()
        >>> summary.failures
        ()
        >>> summary.untranslated()
        {'default.orders.grid': ('es',)}
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        return (
            f"LoadSummary(scopes={len(self.scopes)}, files={self.file_count}, "
            f"errors={self.errors}, junk={self.junk_count})"
        )

    @property
    def scopes(self) -> tuple[str, ...]:
        """Qualified names of the scopes read so far, in load order."""
        return tuple(dict.fromkeys(r.scope_name for r in self.results))

    @property
    def file_count(self) -> int:
        """Number of property files read."""
        return sum(len(r.source_paths) for r in self.results)

    @property
    def junk_count(self) -> int:
        """Total number of junk lines across all files."""
        return sum(len(r.junk_entries) for r in self.results)

    @property
    def failures(self) -> tuple[ResourceLoadResult, ...]:
        """Pairs whose loader raised."""
        return tuple(r for r in self.results if r.is_error)

    @property
    def errors(self) -> int:
        return len(self.failures)

    def for_scope(self, scope_name: str) -> dict[LocaleCode, ResourceLoadResult]:
        """Results of one scope keyed by locale."""
        return {r.locale: r for r in self.results if r.scope_name == scope_name}

    def untranslated(self) -> dict[str, tuple[LocaleCode, ...]]:
        """Locales without files, per scope that has files for some other locale."""
        missing: dict[str, list[LocaleCode]] = defaultdict(list)
        loaded: set[str] = set()
        for result in self.results:
            if result.is_success:
                loaded.add(result.scope_name)
            elif result.is_not_found:
                missing[result.scope_name].append(result.locale)
        return {name: tuple(locales) for name, locales in missing.items() if name in loaded}
