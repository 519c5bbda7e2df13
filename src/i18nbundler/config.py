"""Application i18n configuration.

Provides a frozen dataclass describing the locale setup of one application:
its URL name, declared supported locales, default locale and the name of
the cookie that pins a user's locale choice.

Configuration may be built directly, from a mapping, or from a TOML file
with an ``[app]`` table::

    [app]
    name = "trader"
    locales = ["en", "de"]
    default_locale = "en"
    locale_cookie = "i18n.locale"

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from i18nbundler.constants import DEFAULT_LOCALE_COOKIE
from i18nbundler.locale_utils import locale_key

__all__ = ["AppConfig"]

_KNOWN_KEYS = frozenset({"name", "locales", "default_locale", "locale_cookie"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Immutable locale configuration of one application.

    Attributes:
        name: Application name; first URL path segment (``/<name>/``)
        locales: Declared supported locales, in preference order
        default_locale: Locale used when negotiation finds no match
            (default: the first declared locale)
        locale_cookie: Cookie carrying an explicit locale choice

    Example:
        >>> config = AppConfig("trader", ("en", "de"))
        >>> config.default_locale
        'en'
        >>> config.canonical_locale("DE")
        'de'
    """

    name: str
    locales: tuple[str, ...]
    default_locale: str = ""
    locale_cookie: str = DEFAULT_LOCALE_COOKIE
    _index: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate and normalize configuration values.

        Raises:
            ValueError: If the name is not a single path segment, no locale
                is declared, a locale is declared twice, the default locale
                is not declared, or the cookie name is empty
        """
        if not self.name or "/" in self.name or self.name.strip() != self.name:
            msg = f"Application name must be a single URL path segment: {self.name!r}"
            raise ValueError(msg)
        if not self.locale_cookie:
            msg = "locale_cookie must not be empty"
            raise ValueError(msg)

        locales = tuple(self.locales)
        if not locales:
            msg = "At least one supported locale is required"
            raise ValueError(msg)

        index: dict[str, str] = {}
        for locale in locales:
            if not locale or "/" in locale:
                msg = f"Invalid locale code: {locale!r}"
                raise ValueError(msg)
            key = locale_key(locale)
            if key in index:
                msg = f"Locale declared twice: {index[key]!r} and {locale!r}"
                raise ValueError(msg)
            index[key] = locale

        default = self.default_locale or locales[0]
        canonical_default = index.get(locale_key(default))
        if canonical_default is None:
            msg = f"Default locale {default!r} is not one of {list(locales)}"
            raise ValueError(msg)

        object.__setattr__(self, "locales", locales)
        object.__setattr__(self, "default_locale", canonical_default)
        object.__setattr__(self, "_index", index)

    def supports(self, locale: str) -> bool:
        """Check whether a locale is declared (case-insensitive, '-' == '_')."""
        return locale_key(locale) in self._index

    def canonical_locale(self, locale: str) -> str | None:
        """Return the declared spelling of a locale, or None if undeclared."""
        return self._index.get(locale_key(locale))

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> AppConfig:
        """Build a configuration from a plain mapping.

        Raises:
            ValueError: If keys are unknown or values have the wrong type
        """
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            msg = f"Unknown configuration keys: {sorted(unknown)}"
            raise ValueError(msg)

        name = data.get("name")
        if not isinstance(name, str):
            msg = "'name' must be a string"
            raise ValueError(msg)

        raw_locales = data.get("locales")
        if isinstance(raw_locales, str) or not isinstance(raw_locales, Iterable):
            msg = "'locales' must be a list of locale codes"
            raise ValueError(msg)
        locales = tuple(raw_locales)
        if not all(isinstance(loc, str) for loc in locales):
            msg = "'locales' must contain only strings"
            raise ValueError(msg)

        default_locale = data.get("default_locale", "")
        locale_cookie = data.get("locale_cookie", DEFAULT_LOCALE_COOKIE)
        if not isinstance(default_locale, str) or not isinstance(locale_cookie, str):
            msg = "'default_locale' and 'locale_cookie' must be strings"
            raise ValueError(msg)

        return cls(
            name=name,
            locales=locales,
            default_locale=default_locale,
            locale_cookie=locale_cookie,
        )

    @classmethod
    def from_toml(cls, path: str | Path) -> AppConfig:
        """Load the ``[app]`` table of a TOML file.

        Raises:
            OSError: If the file cannot be read
            tomllib.TOMLDecodeError: If the file is not valid TOML
            ValueError: If the ``[app]`` table is missing or invalid
        """
        with Path(path).open("rb") as f:
            document = tomllib.load(f)

        app = document.get("app")
        if not isinstance(app, dict):
            msg = f"Missing [app] table in {path}"
            raise ValueError(msg)
        return cls.from_mapping(app)
