"""I18nBundler: wires configuration, resources and runtime for one application.

Construction is fail-fast: every declared locale is resolved eagerly, so a
missing scope, an unreadable file or a duplicate key stops startup instead
of corrupting pages later.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from i18nbundler.resources.loading import PathResourceLoader
from i18nbundler.resources.resolver import ResourceResolver
from i18nbundler.resources.store import ResourceStore
from i18nbundler.runtime.formatters import LocaleFormatters
from i18nbundler.runtime.reporter import LoggingReporter
from i18nbundler.runtime.substitution import TokenSubstitutionEngine
from i18nbundler.runtime.translator import Translator
from i18nbundler.validation import validate_bundle
from i18nbundler.web.forwarder import LocaleForwarder
from i18nbundler.web.middleware import LocaleForwardingMiddleware

if TYPE_CHECKING:
    from starlette.types import ASGIApp

    from i18nbundler.config import AppConfig
    from i18nbundler.diagnostics import ValidationResult
    from i18nbundler.resources.cache import TokenTableCache
    from i18nbundler.resources.loading import ResourceLoader
    from i18nbundler.resources.resolver import EffectiveTokenTable
    from i18nbundler.resources.scope import Scope
    from i18nbundler.runtime.reporter import TranslationReporter

__all__ = ["I18nBundler"]

logger = logging.getLogger(__name__)

_JS_NAMESPACE = "window.__i18n"


class I18nBundler:
    """Locale bundling facade for one application.

    Args:
        config: Application locale configuration
        scopes: Most specific scopes of the application (ancestors are added)
        loader: Resource loader for those scopes
        cache: Injectable token table cache
        reporter: Receives missing-translation and template errors
            (logging only by default)

    Raises:
        ResourceError: If any declared locale fails to load or merge

    Example:
        >>> config = AppConfig("trader", ("en", "de"))
        >>> bundler = I18nBundler.from_directory(config, [grid], "/srv/trader")
        >>> bundler.translator("de")("app.title")
        'Aufträge'
    """

    __slots__ = ("_config", "_forwarder", "_formatters", "_reporter", "_resolver", "_store")

    def __init__(
        self,
        config: AppConfig,
        scopes: Scope | Iterable[Scope],
        loader: ResourceLoader,
        *,
        cache: TokenTableCache | None = None,
        reporter: TranslationReporter | None = None,
    ) -> None:
        self._config = config
        self._store = ResourceStore(loader, config.locales)
        self._resolver = ResourceResolver(self._store, scopes, cache=cache)
        self._formatters = LocaleFormatters(self._resolver.resolve)
        self._reporter: TranslationReporter = (
            reporter if reporter is not None else LoggingReporter()
        )
        self._forwarder = LocaleForwarder(config)

        for locale in config.locales:
            self._resolver.resolve(locale)
        logger.info(
            "Bundled app '%s': %d scope(s), locales %s",
            config.name,
            len(self._resolver.scopes),
            ", ".join(config.locales),
        )

    @classmethod
    def from_directory(
        cls,
        config: AppConfig,
        scopes: Scope | Iterable[Scope],
        root_dir: str | Path,
        **kwargs: object,
    ) -> I18nBundler:
        """Build a bundler reading property files below an application root."""
        return cls(config, scopes, PathResourceLoader(root_dir), **kwargs)  # type: ignore[arg-type]

    @property
    def config(self) -> AppConfig:
        """Application configuration."""
        return self._config

    @property
    def store(self) -> ResourceStore:
        """Underlying resource store."""
        return self._store

    @property
    def resolver(self) -> ResourceResolver:
        """Underlying resource resolver."""
        return self._resolver

    @property
    def formatters(self) -> LocaleFormatters:
        """Date and number formatters reading the resolved tables."""
        return self._formatters

    @property
    def forwarder(self) -> LocaleForwarder:
        """Locale forwarder for this application."""
        return self._forwarder

    def table(self, locale: str | None = None) -> EffectiveTokenTable:
        """Effective token table of a locale (default locale when omitted)."""
        return self._resolver.resolve(locale if locale is not None else self._config.default_locale)

    def engine(
        self, locale: str | None = None, *, reporter: TranslationReporter | None = None
    ) -> TokenSubstitutionEngine:
        """Substitution engine bound to a locale's current table."""
        return TokenSubstitutionEngine(
            self.table(locale),
            formatters=self._formatters,
            reporter=reporter if reporter is not None else self._reporter,
        )

    def translator(
        self, locale: str | None = None, *, strict_formatting: bool = False
    ) -> Translator:
        """Programmatic lookup callable bound to a locale."""
        return Translator(self.engine(locale), strict_formatting=strict_formatting)

    def render_js_bundle(self, locale: str | None = None) -> str:
        """Client bundle assigning the locale's table to ``window.__i18n``."""
        table = self.table(locale)
        payload = json.dumps(table.as_dict(), ensure_ascii=False, sort_keys=True)
        # Keep a translation containing "</script>" from closing an inline script.
        payload = payload.replace("</", "<\\/")
        return (
            f"{_JS_NAMESPACE} = {_JS_NAMESPACE} || {{}};\n"
            f"{_JS_NAMESPACE}[{json.dumps(table.locale)}] = {payload};\n"
        )

    def render_properties_bundle(self, locale: str | None = None) -> str:
        """Merged table as sorted ``key=value`` lines."""
        table = self.table(locale)
        return "".join(f"{key}={table[key]}\n" for key in sorted(table))

    def invalidate(self, locale: str | None = None, *, scope: Scope | None = None) -> None:
        """Signal that resource files changed.

        Args:
            locale: Locale whose files changed; None means all locales
            scope: Scope whose files changed; None means every scope
        """
        self._store.invalidate(scope, locale)
        if scope is None:
            self._resolver.invalidate(locale)

    def validate(self) -> ValidationResult:
        """Run build-time validation against the default locale."""
        return validate_bundle(self._resolver, self._config.default_locale)

    def middleware(self, app: ASGIApp) -> LocaleForwardingMiddleware:
        """Wrap an ASGI application with locale forwarding."""
        return LocaleForwardingMiddleware(app, self._forwarder)

    def close(self) -> None:
        """Detach the resolver from store change notifications."""
        self._resolver.close()

    def __repr__(self) -> str:
        return f"I18nBundler(app={self._config.name!r}, locales={self._config.locales!r})"
