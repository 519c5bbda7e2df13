"""Tests for the I18nBundler facade.

Tests verify:
- Fail-fast construction over a directory tree
- Precedence of blade tokens over aspect tokens
- Engine, translator and client bundle rendering
- Invalidation after resource files change

Python 3.13+.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from starlette.applications import Starlette

from i18nbundler import (
    AppConfig,
    I18nBundler,
    MemoryResourceLoader,
    ResourceError,
    ResourceNotFoundError,
    Scope,
    UnsupportedLocaleError,
)
from i18nbundler.runtime import CollectingReporter
from i18nbundler.web import LocaleForwardingMiddleware

_FILES = {
    "default/resources/i18n/en.properties": (
        "app.title=Trading\napp.greeting=Hello [name]\n"
    ),
    "default/resources/i18n/de.properties": (
        "app.title=Handel\napp.greeting=Hallo [name]\n"
    ),
    "default/orders/grid/resources/i18n/en/grid.properties": (
        "app.title=Orders\norders.count=You have [n] orders\n"
    ),
    "default/orders/grid/resources/i18n/de/grid.properties": (
        "app.title=Aufträge\norders.count=Sie haben [n] Aufträge\n"
    ),
}


def _write_tree(root: Path) -> None:
    for relative, text in _FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


@pytest.fixture
def grid() -> Scope:
    """Blade under a bladeset without its own resources."""
    return Scope.aspect("default").bladeset("orders", i18n=False).blade("grid")


@pytest.fixture
def bundler(tmp_path: Path, grid: Scope) -> I18nBundler:
    _write_tree(tmp_path)
    return I18nBundler.from_directory(AppConfig("trader", ("en", "de")), grid, tmp_path)


class TestConstruction:
    """Test fail-fast startup."""

    def test_tables_for_every_locale(self, bundler: I18nBundler) -> None:
        """Blade tokens shadow aspect tokens."""
        assert bundler.table()["app.title"] == "Orders"
        assert bundler.table("de")["app.title"] == "Aufträge"
        assert bundler.table("de")["app.greeting"] == "Hallo [name]"
        assert bundler.table("DE").locale == "de"

    def test_missing_resources_fail_startup(self, aspect: Scope) -> None:
        """An i18n scope without any file stops construction."""
        blade = aspect.bladeset("orders", i18n=False).blade("grid")
        loader = MemoryResourceLoader()
        loader.add(aspect, "en", "app.title=Trading")

        with pytest.raises(ResourceNotFoundError):
            I18nBundler(AppConfig("trader", ("en",)), blade, loader)

    def test_duplicate_key_fails_startup(self, aspect: Scope) -> None:
        """Duplicate keys within one scope stop construction."""
        loader = MemoryResourceLoader()
        loader.add(aspect, "en", "a=1\na=2\n")

        with pytest.raises(ResourceError):
            I18nBundler(AppConfig("trader", ("en",)), aspect, loader)

    def test_unsupported_locale(self, bundler: I18nBundler) -> None:
        """Undeclared locales are rejected."""
        with pytest.raises(UnsupportedLocaleError):
            bundler.table("fr")

    def test_repr(self, bundler: I18nBundler) -> None:
        """repr names the application and locales."""
        assert repr(bundler) == "I18nBundler(app='trader', locales=('en', 'de'))"


class TestRuntime:
    """Test engine and translator wiring."""

    def test_engine_transforms_markup(self, bundler: I18nBundler) -> None:
        """Engines are bound to the locale's table."""
        output, errors = bundler.engine("de").transform_text("<h1>@{app.title}</h1>")

        assert output == "<h1>Aufträge</h1>"
        assert errors == ()

    def test_engine_reporter_override(self, bundler: I18nBundler) -> None:
        """A per-engine reporter replaces the bundler's default."""
        reporter = CollectingReporter()

        bundler.engine("en", reporter=reporter).transform_text("@{nope}")

        assert reporter.missing_keys() == ("nope",)

    def test_translator(self, bundler: I18nBundler) -> None:
        """Translators expand parameters and format numbers."""
        i18n = bundler.translator("de")

        assert i18n("orders.count", {"n": 3}) == "Sie haben 3 Aufträge"
        assert i18n.number(1234.5) == "1.234,5"
        assert i18n.locale == "de"

    def test_formatters_read_resolved_tables(self, tmp_path: Path, grid: Scope) -> None:
        """Format tokens in resource files drive the formatters."""
        _write_tree(tmp_path)
        extra = tmp_path / "default/orders/grid/resources/i18n/en/formats.properties"
        extra.write_text("i18n.number.grouping.separator='\n", encoding="utf-8")

        bundler = I18nBundler.from_directory(AppConfig("trader", ("en", "de")), grid, tmp_path)

        assert bundler.formatters.format_number(1234567, "en") == "1'234'567"
        assert bundler.translator("en").number(1000) == "1'000"

    def test_middleware(self, bundler: I18nBundler) -> None:
        """The middleware shares the bundler's forwarder."""
        middleware = bundler.middleware(Starlette())

        assert isinstance(middleware, LocaleForwardingMiddleware)
        assert middleware.forwarder is bundler.forwarder


class TestClientBundles:
    """Test JS and properties rendering."""

    def test_js_bundle(self, bundler: I18nBundler) -> None:
        """The JS bundle assigns the table to window.__i18n."""
        bundle = bundler.render_js_bundle("de")

        head, assignment = bundle.splitlines()
        assert head == "window.__i18n = window.__i18n || {};"
        prefix = 'window.__i18n["de"] = '
        assert assignment.startswith(prefix)
        payload = json.loads(assignment.removeprefix(prefix).removesuffix(";"))
        assert payload["app.title"] == "Aufträge"
        assert list(payload) == sorted(payload)

    def test_js_bundle_escapes_script_close(self, aspect: Scope) -> None:
        """Translations cannot close an inline script element."""
        loader = MemoryResourceLoader()
        loader.add(aspect, "en", "evil=</script><script>alert(1)")
        bundler = I18nBundler(AppConfig("trader", ("en",)), aspect, loader)

        bundle = bundler.render_js_bundle()

        assert "</script>" not in bundle
        assert "<\\/script>" in bundle

    def test_properties_bundle(self, bundler: I18nBundler) -> None:
        """The properties bundle lists merged tokens sorted by key."""
        assert bundler.render_properties_bundle("en") == (
            "app.greeting=Hello [name]\n"
            "app.title=Orders\n"
            "orders.count=You have [n] orders\n"
        )


class TestInvalidation:
    """Test reaction to changed resource files."""

    def _edit(self, root: Path) -> None:
        path = root / "default/orders/grid/resources/i18n/de/grid.properties"
        path.write_text("app.title=Bestellungen\norders.count=[n]\n", encoding="utf-8")

    def test_cached_until_invalidated(
        self, tmp_path: Path, bundler: I18nBundler
    ) -> None:
        """Edits are picked up only after invalidation."""
        self._edit(tmp_path)
        assert bundler.table("de")["app.title"] == "Aufträge"

        bundler.invalidate("de")

        assert bundler.table("de")["app.title"] == "Bestellungen"

    def test_scope_invalidation(self, tmp_path: Path, bundler: I18nBundler, grid: Scope) -> None:
        """Invalidating one scope rebuilds the affected locale."""
        before = bundler.table("en")
        self._edit(tmp_path)

        bundler.invalidate("de", scope=grid)

        assert bundler.table("de")["app.title"] == "Bestellungen"
        assert bundler.table("en") is before

    def test_close_detaches_resolver(self, tmp_path: Path, bundler: I18nBundler) -> None:
        """After close, store invalidation leaves cached tables alone."""
        before = bundler.table("de")
        bundler.close()
        self._edit(tmp_path)

        bundler.store.invalidate()

        assert bundler.table("de") is before


class TestValidate:
    """Test the validation shortcut."""

    def test_clean_tree_is_valid(self, bundler: I18nBundler) -> None:
        """A consistent tree validates without diagnostics."""
        result = bundler.validate()

        assert result.is_valid
        assert result.warning_count == 0
