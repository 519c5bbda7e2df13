"""Tests for build-time bundle validation.

Tests verify:
- Clean bundles produce no diagnostics
- Warnings: undeclared locales, junk lines, empty values, untranslated tokens
- Errors: malformed templates, duplicate keys, scopes without resources
- Result formatting

Python 3.13+.
"""

from __future__ import annotations

from i18nbundler import MemoryResourceLoader, ResourceResolver, ResourceStore, Scope
from i18nbundler.diagnostics import DiagnosticCode, ValidationResult
from i18nbundler.validation import validate_bundle


def _validate(
    loader: MemoryResourceLoader,
    scope: Scope,
    locales: tuple[str, ...] = ("en", "de"),
    default_locale: str | None = None,
) -> ValidationResult:
    resolver = ResourceResolver(ResourceStore(loader, locales), scope)
    return validate_bundle(resolver, default_locale)


def _codes(result: ValidationResult) -> set[DiagnosticCode]:
    return {d.code for d in (*result.errors, *result.warnings)}


class TestCleanBundle:
    """Test bundles without problems."""

    def test_no_diagnostics(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """Matching locales validate cleanly."""
        loader.add(aspect, "en", "a=Hello [name]\nb=Bye\n")
        loader.add(aspect, "de", "a=Hallo [name]\nb=Tschüss\n")

        result = _validate(loader, aspect)

        assert result.is_valid
        assert result.warning_count == 0
        assert "Validation passed" in result.format()

    def test_reserved_format_keys_need_no_translation(
        self, loader: MemoryResourceLoader, aspect: Scope
    ) -> None:
        """Format tokens are locale-specific and never flagged as untranslated."""
        loader.add(aspect, "en", "a=x\ni18n.date.format=MM/dd/yyyy\n")
        loader.add(aspect, "de", "a=y\n")

        assert _validate(loader, aspect).warning_count == 0


class TestWarnings:
    """Test non-blocking findings."""

    def test_untranslated_token(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """Keys of the default locale missing elsewhere are reported."""
        loader.add(aspect, "en", "a=x\nb=y\n")
        loader.add(aspect, "de", "a=x\n")

        result = _validate(loader, aspect)

        assert result.is_valid
        (warning,) = result.warnings
        assert warning.code is DiagnosticCode.VALIDATION_UNTRANSLATED_TOKEN
        assert (warning.token_key, warning.locale_code) == ("b", "de")

    def test_explicit_default_locale(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """The reference locale is configurable."""
        loader.add(aspect, "en", "a=x\n")
        loader.add(aspect, "de", "a=x\nb=y\n")

        result = _validate(loader, aspect, default_locale="DE")

        assert [(w.token_key, w.locale_code) for w in result.warnings] == [("b", "en")]

    def test_empty_value(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """Empty translations are reported."""
        loader.add(aspect, "en", "a=\n")

        result = _validate(loader, aspect, locales=("en",))

        assert _codes(result) == {DiagnosticCode.VALIDATION_EMPTY_VALUE}

    def test_junk_line(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """Lines without '=' are reported with their position."""
        loader.add(aspect, "en", "a=x\njust text\n", source_path="app/en.properties")

        result = _validate(loader, aspect, locales=("en",))

        (warning,) = result.warnings
        assert warning.code is DiagnosticCode.VALIDATION_JUNK_LINE
        assert (warning.source_path, warning.line) == ("app/en.properties", 2)

    def test_undeclared_locale(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """Resources for undeclared locales are reported."""
        loader.add(aspect, "en", "a=x\n")
        loader.add(aspect, "fr", "a=x\n")

        result = _validate(loader, aspect, locales=("en",))

        (warning,) = result.warnings
        assert warning.code is DiagnosticCode.VALIDATION_UNDECLARED_LOCALE
        assert warning.locale_code == "fr"


class TestErrors:
    """Test findings that would fail startup or substitution."""

    def test_malformed_template(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """Malformed placeholders are errors."""
        loader.add(aspect, "en", "a=Hello [name\n")

        result = _validate(loader, aspect, locales=("en",))

        assert not result.is_valid
        assert _codes(result) == {DiagnosticCode.MALFORMED_TEMPLATE}
        assert "Validation failed" in result.format()

    def test_duplicate_key(self, loader: MemoryResourceLoader, aspect: Scope) -> None:
        """Duplicate keys are errors."""
        loader.add(aspect, "en", "a=1\na=2\n")

        result = _validate(loader, aspect, locales=("en",))

        assert not result.is_valid
        assert DiagnosticCode.DUPLICATE_TOKEN in _codes(result)

    def test_scope_without_resources(
        self, loader: MemoryResourceLoader, aspect: Scope, blade: Scope
    ) -> None:
        """i18n scopes without files are errors; validation still completes."""
        loader.add(aspect, "en", "a=1\n")

        result = _validate(loader, blade, locales=("en",))

        assert not result.is_valid
        assert DiagnosticCode.RESOURCE_NOT_FOUND in _codes(result)

    def test_scope_without_resources_reported_once(
        self, loader: MemoryResourceLoader, aspect: Scope, bladeset: Scope, blade: Scope
    ) -> None:
        """A missing scope yields one error across passes and locales."""
        loader.add(aspect, "en", "a=1\n")
        loader.add(aspect, "de", "a=1\n")
        loader.add(bladeset, "en", "b=1\n")

        result = _validate(loader, blade, locales=("en", "de"))

        assert [d.code for d in result.errors] == [DiagnosticCode.RESOURCE_NOT_FOUND]
        assert result.errors[0].scope_name == blade.qualified_name
