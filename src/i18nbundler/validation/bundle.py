"""Build-time validation of a bundle's locale resources.

Provides standalone validation over a ResourceResolver without rendering
anything. Useful for CI pipelines that should fail before deployment.

Architecture:
    - validate_bundle(): Main entry point, orchestrates validation passes
    - _check_undeclared_locales(): Pass 1 - resources for undeclared locales
    - _check_files(): Pass 2 - junk lines in property files
    - _resolve_tables(): Pass 3 - merge every locale (duplicates, missing scopes)
    - _check_tables(): Pass 4 - templates, empty values, untranslated tokens

Errors are diagnostics with error severity (the bundle would fail to
start); warnings never block a build.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from i18nbundler.constants import RESERVED_KEYS
from i18nbundler.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
    I18nError,
    TemplateError,
    ValidationResult,
)
from i18nbundler.runtime.expander import ParameterExpander

if TYPE_CHECKING:
    from i18nbundler.resources.resolver import EffectiveTokenTable, ResourceResolver

__all__ = ["validate_bundle"]

logger = logging.getLogger(__name__)


def _diagnostic_of(error: I18nError) -> Diagnostic:
    if error.diagnostic is not None:
        return error.diagnostic
    return Diagnostic(code=DiagnosticCode.RESOURCE_LOAD_FAILED, message=str(error))


def _check_undeclared_locales(resolver: ResourceResolver) -> list[Diagnostic]:
    store = resolver.store
    warnings: list[Diagnostic] = []
    for scope in resolver.scopes:
        if not scope.i18n:
            continue
        for locale in sorted(store.undeclared_locales(scope)):
            warnings.append(ErrorTemplate.undeclared_locale(scope.qualified_name, locale))
    return warnings


def _check_files(resolver: ResourceResolver) -> list[Diagnostic]:
    store = resolver.store
    diagnostics: list[Diagnostic] = []
    for scope in resolver.scopes:
        try:
            for locale in store.supported_locales:
                for resource in store.scope_files(scope, locale):
                    diagnostics.extend(
                        ErrorTemplate.junk_line(resource.source_path, junk.line, junk.content)
                        for junk in resource.junk
                    )
        except I18nError as e:
            diagnostics.append(_diagnostic_of(e))
    return diagnostics


def _resolve_tables(
    resolver: ResourceResolver,
) -> tuple[dict[str, EffectiveTokenTable], list[Diagnostic]]:
    tables: dict[str, EffectiveTokenTable] = {}
    errors: list[Diagnostic] = []
    for locale in resolver.store.supported_locales:
        try:
            tables[locale] = resolver.resolve(locale)
        except I18nError as e:
            errors.append(_diagnostic_of(e))
    return tables, errors


def _check_tables(
    tables: dict[str, EffectiveTokenTable], default_locale: str
) -> list[Diagnostic]:
    expander = ParameterExpander()
    diagnostics: list[Diagnostic] = []

    for locale, table in tables.items():
        for key, template in table.items():
            if not template.strip():
                diagnostics.append(ErrorTemplate.empty_value(key, locale))
                continue
            try:
                expander.placeholders(template, token_key=key)
            except TemplateError as e:
                diagnostics.append(_diagnostic_of(e))

    reference = tables.get(default_locale)
    if reference is None:
        return diagnostics

    for locale, table in tables.items():
        if locale == default_locale:
            continue
        diagnostics.extend(
            ErrorTemplate.untranslated_token(key, locale, default_locale)
            for key in sorted(reference)
            if key not in table and key not in RESERVED_KEYS
        )
    return diagnostics


def validate_bundle(
    resolver: ResourceResolver, default_locale: str | None = None
) -> ValidationResult:
    """Validate every declared locale reachable through a resolver.

    Checks:
        - Resources present for locales the application does not declare (warning)
        - Property file lines without ``=`` (warning)
        - Scopes without resources, unreadable files, duplicate keys (error)
        - Malformed placeholder templates (error)
        - Empty translations (warning)
        - Tokens defined for the default locale but not for another (warning)

    Args:
        resolver: Resolver over the application's scopes
        default_locale: Reference locale for the untranslated-token check
            (default: the first supported locale)

    Returns:
        ValidationResult with errors and warnings

    Example:
        >>> result = validate_bundle(resolver, "en")
        >>> result.is_valid
        True
    """
    store = resolver.store
    reference = (
        store.canonical_locale(default_locale)
        if default_locale is not None
        else store.supported_locales[0]
    )

    diagnostics: list[Diagnostic] = []
    diagnostics.extend(_check_undeclared_locales(resolver))
    diagnostics.extend(_check_files(resolver))

    tables, resolve_errors = _resolve_tables(resolver)
    diagnostics.extend(resolve_errors)
    diagnostics.extend(_check_tables(tables, reference))

    # A broken scope surfaces in several passes and locales; report it once.
    result = ValidationResult.from_diagnostics(tuple(dict.fromkeys(diagnostics)))
    logger.info(
        "Validated %d locale(s): %d error(s), %d warning(s)",
        len(store.supported_locales),
        result.error_count,
        result.warning_count,
    )
    return result
