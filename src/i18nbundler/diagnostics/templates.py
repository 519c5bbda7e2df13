"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here; exception constructors receive the
    finished Diagnostic rather than building f-strings inline.
    """

    @staticmethod
    def resource_not_found(scope_name: str, locales: Iterable[str]) -> Diagnostic:
        """i18n-enabled scope without any resource file."""
        locale_list = ", ".join(locales)
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message=(
                f"Scope '{scope_name}' declares i18n support but has no resource "
                f"files for any supported locale ({locale_list})"
            ),
            hint="Add a .properties file for at least one locale, or disable i18n for the scope",
            scope_name=scope_name,
        )

    @staticmethod
    def resource_load_failed(
        scope_name: str, locale_code: str, source_path: str, reason: str
    ) -> Diagnostic:
        """Resource file exists but could not be read or decoded."""
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_LOAD_FAILED,
            message=f"Failed to load resource '{source_path}': {reason}",
            hint="Check file permissions and that the file is UTF-8 encoded",
            scope_name=scope_name,
            locale_code=locale_code,
            source_path=source_path,
        )

    @staticmethod
    def duplicate_token(
        token_key: str,
        locale_code: str,
        scope_name: str,
        source_path: str | None = None,
        line: int | None = None,
    ) -> Diagnostic:
        """Same key defined twice within one scope+locale file set."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_TOKEN,
            message=(
                f"Token '{token_key}' defined twice in scope '{scope_name}' "
                f"for locale '{locale_code}'"
            ),
            hint="Remove one of the definitions; overrides belong in a more specific scope",
            token_key=token_key,
            locale_code=locale_code,
            scope_name=scope_name,
            source_path=source_path,
            line=line,
        )

    @staticmethod
    def conflicting_token(
        token_key: str, locale_code: str, scope_name: str, other_scope_name: str
    ) -> Diagnostic:
        """Same key defined by two sibling scopes of equal precedence."""
        return Diagnostic(
            code=DiagnosticCode.CONFLICTING_TOKEN,
            message=(
                f"Token '{token_key}' defined by both '{scope_name}' and "
                f"'{other_scope_name}' for locale '{locale_code}'"
            ),
            hint="Sibling scopes cannot override each other; move the token to a common parent",
            token_key=token_key,
            locale_code=locale_code,
            scope_name=scope_name,
        )

    @staticmethod
    def unsupported_locale(locale_code: str, supported: Iterable[str]) -> Diagnostic:
        """Locale outside the declared supported set."""
        supported_list = ", ".join(supported)
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_LOCALE,
            message=f"Locale '{locale_code}' is not supported (supported: {supported_list})",
            hint="Declare the locale in the application configuration",
            locale_code=locale_code,
        )

    @staticmethod
    def unbound_parameter(placeholder: str, token_key: str | None) -> Diagnostic:
        """Placeholder without a supplied value."""
        where = f" in token '{token_key}'" if token_key else ""
        return Diagnostic(
            code=DiagnosticCode.UNBOUND_PARAMETER,
            message=f"No value supplied for placeholder '[{placeholder}]'{where}",
            hint=f"Pass a value for '{placeholder}' in the parameter mapping",
            token_key=token_key,
        )

    @staticmethod
    def malformed_template(token_key: str | None, position: int, reason: str) -> Diagnostic:
        """Unterminated, nested or empty placeholder."""
        where = f" in token '{token_key}'" if token_key else ""
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_TEMPLATE,
            message=f"Malformed placeholder at offset {position}{where}: {reason}",
            hint="Placeholders are written [name] and cannot nest",
            token_key=token_key,
        )

    @staticmethod
    def missing_translation(token_key: str, locale_code: str) -> Diagnostic:
        """Token has no entry for the active locale."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_TRANSLATION,
            message=f"No translation for '{token_key}' in locale '{locale_code}'",
            hint=f"Add '{token_key}=...' to a resource file for '{locale_code}'",
            token_key=token_key,
            locale_code=locale_code,
            severity="warning",
        )

    @staticmethod
    def date_format_failed(value: object, pattern: str, reason: str) -> Diagnostic:
        """Date pattern could not be applied."""
        return Diagnostic(
            code=DiagnosticCode.DATE_FORMAT_FAILED,
            message=f"Date formatting failed for {value!r} with pattern '{pattern}': {reason}",
        )

    @staticmethod
    def number_format_failed(value: object, pattern: str, reason: str) -> Diagnostic:
        """Number pattern could not be applied."""
        return Diagnostic(
            code=DiagnosticCode.NUMBER_FORMAT_FAILED,
            message=f"Number formatting failed for {value!r} with pattern '{pattern}': {reason}",
        )

    @staticmethod
    def undeclared_locale(scope_name: str, locale_code: str) -> Diagnostic:
        """Resources exist for a locale the application does not declare."""
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_UNDECLARED_LOCALE,
            message=f"Scope '{scope_name}' has resources for undeclared locale '{locale_code}'",
            hint="Declare the locale or remove the resources",
            scope_name=scope_name,
            locale_code=locale_code,
            severity="warning",
        )

    @staticmethod
    def junk_line(source_path: str, line: int, content: str) -> Diagnostic:
        """Property file line that is neither an entry nor a comment."""
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_JUNK_LINE,
            message=f"Ignored line without '=': {content!r}",
            source_path=source_path,
            line=line,
            severity="warning",
        )

    @staticmethod
    def untranslated_token(token_key: str, locale_code: str, default_locale: str) -> Diagnostic:
        """Token present in the default locale but absent in another."""
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_UNTRANSLATED_TOKEN,
            message=(
                f"Token '{token_key}' is defined for '{default_locale}' "
                f"but not for '{locale_code}'"
            ),
            token_key=token_key,
            locale_code=locale_code,
            severity="warning",
        )

    @staticmethod
    def empty_value(token_key: str, locale_code: str) -> Diagnostic:
        """Token defined with an empty translation."""
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_EMPTY_VALUE,
            message=f"Token '{token_key}' has an empty translation in '{locale_code}'",
            token_key=token_key,
            locale_code=locale_code,
            severity="warning",
        )
