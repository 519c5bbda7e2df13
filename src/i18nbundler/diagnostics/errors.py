"""i18nbundler exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Hierarchy:
    I18nError
    ├─ ResourceError               (build-time, halts startup)
    │  ├─ ResourceNotFoundError
    │  └─ DuplicateTokenError
    ├─ UnsupportedLocaleError
    ├─ TemplateError               (fails one substitution)
    │  ├─ UnboundParameterError
    │  └─ MalformedTemplateError
    ├─ MissingTranslationError     (non-fatal, collected)
    └─ FormattingError

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, ErrorCategory

__all__ = [
    "DuplicateTokenError",
    "FormattingError",
    "I18nError",
    "MalformedTemplateError",
    "MissingTranslationError",
    "ResourceError",
    "ResourceNotFoundError",
    "TemplateError",
    "UnboundParameterError",
    "UnsupportedLocaleError",
]


class I18nError(Exception):
    """Base exception for all i18nbundler errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
        category: Error category used by reporters
    """

    category: ErrorCategory = ErrorCategory.RESOURCE

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize I18nError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ResourceError(I18nError):
    """Resource loading or merge failure.

    Surfaces at build/start time and halts startup: a broken token table
    silently corrupts every page.
    """


class ResourceNotFoundError(ResourceError):
    """An i18n-enabled scope has no resource files for any supported locale.

    Attributes:
        scope_name: Qualified name of the offending scope
    """

    def __init__(self, message: str | Diagnostic, *, scope_name: str) -> None:
        super().__init__(message)
        self.scope_name = scope_name


class DuplicateTokenError(ResourceError):
    """Token key defined twice at the same precedence.

    Raised when one scope+locale file set defines a key twice, or when two
    distinct scopes of the same level both define it.

    Attributes:
        token_key: The duplicated key
        locale_code: Locale of the conflicting files
        scope_name: Scope holding the first definition
        other_scope_name: Scope holding the second definition (same as
            scope_name for a within-scope duplicate)
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        token_key: str,
        locale_code: str,
        scope_name: str,
        other_scope_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.token_key = token_key
        self.locale_code = locale_code
        self.scope_name = scope_name
        self.other_scope_name = other_scope_name if other_scope_name is not None else scope_name


class UnsupportedLocaleError(I18nError):
    """Locale outside the application's declared supported set.

    For forwarding, the default locale is used instead. For resources it is a
    hard configuration error.

    Attributes:
        locale_code: The rejected locale
        supported: The declared supported locales
    """

    category = ErrorCategory.LOCALE

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale_code: str,
        supported: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.locale_code = locale_code
        self.supported = tuple(supported)


class TemplateError(I18nError):
    """Bad parameterized template.

    Fails the single substitution, never the whole build or stream.

    Attributes:
        token_key: Key of the template being expanded (None if unknown)
    """

    category = ErrorCategory.TEMPLATE

    def __init__(self, message: str | Diagnostic, *, token_key: str | None = None) -> None:
        super().__init__(message)
        self.token_key = token_key


class UnboundParameterError(TemplateError):
    """Placeholder with no value in the supplied parameters.

    Attributes:
        placeholder: Name inside the brackets
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        placeholder: str,
        token_key: str | None = None,
    ) -> None:
        super().__init__(message, token_key=token_key)
        self.placeholder = placeholder


class MalformedTemplateError(TemplateError):
    """Unterminated, nested, or empty placeholder bracket.

    Attributes:
        position: 0-indexed offset of the offending '['
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        position: int,
        token_key: str | None = None,
    ) -> None:
        super().__init__(message, token_key=token_key)
        self.position = position


class MissingTranslationError(I18nError):
    """Token has no entry for the active locale.

    Non-fatal: rendering continues with a visible diagnostic marker and the
    event is collected for reporting.

    Attributes:
        token_key: The unresolved key
        locale_code: The active locale
    """

    category = ErrorCategory.MISSING

    def __init__(self, message: str | Diagnostic, *, token_key: str, locale_code: str) -> None:
        super().__init__(message)
        self.token_key = token_key
        self.locale_code = locale_code


class FormattingError(I18nError):
    """Locale-aware date or number formatting failed.

    Carries a fallback_value so that callers collecting the error still have
    usable output.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    category = ErrorCategory.FORMATTING

    def __init__(self, message: str | Diagnostic, *, fallback_value: str) -> None:
        super().__init__(message)
        self.fallback_value = fallback_value
