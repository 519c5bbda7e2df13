"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization used by reporters and log aggregation.

    Categories:
        RESOURCE: Resource loading or merge failure (fails the build)
        LOCALE: Locale outside the declared supported set
        TEMPLATE: Bad parameterized template (fails one substitution)
        MISSING: Token has no entry for the active locale (non-fatal)
        FORMATTING: Locale-aware date/number formatting failure
    """

    RESOURCE = "resource"
    LOCALE = "locale"
    TEMPLATE = "template"
    MISSING = "missing"
    FORMATTING = "formatting"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Resource errors (loading, merging)
        2000-2999: Locale errors
        3000-3999: Template errors (parameter expansion)
        4000-4999: Translation lookup errors
        5000-5999: Formatting errors
        6000-6099: Validation warnings
    """

    # Resource errors (1000-1999)
    RESOURCE_NOT_FOUND = 1001
    DUPLICATE_TOKEN = 1002
    CONFLICTING_TOKEN = 1003
    RESOURCE_LOAD_FAILED = 1004

    # Locale errors (2000-2999)
    UNSUPPORTED_LOCALE = 2001

    # Template errors (3000-3999)
    UNBOUND_PARAMETER = 3001
    MALFORMED_TEMPLATE = 3002

    # Lookup errors (4000-4999)
    MISSING_TRANSLATION = 4001

    # Formatting errors (5000-5999)
    DATE_FORMAT_FAILED = 5001
    NUMBER_FORMAT_FAILED = 5002

    # Validation warnings (6000-6099)
    VALIDATION_UNDECLARED_LOCALE = 6001
    VALIDATION_JUNK_LINE = 6002
    VALIDATION_UNTRANSLATED_TOKEN = 6003
    VALIDATION_EMPTY_VALUE = 6004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        token_key: Token key involved, if any
        locale_code: Locale involved, if any
        scope_name: Qualified scope name involved, if any
        source_path: Resource file location, if any
        line: 1-indexed line within source_path, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    token_key: str | None = None
    locale_code: str | None = None
    scope_name: str | None = None
    source_path: str | None = None
    line: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[DUPLICATE_TOKEN]: Token 'app.title' defined twice in scope 'app' (en)
              --> app/resources/i18n/en/extra.properties:3
              = token: app.title
              = help: Remove one of the definitions

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
