"""Diagnostic system for i18nbundler errors.

Provides structured error diagnostics with codes, hints and locations.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory
from .errors import (
    DuplicateTokenError,
    FormattingError,
    I18nError,
    MalformedTemplateError,
    MissingTranslationError,
    ResourceError,
    ResourceNotFoundError,
    TemplateError,
    UnboundParameterError,
    UnsupportedLocaleError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import ValidationResult

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateTokenError",
    "ErrorCategory",
    "ErrorTemplate",
    "FormattingError",
    "I18nError",
    "MalformedTemplateError",
    "MissingTranslationError",
    "OutputFormat",
    "ResourceError",
    "ResourceNotFoundError",
    "TemplateError",
    "UnboundParameterError",
    "UnsupportedLocaleError",
    "ValidationResult",
]
