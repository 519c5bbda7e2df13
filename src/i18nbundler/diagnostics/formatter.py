"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from .validation import ValidationResult

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.missing_translation("a.b", "en")))
        MISSING_TRANSLATION: No translation for 'a.b' in locale 'en'
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_validation_result(self, result: "ValidationResult") -> str:
        """Format a ValidationResult with a summary line and details."""
        if result.is_valid:
            parts = [f"Validation passed: {result.warning_count} warning(s)"]
        else:
            parts = [
                f"Validation failed: {result.error_count} error(s), "
                f"{result.warning_count} warning(s)"
            ]

        if result.errors:
            parts.append("\nErrors:")
            parts.extend(f"  {self._format_simple(d)}" for d in result.errors)

        if result.warnings:
            parts.append("\nWarnings:")
            parts.extend(f"  {self._format_simple(d)}" for d in result.warnings)

        return "\n".join(parts)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        severity = "warning" if diagnostic.severity == "warning" else "error"
        parts = [f"{severity}[{diagnostic.code.name}]: {self._maybe_sanitize(diagnostic.message)}"]

        if diagnostic.source_path:
            if diagnostic.line is not None:
                parts.append(f"  --> {diagnostic.source_path}:{diagnostic.line}")
            else:
                parts.append(f"  --> {diagnostic.source_path}")

        if diagnostic.scope_name:
            parts.append(f"  = scope: {diagnostic.scope_name}")
        if diagnostic.locale_code:
            parts.append(f"  = locale: {diagnostic.locale_code}")
        if diagnostic.token_key:
            parts.append(f"  = token: {diagnostic.token_key}")
        if diagnostic.hint:
            parts.append(f"  = help: {self._maybe_sanitize(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        message = self._maybe_sanitize(diagnostic.message)
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        for name in ("token_key", "locale_code", "scope_name", "source_path", "line"):
            value = getattr(diagnostic, name)
            if value is not None:
                data[name] = value

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
