"""Unified validation result for build-time bundle validation.

Python 3.13+.
"""

from dataclasses import dataclass

from .codes import Diagnostic

__all__ = ["ValidationResult"]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Immutable validation feedback.

    Attributes:
        errors: Diagnostics with error severity
        warnings: Diagnostics with warning severity

    Example:
        >>> result = ValidationResult.valid()
        >>> result.is_valid
        True
    """

    errors: tuple[Diagnostic, ...] = ()
    warnings: tuple[Diagnostic, ...] = ()

    @classmethod
    def valid(cls) -> "ValidationResult":
        """Create a result with no errors or warnings."""
        return cls()

    @classmethod
    def from_diagnostics(cls, diagnostics: tuple[Diagnostic, ...]) -> "ValidationResult":
        """Split diagnostics by severity."""
        return cls(
            errors=tuple(d for d in diagnostics if d.severity == "error"),
            warnings=tuple(d for d in diagnostics if d.severity == "warning"),
        )

    @property
    def is_valid(self) -> bool:
        """True when there are no errors (warnings are allowed)."""
        return not self.errors

    @property
    def error_count(self) -> int:
        """Number of errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Number of warnings."""
        return len(self.warnings)

    def format(self) -> str:
        """Human-readable summary of all diagnostics."""
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format_validation_result(self)
