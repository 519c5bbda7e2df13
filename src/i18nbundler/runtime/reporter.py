"""Missing-translation reporters.

The substitution engine never fails a stream because of a missing token or a
bad template; it renders a visible marker and hands the error to a reporter.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Protocol

from i18nbundler.diagnostics import MissingTranslationError

if TYPE_CHECKING:
    from i18nbundler.diagnostics import I18nError

__all__ = ["CollectingReporter", "LoggingReporter", "TranslationReporter"]

logger = logging.getLogger(__name__)


class TranslationReporter(Protocol):
    """Receives non-fatal substitution errors."""

    def report(self, error: I18nError) -> None:
        """Record one error."""
        ...


class LoggingReporter:
    """Reporter that only logs.

    Missing translations are logged at WARNING, other errors at ERROR.
    """

    __slots__ = ()

    def report(self, error: I18nError) -> None:
        """Log one error."""
        if isinstance(error, MissingTranslationError):
            logger.warning("Missing translation: %s", error)
        else:
            logger.error("Substitution failed: %s", error)


class CollectingReporter(LoggingReporter):
    """Thread-safe reporter that logs and keeps every error.

    Example:
        >>> reporter = CollectingReporter()
        >>> engine = TokenSubstitutionEngine({}, locale="en", reporter=reporter)
        >>> engine.transform_text("@{a.b}")[0]
        '??? a.b ???'
        >>> reporter.missing_keys()
        ('a.b',)
    """

    __slots__ = ("_errors", "_lock")

    def __init__(self) -> None:
        self._errors: list[I18nError] = []
        self._lock = threading.Lock()

    def report(self, error: I18nError) -> None:
        """Log and record one error."""
        super().report(error)
        with self._lock:
            self._errors.append(error)

    @property
    def errors(self) -> tuple[I18nError, ...]:
        """Every recorded error, in report order."""
        with self._lock:
            return tuple(self._errors)

    def missing(self) -> tuple[MissingTranslationError, ...]:
        """Recorded missing-translation errors."""
        return tuple(e for e in self.errors if isinstance(e, MissingTranslationError))

    def missing_keys(self) -> tuple[str, ...]:
        """Distinct missing token keys, in first-report order."""
        return tuple(dict.fromkeys(e.token_key for e in self.missing()))

    def clear(self) -> None:
        """Forget every recorded error."""
        with self._lock:
            self._errors.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._errors)
