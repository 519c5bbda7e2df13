"""Translator: programmatic token lookup for application code.

The callable form mirrors the markup marker path, so ``translate("a.b",
{"n": 3})`` resolves exactly what ``@{a.b}`` would. It differs in how
template errors surface: markup streams keep going, while application code
gets the exception.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from i18nbundler.diagnostics import FormattingError

if TYPE_CHECKING:
    from i18nbundler.runtime.substitution import TokenSubstitutionEngine

__all__ = ["Translator"]

logger = logging.getLogger(__name__)


class Translator:
    """Bound lookup callable with ``date()`` and ``number()`` siblings.

    Args:
        engine: Substitution engine for the active locale
        strict_formatting: Raise FormattingError instead of falling back to
            the unformatted value

    Example:
        >>> i18n = Translator(engine)
        >>> i18n("orders.count", {"n": 3})
        'You have 3 orders'
        >>> i18n.number(1234567)
        '1,234,567'
    """

    __slots__ = ("_engine", "_strict_formatting")

    def __init__(self, engine: TokenSubstitutionEngine, *, strict_formatting: bool = False) -> None:
        self._engine = engine
        self._strict_formatting = strict_formatting

    @property
    def locale(self) -> str:
        """Active locale."""
        return self._engine.locale

    @property
    def engine(self) -> TokenSubstitutionEngine:
        """Underlying substitution engine."""
        return self._engine

    def __call__(self, key: str, params: Mapping[str, object] | None = None) -> str:
        """Resolve a token and expand its placeholders.

        A missing key returns ``??? key ???`` and is reported.

        Raises:
            UnboundParameterError: A placeholder has no value in params
            MalformedTemplateError: The translation template is malformed
        """
        return self._engine.translate(key, params)

    def has_token(self, key: str) -> bool:
        """Check whether a key resolves in the active locale."""
        return self._engine.has_token(key)

    def date(self, value: date | datetime | str) -> str:
        """Format a date with the active locale's date pattern."""
        formatters = self._engine.formatters
        try:
            return formatters.format_date(value, self.locale, table=self._engine.table)
        except FormattingError as e:
            return self._fallback(e)

    def number(self, value: int | float | Decimal) -> str:
        """Format a number with the active locale's separators."""
        formatters = self._engine.formatters
        try:
            return formatters.format_number(value, self.locale, table=self._engine.table)
        except FormattingError as e:
            return self._fallback(e)

    def _fallback(self, error: FormattingError) -> str:
        if self._strict_formatting:
            raise error
        self._engine.reporter.report(error)
        return error.fallback_value

    def __repr__(self) -> str:
        return f"Translator(locale={self.locale!r})"
