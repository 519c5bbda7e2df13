"""LocaleFormatters: locale-aware date and number formatting.

Format patterns are ordinary resolvable tokens, not hard-coded constants.
For each locale the formatter looks, in order, at:

1. The reserved keys in the locale's EffectiveTokenTable
   (``i18n.date.format``, ``i18n.number.format``,
   ``i18n.number.grouping.separator``, ``i18n.number.decimal.separator``)
2. Built-in defaults for a small closed set of well-known locales
3. Babel CLDR symbols, for number separators of locales Babel knows
4. A generic ISO-like date pattern and plain ``,`` / ``.`` separators

Patterns use CLDR syntax and are applied with Babel:
    - Dates: ``dd`` day, ``MM`` month, ``yyyy`` year, ``HH`` hour,
      ``mm`` minute, ``ss`` second (see babel.dates)
    - Numbers: ``#,##0.###`` style (see babel.numbers); the pattern's
      ``,`` and ``.`` are rendered with the resolved separators

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from types import MappingProxyType

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from i18nbundler.constants import (
    DATE_FORMAT_KEY,
    DECIMAL_SEPARATOR_KEY,
    DEFAULT_NUMBER_PATTERN,
    GENERIC_DATE_PATTERN,
    GROUPING_SEPARATOR_KEY,
    NUMBER_FORMAT_KEY,
)
from i18nbundler.diagnostics import ErrorTemplate, FormattingError
from i18nbundler.locale_utils import language_of, locale_key, try_babel_locale

__all__ = ["BUILTIN_FORMATS", "FormatDefaults", "LocaleFormatters", "NumberSymbols"]

logger = logging.getLogger(__name__)

type TableSource = Callable[[str], Mapping[str, str]]
type DateValue = date | datetime | str
type NumberValue = int | float | Decimal

# Babel renders the numeric body of a pattern with English symbols; only the
# body is then translated to the resolved separators. Literal prefix and
# suffix text is reattached untouched.
_NEUTRAL_LOCALE = "en"
_NEUTRAL_GROUPING = ","
_NEUTRAL_DECIMAL = "."
_QUOTED_LITERAL = re.compile(r"'([^']*)'")


def _literal(text: str) -> str:
    """Unquote pattern literal text (``''`` is a single quote)."""
    return _QUOTED_LITERAL.sub(lambda m: m.group(1) or "'", text)


@dataclass(frozen=True, slots=True)
class NumberSymbols:
    """Separator characters for number formatting."""

    grouping: str
    decimal: str


@dataclass(frozen=True, slots=True)
class FormatDefaults:
    """Built-in formatting defaults for one well-known locale."""

    date_pattern: str
    symbols: NumberSymbols


BUILTIN_FORMATS: Mapping[str, FormatDefaults] = MappingProxyType(
    {
        "en": FormatDefaults("dd/MM/yyyy", NumberSymbols(",", ".")),
        "de": FormatDefaults("dd.MM.yyyy", NumberSymbols(".", ",")),
        "zh": FormatDefaults("yyyy-MM-dd", NumberSymbols(",", ".")),
        "fr": FormatDefaults("dd/MM/yyyy", NumberSymbols(" ", ",")),
    }
)

_PLAIN_SYMBOLS = NumberSymbols(_NEUTRAL_GROUPING, _NEUTRAL_DECIMAL)


class LocaleFormatters:
    """Formats dates and numbers per locale.

    Args:
        table_source: Callable returning the effective token table of a
            locale, typically ``ResourceResolver.resolve``. None uses the
            built-in defaults only.
        builtins: Built-in defaults table (overridable for tests)

    Example:
        >>> formatters = LocaleFormatters()
        >>> formatters.format_number(1234567, "en")
        '1,234,567'
        >>> formatters.format_number(1234567.5, "de")
        '1.234.567,5'
    """

    __slots__ = ("_builtins", "_table_source")

    def __init__(
        self,
        table_source: TableSource | None = None,
        *,
        builtins: Mapping[str, FormatDefaults] = BUILTIN_FORMATS,
    ) -> None:
        self._table_source = table_source
        self._builtins = {locale_key(code): value for code, value in builtins.items()}

    def format_date(
        self,
        value: DateValue,
        locale: str,
        *,
        table: Mapping[str, str] | None = None,
    ) -> str:
        """Format a date, datetime or ISO-8601 string.

        Args:
            value: Value to format
            locale: Active locale
            table: Effective table to read the pattern from (looked up via
                the table source when omitted)

        Raises:
            FormattingError: If the value or pattern is invalid; carries the
                unformatted value as fallback
        """
        pattern = self.date_pattern(locale, table=table)

        try:
            moment = _to_datetime(value)
            return str(
                babel_dates.format_datetime(
                    moment,
                    format=pattern,
                    locale=try_babel_locale(locale) or _NEUTRAL_LOCALE,
                )
            )
        except (ValueError, TypeError, AttributeError, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.date_format_failed(value, pattern, str(e)),
                fallback_value=str(value),
            ) from e

    def format_number(
        self,
        value: NumberValue,
        locale: str,
        *,
        table: Mapping[str, str] | None = None,
    ) -> str:
        """Format a number with the locale's separators.

        Raises:
            FormattingError: If the value or pattern is invalid; carries
                str(value) as fallback
        """
        if table is None:
            table = self._table(locale)
        pattern = table.get(NUMBER_FORMAT_KEY) or DEFAULT_NUMBER_PATTERN
        symbols = self.number_symbols(locale, table=table)

        if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
            raise FormattingError(
                ErrorTemplate.number_format_failed(value, pattern, "not a number"),
                fallback_value=str(value),
            )

        try:
            parsed = babel_numbers.parse_pattern(pattern)
            number = value if isinstance(value, Decimal) else Decimal(str(value))
            negative = int(number.is_signed())
            body_pattern = copy.copy(parsed)
            body_pattern.prefix = body_pattern.suffix = ("", "")
            body = babel_numbers.format_decimal(
                number.copy_abs(), format=body_pattern, locale=_NEUTRAL_LOCALE
            )
        except (ValueError, TypeError, InvalidOperation, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.number_format_failed(value, pattern, str(e)),
                fallback_value=str(value),
            ) from e

        body = body.translate(
            str.maketrans({_NEUTRAL_GROUPING: symbols.grouping, _NEUTRAL_DECIMAL: symbols.decimal})
        )
        return _literal(parsed.prefix[negative]) + body + _literal(parsed.suffix[negative])

    def date_pattern(self, locale: str, *, table: Mapping[str, str] | None = None) -> str:
        """Resolve the date pattern of a locale."""
        if table is None:
            table = self._table(locale)
        pattern = table.get(DATE_FORMAT_KEY)
        if pattern:
            return pattern
        defaults = self._builtin(locale)
        return defaults.date_pattern if defaults is not None else GENERIC_DATE_PATTERN

    def number_symbols(
        self, locale: str, *, table: Mapping[str, str] | None = None
    ) -> NumberSymbols:
        """Resolve grouping and decimal separators of a locale.

        Each separator is resolved independently, so a table may override
        only one of them.
        """
        if table is None:
            table = self._table(locale)
        fallback = self._default_symbols(locale)
        return NumberSymbols(
            grouping=table.get(GROUPING_SEPARATOR_KEY) or fallback.grouping,
            decimal=table.get(DECIMAL_SEPARATOR_KEY) or fallback.decimal,
        )

    def _table(self, locale: str) -> Mapping[str, str]:
        if self._table_source is None:
            return {}
        return self._table_source(locale)

    def _builtin(self, locale: str) -> FormatDefaults | None:
        return self._builtins.get(locale_key(locale)) or self._builtins.get(
            locale_key(language_of(locale))
        )

    def _default_symbols(self, locale: str) -> NumberSymbols:
        defaults = self._builtin(locale)
        if defaults is not None:
            return defaults.symbols

        babel_locale = try_babel_locale(locale)
        if babel_locale is None:
            return _PLAIN_SYMBOLS

        logger.debug("Using CLDR number symbols for locale %s", locale)
        return NumberSymbols(
            grouping=babel_numbers.get_group_symbol(babel_locale),
            decimal=babel_numbers.get_decimal_symbol(babel_locale),
        )


def _to_datetime(value: DateValue) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    msg = f"Expected date, datetime or ISO-8601 string, got {type(value).__name__}"
    raise TypeError(msg)
