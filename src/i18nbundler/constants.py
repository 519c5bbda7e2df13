"""Shared constants for i18nbundler.

Centralized configuration constants used across the resources, runtime and
web packages. Placing constants here avoids circular imports and provides a
single source of truth.

Constants are grouped by domain:
- Reserved format keys: FormatSpec tokens read by LocaleFormatters
- Marker grammar: inline token marker syntax and limits
- Fallback strings: visible diagnostics rendered in place of values
- Forwarding: cookie and redirect defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Reserved format keys
    "DATE_FORMAT_KEY",
    "NUMBER_FORMAT_KEY",
    "GROUPING_SEPARATOR_KEY",
    "DECIMAL_SEPARATOR_KEY",
    "RESERVED_KEYS",
    "DEFAULT_NUMBER_PATTERN",
    "GENERIC_DATE_PATTERN",
    # Marker grammar
    "MARKER_OPEN",
    "MARKER_CLOSE",
    "MARKER_KEY_CHARS",
    "MAX_MARKER_LENGTH",
    "DATE_MARKER_PREFIX",
    "NUMBER_MARKER_PREFIX",
    "PLACEHOLDER_OPEN",
    "PLACEHOLDER_CLOSE",
    # Fallback strings
    "FALLBACK_MISSING_TOKEN",
    "FALLBACK_TEMPLATE_ERROR",
    # Resource files
    "PROPERTIES_SUFFIX",
    "I18N_RESOURCE_DIR",
    # Forwarding
    "DEFAULT_LOCALE_COOKIE",
    "REDIRECT_STATUS",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "DEFAULT_CHUNK_SIZE",
]

# ============================================================================
# RESERVED FORMAT KEYS
# ============================================================================

# Resolved through the EffectiveTokenTable exactly like ordinary tokens, so an
# Aspect-level definition is inherited unless a BladeSet or Blade overrides it.
DATE_FORMAT_KEY: str = "i18n.date.format"
NUMBER_FORMAT_KEY: str = "i18n.number.format"
GROUPING_SEPARATOR_KEY: str = "i18n.number.grouping.separator"
DECIMAL_SEPARATOR_KEY: str = "i18n.number.decimal.separator"
RESERVED_KEYS: frozenset[str] = frozenset(
    {DATE_FORMAT_KEY, NUMBER_FORMAT_KEY, GROUPING_SEPARATOR_KEY, DECIMAL_SEPARATOR_KEY}
)

# CLDR number pattern: grouping with up to three fraction digits.
DEFAULT_NUMBER_PATTERN: str = "#,##0.###"

# Used when neither the table nor the built-in locale defaults define a pattern.
GENERIC_DATE_PATTERN: str = "yyyy-MM-dd"

# ============================================================================
# MARKER GRAMMAR
# ============================================================================

MARKER_OPEN: str = "@{"
MARKER_CLOSE: str = "}"

# Token keys are dotted identifiers; ':' separates a built-in formatter prefix.
MARKER_KEY_CHARS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.-:"
)

# Upper bound on a pending partial marker carried across chunk boundaries.
# Longer runs are emitted as literal text rather than buffered.
MAX_MARKER_LENGTH: int = 256

DATE_MARKER_PREFIX: str = "date:"
NUMBER_MARKER_PREFIX: str = "number:"

PLACEHOLDER_OPEN: str = "["
PLACEHOLDER_CLOSE: str = "]"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Format strings - use .format(key=...)
FALLBACK_MISSING_TOKEN: str = "??? {key} ???"  # e.g., ??? app.title ???
FALLBACK_TEMPLATE_ERROR: str = "!!! {key} !!!"  # e.g., !!! app.greeting !!!

# ============================================================================
# RESOURCE FILES
# ============================================================================

PROPERTIES_SUFFIX: str = ".properties"
I18N_RESOURCE_DIR: str = "resources/i18n"

# ============================================================================
# FORWARDING
# ============================================================================

DEFAULT_LOCALE_COOKIE: str = "i18n.locale"
REDIRECT_STATUS: int = 302

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached Babel Locale objects (see locale_utils.get_babel_locale).
MAX_LOCALE_CACHE_SIZE: int = 128

# Read size used by transform_file when streaming from a text source.
DEFAULT_CHUNK_SIZE: int = 64 * 1024
