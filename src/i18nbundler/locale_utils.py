"""Locale utilities for BCP-47 to POSIX conversion and header parsing.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys, lookups
and Accept-Language negotiation.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from i18nbundler.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "language_of",
    "locale_key",
    "normalize_locale",
    "parse_accept_language",
    "try_babel_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Normalize at the system boundary, then use the normalized form for cache
    keys and lookups.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", "_")


def locale_key(locale_code: str) -> str:
    """Return a case-insensitive comparison key for a locale code.

    Example:
        >>> locale_key("en-GB") == locale_key("EN_gb")
        True
    """
    return normalize_locale(locale_code).casefold()


def language_of(locale_code: str) -> str:
    """Return the language subtag of a locale code.

    Example:
        >>> language_of("de-AT")
        'de'
    """
    return normalize_locale(locale_code).split("_", 1)[0]


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def try_babel_locale(locale_code: str) -> Locale | None:
    """Get a Babel Locale, or None when Babel does not know the locale."""
    from babel import UnknownLocaleError  # noqa: PLC0415

    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("Babel has no locale data for '%s': %s", locale_code, e)
        return None


def parse_accept_language(header: str | None) -> tuple[str, ...]:
    """Parse an Accept-Language header into locale tags by preference.

    Entries are ordered by descending quality value; entries with equal
    quality keep header order. Entries with ``q=0``, malformed quality
    values, or the ``*`` wildcard are dropped.

    Args:
        header: Raw header value (e.g., ``"de,en;q=0.8"``) or None

    Returns:
        Normalized locale tags (e.g., ``("de", "en")``)

    Example:
        >>> parse_accept_language("en;q=0.5, de-AT, fr;q=0")
        ('de_AT', 'en')
    """
    if not header:
        return ()

    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue

        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                quality = float(value.strip())
            except ValueError:
                quality = -1.0
        if not 0.0 < quality <= 1.0:
            continue

        weighted.append((-quality, position, normalize_locale(tag)))

    weighted.sort()
    return tuple(tag for _, _, tag in weighted)
