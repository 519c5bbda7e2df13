"""Property resource file parser.

Format:
    - UTF-8 text, one entry per line: ``key=value``
    - Lines end at LF, CRLF or CR only; other Unicode line
      separators (U+2028, U+0085, ...) are ordinary value characters
    - The key is stripped; leading spaces, tabs and form feeds of the
      value are dropped
    - Blank lines and lines starting with ``#`` or ``!`` are comments
    - No escaping mechanism beyond literal characters
    - Lines without ``=`` (or with an empty key) are kept as junk so that
      validation can report them

Entries are returned in file order and duplicates are preserved: deciding
whether a duplicate is an error is the resolver's job.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from i18nbundler.resources.types import PropertiesSource, TokenKey, Translation

__all__ = [
    "ParsedProperties",
    "PropertyEntry",
    "PropertyJunk",
    "parse_properties",
]

_COMMENT_PREFIXES = ("#", "!")
_BOM = "\ufeff"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_VALUE_INDENT = " \t\f"


@dataclass(frozen=True, slots=True)
class PropertyEntry:
    """One ``key=value`` line.

    Attributes:
        key: Token key
        value: Raw translation template
        line: 1-indexed line number
    """

    key: TokenKey
    value: Translation
    line: int


@dataclass(frozen=True, slots=True)
class PropertyJunk:
    """A line that is neither an entry nor a comment.

    Attributes:
        content: The raw line
        line: 1-indexed line number
    """

    content: str
    line: int


@dataclass(frozen=True, slots=True)
class ParsedProperties:
    """Result of parsing one property file."""

    entries: tuple[PropertyEntry, ...]
    junk: tuple[PropertyJunk, ...] = ()


def parse_properties(source: PropertiesSource) -> ParsedProperties:
    """Parse property file text.

    Example:
        >>> parsed = parse_properties("# header\\napp.title = Orders\\nbroken line\\n")
        >>> [(e.key, e.value, e.line) for e in parsed.entries]
        [('app.title', 'Orders', 2)]
        >>> parsed.junk[0].line
        3
    """
    source = source.removeprefix(_BOM)

    entries: list[PropertyEntry] = []
    junk: list[PropertyJunk] = []

    for line_number, raw_line in enumerate(_LINE_BREAK.split(source), start=1):
        stripped = raw_line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIXES):
            continue

        key, separator, value = raw_line.partition("=")
        key = key.strip()
        if not separator or not key:
            junk.append(PropertyJunk(content=raw_line, line=line_number))
            continue

        entries.append(PropertyEntry(key=key, value=value.lstrip(_VALUE_INDENT), line=line_number))

    return ParsedProperties(entries=tuple(entries), junk=tuple(junk))
