"""Enumerations for i18nbundler type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ScopeLevel(StrEnum):
    """Nesting level at which locale resources may be declared.

    StrEnum provides automatic string conversion: str(ScopeLevel.BLADE) == "blade"
    """

    ASPECT = "aspect"
    """Root scope: the application aspect."""

    BLADESET = "bladeset"
    """Child of an aspect."""

    BLADE = "blade"
    """Child of a bladeset; the most specific scope."""

    @property
    def rank(self) -> int:
        """Precedence rank: higher ranks override lower ranks."""
        return _SCOPE_RANKS[self]


_SCOPE_RANKS: dict[ScopeLevel, int] = {
    ScopeLevel.ASPECT: 0,
    ScopeLevel.BLADESET: 1,
    ScopeLevel.BLADE: 2,
}


class LoadStatus(StrEnum):
    """Outcome of loading resources for one (scope, locale) pair."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


class ForwardingState(StrEnum):
    """LocaleForwarder request state.

    A request starts in DECIDING and ends in FORWARDED. Locale-qualified
    URLs are FORWARDED on arrival and never re-enter DECIDING.
    """

    DECIDING = "deciding"
    FORWARDED = "forwarded"


class LocaleSource(StrEnum):
    """Which client or configuration signal selected the active locale."""

    URL = "url"
    COOKIE = "cookie"
    ACCEPT_LANGUAGE = "accept_language"
    DEFAULT = "default"


__all__ = [
    "ForwardingState",
    "LoadStatus",
    "LocaleSource",
    "ScopeLevel",
]
