"""LocaleForwarder: request-time locale decision and redirect.

Two-state machine keyed by URL shape, not by session memory:

    DECIDING   - request to the unqualified application root
                 (``/<app>``, ``/<app>/``, ``/<app>/index.html``)
    FORWARDED  - request already addressed to ``/<app>/<locale>/...``

In DECIDING the locale comes from, in order:

1. The locale cookie, when it names a declared locale
2. Accept-Language, in quality order, negotiated with Babel (a region tag
   such as ``de-AT`` falls back to its language when only ``de`` is declared)
3. The configured default locale

and the decision carries a redirect to the locale-qualified root. A
FORWARDED request is never redirected again, so following the redirect is
idempotent and loops are impossible. Changing locale requires a fresh
request to the unqualified root.

Python 3.13+. Uses Babel for locale negotiation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from babel.core import negotiate_locale

from i18nbundler.constants import REDIRECT_STATUS
from i18nbundler.enums import ForwardingState, LocaleSource
from i18nbundler.locale_utils import normalize_locale, parse_accept_language, try_babel_locale

if TYPE_CHECKING:
    from i18nbundler.config import AppConfig

__all__ = ["ForwardingDecision", "LocaleForwarder"]

logger = logging.getLogger(__name__)

_INDEX_DOCUMENT = "index.html"
_VARY = "Accept-Language, Cookie"


@dataclass(frozen=True, slots=True)
class ForwardingDecision:
    """Outcome of one forwarding evaluation.

    Attributes:
        state: FORWARDED once the locale is fixed for this request
        locale: Active locale (declared spelling)
        source: Signal that selected the locale
        location: Redirect target, or None when no redirect is needed
        status: HTTP status of the redirect, or None
    """

    state: ForwardingState
    locale: str
    source: LocaleSource
    location: str | None = None
    status: int | None = None

    @property
    def is_redirect(self) -> bool:
        """Check whether the response must redirect."""
        return self.location is not None

    def headers(self) -> tuple[tuple[str, str], ...]:
        """Response headers carrying the redirect."""
        if self.location is None:
            return ()
        return (("Location", self.location), ("Vary", _VARY))


class LocaleForwarder:
    """Stateless locale forwarder for one application.

    Example:
        >>> forwarder = LocaleForwarder(AppConfig("trader", ("en", "de", "es")))
        >>> decision = forwarder.decide("/trader/", accept_language="de,en;q=0.8")
        >>> decision.location
        '/trader/de/'
        >>> forwarder.decide("/trader/de/").is_redirect
        False
    """

    __slots__ = ("_available", "_config", "_root")

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._root = f"/{config.name}"
        self._available = [normalize_locale(loc) for loc in config.locales]

    @property
    def config(self) -> AppConfig:
        """Application configuration."""
        return self._config

    def decide(
        self,
        path: str,
        *,
        cookies: Mapping[str, str] | None = None,
        accept_language: str | None = None,
        query_string: str = "",
    ) -> ForwardingDecision | None:
        """Evaluate one request.

        Args:
            path: Request path (no query string)
            cookies: Request cookies by name
            accept_language: Raw Accept-Language header
            query_string: Raw query string, preserved on redirect

        Returns:
            A FORWARDED decision (with a redirect for the unqualified root),
            or None when the path does not belong to this application's
            locale-forwarding surface

        A path qualified with a locale Babel knows but the application does
        not declare is forwarded to the default locale's root.
        """
        if self.is_unqualified_root(path):
            locale, source = self.select_locale(cookies=cookies, accept_language=accept_language)
            location = self.locale_root(locale)
            if query_string:
                location = f"{location}?{query_string}"
            logger.debug("Forwarding %s to %s (%s)", path, location, source)
            return ForwardingDecision(
                state=ForwardingState.FORWARDED,
                locale=locale,
                source=source,
                location=location,
                status=REDIRECT_STATUS,
            )

        segment = self._locale_segment(path)
        if segment is None:
            return None

        locale = self._config.canonical_locale(segment)
        if locale is not None:
            return ForwardingDecision(
                state=ForwardingState.FORWARDED, locale=locale, source=LocaleSource.URL
            )

        if try_babel_locale(segment) is None:
            return None
        default = self._config.default_locale
        location = self.locale_root(default)
        if query_string:
            location = f"{location}?{query_string}"
        logger.warning(
            "Unsupported locale '%s' requested at %s; forwarding to %s", segment, path, location
        )
        return ForwardingDecision(
            state=ForwardingState.FORWARDED,
            locale=default,
            source=LocaleSource.DEFAULT,
            location=location,
            status=REDIRECT_STATUS,
        )

    def select_locale(
        self,
        *,
        cookies: Mapping[str, str] | None = None,
        accept_language: str | None = None,
    ) -> tuple[str, LocaleSource]:
        """Pick the active locale from client signals (the DECIDING step)."""
        if cookies:
            requested = cookies.get(self._config.locale_cookie)
            if requested:
                canonical = self._config.canonical_locale(requested)
                if canonical is not None:
                    return canonical, LocaleSource.COOKIE
                logger.warning("Ignoring unsupported locale cookie value %r", requested)

        preferred = parse_accept_language(accept_language)
        if preferred:
            match = negotiate_locale(preferred, self._available, sep="_", aliases={})
            canonical = self._config.canonical_locale(match) if match else None
            if canonical is not None:
                return canonical, LocaleSource.ACCEPT_LANGUAGE

        return self._config.default_locale, LocaleSource.DEFAULT

    def is_unqualified_root(self, path: str) -> bool:
        """Check whether a path is the application root without a locale."""
        return path in (self._root, f"{self._root}/", f"{self._root}/{_INDEX_DOCUMENT}")

    def qualified_locale(self, path: str) -> str | None:
        """Return the declared locale a path is qualified with, or None."""
        segment = self._locale_segment(path)
        if segment is None:
            return None
        return self._config.canonical_locale(segment)

    def is_qualified(self, path: str) -> bool:
        """Check whether a path is already addressed to a declared locale."""
        return self.qualified_locale(path) is not None

    def locale_root(self, locale: str) -> str:
        """Locale-qualified application root, e.g. ``/trader/de/``."""
        return f"{self._root}/{locale}/"

    def _locale_segment(self, path: str) -> str | None:
        prefix = f"{self._root}/"
        if not path.startswith(prefix):
            return None
        segment = path[len(prefix) :].split("/", 1)[0]
        return segment or None
