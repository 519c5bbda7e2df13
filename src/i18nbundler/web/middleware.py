"""Starlette middleware for LocaleForwarder.

Requests to the unqualified application root receive a redirect; requests
to a locale-qualified path reach the application with the active locale on
``request.state.locale`` and echoed back in ``Content-Language``.

Python 3.13+. Uses Starlette.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from i18nbundler.constants import DEFAULT_LOCALE_COOKIE
from i18nbundler.web.forwarder import LocaleForwarder

if TYPE_CHECKING:
    from starlette.types import ASGIApp

    from i18nbundler.config import AppConfig

__all__ = ["LocaleForwardingMiddleware", "set_locale_cookie"]

logger = logging.getLogger(__name__)


def set_locale_cookie(
    response: Response,
    locale: str,
    *,
    cookie_name: str = DEFAULT_LOCALE_COOKIE,
    path: str = "/",
    max_age: int | None = None,
) -> Response:
    """Pin a locale for the next evaluation of the unqualified root.

    Example:
        >>> response = RedirectResponse("/trader/")
        >>> set_locale_cookie(response, "de").headers["set-cookie"]
        'i18n.locale=de; Path=/; SameSite=lax'
    """
    response.set_cookie(cookie_name, locale, max_age=max_age, path=path, samesite="lax")
    return response


class LocaleForwardingMiddleware(BaseHTTPMiddleware):
    """Locale forwarding for a Starlette (or any ASGI) application.

    Example:
        >>> app = Starlette(
        ...     routes=routes,
        ...     middleware=[Middleware(LocaleForwardingMiddleware, config=config)],
        ... )
    """

    def __init__(self, app: ASGIApp, config: AppConfig | LocaleForwarder) -> None:
        super().__init__(app)
        self.forwarder = config if isinstance(config, LocaleForwarder) else LocaleForwarder(config)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        decision = self.forwarder.decide(
            request.url.path,
            cookies=request.cookies,
            accept_language=request.headers.get("Accept-Language"),
            query_string=request.url.query,
        )

        if decision is None:
            return await call_next(request)

        if decision.location is not None and decision.status is not None:
            return RedirectResponse(
                decision.location,
                status_code=decision.status,
                headers=dict(decision.headers()),
            )

        request.state.locale = decision.locale
        response = await call_next(request)
        response.headers["Content-Language"] = decision.locale
        return response
