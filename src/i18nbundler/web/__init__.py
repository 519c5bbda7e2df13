"""Web package: request-time locale forwarding.

Python 3.13+.
"""

from .forwarder import ForwardingDecision, LocaleForwarder
from .middleware import LocaleForwardingMiddleware, set_locale_cookie

__all__ = [
    "ForwardingDecision",
    "LocaleForwarder",
    "LocaleForwardingMiddleware",
    "set_locale_cookie",
]
