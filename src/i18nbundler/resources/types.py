"""Type aliases for the resources domain.

Provides semantic type aliases used throughout the resources package
and by user code when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "LocaleCode",
    "PropertiesSource",
    "TokenKey",
    "Translation",
]

type LocaleCode = str
"""Locale code as declared by the application (e.g., 'en', 'de', 'en_GB')."""

type TokenKey = str
"""Dotted token key (e.g., 'app.header.title')."""

type Translation = str
"""Raw translation template; may contain [name] placeholders."""

type PropertiesSource = str
"""Raw UTF-8 property file text."""
