"""i18nbundler - locale resource bundling, token substitution and forwarding.

Resolves translation tokens from layered property files (Aspect -> BladeSet
-> Blade), streams ``@{token.key}`` substitution into HTML/JS output, expands
``[name]`` placeholders, formats dates and numbers per locale, and forwards
clients to a locale-qualified application URL.

Public API:
    I18nBundler - Facade wiring configuration, resources and runtime
    AppConfig - Supported locales, default locale, cookie name
    Scope - Aspect / BladeSet / Blade scope tree
    ResourceStore, ResourceResolver - Loading and merging of resources
    TokenSubstitutionEngine - Streaming marker substitution
    Translator - Programmatic lookup with date() and number()
    LocaleForwarder - Request-time locale decision and redirect

Exceptions:
    I18nError - Base exception class
    ResourceError - Resource loading or merge failure (fails startup)
    TemplateError - Bad parameterized template (fails one substitution)
    MissingTranslationError - Token missing for the active locale (non-fatal)

Submodules:
    i18nbundler.resources - Scopes, property files, loaders, resolver
    i18nbundler.runtime - Expander, formatters, substitution, translator
    i18nbundler.web - Forwarder and Starlette middleware
    i18nbundler.diagnostics - Error types and validation results
    i18nbundler.validation - Build-time bundle validation
"""

from .bundler import I18nBundler
from .config import AppConfig
from .diagnostics import (
    DuplicateTokenError,
    FormattingError,
    I18nError,
    MalformedTemplateError,
    MissingTranslationError,
    ResourceError,
    ResourceNotFoundError,
    TemplateError,
    UnboundParameterError,
    UnsupportedLocaleError,
)
from .resources import (
    EffectiveTokenTable,
    MemoryResourceLoader,
    PathResourceLoader,
    ResourceResolver,
    ResourceStore,
    Scope,
    TokenTableCache,
)
from .runtime import LocaleFormatters, ParameterExpander, TokenSubstitutionEngine, Translator
from .validation import validate_bundle
from .web import LocaleForwarder, LocaleForwardingMiddleware

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18nbundler")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Facade and configuration
    "I18nBundler",
    "AppConfig",
    # Resources
    "Scope",
    "ResourceStore",
    "ResourceResolver",
    "EffectiveTokenTable",
    "TokenTableCache",
    "PathResourceLoader",
    "MemoryResourceLoader",
    # Runtime
    "ParameterExpander",
    "LocaleFormatters",
    "TokenSubstitutionEngine",
    "Translator",
    # Web
    "LocaleForwarder",
    "LocaleForwardingMiddleware",
    # Validation
    "validate_bundle",
    # Errors
    "I18nError",
    "ResourceError",
    "ResourceNotFoundError",
    "DuplicateTokenError",
    "UnsupportedLocaleError",
    "TemplateError",
    "UnboundParameterError",
    "MalformedTemplateError",
    "MissingTranslationError",
    "FormattingError",
    # Version
    "__version__",
]
