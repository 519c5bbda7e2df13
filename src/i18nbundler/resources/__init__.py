"""Resource package: scopes, property files, loading and merging.

Submodules:
    types      - PEP 695 type aliases (LocaleCode, TokenKey, Translation)
    scope      - Scope tree (Aspect -> BladeSet -> Blade)
    properties - key=value property file parser
    loading    - ResourceLoader protocol, PathResourceLoader,
                 MemoryResourceLoader, ResourceLoadResult, LoadSummary
    store      - ResourceStore (leaf: loads and indexes files)
    cache      - TokenTableCache (explicit, injectable table cache)
    resolver   - ResourceResolver and EffectiveTokenTable

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from i18nbundler.resources.cache import TokenTableCache
from i18nbundler.resources.loading import (
    LoadSummary,
    MemoryResourceLoader,
    PathResourceLoader,
    ResourceLoader,
    ResourceLoadResult,
    ResourceSource,
)
from i18nbundler.resources.properties import (
    ParsedProperties,
    PropertyEntry,
    PropertyJunk,
    parse_properties,
)
from i18nbundler.resources.resolver import EffectiveTokenTable, ResourceResolver
from i18nbundler.resources.scope import Scope
from i18nbundler.resources.store import ResourceFile, ResourceStore
from i18nbundler.resources.types import LocaleCode, PropertiesSource, TokenKey, Translation

__all__ = [
    # Scope tree
    "Scope",
    # Store and resolver
    "ResourceStore",
    "ResourceFile",
    "ResourceResolver",
    "EffectiveTokenTable",
    "TokenTableCache",
    # Loaders
    "ResourceLoader",
    "ResourceSource",
    "PathResourceLoader",
    "MemoryResourceLoader",
    "ResourceLoadResult",
    "LoadSummary",
    # Property files
    "parse_properties",
    "ParsedProperties",
    "PropertyEntry",
    "PropertyJunk",
    # Type aliases
    "LocaleCode",
    "PropertiesSource",
    "TokenKey",
    "Translation",
]
