"""Hypothesis strategies for i18nbundler property-based testing.

Strategies are organized by domain:

- tokens: token keys, translation templates, markup with markers
- locales: locale codes and Accept-Language headers

Usage:
    from tests.strategies import token_keys, markup_documents
    from tests.strategies.locales import accept_language_headers

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - markup_documents, chunk_splits, templates_with_params
    - accept_language_headers
"""

from .locales import accept_language_headers, locale_codes
from .tokens import (
    chunk_splits,
    markup_documents,
    plain_text,
    templates_with_params,
    token_keys,
    token_tables,
)

__all__ = [
    "accept_language_headers",
    "chunk_splits",
    "locale_codes",
    "markup_documents",
    "plain_text",
    "templates_with_params",
    "token_keys",
    "token_tables",
]
