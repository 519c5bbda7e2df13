"""Build-time validation for i18n bundles.

Python 3.13+.
"""

from .bundle import validate_bundle

__all__ = ["validate_bundle"]
