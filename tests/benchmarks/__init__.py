"""Performance benchmarks for i18nbundler.

Benchmarks use pytest-benchmark to measure and track performance of critical operations.
Prevents performance regressions in resolution, substitution and property parsing.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
