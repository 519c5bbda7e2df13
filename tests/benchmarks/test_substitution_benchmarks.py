"""Performance benchmarks for resolution and streaming substitution.

Measures table merging, marker substitution and parsing speed to detect
performance regressions.

Python 3.13+.
"""

from __future__ import annotations

from typing import Any

import pytest

from i18nbundler import MemoryResourceLoader, ResourceResolver, ResourceStore, Scope
from i18nbundler.resources.properties import parse_properties
from i18nbundler.runtime import TokenSubstitutionEngine

_TOKEN_COUNT = 500


def _properties(prefix: str) -> str:
    return "".join(f"{prefix}.key{i}=Value {i} for [name]\n" for i in range(_TOKEN_COUNT))


class TestResolutionBenchmarks:
    """Benchmark table merging."""

    @pytest.fixture
    def resolver(self) -> ResourceResolver:
        """Resolver over three levels of 500 tokens each."""
        aspect = Scope.aspect("default")
        blade = aspect.bladeset("orders").blade("grid")
        loader = MemoryResourceLoader()
        for scope in blade.lineage():
            loader.add(scope, "en", _properties(scope.level.value))
        return ResourceResolver(ResourceStore(loader, ["en"]), blade)

    def test_resolve_cold(self, benchmark: Any, resolver: ResourceResolver) -> None:
        """Benchmark merging after invalidation."""

        def rebuild() -> int:
            resolver.invalidate("en")
            return len(resolver.resolve("en"))

        assert benchmark(rebuild) == 3 * _TOKEN_COUNT

    def test_resolve_cached(self, benchmark: Any, resolver: ResourceResolver) -> None:
        """Benchmark a published-table lookup."""
        resolver.resolve("en")

        table = benchmark(resolver.resolve, "en")

        assert table.locale == "en"


class TestSubstitutionBenchmarks:
    """Benchmark marker substitution."""

    @pytest.fixture
    def engine(self) -> TokenSubstitutionEngine:
        """Engine over 500 tokens."""
        table = {f"page.key{i}": f"Value {i} for [name]" for i in range(_TOKEN_COUNT)}
        return TokenSubstitutionEngine(table, locale="en")

    @pytest.fixture
    def document(self) -> str:
        """HTML page with one marker per row."""
        rows = "".join(f"<tr><td>@{{page.key{i}}}</td></tr>\n" for i in range(_TOKEN_COUNT))
        return f"<html><body><table>\n{rows}</table></body></html>\n"

    def test_transform_text(
        self, benchmark: Any, engine: TokenSubstitutionEngine, document: str
    ) -> None:
        """Benchmark substituting a whole page."""
        output, errors = benchmark(engine.transform_text, document, {"name": "Ann"})

        assert errors == ()
        assert "@{" not in output

    def test_transform_small_chunks(
        self, benchmark: Any, engine: TokenSubstitutionEngine, document: str
    ) -> None:
        """Benchmark streaming in 64-character chunks."""
        chunks = [document[i : i + 64] for i in range(0, len(document), 64)]

        def stream() -> str:
            return "".join(engine.transform(chunks, {"name": "Ann"}))

        assert "@{" not in benchmark(stream)

    def test_parse_properties(self, benchmark: Any) -> None:
        """Benchmark parsing a 500-line property file."""
        source = _properties("page")

        parsed = benchmark(parse_properties, source)

        assert len(parsed.entries) == _TOKEN_COUNT
