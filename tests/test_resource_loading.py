"""Tests for resource loaders and load tracking.

Tests verify:
- PathResourceLoader directory layout and sorted file order
- Path traversal rejection
- Locale discovery on disk
- MemoryResourceLoader add/replace semantics
- LoadSummary aggregation

Python 3.13+.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from i18nbundler.enums import LoadStatus
from i18nbundler.resources.loading import (
    LoadSummary,
    MemoryResourceLoader,
    PathResourceLoader,
    ResourceLoadResult,
)
from i18nbundler.resources.properties import PropertyJunk
from i18nbundler.resources.scope import Scope


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestPathResourceLoader:
    """Test filesystem loading."""

    def test_loads_single_file(self, tmp_path: Path, aspect: Scope) -> None:
        """<scope>/resources/i18n/<locale>.properties is loaded."""
        _write(tmp_path / "default/resources/i18n/en.properties", "app.title=Orders")

        sources = PathResourceLoader(tmp_path).load(aspect, "en")

        assert [s.text for s in sources] == ["app.title=Orders"]
        assert sources[0].source_path.endswith("en.properties")

    def test_loads_locale_directory_sorted(self, tmp_path: Path, aspect: Scope) -> None:
        """Files in <locale>/ are read after the single file, sorted by name."""
        base = tmp_path / "default/resources/i18n"
        _write(base / "en.properties", "a=0")
        _write(base / "en/b.properties", "b=2")
        _write(base / "en/a.properties", "a.x=1")
        _write(base / "en/notes.txt", "ignored")

        sources = PathResourceLoader(tmp_path).load(aspect, "en")

        assert [s.text for s in sources] == ["a=0", "a.x=1", "b=2"]

    def test_missing_locale_is_empty(self, tmp_path: Path, aspect: Scope) -> None:
        """No files for a locale is not an error at this level."""
        assert PathResourceLoader(tmp_path).load(aspect, "de") == ()

    def test_nested_scope_directory(self, tmp_path: Path, blade: Scope) -> None:
        """Blade resources live under the blade path."""
        _write(tmp_path / "default/orders/grid/resources/i18n/en.properties", "g=1")

        sources = PathResourceLoader(tmp_path).load(blade, "en")

        assert sources[0].text == "g=1"

    @pytest.mark.parametrize("locale", ["", "../en", "en/../../x", "a\\b"])
    def test_unsafe_locale_rejected(self, tmp_path: Path, aspect: Scope, locale: str) -> None:
        """Locale codes cannot escape the scope directory."""
        with pytest.raises(ValueError):
            PathResourceLoader(tmp_path).load(aspect, locale)

    def test_scope_directory_escape_rejected(self, tmp_path: Path) -> None:
        """A scope directory outside the root is rejected."""
        scope = Scope.aspect("default", directory="../outside")

        with pytest.raises(ValueError, match="Path traversal"):
            PathResourceLoader(tmp_path / "root").load(scope, "en")

    def test_discover_locales(self, tmp_path: Path, aspect: Scope) -> None:
        """Locales are discovered from file stems and non-empty directories."""
        base = tmp_path / "default/resources/i18n"
        _write(base / "en.properties", "a=1")
        _write(base / "de/x.properties", "a=1")
        (base / "fr").mkdir()

        assert PathResourceLoader(tmp_path).discover_locales(aspect) == {"en", "de"}

    def test_discover_without_directory(self, tmp_path: Path, aspect: Scope) -> None:
        """A scope without an i18n directory has no locales."""
        assert PathResourceLoader(tmp_path).discover_locales(aspect) == frozenset()


class TestMemoryResourceLoader:
    """Test in-memory loading."""

    def test_add_and_load(self, aspect: Scope) -> None:
        """Files are returned in insertion order."""
        loader = MemoryResourceLoader()
        loader.add(aspect, "en", "a=1")
        loader.add(aspect, "en", "b=2", source_path="extra.properties")

        sources = loader.load(aspect, "en")

        assert [s.text for s in sources] == ["a=1", "b=2"]
        assert sources[1].source_path == "extra.properties"

    def test_locale_matching_is_normalized(self, aspect: Scope) -> None:
        """'en-US' and 'en_us' address the same files."""
        loader = MemoryResourceLoader()
        loader.add(aspect, "en-US", "a=1")

        assert len(loader.load(aspect, "en_us")) == 1

    def test_replace(self, aspect: Scope) -> None:
        """replace() drops previous files of the pair."""
        loader = MemoryResourceLoader()
        loader.add(aspect, "en", "a=1")
        loader.add(aspect, "en", "b=1")
        loader.replace(aspect, "en", "c=1")

        assert [s.text for s in loader.load(aspect, "en")] == ["c=1"]

    def test_discover_locales(self, aspect: Scope, blade: Scope) -> None:
        """Discovery is per scope."""
        loader = MemoryResourceLoader()
        loader.add(aspect, "en", "a=1")
        loader.add(aspect, "fr", "a=1")
        loader.add(blade, "de", "a=1")

        assert loader.discover_locales(aspect) == {"en", "fr"}
        assert loader.discover_locales(blade) == {"de"}


class TestLoadSummary:
    """Test load result aggregation."""

    def test_counts(self) -> None:
        """Counters split results by status."""
        summary = LoadSummary(
            results=(
                ResourceLoadResult("default", "en", LoadStatus.SUCCESS),
                ResourceLoadResult("default", "de", LoadStatus.NOT_FOUND),
                ResourceLoadResult("default", "es", LoadStatus.ERROR, error=OSError("boom")),
                ResourceLoadResult(
                    "default",
                    "fr",
                    LoadStatus.SUCCESS,
                    junk_entries=(("fr.properties", PropertyJunk("oops", 3)),),
                ),
            )
        )

        assert summary.total_attempted == 4
        assert summary.successful == 2
        assert summary.not_found == 1
        assert summary.errors == 1
        assert summary.junk_count == 1
        assert summary.has_errors
        assert [r.locale for r in summary.get_errors()] == ["es"]
        assert [r.locale for r in summary.get_not_found()] == ["de"]
        assert [r.locale for r in summary.get_with_junk()] == ["fr"]
        assert [r.locale for r in summary.get_by_locale("EN")] == ["en"]
        assert "errors=1" in repr(summary)
