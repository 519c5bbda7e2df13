"""Tests for the key=value property file parser.

Tests verify:
- Key stripping and value left-stripping
- Comment and blank line handling
- BOM removal
- Junk line recording with line numbers
- Duplicate preservation (the resolver decides)
- Only CR and LF terminate lines

Python 3.13+.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from i18nbundler.resources.properties import PropertyEntry, PropertyJunk, parse_properties
from tests.strategies import token_keys


class TestParseProperties:
    """Test parse_properties() line handling."""

    def test_simple_entries(self) -> None:
        """Entries keep file order and 1-indexed line numbers."""
        parsed = parse_properties("app.title=Orders\napp.save=Save\n")

        assert parsed.entries == (
            PropertyEntry("app.title", "Orders", 1),
            PropertyEntry("app.save", "Save", 2),
        )
        assert parsed.junk == ()

    def test_whitespace_around_separator(self) -> None:
        """Key is stripped, value loses leading whitespace only."""
        parsed = parse_properties("  app.title   =   Orders  ")

        assert parsed.entries[0].key == "app.title"
        assert parsed.entries[0].value == "Orders  "

    def test_value_may_contain_equals(self) -> None:
        """Only the first '=' separates key from value."""
        parsed = parse_properties("app.formula=a=b+c")

        assert parsed.entries[0].value == "a=b+c"

    def test_empty_value_is_entry(self) -> None:
        """'key=' is a valid entry with an empty translation."""
        parsed = parse_properties("app.empty=")

        assert parsed.entries == (PropertyEntry("app.empty", "", 1),)

    def test_comments_and_blank_lines_skipped(self) -> None:
        """'#' and '!' comments and blank lines produce nothing."""
        parsed = parse_properties("# comment\n! other\n\n   \napp.title=Orders")

        assert [e.key for e in parsed.entries] == ["app.title"]
        assert parsed.entries[0].line == 5
        assert parsed.junk == ()

    def test_bom_is_ignored(self) -> None:
        """Leading UTF-8 BOM does not become part of the first key."""
        parsed = parse_properties("\ufeffapp.title=Orders")

        assert parsed.entries[0].key == "app.title"

    def test_line_without_separator_is_junk(self) -> None:
        """Lines without '=' are recorded as junk."""
        parsed = parse_properties("app.title=Orders\nthis is not an entry\n")

        assert parsed.junk == (PropertyJunk("this is not an entry", 2),)
        assert len(parsed.entries) == 1

    def test_empty_key_is_junk(self) -> None:
        """'=value' has no key and is junk."""
        parsed = parse_properties("  =value")

        assert parsed.entries == ()
        assert parsed.junk[0].line == 1

    def test_duplicates_preserved(self) -> None:
        """Duplicate keys are returned as-is for the resolver to reject."""
        parsed = parse_properties("a=1\na=2")

        assert [(e.key, e.value) for e in parsed.entries] == [("a", "1"), ("a", "2")]

    def test_crlf_line_endings(self) -> None:
        """Windows line endings do not leak into values."""
        parsed = parse_properties("a=1\r\nb=2\r\n")

        assert [e.value for e in parsed.entries] == ["1", "2"]

    def test_unicode_values(self) -> None:
        """UTF-8 text is kept verbatim."""
        parsed = parse_properties("app.title=Aufträge 注文")

        assert parsed.entries[0].value == "Aufträge 注文"

    def test_unicode_line_separators_stay_in_values(self) -> None:
        """Only CR and LF end a line; U+2028, U+0085 and friends are text."""
        parsed = parse_properties("a.b=x\u2028y\nc=\x85d\ne=f\x1cg\x0bh\n")

        assert [(e.key, e.value, e.line) for e in parsed.entries] == [
            ("a.b", "x\u2028y", 1),
            ("c", "\x85d", 2),
            ("e", "f\x1cg\x0bh", 3),
        ]
        assert parsed.junk == ()

    def test_lone_cr_line_endings(self) -> None:
        """Old Mac line endings still separate entries."""
        parsed = parse_properties("a=1\rb=2\r")

        assert [(e.key, e.line) for e in parsed.entries] == [("a", 1), ("b", 2)]


class TestParsePropertiesProperties:
    """Property-based tests for parse_properties()."""

    @given(
        st.dictionaries(
            token_keys(),
            st.text(alphabet="abcXYZ [].,=", max_size=20).map(str.strip),
            max_size=10,
        )
    )
    def test_rendered_table_parses_back(self, table: dict[str, str]) -> None:
        """Rendering 'key=value' lines and parsing returns the same table."""
        source = "".join(f"{key}={value}\n" for key, value in table.items())

        parsed = parse_properties(source)

        assert {e.key: e.value for e in parsed.entries} == table
        assert parsed.junk == ()

    @given(
        token_keys(),
        st.text(st.characters(exclude_characters="\r\n", exclude_categories=("Cs",))).map(
            lambda s: s.lstrip(" \t\f")
        ),
    )
    def test_any_single_line_value_survives(self, key: str, value: str) -> None:
        """Property: a value without CR or LF parses back unchanged."""
        parsed = parse_properties(f"{key}={value}\n")

        assert [(e.key, e.value) for e in parsed.entries] == [(key, value)]
