"""Tests for connectz.security.sanitize — HTML escaping of input."""

from connectz.security import escape, escape_text, sanitize_fields


class TestEscape:
    def test_markup(self) -> None:
        assert escape("<script>") == "&lt;script&gt;"

    def test_quotes_and_slashes(self) -> None:
        assert escape("a\"b'c/d\\e`f") == "a&quot;b&#x27;c&#x2F;d&#x5C;e&#96;f"

    def test_ampersand_first(self) -> None:
        assert escape("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self) -> None:
        assert escape("Beat Production") == "Beat Production"


class TestEscapeText:
    def test_only_text_significant_characters(self) -> None:
        assert escape_text("<a href='/x'>&</a>") == "&lt;a href='/x'&gt;&amp;&lt;/a&gt;"


class TestSanitizeFields:
    def test_strings_escaped_others_untouched(self) -> None:
        data = {"userId": "<u1>", "amount": 25, "tags": ["<x>"]}
        assert sanitize_fields(data) == {"userId": "&lt;u1&gt;", "amount": 25, "tags": ["<x>"]}

    def test_returns_copy(self) -> None:
        data = {"bio": "<b>"}
        sanitize_fields(data)
        assert data == {"bio": "<b>"}
