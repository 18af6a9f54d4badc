"""Tests for mdconvert document assembly."""

from mdconvert.assembler import EMPTY_DOCUMENT, error_fragment, stylesheet, wrap
from mdconvert.config import DARK_THEME, LIGHT_THEME


class TestWrap:
    """Tests for wrap function."""

    def test_document_shell(self):
        """Test the fragment lands in a complete UTF-8 document."""
        html = wrap("<p>Hello</p>", LIGHT_THEME)
        assert html.startswith("<!DOCTYPE html>")
        assert '<meta charset="UTF-8">' in html
        assert "<body><p>Hello</p></body></html>" in html

    def test_deterministic(self):
        """Test same input gives byte-identical output."""
        assert wrap("<p>x</p>", DARK_THEME) == wrap("<p>x</p>", DARK_THEME)

    def test_theme_colors(self):
        """Test theme colors are substituted."""
        light = wrap("", LIGHT_THEME)
        dark = wrap("", DARK_THEME)
        assert "background-color:#F0F2F5" in light
        assert "background-color:#1E1E1E" in dark
        assert light != dark

    def test_every_role_used(self):
        """Test all color roles reach the stylesheet."""
        css = stylesheet(DARK_THEME)
        for color in DARK_THEME.to_dict().values():
            assert color in css

    def test_task_list_rules_in_every_theme(self):
        """Test checkbox styling is present regardless of theme."""
        for theme in (LIGHT_THEME, DARK_THEME):
            assert "line-through" in wrap("", theme)

    def test_no_leftover_placeholders(self):
        """Test the stylesheet has no unformatted braces."""
        assert "{text}" not in stylesheet(LIGHT_THEME)
        assert "{{" not in stylesheet(LIGHT_THEME)

    def test_default_theme(self):
        """Test light theme is used when none is given."""
        assert wrap("<p/>") == wrap("<p/>", LIGHT_THEME)

    def test_title(self):
        """Test optional escaped title."""
        assert "<title>a &amp; b</title>" in wrap("", LIGHT_THEME, title="a & b")


class TestErrorFragment:
    """Tests for error_fragment function."""

    def test_message_escaped(self):
        fragment = error_fragment("bad <input>")
        assert fragment == "<h1>Conversion error</h1><p>bad &lt;input&gt;</p>"


def test_empty_document():
    assert EMPTY_DOCUMENT == "<html><body></body></html>"
