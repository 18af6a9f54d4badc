"""Document shell around engine output."""

from __future__ import annotations

import html

from .config import LIGHT_THEME, ThemeProfile
from .tasklist import TASK_LIST_CSS

EMPTY_DOCUMENT = "<html><body></body></html>"

BASE_CSS = (
    "html{{color:#1a1a1a;background-color:transparent}}"
    "body{{font-family:'Segoe UI',sans-serif;line-height:1.6;padding:20px;max-width:850px;margin:0 auto}}"
    "h1{{color:{heading};border-bottom:2px solid {border};padding-bottom:10px}}"
    "h2{{color:{heading}}}"
    "h3{{color:{heading}}}"
    "a{{color:{link};text-decoration:none}}"
    "a:hover{{text-decoration:underline}}"
    "img{{max-width:100%;height:auto;display:block;margin:10px 0;border-radius:4px}}"
    "blockquote{{border-left:4px solid {blockquote_border};padding-left:16px;margin-left:0;"
    "color:{blockquote_text};background:{blockquote_bg}}}"
    "table{{border-collapse:collapse;width:100%;margin:16px 0}}"
    "th,td{{border:1px solid {table_border};padding:10px;text-align:left;background:{table_bg}}}"
    "ul,ol{{padding-left:24px}}"
    "pre{{white-space:pre-wrap;background:{code_bg};border:1px solid {code_border};padding:12px;border-radius:5px}}"
    "code{{font-family:'Consolas',monospace;background:{code_bg};padding:2px 4px;border-radius:3px;color:{code_text}}}"
)

THEME_CSS = (
    "body{{color:{text};background-color:{body_bg}}}"
    "h1,h2,h3{{color:{heading};border-bottom-color:{border}}}"
    "a{{color:{link}}}"
    "blockquote{{background:{blockquote_bg};color:{blockquote_text};border-left-color:{blockquote_border}}}"
    "pre,code{{background:{code_bg};color:{code_text};border-color:{code_border}}}"
    "table,th,td{{border-color:{table_border};background:{table_bg}}}"
)

MATH_CSS = "math{font-size:1.1em;font-family:'STIX Two Math',serif}"


def stylesheet(theme: ThemeProfile) -> str:
    """Build the inline stylesheet for a theme."""
    colors = theme.to_dict()
    return BASE_CSS.format(**colors) + THEME_CSS.format(**colors) + TASK_LIST_CSS + MATH_CSS


def wrap(fragment_html: str, theme: ThemeProfile | None = None, title: str | None = None) -> str:
    """Wrap fragment HTML in a self-contained, themed document."""
    theme = theme or LIGHT_THEME
    title_tag = f"<title>{html.escape(title)}</title>" if title else ""
    return (
        '<!DOCTYPE html><html xmlns="http://www.w3.org/1999/xhtml"><head><meta charset="UTF-8">'
        f"{title_tag}<style>{stylesheet(theme)}</style></head>"
        f"<body>{fragment_html}</body></html>"
    )


def error_fragment(message: str, heading: str = "Conversion error") -> str:
    """Fragment shown in place of converted content when conversion fails."""
    return f"<h1>{html.escape(heading)}</h1><p>{html.escape(message)}</p>"
