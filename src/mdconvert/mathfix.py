"""Inline math delimiter cleanup."""

from __future__ import annotations

import re

# Single-dollar pairs, matched left to right on one line. "$$" display
# delimiters and escaped "\$" are skipped; a closing "$" followed by a
# digit is currency, never the end of math.
INLINE_MATH_PATTERN = re.compile(r"(?<![\\$])\$(?!\$)([^$\n]+?)(?<!\\)\$(?![\d$])")


def _collapse(match: re.Match) -> str:
    inner = match.group(1).strip(" \t")
    if not inner:
        return match.group(0)
    return f"${inner}$"


def normalize_math(text: str) -> str:
    """
    Trim whitespace just inside single-dollar inline math.

    ``$ x $``, ``$x $`` and ``$ x$`` all become ``$x$``; pandoc only treats
    a dollar pair as math when no space touches the inner side.
    """
    if not text or "$" not in text:
        return text
    return INLINE_MATH_PATTERN.sub(_collapse, text)
