"""
Module: builder.layout.wrapper

Purpose:
    Greedy word wrapping of free text into display lines that fit a
    maximum width for a given font and size.

Key Functions:
    - wrap_text(): Split text into Lines
    - normalize_newlines(): Map CRLF / CR to LF

Algorithm:
    1. Split on paragraph breaks; every paragraph yields at least one line
    2. Split each paragraph on single spaces
    3. Accumulate words while the joined line still fits
    4. The first word of a line is always accepted (words are never broken)

Dependencies:
    - builder.layout.models: Line, FontFamily

Used By:
    - builder.layout.blocks: All wrapped block renderers
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .models import FontFamily, Line

MeasureFn = Callable[[str, FontFamily, float], float]


def normalize_newlines(text: str) -> str:
    """Map CRLF and lone CR to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def wrap_text(
    text: Optional[str],
    max_width: float,
    font: FontFamily,
    size: float,
    measure: MeasureFn,
) -> List[Line]:
    """
    Wrap text into lines no wider than max_width.

    Pure function: identical inputs always give identical output.
    Runs of spaces are kept as empty words, so leading indentation
    survives. A single word wider than max_width is placed on its own
    line unmodified.

    Args:
        text: Text to wrap (None or "" gives no lines)
        max_width: Maximum line width in points
        font: Font family used for measuring
        size: Point size used for measuring
        measure: Width function (text, font, size) -> points

    Returns:
        Ordered list of Lines

    Example:
        >>> measure = lambda t, f, s: len(t) * 10
        >>> [l.text for l in wrap_text("aa bb cc\\n\\ndd", 50, FontFamily.MONO, 10, measure)]
        ['aa bb', 'cc', '', 'dd']
    """
    if not text:
        return []

    lines: List[Line] = []
    for paragraph in normalize_newlines(text).split("\n"):
        for segment in _wrap_paragraph(paragraph, max_width, font, size, measure):
            lines.append(Line(text=segment, font=font, size=size))
    return lines


def _wrap_paragraph(
    paragraph: str,
    max_width: float,
    font: FontFamily,
    size: float,
    measure: MeasureFn,
) -> List[str]:
    """Greedy wrap of a single paragraph (no newlines)."""
    segments: List[str] = []
    current: List[str] = []

    for word in paragraph.split(" "):
        if not current:
            current = [word]
            continue
        candidate = " ".join(current + [word])
        if measure(candidate, font, size) <= max_width:
            current.append(word)
        else:
            segments.append(" ".join(current))
            current = [word]

    segments.append(" ".join(current))
    return segments
