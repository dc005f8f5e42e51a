"""
Module: builder.layout.blocks

Purpose:
    Block renderers, one per content kind. Each consumes the line
    wrapper and (except the title-page blocks) the page cursor, and
    emits positioned text / rectangle draw instructions.

Key Functions:
    - draw_title(): Centered single line at an absolute y
    - draw_heading_1(): Wrapped, centered lines from an absolute y
    - draw_text_at(): Single unwrapped line at an absolute (x, y)
    - draw_heading_2(): Cursor-tracked section heading
    - draw_body(): Cursor-tracked wrapped paragraph text
    - draw_code_block(): Cursor-tracked monospace block on a background box

Dependencies:
    - builder.layout.wrapper: wrap_text
    - builder.layout.cursor: PageCursor
    - builder.layout.styles: StyleTable

Used By:
    - builder.layout.assembler: Document pipeline
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from .config import LayoutConfig
from .cursor import PageCursor
from .models import Line, Page, RectFill
from .styles import BlockKind, BlockStyle, StyleTable
from .wrapper import wrap_text

if TYPE_CHECKING:
    from lab_record_toolkit.builder.output.surface import DocumentSurface

logger = logging.getLogger(__name__)

ELLIPSIS = "..."
CODE_TAB_SIZE = 4

# Heading-2 reserves this many heading line heights before drawing
HEADING_2_RESERVE_LINES = 2
HEADING_2_GAP_BEFORE = 1.5


# ─────────────────────────────────────────────────────────────────────────────
# Title page blocks (absolute positions, no cursor)
# ─────────────────────────────────────────────────────────────────────────────

def draw_title(
    surface: DocumentSurface,
    page: Page,
    text: str,
    y: float,
    config: LayoutConfig,
    styles: StyleTable,
) -> int:
    """
    Draw one horizontally centered title line at an absolute y.

    No wrapping and no page-break check.

    Returns:
        Number of lines drawn (0 for empty text, else 1)
    """
    if not text:
        return 0
    style = styles[BlockKind.TITLE]
    width = surface.measure_width(text, style.font, style.size)
    x = (config.page_width - width) / 2
    surface.place_text(page, text, x, y, style.font, style.size, style.color)
    return 1


def draw_heading_1(
    surface: DocumentSurface,
    page: Page,
    text: str,
    y: float,
    config: LayoutConfig,
    styles: StyleTable,
    max_lines: Optional[int] = None,
) -> int:
    """
    Draw wrapped, individually centered heading lines from an absolute y.

    Lines grow downward by the heading-1 line height. When max_lines is
    given, extra lines are dropped and the last kept line is suffixed
    with an ellipsis.

    Args:
        surface: Document primitives
        page: Page to draw on
        text: Heading text
        y: Baseline of the first line (from page top)
        config: Layout configuration
        styles: Style table
        max_lines: Optional cap on drawn lines

    Returns:
        Number of lines drawn
    """
    style = styles[BlockKind.HEADING_1]
    lines = wrap_text(text, config.content_width, style.font, style.size, surface.measure_width)

    if max_lines is not None and len(lines) > max_lines:
        logger.warning(
            f"Heading truncated to {max_lines} of {len(lines)} lines to stay clear of the page content below"
        )
        last = lines[max_lines - 1]
        lines = lines[: max_lines - 1] + [Line(last.text + ELLIPSIS, last.font, last.size)]

    current_y = y
    for line in lines:
        width = surface.measure_width(line.text, style.font, style.size)
        x = (config.page_width - width) / 2
        surface.place_text(page, line.text, x, current_y, style.font, style.size, style.color)
        current_y += style.line_height
    return len(lines)


def draw_text_at(
    surface: DocumentSurface,
    page: Page,
    text: str,
    x: float,
    y: float,
    style: BlockStyle,
) -> int:
    """Draw a single unwrapped line at an absolute position. Empty text draws nothing."""
    if not text:
        return 0
    surface.place_text(page, text, x, y, style.font, style.size, style.color)
    return 1


# ─────────────────────────────────────────────────────────────────────────────
# Content blocks (cursor-tracked)
# ─────────────────────────────────────────────────────────────────────────────

def draw_heading_2(
    surface: DocumentSurface,
    cursor: PageCursor,
    text: str,
    config: LayoutConfig,
    styles: StyleTable,
) -> None:
    """
    Draw a left-aligned section heading.

    Reserves two heading line heights, leaves a 1.5 line gap above the
    heading and one body line below it. Empty text draws nothing and
    leaves the cursor untouched.
    """
    if not text:
        return
    style = styles[BlockKind.HEADING_2]
    body = styles[BlockKind.BODY]

    cursor.check_overflow(style.line_height * HEADING_2_RESERVE_LINES)
    cursor.advance(style.line_height * HEADING_2_GAP_BEFORE)
    surface.place_text(cursor.page, text, config.margin_left, cursor.y, style.font, style.size, style.color)
    cursor.advance(body.line_height)
    logger.debug(f"Heading '{text}' on page {cursor.page.index}")


def draw_body(
    surface: DocumentSurface,
    cursor: PageCursor,
    text: str,
    config: LayoutConfig,
    styles: StyleTable,
) -> int:
    """
    Draw wrapped body text, left-aligned at the left margin.

    Empty text draws nothing and leaves the cursor untouched. Overflow
    is checked before every line.

    Returns:
        Number of lines drawn
    """
    if not text:
        return 0

    style = styles[BlockKind.BODY]
    lines = wrap_text(text, config.content_width, style.font, style.size, surface.measure_width)
    _warn_overwide(surface, lines, config.content_width, "body")

    for line in lines:
        cursor.check_overflow(style.line_height)
        surface.place_text(
            cursor.page, line.text, config.margin_left, cursor.y, style.font, style.size, style.color
        )
        cursor.advance(style.line_height)

    logger.debug(f"Body block: {len(lines)} lines, ends on page {cursor.page.index}")
    return len(lines)


def draw_code_block(
    surface: DocumentSurface,
    cursor: PageCursor,
    text: str,
    config: LayoutConfig,
    styles: StyleTable,
) -> List[RectFill]:
    """
    Draw monospace text on a filled background box.

    The whole block (lines plus padding) is kept on one page whenever it
    fits on a fresh page. A block taller than a page starts in place and
    is split into fragments, each with its own background box drawn
    before its text;
    the first fragment carries the top padding and the last the bottom
    padding, so fragment heights always sum to
    len(lines) * line_height + padding.

    Args:
        surface: Document primitives
        cursor: Page cursor
        text: Code text (tabs expand to four spaces)
        config: Layout configuration
        styles: Style table

    Returns:
        Background boxes drawn, one per page fragment (empty for empty text)
    """
    if not text:
        return []

    style = styles[BlockKind.CODE]
    text = text.expandtabs(CODE_TAB_SIZE)
    lines = wrap_text(text, config.code_content_width, style.font, style.size, surface.measure_width)
    _warn_overwide(surface, lines, config.code_content_width, "code")

    block_height = len(lines) * style.line_height + config.code_padding
    if block_height <= config.content_bottom - config.margin_top:
        cursor.check_overflow(block_height)

    rect_x = config.margin_left + config.code_inset / 2
    rect_width = config.code_content_width + config.code_inset
    text_x = config.margin_left + config.code_inset
    background = style.background if style.background is not None else style.color

    rects: List[RectFill] = []
    pending: Sequence[Line] = lines
    lead = config.code_padding_top

    while pending:
        capacity = cursor.line_capacity(style.line_height, lead)
        if capacity == 0:
            cursor.add_page()
            capacity = max(1, cursor.line_capacity(style.line_height, lead))

        fragment, pending = pending[:capacity], pending[capacity:]
        trail = 0 if pending else config.code_padding_bottom
        height = lead + len(fragment) * style.line_height + trail

        rect = RectFill(x=rect_x, y=cursor.y, width=rect_width, height=height, color=background)
        surface.fill_rect(cursor.page, rect.x, rect.y, rect.width, rect.height, rect.color)
        rects.append(rect)

        cursor.advance(lead)
        for line in fragment:
            cursor.check_overflow(style.line_height)
            surface.place_text(
                cursor.page, line.text, text_x, cursor.y + style.size, style.font, style.size, style.color
            )
            cursor.advance(style.line_height)
        cursor.advance(trail)

        if pending:
            cursor.add_page()
        lead = 0

    if len(rects) > 1:
        logger.warning(f"Code block of {len(lines)} lines split across {len(rects)} pages")
    else:
        logger.debug(f"Code block: {len(lines)} lines on page {cursor.page.index}")
    return rects


def _warn_overwide(
    surface: DocumentSurface,
    lines: Sequence[Line],
    max_width: float,
    block_name: str,
) -> None:
    """Log lines wider than the available width (single unbreakable words)."""
    overwide = [
        line for line in lines
        if surface.measure_width(line.text, line.font, line.size) > max_width
    ]
    if overwide:
        logger.warning(
            f"{len(overwide)} {block_name} line(s) exceed the available width "
            f"of {max_width:.1f}pt and will overrun the margin"
        )
