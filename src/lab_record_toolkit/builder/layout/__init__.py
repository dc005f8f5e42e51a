"""
Module: builder.layout

Purpose:
    Document layout and pagination engine.
    Wraps text, tracks the vertical cursor, inserts pages on overflow
    and emits positioned draw instructions.

Key Functions:
    - assemble_document(): Main entry point for layout
    - wrap_text(): Greedy word wrapping

Key Classes:
    - LayoutConfig: Page geometry
    - StyleTable: Style lookup keyed by BlockKind
    - PageCursor: Active page and vertical position
    - Page: Page with ordered draw instructions

Dependencies:
    - reportlab: Page size and colors
    - core.models: LabRecord

Used By:
    - builder.controller: Main generation pipeline
"""

from .config import LayoutConfig, TitlePageLayout
from .models import FontFamily, Line, Page, RectFill, TextPlacement
from .styles import BlockKind, BlockStyle, StyleTable
from .wrapper import wrap_text
from .cursor import LayoutError, PageCursor
from .blocks import (
    draw_body,
    draw_code_block,
    draw_heading_1,
    draw_heading_2,
    draw_text_at,
    draw_title,
)
from .assembler import assemble_document, stamp_headers_and_footers

__all__ = [
    # Config
    "LayoutConfig",
    "TitlePageLayout",
    "BlockKind",
    "BlockStyle",
    "StyleTable",
    # Models
    "FontFamily",
    "Line",
    "Page",
    "RectFill",
    "TextPlacement",
    # Engine
    "wrap_text",
    "PageCursor",
    "LayoutError",
    "draw_title",
    "draw_heading_1",
    "draw_text_at",
    "draw_heading_2",
    "draw_body",
    "draw_code_block",
    "assemble_document",
    "stamp_headers_and_footers",
]
