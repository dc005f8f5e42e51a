"""
Module: builder.layout.assembler

Purpose:
    Build the full multi-page lab record layout.
    Title page → content sections → header/footer pass.

Key Functions:
    - assemble_document(): Main entry point for layout
    - stamp_headers_and_footers(): Final annotation pass

Algorithm:
    Fixed pipeline, no branching on content beyond emptiness:
    1. Title page: college, subject, capped "Aim:" heading, submitted-by block
    2. Reset cursor, start the first content page
    3. Aim, Theory, Code, Output, Conclusion sections in order
    4. Stamp header and "Page i of N" footer on every page but the first

Dependencies:
    - builder.layout.blocks: Block renderers
    - builder.layout.cursor: PageCursor
    - core.models: LabRecord

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Tuple

from lab_record_toolkit.core.models import LabRecord

from .blocks import (
    draw_body,
    draw_code_block,
    draw_heading_1,
    draw_heading_2,
    draw_text_at,
    draw_title,
)
from .config import LayoutConfig
from .cursor import LayoutError, PageCursor
from .models import Page, ROLE_FOOTER, ROLE_HEADER
from .styles import BlockKind, StyleTable

if TYPE_CHECKING:
    from lab_record_toolkit.builder.output.surface import DocumentSurface

logger = logging.getLogger(__name__)

SUBMITTED_BY_LABEL = "Submitted by:"

SectionRenderer = Callable[..., object]

# (heading, record field, renderer) in output order
SECTIONS: Tuple[Tuple[str, str, SectionRenderer], ...] = (
    ("Aim", "aim", draw_body),
    ("Theory / Apparatus", "theory", draw_body),
    ("Code / Procedure", "code", draw_code_block),
    ("Output / Observations", "output", draw_code_block),
    ("Conclusion", "conclusion", draw_body),
)


def assemble_document(
    record: LabRecord,
    surface: DocumentSurface,
    config: LayoutConfig,
    styles: StyleTable,
    *,
    show_header_footer: bool = True,
) -> List[Page]:
    """
    Lay out a lab record onto the surface.

    The surface must be empty (LayoutError otherwise). Page 0 is the
    title page; every later page is a content page.

    Args:
        record: Input record (empty fields give empty blocks)
        surface: Document primitives to draw with
        config: Layout configuration
        styles: Style table
        show_header_footer: Whether to run the header/footer pass

    Returns:
        All pages in order

    Example:
        >>> from lab_record_toolkit.builder.output import PdfDocument
        >>> doc = PdfDocument()
        >>> pages = assemble_document(LabRecord(student_name="A", subject="B"), doc, LayoutConfig(), StyleTable())
        >>> len(pages)
        2
    """
    if surface.page_count:
        raise LayoutError(f"Surface already holds {surface.page_count} pages")

    cursor = PageCursor(surface, config)

    _draw_title_page(record, surface, cursor, config, styles)
    cursor.reset_unmeasured()

    cursor.add_page()
    for heading, field_name, renderer in SECTIONS:
        draw_heading_2(surface, cursor, heading, config, styles)
        renderer(surface, cursor, getattr(record, field_name), config, styles)

    if show_header_footer:
        stamp_headers_and_footers(surface, record, config, styles)

    logger.info(f"Laid out lab record onto {surface.page_count} pages")
    return list(surface.pages)


def _draw_title_page(
    record: LabRecord,
    surface: DocumentSurface,
    cursor: PageCursor,
    config: LayoutConfig,
    styles: StyleTable,
) -> None:
    """Draw the title page at its fixed coordinates."""
    layout = config.title_page
    page = cursor.add_page()

    draw_title(surface, page, record.college_name, layout.college_y, config, styles)
    draw_title(surface, page, record.subject, layout.subject_y, config, styles)

    heading_style = styles[BlockKind.HEADING_1]
    draw_heading_1(
        surface,
        page,
        f"Aim: {record.aim}".rstrip(),
        layout.aim_y,
        config,
        styles,
        max_lines=layout.aim_max_lines(heading_style.line_height),
    )

    x = layout.submitted_by_x
    draw_text_at(surface, page, SUBMITTED_BY_LABEL, x, layout.submitted_by_y, styles[BlockKind.LABEL])
    draw_text_at(surface, page, record.student_name, x, layout.student_name_y, styles[BlockKind.BODY])
    draw_text_at(surface, page, record.roll_number, x, layout.roll_number_y, styles[BlockKind.BODY])


def stamp_headers_and_footers(
    surface: DocumentSurface,
    record: LabRecord,
    config: LayoutConfig,
    styles: StyleTable,
) -> None:
    """
    Stamp header and footer on every content page.

    Must run after all content pages exist, since the footer shows the
    final page count. The title page (index 0) gets neither.

    Args:
        surface: Document primitives
        record: Input record (header text)
        config: Layout configuration
        styles: Style table
    """
    style = styles[BlockKind.HEADER_FOOTER]
    pages = surface.pages
    page_count = len(pages)
    header = f"{record.student_name} | {record.subject}"

    for page in pages[1:]:
        surface.place_text(
            page,
            header,
            config.margin_left,
            config.margin_top / 2,
            style.font,
            style.size,
            style.color,
            role=ROLE_HEADER,
        )

        footer = f"Page {page.index + 1} of {page_count}"
        width = surface.measure_width(footer, style.font, style.size)
        surface.place_text(
            page,
            footer,
            config.page_width - config.margin_right - width,
            config.page_height - config.margin_bottom / 2,
            style.font,
            style.size,
            style.color,
            role=ROLE_FOOTER,
        )

    logger.debug(f"Stamped header/footer on {max(0, page_count - 1)} pages")
