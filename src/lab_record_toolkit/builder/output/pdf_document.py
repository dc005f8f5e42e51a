"""
Module: builder.output.pdf_document

Purpose:
    ReportLab implementation of the document primitives.
    Draw instructions are buffered per page and written to a canvas
    only on serialize(), so earlier pages can still receive their
    header/footer annotations once the final page count is known.

Key Classes:
    - PdfDocument: In-memory PDF document

Dependencies:
    - reportlab: Font metrics and PDF generation
    - builder.output.surface: DocumentSurface interface

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from lab_record_toolkit.builder.layout.models import (
    FontFamily,
    Page,
    RectFill,
    TextPlacement,
    ROLE_CONTENT,
)

from .surface import DocumentSealedError, DocumentSurface, SurfaceError

logger = logging.getLogger(__name__)


class PdfDocument(DocumentSurface):
    """
    In-memory PDF document backed by ReportLab.

    Output is byte-for-byte reproducible (invariant mode) for identical
    input.

    Example:
        >>> doc = PdfDocument()
        >>> page = doc.create_page()
        >>> doc.place_text(page, "Hello", 72, 100, FontFamily.REGULAR, 12, Color(0, 0, 0))
        >>> data = doc.serialize()
        >>> data[:5]
        b'%PDF-'
    """

    def __init__(
        self,
        page_size: Tuple[float, float] = A4,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> None:
        self.page_width, self.page_height = page_size
        self.title = title
        self.author = author
        self.subject = subject
        self._pages: List[Page] = []
        self._sealed = False

    # ─────────────────────────────────────────────────────────────────────────
    # Primitive interface
    # ─────────────────────────────────────────────────────────────────────────

    def create_page(self) -> Page:
        self._ensure_open()
        page = Page(index=len(self._pages), width=self.page_width, height=self.page_height)
        self._pages.append(page)
        return page

    def measure_width(self, text: str, font: FontFamily, size: float) -> float:
        return stringWidth(text, font.value, size)

    def place_text(
        self,
        page: Page,
        text: str,
        x: float,
        y: float,
        font: FontFamily,
        size: float,
        color: Color,
        role: str = ROLE_CONTENT,
    ) -> None:
        self._check_page(page)
        page.instructions.append(
            TextPlacement(text=text, x=x, y=y, font=font, size=size, color=color, role=role)
        )

    def fill_rect(
        self,
        page: Page,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
    ) -> None:
        self._check_page(page)
        page.instructions.append(RectFill(x=x, y=y, width=width, height=height, color=color))

    @property
    def pages(self) -> Sequence[Page]:
        return tuple(self._pages)

    @property
    def is_sealed(self) -> bool:
        """True once serialize() has run."""
        return self._sealed

    def serialize(self) -> bytes:
        """
        Render all buffered pages to PDF bytes.

        Returns:
            Complete PDF file contents

        Raises:
            DocumentSealedError: If the document was already serialized
        """
        self._ensure_open()

        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=(self.page_width, self.page_height), invariant=1)
        if self.title:
            c.setTitle(self.title)
        if self.author:
            c.setAuthor(self.author)
        if self.subject:
            c.setSubject(self.subject)

        for page in self._pages:
            _render_page(c, page)
            c.showPage()

        c.save()
        self._sealed = True

        data = buf.getvalue()
        logger.debug(f"Serialized {len(self._pages)} pages ({len(data)} bytes)")
        return data

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _ensure_open(self) -> None:
        if self._sealed:
            raise DocumentSealedError("Document already serialized")

    def _check_page(self, page: Page) -> None:
        self._ensure_open()
        if page.index >= len(self._pages) or self._pages[page.index] is not page:
            raise SurfaceError(f"Page {page.index} does not belong to this document")


def _render_page(c: canvas.Canvas, page: Page) -> None:
    """
    Draw one buffered page onto the canvas in instruction order.

    Args:
        c: ReportLab canvas
        page: Page with buffered instructions
    """
    for instruction in page.instructions:
        c.saveState()
        c.setFillColor(instruction.color)
        if isinstance(instruction, RectFill):
            c.rect(
                instruction.x,
                _to_pdf_y(page.height, instruction.bottom),
                instruction.width,
                instruction.height,
                stroke=0,
                fill=1,
            )
        else:
            c.setFont(instruction.font.value, instruction.size)
            c.drawString(instruction.x, _to_pdf_y(page.height, instruction.y), instruction.text)
        c.restoreState()


def _to_pdf_y(page_height: float, y_from_top: float) -> float:
    """
    Convert top-down Y coordinate to bottom-up PDF Y.

    Args:
        page_height: Page height in points
        y_from_top: Distance from page top in points

    Returns:
        Distance from page bottom in points
    """
    return page_height - y_from_top
