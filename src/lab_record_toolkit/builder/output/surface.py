"""
Module: builder.output.surface

Purpose:
    Abstract page/document primitive interface consumed by the layout
    engine: page creation, glyph-width measurement, text placement,
    rectangle fill and final byte serialization.

Key Classes:
    - DocumentSurface: Abstract base class for document primitives
    - SurfaceError: Exception for invalid primitive-layer use
    - DocumentSealedError: Mutation attempted after serialization

Dependencies:
    - builder.layout.models: Page, FontFamily

Used By:
    - builder.layout.cursor: Page creation
    - builder.layout.blocks: Measurement and drawing
    - builder.output.pdf_document: ReportLab implementation
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from reportlab.lib.colors import Color

from lab_record_toolkit.builder.layout.models import FontFamily, Page, ROLE_CONTENT


class SurfaceError(Exception):
    """Invalid use of the document primitives."""
    pass


class DocumentSealedError(SurfaceError):
    """Document was already serialized and can no longer change."""
    pass


class DocumentSurface(ABC):
    """
    Abstract interface for document primitives.

    All y coordinates are distances from the top of the page.
    Implementations handle any coordinate flip needed by the output format.
    """

    @abstractmethod
    def create_page(self) -> Page:
        """
        Append a new page to the document.

        Returns:
            The new Page

        Raises:
            DocumentSealedError: If the document was serialized
        """

    @abstractmethod
    def measure_width(self, text: str, font: FontFamily, size: float) -> float:
        """
        Measure rendered text width.

        Args:
            text: Text to measure
            font: Font family
            size: Point size

        Returns:
            Width in points
        """

    @abstractmethod
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
        """Place a run of text with its baseline at (x, y from top)."""

    @abstractmethod
    def fill_rect(
        self,
        page: Page,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
    ) -> None:
        """Fill a rectangle whose top-left corner is at (x, y from top)."""

    @property
    @abstractmethod
    def pages(self) -> Sequence[Page]:
        """All pages in order."""

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Produce the final byte stream. Terminal and irreversible.

        Raises:
            DocumentSealedError: If called twice
        """

    @property
    def page_count(self) -> int:
        """Number of pages created so far."""
        return len(self.pages)
