"""
Module: builder.layout.cursor

Purpose:
    Track the active page and the vertical write position on it.
    Sole owner of the page-break decision.

Key Classes:
    - PageCursor: Explicit cursor threaded through every renderer call
    - LayoutError: Exception for invalid cursor use

Dependencies:
    - builder.layout.config: LayoutConfig
    - builder.output.surface: DocumentSurface (type only)

Used By:
    - builder.layout.blocks: Cursor-tracked block renderers
    - builder.layout.assembler: Page sequencing
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from .config import LayoutConfig
from .models import Page

if TYPE_CHECKING:
    from lab_record_toolkit.builder.output.surface import DocumentSurface

logger = logging.getLogger(__name__)


class LayoutError(Exception):
    """Invalid use of the layout engine."""
    pass


class PageCursor:
    """
    Current page and vertical position (distance from page top).

    One cursor per document. Exactly one page is active at a time;
    once superseded by add_page() a page is not written to again.

    Example:
        >>> cursor = PageCursor(surface, LayoutConfig())
        >>> page = cursor.add_page()
        >>> cursor.y
        72
        >>> cursor.advance(18)
        >>> cursor.y
        90
    """

    def __init__(self, surface: DocumentSurface, config: LayoutConfig) -> None:
        self.surface = surface
        self.config = config
        self._page: Optional[Page] = None
        self._y: float = 0

    @property
    def page(self) -> Page:
        """The active page."""
        if self._page is None:
            raise LayoutError("No active page: call add_page() first")
        return self._page

    @property
    def y(self) -> float:
        """Current vertical position, measured from page top."""
        if self._page is None:
            raise LayoutError("No active page: call add_page() first")
        return self._y

    @property
    def remaining(self) -> float:
        """Vertical space left above the bottom margin."""
        return self.config.content_bottom - self.y

    def add_page(self) -> Page:
        """Start a new page and move the cursor to its top margin."""
        self._page = self.surface.create_page()
        self._y = self.config.margin_top
        logger.debug(f"Started page {self._page.index}")
        return self._page

    def check_overflow(self, height_needed: float) -> bool:
        """
        Start a new page if height_needed does not fit above the bottom margin.

        Args:
            height_needed: Height the caller is about to consume

        Returns:
            True if a new page was started
        """
        if self.y + height_needed > self.config.content_bottom:
            self.add_page()
            return True
        return False

    def advance(self, amount: float) -> None:
        """Move the cursor down by amount."""
        self._y = self.y + amount

    def reset_unmeasured(self) -> None:
        """Set y to 0 without starting a page."""
        self._y = 0

    def line_capacity(self, line_height: float, lead: float = 0) -> int:
        """
        Whole lines of line_height that fit after lead on the active page.

        Args:
            line_height: Height of each line
            lead: Space consumed before the first line

        Returns:
            Number of lines (never negative)
        """
        return max(0, math.floor((self.remaining - lead) / line_height))
