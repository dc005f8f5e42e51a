"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable draw instructions plus the Page that collects them.

Key Classes:
    - FontFamily: The three fixed font families
    - Line: One wrapped line with its font/size
    - TextPlacement: Text run positioned on a page
    - RectFill: Filled rectangle positioned on a page
    - Page: Fixed-size page holding an ordered list of instructions

Dependencies:
    - reportlab: Color type
    - dataclasses (std)

Used By:
    - builder.layout.wrapper: Produces Lines
    - builder.layout.blocks: Emits instructions
    - builder.output.pdf_document: Serializes pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from reportlab.lib.colors import Color


class FontFamily(str, Enum):
    """Font families, valued by their standard PDF font names."""

    REGULAR = "Helvetica"
    BOLD = "Helvetica-Bold"
    MONO = "Courier"


ROLE_CONTENT = "content"
ROLE_HEADER = "header"
ROLE_FOOTER = "footer"


@dataclass(frozen=True)
class Line:
    """
    A single wrapped line and the font/size it will be drawn with.

    Attributes:
        text: Line text (may be empty for blank paragraphs)
        font: Font family
        size: Point size
    """

    text: str
    font: FontFamily
    size: float


@dataclass(frozen=True)
class TextPlacement:
    """
    Text run positioned on a page.

    Attributes:
        text: Text to draw
        x: Left edge in points
        y: Baseline as distance from page top in points
        font: Font family
        size: Point size
        color: Fill color
        role: "content", "header" or "footer"
    """

    text: str
    x: float
    y: float
    font: FontFamily
    size: float
    color: Color
    role: str = ROLE_CONTENT


@dataclass(frozen=True)
class RectFill:
    """
    Filled rectangle positioned on a page.

    Attributes:
        x: Left edge in points
        y: Top edge as distance from page top in points
        width: Width in points
        height: Height in points
        color: Fill color

    Example:
        >>> rect = RectFill(x=77, y=100, width=441.28, height=38, color=Color(0, 0, 0))
        >>> rect.bottom
        138
    """

    x: float
    y: float
    width: float
    height: float
    color: Color

    @property
    def bottom(self) -> float:
        """Bottom edge (top + height)."""
        return self.y + self.height


DrawInstruction = Union[TextPlacement, RectFill]


@dataclass
class Page:
    """
    One page of the document.

    Pages are created by a DocumentSurface and are never removed.
    Instructions are kept in draw order.

    Attributes:
        index: Page number (0-indexed)
        width: Page width in points
        height: Page height in points
        instructions: Ordered draw instructions
    """

    index: int
    width: float
    height: float
    instructions: List[DrawInstruction] = field(default_factory=list)

    @property
    def texts(self) -> list[TextPlacement]:
        """All text placements in draw order."""
        return [i for i in self.instructions if isinstance(i, TextPlacement)]

    @property
    def rects(self) -> list[RectFill]:
        """All filled rectangles in draw order."""
        return [i for i in self.instructions if isinstance(i, RectFill)]

    def texts_with_role(self, role: str) -> list[TextPlacement]:
        """Text placements tagged with the given role."""
        return [t for t in self.texts if t.role == role]

    @property
    def is_empty(self) -> bool:
        """Check if page has no instructions."""
        return len(self.instructions) == 0
