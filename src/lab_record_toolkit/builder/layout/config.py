"""
Module: builder.layout.config

Purpose:
    Configuration for the page layout engine.
    Defines page dimensions, margins, code block geometry and the fixed
    coordinates of the title page.

Key Classes:
    - LayoutConfig: Immutable layout configuration
    - TitlePageLayout: Absolute positions used on the title page

Dependencies:
    - reportlab: A4 page size in points
    - dataclasses (std)

Used By:
    - builder.layout.cursor: Page-break decisions
    - builder.layout.blocks: Block geometry
    - builder.layout.assembler: Title page and header/footer placement
"""

from __future__ import annotations

from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4

# Standard A4 page dimensions in points (1/72 inch)
DEFAULT_PAGE_WIDTH_PT, DEFAULT_PAGE_HEIGHT_PT = A4
DEFAULT_MARGIN_PT = 72  # 1 inch


@dataclass(frozen=True)
class TitlePageLayout:
    """
    Absolute positions on the title page (immutable).

    All y values are distances from the top of the page. The title page
    is not cursor-tracked, so these are the only positions it uses.

    Attributes:
        college_y: Baseline of the college name
        subject_y: Baseline of the subject
        aim_y: Baseline of the first wrapped "Aim:" line
        submitted_by_x: Left edge of the submitted-by block
        submitted_by_y: Baseline of the "Submitted by:" label
        student_name_y: Baseline of the student name
        roll_number_y: Baseline of the roll number
    """

    college_y: float = 250
    subject_y: float = 300
    aim_y: float = 350
    submitted_by_x: float = 40
    submitted_by_y: float = 680
    student_name_y: float = 700
    roll_number_y: float = 720

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.aim_y >= self.submitted_by_y:
            raise ValueError(
                f"aim_y ({self.aim_y}) must be above submitted_by_y ({self.submitted_by_y})"
            )

    def aim_max_lines(self, line_height: float) -> int:
        """
        Number of aim lines that fit above the submitted-by block.

        One full line height is kept clear above the label.

        Example:
            >>> TitlePageLayout().aim_max_lines(24)
            13
        """
        free = self.submitted_by_y - self.aim_y - line_height
        return max(1, int(free // line_height) + 1)


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Controls page dimensions, margins and code block geometry.
    All values are in PDF points.

    Attributes:
        page_width: Page width
        page_height: Page height
        margin_top: Top margin (cursor start on a fresh page)
        margin_bottom: Bottom margin (overflow threshold)
        margin_left: Left margin (x of left-aligned text)
        margin_right: Right margin
        code_inset: Extra horizontal inset applied on both sides of code text
        code_padding_top: Space between code box top and first line box
        code_padding_bottom: Space between last line box and code box bottom
        title_page: Title page coordinates

    Example:
        >>> config = LayoutConfig()
        >>> round(config.content_width, 2)
        451.28
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_PT
    page_height: float = DEFAULT_PAGE_HEIGHT_PT

    # Margins
    margin_top: float = DEFAULT_MARGIN_PT
    margin_bottom: float = DEFAULT_MARGIN_PT
    margin_left: float = DEFAULT_MARGIN_PT
    margin_right: float = DEFAULT_MARGIN_PT

    # Code blocks
    code_inset: float = 10
    code_padding_top: float = 5
    code_padding_bottom: float = 5

    title_page: TitlePageLayout = field(default_factory=TitlePageLayout)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.content_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.content_bottom <= self.margin_top:
            raise ValueError("Margins exceed page height")
        if self.code_inset < 0 or self.code_padding_top < 0 or self.code_padding_bottom < 0:
            raise ValueError("Code block inset and padding must be non-negative")
        if self.code_content_width <= 0:
            raise ValueError("code_inset leaves no width for code text")

    @property
    def content_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def code_content_width(self) -> float:
        """Wrapping width for code text (content width minus inset on both sides)."""
        return self.content_width - 2 * self.code_inset

    @property
    def content_bottom(self) -> float:
        """Lowest y (from top) content may reach before a page break."""
        return self.page_height - self.margin_bottom

    @property
    def code_padding(self) -> float:
        """Fixed vertical padding added to every code block."""
        return self.code_padding_top + self.code_padding_bottom
