"""
Module: builder.layout.styles

Purpose:
    Single immutable style table keyed by content kind.
    Every block renderer reads exactly one entry; sizes and line heights
    never vary per call.

Key Classes:
    - BlockKind: Content kinds
    - BlockStyle: Font, size, color and line height for one kind
    - StyleTable: Immutable mapping BlockKind -> BlockStyle

Dependencies:
    - reportlab: Color types
    - builder.layout.models: FontFamily

Used By:
    - builder.layout.blocks: Block renderers
    - builder.layout.assembler: Title page and header/footer pass
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from reportlab.lib.colors import CMYKColor, Color

from .models import FontFamily


class BlockKind(Enum):
    """Kinds of rendered content."""

    TITLE = "title"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    BODY = "body"
    CODE = "code"
    LABEL = "label"
    HEADER_FOOTER = "header_footer"


@dataclass(frozen=True)
class BlockStyle:
    """
    Style for one content kind (immutable).

    Attributes:
        font: Font family
        size: Point size
        color: Text color
        line_height: Vertical advance per line
        background: Fill color for boxed blocks (code only)
    """

    font: FontFamily
    size: float
    color: Color
    line_height: float
    background: Color | None = None

    def __post_init__(self) -> None:
        """Validate style on construction."""
        if self.size <= 0:
            raise ValueError(f"size must be positive: {self.size}")
        if self.line_height <= 0:
            raise ValueError(f"line_height must be positive: {self.line_height}")


COLOR_TITLE = Color(0, 0, 0)
COLOR_HEADING = Color(0.1, 0.1, 0.4)  # Dark blue
COLOR_BODY = Color(0.1, 0.1, 0.1)
COLOR_CODE_BG = CMYKColor(0, 0, 0, 0.05)  # 5% black
COLOR_CODE_TEXT = Color(0, 0, 0)
COLOR_HEADER_FOOTER = Color(0.5, 0.5, 0.5)


def _default_styles() -> dict[BlockKind, BlockStyle]:
    return {
        BlockKind.TITLE: BlockStyle(FontFamily.BOLD, 24, COLOR_TITLE, line_height=30),
        BlockKind.HEADING_1: BlockStyle(FontFamily.REGULAR, 18, COLOR_HEADING, line_height=24),
        BlockKind.HEADING_2: BlockStyle(FontFamily.BOLD, 14, COLOR_HEADING, line_height=24),
        BlockKind.BODY: BlockStyle(FontFamily.REGULAR, 12, COLOR_BODY, line_height=18),
        BlockKind.CODE: BlockStyle(
            FontFamily.MONO, 10, COLOR_CODE_TEXT, line_height=14, background=COLOR_CODE_BG
        ),
        BlockKind.LABEL: BlockStyle(FontFamily.BOLD, 14, COLOR_HEADING, line_height=20),
        BlockKind.HEADER_FOOTER: BlockStyle(FontFamily.REGULAR, 10, COLOR_HEADER_FOOTER, line_height=12),
    }


@dataclass(frozen=True)
class StyleTable:
    """
    Immutable style lookup keyed by BlockKind.

    Missing kinds fall back to the defaults, so callers may override
    only what they need.

    Example:
        >>> styles = StyleTable()
        >>> styles[BlockKind.BODY].line_height
        18
        >>> custom = StyleTable.with_overrides({BlockKind.BODY: BlockStyle(FontFamily.REGULAR, 11, COLOR_BODY, 16)})
        >>> custom[BlockKind.BODY].size
        11
    """

    entries: Mapping[BlockKind, BlockStyle] = field(
        default_factory=lambda: MappingProxyType(_default_styles())
    )

    def __post_init__(self) -> None:
        """Freeze the mapping and fill in any missing kinds."""
        merged = _default_styles()
        merged.update(self.entries)
        object.__setattr__(self, "entries", MappingProxyType(merged))

    def __getitem__(self, kind: BlockKind) -> BlockStyle:
        return self.entries[kind]

    @classmethod
    def with_overrides(cls, overrides: Mapping[BlockKind, BlockStyle]) -> StyleTable:
        """Create a table from the defaults with some kinds replaced."""
        return cls(entries=dict(overrides))
