"""
Module: builder.config

Purpose:
    Configuration dataclass for the lab record generation pipeline.
    Immutable configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for generating a lab record

Dependencies:
    - dataclasses (std)
    - builder.layout: LayoutConfig, StyleTable

Used By:
    - builder.controller: Main generation controller
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lab_record_toolkit.builder.layout.config import LayoutConfig
from lab_record_toolkit.builder.layout.styles import StyleTable


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for generating a lab record (immutable).

    Attributes:
        layout: Page geometry and title page coordinates
        styles: Style table keyed by content kind
        show_header_footer: Stamp header/footer on content pages
        embed_metadata: Write title/author/subject into the PDF info dict

    Example:
        >>> config = BuilderConfig(show_header_footer=False)
        >>> config.page_size
        (595.2755905511812, 841.8897637795277)
    """

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    styles: StyleTable = field(default_factory=StyleTable)
    show_header_footer: bool = True
    embed_metadata: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.layout, LayoutConfig):
            raise ValueError(f"layout must be a LayoutConfig: {self.layout!r}")
        if not isinstance(self.styles, StyleTable):
            raise ValueError(f"styles must be a StyleTable: {self.styles!r}")

    @property
    def page_size(self) -> tuple[float, float]:
        """(width, height) in points."""
        return (self.layout.page_width, self.layout.page_height)
