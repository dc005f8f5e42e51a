"""
Module: builder.output

Purpose:
    Page/document primitives for the layout engine.
    Converts buffered pages to PDF bytes using ReportLab.

Key Classes:
    - DocumentSurface: Abstract primitive interface
    - PdfDocument: ReportLab-backed implementation

Dependencies:
    - reportlab: PDF generation and font metrics
    - builder.layout.models: Page and draw instructions

Used By:
    - builder.controller: Pipeline orchestration
"""

from .surface import DocumentSurface, DocumentSealedError, SurfaceError
from .pdf_document import PdfDocument

__all__ = [
    "DocumentSurface",
    "DocumentSealedError",
    "SurfaceError",
    "PdfDocument",
]
