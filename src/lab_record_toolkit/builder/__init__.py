"""
Module: builder

Purpose:
    Lab record generation pipeline. Lays a LabRecord out onto A4 pages
    (title page, section headings, wrapped body text, boxed code blocks,
    header/footer annotations) and serializes the result to PDF.

Key Functions:
    - generate_lab_record(): Main entry point, returns PDF bytes
    - write_lab_record(): Generate and write to disk
    - suggested_filename(): Download filename for a subject

Key Classes:
    - BuilderConfig: Configuration for generation
    - GenerationResult: Bytes plus metadata
    - GenerationError: Raised when generation fails

Dependencies:
    - reportlab: PDF generation and font metrics
    - lab_record_toolkit.core.models: LabRecord

Used By:
    - HTTP layer (external): request handler
"""

from .config import BuilderConfig
from .controller import (
    generate_lab_record,
    write_lab_record,
    suggested_filename,
    GenerationResult,
    GenerationError,
)

__all__ = [
    # Config
    "BuilderConfig",
    # Controller
    "generate_lab_record",
    "write_lab_record",
    "suggested_filename",
    "GenerationResult",
    "GenerationError",
]
