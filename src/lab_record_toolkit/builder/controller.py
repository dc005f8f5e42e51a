"""
Module: builder.controller

Purpose:
    Orchestrate the complete lab record pipeline.
    Record → Layout → Header/footer → Serialize

Key Functions:
    - generate_lab_record(): Main entry point, returns PDF bytes
    - write_lab_record(): Generate and write to a file
    - suggested_filename(): Download filename derived from the subject

Key Classes:
    - GenerationResult: Complete generation result
    - GenerationError: Exception for generation failures

Dependencies:
    - builder.layout: Layout engine
    - builder.output: ReportLab document primitives
    - core.models: LabRecord

Used By:
    - HTTP layer (external): request handler
"""

from __future__ import annotations

import logging
import re
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from lab_record_toolkit.core.models import LabRecord

from .config import BuilderConfig
from .layout import assemble_document
from .output import PdfDocument

logger = logging.getLogger(__name__)

FILENAME_SUFFIX = "_Lab_Record.pdf"
FALLBACK_FILENAME = "Lab_Record.pdf"

RecordInput = Union[LabRecord, Mapping[str, Any]]


class GenerationError(Exception):
    """Error during lab record generation."""
    pass


@dataclass(frozen=True)
class GenerationResult:
    """
    Complete generation result (immutable).

    Attributes:
        pdf_bytes: Serialized PDF document
        page_count: Number of pages, title page included
        filename: Suggested download filename
        warnings: Layout warnings raised during generation
        metadata: Generation metadata dictionary

    Example:
        >>> result = generate_lab_record({"studentName": "A", "subject": "B"})
        >>> result.page_count
        2
        >>> result.filename
        'B_Lab_Record.pdf'
    """

    pdf_bytes: bytes
    page_count: int
    filename: str
    warnings: tuple[str, ...] = ()
    metadata: dict = field(default_factory=dict)


def suggested_filename(subject: str) -> str:
    """
    Derive a download filename from the subject.

    Runs of anything other than ASCII letters and digits become a
    single underscore.

    Examples:
        >>> suggested_filename("Data Structures")
        'Data_Structures_Lab_Record.pdf'
        >>> suggested_filename("C++ / OOP")
        'C_OOP_Lab_Record.pdf'
        >>> suggested_filename("")
        'Lab_Record.pdf'
    """
    stem = re.sub(r"[^0-9A-Za-z]+", "_", subject or "").strip("_")
    if not stem:
        return FALLBACK_FILENAME
    return f"{stem}{FILENAME_SUFFIX}"


def generate_lab_record(
    record: RecordInput,
    config: Optional[BuilderConfig] = None,
) -> GenerationResult:
    """
    Generate a lab record PDF from start to finish.

    Pipeline:
    1. Normalize the input into a LabRecord
    2. Lay out title page and content pages
    3. Stamp headers and footers
    4. Serialize to bytes

    No partial document is ever returned: any failure aborts the whole
    call.

    Args:
        record: LabRecord or form payload mapping
        config: Builder configuration (defaults apply when None)

    Returns:
        GenerationResult with PDF bytes and metadata

    Raises:
        GenerationError: If layout or serialization fails
    """
    config = config or BuilderConfig()
    if not isinstance(record, LabRecord):
        record = LabRecord.from_dict(record)

    start_time = time.perf_counter()
    logger.info(f"Starting lab record generation for subject {record.subject!r}")

    collector = _WarningCollector()
    layout_logger = logging.getLogger("lab_record_toolkit.builder.layout")
    layout_logger.addHandler(collector)
    try:
        document = PdfDocument(
            config.page_size,
            title=f"{record.subject} Lab Record" if config.embed_metadata and record.subject else None,
            author=record.student_name if config.embed_metadata and record.student_name else None,
            subject=record.aim if config.embed_metadata and record.aim else None,
        )
        pages = assemble_document(
            record,
            document,
            config.layout,
            config.styles,
            show_header_footer=config.show_header_footer,
        )
        pdf_bytes = document.serialize()
    except Exception as e:
        logger.error(f"Lab record generation failed: {e}")
        raise GenerationError(f"Failed to generate lab record: {e}") from e
    finally:
        layout_logger.removeHandler(collector)

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"Generated {len(pages)} pages ({len(pdf_bytes)} bytes) in {duration_ms:.1f}ms")

    return GenerationResult(
        pdf_bytes=pdf_bytes,
        page_count=len(pages),
        filename=suggested_filename(record.subject),
        warnings=tuple(collector.messages),
        metadata={
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "duration_ms": round(duration_ms, 2),
            "page_size": config.page_size,
        },
    )


def write_lab_record(
    record: RecordInput,
    output_path: Path,
    config: Optional[BuilderConfig] = None,
) -> GenerationResult:
    """
    Generate a lab record and write it to output_path.

    Parent directories are created as needed.

    Example:
        >>> result = write_lab_record(record, Path("output/record.pdf"))
        >>> print(f"Wrote {result.page_count} pages")
    """
    result = generate_lab_record(record, config)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.pdf_bytes)
    logger.info(f"Wrote lab record to {output_path}")
    return result


class _WarningCollector(logging.Handler):
    """
    Collects WARNING+ messages emitted on the calling thread.

    Attached to the layout logger for the duration of one generation
    call; records from other threads are ignored.
    """

    def __init__(self) -> None:
        super().__init__(logging.WARNING)
        self.thread_id = threading.get_ident()
        self.messages: List[str] = []
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        if record.thread != self.thread_id:
            return
        try:
            self.messages.append(self.format(record))
        except Exception:
            self.handleError(record)
