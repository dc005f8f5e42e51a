"""
Unit tests for the ReportLab document surface.

Covers instruction buffering, sealing after serialize(), foreign page
rejection and the top-down to bottom-up coordinate flip.
"""

import pytest
from unittest.mock import call, patch

from reportlab.lib.colors import Color, black
from reportlab.pdfbase.pdfmetrics import stringWidth

from lab_record_toolkit.builder.layout import FontFamily, RectFill, TextPlacement
from lab_record_toolkit.builder.layout.models import ROLE_FOOTER
from lab_record_toolkit.builder.output import (
    DocumentSealedError,
    PdfDocument,
    SurfaceError,
)
from lab_record_toolkit.builder.output.pdf_document import _to_pdf_y


GREY = Color(0.95, 0.95, 0.95)


class TestPdfDocumentBuffering:
    """Primitives append to pages; nothing is drawn until serialize()."""

    def test_create_page_when_called_then_indexed_in_order(self, pdf_document):
        """Pages are numbered from zero in creation order."""
        first = pdf_document.create_page()
        second = pdf_document.create_page()

        assert (first.index, second.index) == (0, 1)
        assert pdf_document.pages == (first, second)
        assert pdf_document.page_count == 2
        assert first.width == pytest.approx(595.2756, abs=1e-3)

    def test_place_text_when_called_then_instruction_buffered(self, pdf_document):
        """Text is recorded with its role, unrendered."""
        page = pdf_document.create_page()

        pdf_document.place_text(page, "Page 2 of 3", 480, 805, FontFamily.REGULAR, 10, black, role=ROLE_FOOTER)

        assert page.instructions == [
            TextPlacement("Page 2 of 3", 480, 805, FontFamily.REGULAR, 10, black, role=ROLE_FOOTER)
        ]

    def test_fill_rect_when_called_then_instruction_buffered(self, pdf_document):
        """Rectangles keep their top-down geometry."""
        page = pdf_document.create_page()

        pdf_document.fill_rect(page, 77, 200, 441, 52, GREY)

        (rect,) = page.rects
        assert rect == RectFill(77, 200, 441, 52, GREY)
        assert rect.bottom == 252

    @pytest.mark.parametrize("font", list(FontFamily))
    def test_measure_width_when_called_then_matches_reportlab(self, pdf_document, font):
        """Widths come straight from the standard font metrics."""
        assert pdf_document.measure_width("Lab Record", font, 12) == stringWidth("Lab Record", font.value, 12)

    def test_place_text_when_page_from_other_document_then_surface_error(self, pdf_document):
        """A page belonging to another document is rejected."""
        foreign = PdfDocument().create_page()

        with pytest.raises(SurfaceError, match="does not belong"):
            pdf_document.place_text(foreign, "x", 0, 0, FontFamily.REGULAR, 12, black)
        with pytest.raises(SurfaceError):
            pdf_document.fill_rect(foreign, 0, 0, 1, 1, GREY)


class TestPdfDocumentSerialize:
    """serialize() renders once and seals the document."""

    def test_serialize_when_pages_then_pdf_bytes(self, pdf_document):
        """Output is a PDF file."""
        page = pdf_document.create_page()
        pdf_document.place_text(page, "Hello", 72, 100, FontFamily.REGULAR, 12, black)

        data = pdf_document.serialize()

        assert data.startswith(b"%PDF-")
        assert data.rstrip().endswith(b"%%EOF")
        assert pdf_document.is_sealed

    def test_serialize_when_same_input_then_identical_bytes(self):
        """Invariant mode makes output reproducible."""
        outputs = []
        for _ in range(2):
            doc = PdfDocument(title="T", author="A", subject="S")
            page = doc.create_page()
            doc.fill_rect(page, 77, 100, 441, 24, GREY)
            doc.place_text(page, "print(1)", 82, 115, FontFamily.MONO, 10, black)
            outputs.append(doc.serialize())

        assert outputs[0] == outputs[1]

    def test_serialize_when_sealed_then_further_use_rejected(self, pdf_document):
        """After serialize() the document accepts no more changes."""
        # Arrange
        page = pdf_document.create_page()
        pdf_document.serialize()

        # Act / Assert
        with pytest.raises(DocumentSealedError, match="already serialized"):
            pdf_document.create_page()
        with pytest.raises(DocumentSealedError):
            pdf_document.place_text(page, "late", 0, 0, FontFamily.REGULAR, 12, black)
        with pytest.raises(DocumentSealedError):
            pdf_document.fill_rect(page, 0, 0, 1, 1, GREY)
        with pytest.raises(DocumentSealedError):
            pdf_document.serialize()

    def test_sealed_error_when_raised_then_is_surface_error(self):
        """Callers can catch every surface failure with one type."""
        assert issubclass(DocumentSealedError, SurfaceError)


class TestCoordinateFlip:
    """Top-down layout coordinates become bottom-up PDF coordinates."""

    @pytest.mark.parametrize(
        "page_height, y, expected",
        [
            (841.89, 0, 841.89),
            (841.89, 841.89, 0),
            (200, 72, 128),
        ],
    )
    def test_to_pdf_y_when_called_then_flipped(self, page_height, y, expected):
        assert _to_pdf_y(page_height, y) == pytest.approx(expected)

    @patch("reportlab.pdfgen.canvas.Canvas")
    def test_serialize_when_rendered_then_canvas_receives_flipped_coordinates(self, mock_canvas_cls):
        """Rects are anchored at their bottom edge; text baselines are flipped."""
        # Arrange
        doc = PdfDocument((300, 200), title="Lab")
        page = doc.create_page()
        doc.fill_rect(page, 25, 20, 250, 52, GREY)
        doc.place_text(page, "a", 30, 35, FontFamily.MONO, 10, black)
        mock_canvas = mock_canvas_cls.return_value

        # Act
        doc.serialize()

        # Assert
        mock_canvas.rect.assert_called_once_with(25, 200 - 72, 250, 52, stroke=0, fill=1)
        mock_canvas.drawString.assert_called_once_with(30, 200 - 35, "a")
        mock_canvas.setFont.assert_called_once_with("Courier", 10)
        assert mock_canvas.setFillColor.call_args_list == [call(GREY), call(black)]
        mock_canvas.setTitle.assert_called_once_with("Lab")
        mock_canvas.setAuthor.assert_not_called()
        assert mock_canvas.showPage.call_count == 1
        mock_canvas.save.assert_called_once()

    @patch("reportlab.pdfgen.canvas.Canvas")
    def test_serialize_when_instructions_then_drawn_in_order(self, mock_canvas_cls):
        """Backgrounds placed first are painted first, under their text."""
        doc = PdfDocument()
        page = doc.create_page()
        doc.fill_rect(page, 0, 0, 10, 10, GREY)
        doc.place_text(page, "over", 0, 5, FontFamily.MONO, 10, black)
        mock_canvas = mock_canvas_cls.return_value

        doc.serialize()

        names = [c[0] for c in mock_canvas.method_calls if c[0] in ("rect", "drawString")]
        assert names == ["rect", "drawString"]
