"""
Integration tests for the document assembler.

Runs the full title page → sections → header/footer pipeline against a
PdfDocument without serializing, and inspects the buffered pages.
"""

import pytest

from lab_record_toolkit.builder.layout import (
    BlockKind,
    LayoutConfig,
    LayoutError,
    StyleTable,
    assemble_document,
    stamp_headers_and_footers,
)
from lab_record_toolkit.builder.layout.assembler import SECTIONS, SUBMITTED_BY_LABEL
from lab_record_toolkit.builder.layout.models import ROLE_CONTENT, ROLE_FOOTER, ROLE_HEADER
from lab_record_toolkit.builder.output import PdfDocument
from lab_record_toolkit.core.models import LabRecord


def _content_texts(page):
    return [t.text for t in page.texts_with_role(ROLE_CONTENT)]


def _assemble(record, config=None, styles=None, **kwargs):
    config = config or LayoutConfig()
    doc = PdfDocument((config.page_width, config.page_height))
    pages = assemble_document(record, doc, config, styles or StyleTable(), **kwargs)
    return doc, pages


class TestAssembleDocument:
    """End-to-end layout scenarios."""

    def test_assemble_when_only_name_and_subject_then_two_pages(self):
        """Minimal record: title page plus one page of bare headings."""
        # Arrange
        record = LabRecord(student_name="A", subject="B")

        # Act
        doc, pages = _assemble(record)

        # Assert
        assert len(pages) == 2
        assert _content_texts(pages[0]) == ["B", "Aim:", SUBMITTED_BY_LABEL, "A"]
        assert _content_texts(pages[1]) == [heading for heading, _, _ in SECTIONS]
        assert [t.text for t in pages[1].texts_with_role(ROLE_HEADER)] == ["A | B"]
        assert [t.text for t in pages[1].texts_with_role(ROLE_FOOTER)] == ["Page 2 of 2"]
        assert all(not page.rects for page in pages)

    def test_assemble_when_sample_record_then_golden_text_sequence(self, sample_record):
        """Short record lays out in a fixed, known order on two pages."""
        doc, pages = _assemble(sample_record)

        assert [[t.text for t in page.texts] for page in pages] == [
            [
                "CBIT",
                "Data Structures",
                "Aim: Implement a stack",
                "Submitted by:",
                "Ada Lovelace",
                "CS-042",
            ],
            [
                "Aim",
                "Implement a stack",
                "Theory / Apparatus",
                "A stack is LIFO.",
                "Code / Procedure",
                "push(1)",
                "pop()",
                "Output / Observations",
                "1",
                "Conclusion",
                "Stack works.",
                "Ada Lovelace | Data Structures",
                "Page 2 of 2",
            ],
        ]

    def test_assemble_when_sample_record_then_title_page_fixed_positions(self, sample_record, layout_config):
        """Title page elements sit at their fixed coordinates."""
        doc, pages = _assemble(sample_record)
        layout = layout_config.title_page

        by_text = {t.text: t for t in pages[0].texts}
        assert by_text["CBIT"].y == layout.college_y
        assert by_text["Data Structures"].y == layout.subject_y
        assert by_text["Aim: Implement a stack"].y == layout.aim_y
        assert (by_text[SUBMITTED_BY_LABEL].x, by_text[SUBMITTED_BY_LABEL].y) == (
            layout.submitted_by_x,
            layout.submitted_by_y,
        )
        assert by_text["Ada Lovelace"].y == layout.student_name_y
        assert by_text["CS-042"].y == layout.roll_number_y

    def test_assemble_when_sample_record_then_one_box_per_code_section(self, sample_record):
        """Code and output each get one background box on the content page."""
        doc, pages = _assemble(sample_record)

        assert not pages[0].rects
        heights = [r.height for r in pages[1].rects]
        assert heights == [2 * 14 + 10, 1 * 14 + 10]

    def test_assemble_when_code_spans_pages_then_boxes_sum_to_block(self):
        """200 code lines spill over several pages with consistent boxes."""
        # Arrange
        code = "\n".join(f"line {i}" for i in range(200))
        record = LabRecord(student_name="S", subject="T", aim="a", theory="t", code=code)

        # Act
        doc, pages = _assemble(record)

        # Assert
        assert len(pages) >= 3
        assert {"Aim", "Theory / Apparatus", "Code / Procedure"} <= set(_content_texts(pages[1]))
        code_pages = {page.index for page in pages if any(t.text.startswith("line ") for t in page.texts)}
        assert max(code_pages) > 1
        assert sum(r.height for page in pages for r in page.rects) == 200 * 14 + 10
        placed = [t.text for page in pages for t in page.texts if t.text.startswith("line ")]
        assert placed == [f"line {i}" for i in range(200)]

    def test_assemble_when_code_spans_pages_then_text_inside_margins(self, layout_config):
        """No content line crosses the bottom margin."""
        code = "\n".join(["x = 1"] * 200)
        doc, pages = _assemble(LabRecord(code=code))

        for page in pages[1:]:
            for t in page.texts_with_role(ROLE_CONTENT):
                assert t.y <= layout_config.content_bottom

    def test_assemble_when_aim_is_one_huge_word_then_kept_unbroken(self):
        """An unbreakable aim is placed whole on the title page."""
        word = "w" * 300
        doc, pages = _assemble(LabRecord(aim=word))

        title_texts = [t.text for t in pages[0].texts]
        assert "Aim:" in title_texts
        assert word in title_texts
        assert word in _content_texts(pages[1])

    def test_assemble_when_aim_very_long_then_title_page_truncated(self, layout_config, caplog):
        """The title-page aim stops above the submitted-by block."""
        # Arrange
        aim = "\n".join(f"step {i}" for i in range(40))
        limit = layout_config.title_page.aim_max_lines(24)

        # Act
        doc, pages = _assemble(LabRecord(aim=aim))

        # Assert
        aim_lines = [t for t in pages[0].texts if t.text.startswith(("Aim:", "step"))]
        assert len(aim_lines) == limit
        assert aim_lines[-1].text.endswith("...")
        assert max(t.y for t in aim_lines) < layout_config.title_page.submitted_by_y
        assert "truncated" in caplog.text
        body = [t.text for page in pages[1:] for t in page.texts if t.text.startswith("step")]
        assert body == [f"step {i}" for i in range(40)]

    @pytest.mark.parametrize("field", ["theory", "conclusion"])
    def test_assemble_when_text_grows_then_page_count_never_shrinks(self, field):
        """Appending paragraphs can only keep or increase the page count."""
        counts = []
        for n in (0, 10, 40, 80, 160):
            text = "\n".join(f"paragraph {i}" for i in range(n))
            doc, pages = _assemble(LabRecord(**{field: text}))
            counts.append(len(pages))

        assert counts == sorted(counts)
        assert counts[0] == 2
        assert counts[-1] > 2

    def test_assemble_when_surface_not_empty_then_layout_error(self, sample_record, layout_config, styles):
        """A surface that already has pages is rejected."""
        doc = PdfDocument()
        doc.create_page()

        with pytest.raises(LayoutError, match="already holds 1 pages"):
            assemble_document(sample_record, doc, layout_config, styles)

    def test_assemble_when_header_footer_disabled_then_none_stamped(self, sample_record):
        """show_header_footer=False skips the annotation pass."""
        doc, pages = _assemble(sample_record, show_header_footer=False)

        for page in pages:
            assert not page.texts_with_role(ROLE_HEADER)
            assert not page.texts_with_role(ROLE_FOOTER)

    def test_assemble_when_measure_fails_then_error_propagates(self, sample_record, layout_config, styles):
        """Metrics errors surface to the caller."""

        class BrokenMetrics(PdfDocument):
            def measure_width(self, text, font, size):
                raise RuntimeError("no metrics")

        with pytest.raises(RuntimeError, match="no metrics"):
            assemble_document(sample_record, BrokenMetrics(), layout_config, styles)


class TestHeadersAndFooters:
    """Header/footer pass over finished pages."""

    def test_stamp_when_many_pages_then_every_content_page_numbered(self):
        """Pages 2..N carry one header and a 'Page i of N' footer; page 1 carries neither."""
        # Arrange
        theory = "\n".join(f"row {i}" for i in range(150))

        # Act
        doc, pages = _assemble(LabRecord(student_name="Ada", subject="OS", theory=theory))

        # Assert
        total = len(pages)
        assert total > 2
        assert not pages[0].texts_with_role(ROLE_HEADER)
        assert not pages[0].texts_with_role(ROLE_FOOTER)
        for page in pages[1:]:
            (header,) = page.texts_with_role(ROLE_HEADER)
            (footer,) = page.texts_with_role(ROLE_FOOTER)
            assert header.text == "Ada | OS"
            assert footer.text == f"Page {page.index + 1} of {total}"

    def test_stamp_when_called_then_positions_inside_margins(self, sample_record, layout_config, styles):
        """Header sits at half the top margin; footer is right-aligned at half the bottom margin."""
        doc, pages = _assemble(sample_record)

        (header,) = pages[1].texts_with_role(ROLE_HEADER)
        (footer,) = pages[1].texts_with_role(ROLE_FOOTER)
        footer_width = doc.measure_width(footer.text, footer.font, footer.size)

        assert (header.x, header.y) == (layout_config.margin_left, layout_config.margin_top / 2)
        assert footer.y == layout_config.page_height - layout_config.margin_bottom / 2
        assert footer.x + footer_width == pytest.approx(layout_config.page_width - layout_config.margin_right)
        assert header.size == styles[BlockKind.HEADER_FOOTER].size

    def test_stamp_when_only_title_page_then_nothing_stamped(self, layout_config, styles):
        """A lone title page is never annotated."""
        doc = PdfDocument()
        doc.create_page()

        stamp_headers_and_footers(doc, LabRecord(), layout_config, styles)

        assert doc.pages[0].is_empty
