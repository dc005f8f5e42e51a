import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import lab_record_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from lab_record_toolkit.builder.layout import LayoutConfig, StyleTable  # noqa: E402
from lab_record_toolkit.builder.output import PdfDocument  # noqa: E402
from lab_record_toolkit.core.models import LabRecord  # noqa: E402


# Common test fixtures
@pytest.fixture
def layout_config():
    """Default A4 layout configuration."""
    return LayoutConfig()


@pytest.fixture
def styles():
    """Default style table."""
    return StyleTable()


@pytest.fixture
def pdf_document():
    """Empty A4 PDF document."""
    return PdfDocument()


@pytest.fixture
def fixed_measure():
    """Width function where every character is 10pt wide, regardless of font."""
    def _measure(text, font, size):
        return len(text) * 10.0
    return _measure


@pytest.fixture
def sample_record():
    """Short record where nothing needs wrapping."""
    return LabRecord(
        student_name="Ada Lovelace",
        roll_number="CS-042",
        subject="Data Structures",
        college_name="CBIT",
        aim="Implement a stack",
        theory="A stack is LIFO.",
        code="push(1)\npop()",
        output="1",
        conclusion="Stack works.",
    )
