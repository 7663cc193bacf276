import io
from collections.abc import Callable
from unittest.mock import MagicMock

import docx
import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from thrive_extract.ocr.base import BaseOcrEngine, OcrRecognition
from thrive_extract.ocr.session import OcrSession

LONG_LINE_ONE = "Psychoeducational evaluation summary for the student."
LONG_LINE_TWO = "Reading fluency falls below grade level expectations."


def _pdf(pages: list[list[str]], encrypt: str | None = None) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt=encrypt)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page PDF with a short line of text."""
    return _pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """A two-page PDF whose text layer is long enough to skip OCR."""
    return _pdf([[LONG_LINE_ONE], [LONG_LINE_TWO]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF with one blank page."""
    return _pdf([[]])


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """A PDF locked with a user password."""
    return _pdf([[LONG_LINE_ONE]], encrypt="secret-user-pw")


@pytest.fixture()
def blank_pdf_factory() -> Callable[[int], bytes]:
    """Build a PDF with the given number of blank pages, like a scan."""

    def build(page_count: int) -> bytes:
        return _pdf([[] for _ in range(page_count)])

    return build


@pytest.fixture()
def docx_factory() -> Callable[..., bytes]:
    def build(paragraphs: list[str], table_rows: list[list[str]] | None = None) -> bytes:
        document = docx.Document()
        for text in paragraphs:
            document.add_paragraph(text)
        if table_rows:
            table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
            for row, values in zip(table.rows, table_rows):
                for cell, value in zip(row.cells, values):
                    cell.text = value
        buf = io.BytesIO()
        document.save(buf)
        return buf.getvalue()

    return build


@pytest.fixture()
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (32, 32), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def ocr_engine() -> MagicMock:
    """An OCR engine double; tests set ``recognize`` results as needed."""
    engine = MagicMock(spec=BaseOcrEngine)
    engine.recognize.return_value = OcrRecognition(
        text="Recognized assessment text from a scanned page image.",
        confidence=91.0,
    )
    return engine


@pytest.fixture()
def ocr_session(ocr_engine: MagicMock) -> OcrSession:
    return OcrSession(ocr_engine, language="eng")
