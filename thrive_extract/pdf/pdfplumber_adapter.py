import io
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import pdfplumber

from thrive_extract.documents.exceptions import PdfEngineUnavailableError
from thrive_extract.documents.models import TextFragment
from thrive_extract.logging.logger import Log
from thrive_extract.pdf.base import BasePdfEngine, PdfDocumentHandle
from thrive_extract.pdf.errors import describe_open_failure

_POINTS_PER_INCH = 72


class _PdfPlumberDocument(PdfDocumentHandle):
    def __init__(self, pdf: Any) -> None:
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def text_fragments(self, page_number: int) -> list[TextFragment]:
        page = self._pdf.pages[page_number - 1]
        # pdfplumber measures "bottom" from the top edge; flip it to PDF space.
        return [
            TextFragment(
                text=line["text"],
                x=float(line["x0"]),
                y=float(page.height - line["bottom"]),
                width=float(line["x1"] - line["x0"]),
            )
            for line in page.extract_text_lines(return_chars=False)
        ]

    def render_png(self, page_number: int, scale: float) -> bytes:
        page = self._pdf.pages[page_number - 1]
        image = page.to_image(resolution=int(_POINTS_PER_INCH * scale))
        buf = io.BytesIO()
        image.original.save(buf, format="PNG")
        return buf.getvalue()


class PdfPlumberAdapter(BasePdfEngine):
    """Reads text lines and renders pages using pdfplumber."""

    name = "pdfplumber"

    def ensure_available(self) -> None:
        version = getattr(pdfplumber, "__version__", None)
        if not version:
            raise PdfEngineUnavailableError(
                "PDF engine 'pdfplumber' is not available: package metadata missing"
            )
        Log.debug(f"Using pdfplumber {version}")

    @contextmanager
    def open(self, pdf_bytes: bytes) -> Iterator[PdfDocumentHandle]:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise describe_open_failure(self.name, exc) from exc
        try:
            # Touch the page tree so structural damage surfaces here.
            _ = pdf.pages
        except Exception as exc:
            pdf.close()
            raise describe_open_failure(self.name, exc) from exc
        try:
            yield _PdfPlumberDocument(pdf)
        finally:
            pdf.close()
