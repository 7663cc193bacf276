from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import pymupdf

from thrive_extract.documents.exceptions import PdfEngineUnavailableError, PdfExtractionError
from thrive_extract.documents.models import TextFragment
from thrive_extract.logging.logger import Log
from thrive_extract.pdf.base import BasePdfEngine, PdfDocumentHandle
from thrive_extract.pdf.errors import PASSWORD_PROTECTED_MESSAGE, describe_open_failure

_TEXT_BLOCK = 0


class _PyMuPdfDocument(PdfDocumentHandle):
    def __init__(self, doc: Any) -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return int(self._doc.page_count)

    def text_fragments(self, page_number: int) -> list[TextFragment]:
        page = self._doc.load_page(page_number - 1)
        height = page.rect.height
        fragments: list[TextFragment] = []
        for block in page.get_text("dict")["blocks"]:
            if block.get("type") != _TEXT_BLOCK:
                continue
            for line in block["lines"]:
                for span in line["spans"]:
                    x0, _y0, x1, _y1 = span["bbox"]
                    origin_x, origin_y = span["origin"]
                    fragments.append(
                        TextFragment(
                            text=span["text"],
                            x=origin_x,
                            y=height - origin_y,
                            width=x1 - x0,
                        )
                    )
        return fragments

    def render_png(self, page_number: int, scale: float) -> bytes:
        page = self._doc.load_page(page_number - 1)
        pixmap = page.get_pixmap(matrix=pymupdf.Matrix(scale, scale))
        return bytes(pixmap.tobytes("png"))


class PyMuPdfAdapter(BasePdfEngine):
    """Reads text spans and renders pages using PyMuPDF."""

    name = "pymupdf"

    def ensure_available(self) -> None:
        version = getattr(pymupdf, "__version__", None) or getattr(pymupdf, "VersionBind", None)
        if not version:
            raise PdfEngineUnavailableError(
                "PDF engine 'pymupdf' is not available: MuPDF bindings failed to load"
            )
        Log.debug(f"Using PyMuPDF {version}")

    @contextmanager
    def open(self, pdf_bytes: bytes) -> Iterator[PdfDocumentHandle]:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise describe_open_failure(self.name, exc) from exc
        try:
            if doc.needs_pass:
                raise PdfExtractionError(PASSWORD_PROTECTED_MESSAGE)
            yield _PyMuPdfDocument(doc)
        finally:
            doc.close()
