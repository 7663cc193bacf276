from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager

from thrive_extract.documents.models import TextFragment


class PdfDocumentHandle(ABC):
    """An opened PDF whose pages can be read and rendered one at a time."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def text_fragments(self, page_number: int) -> list[TextFragment]:
        """Return the text-layer fragments of a 1-based page, unordered."""

    @abstractmethod
    def render_png(self, page_number: int, scale: float) -> bytes:
        """Rasterize a 1-based page and return it as PNG bytes."""


class BasePdfEngine(ABC):
    """Contract for all PDF parsing/rendering adapters."""

    name: str = ""

    @abstractmethod
    def ensure_available(self) -> None:
        """Check the engine can be used.

        Raises:
            PdfEngineUnavailableError: if the underlying library is unusable.
        """

    @abstractmethod
    def open(self, pdf_bytes: bytes) -> AbstractContextManager[PdfDocumentHandle]:
        """Open a PDF from memory.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            A context manager yielding the opened document.

        Raises:
            PdfExtractionError: if the bytes cannot be parsed as a PDF.
        """


def iter_page_numbers(document: PdfDocumentHandle, limit: int | None = None) -> Iterator[int]:
    """Yield 1-based page numbers, optionally capped at ``limit`` pages."""
    last = document.page_count if limit is None else min(document.page_count, limit)
    yield from range(1, last + 1)
