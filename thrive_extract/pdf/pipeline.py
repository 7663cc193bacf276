from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from thrive_extract.documents.models import SourceFile
from thrive_extract.pdf.base import PdfDocumentHandle


@dataclass(slots=True)
class PdfExtractionContext:
    file: SourceFile
    document: PdfDocumentHandle
    text: str = ""
    failed_pages: list[int] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    used_ocr: bool = False


class PdfExtractionStep(ABC):
    @abstractmethod
    def run(self, context: PdfExtractionContext) -> PdfExtractionContext:
        raise NotImplementedError
