class ExtractionError(Exception):
    """Base exception for all text extraction errors."""


class FileReadError(ExtractionError):
    """Raised when a file cannot be read from disk."""


class PdfExtractionError(ExtractionError):
    """Raised when text cannot be extracted from a PDF."""


class PdfEngineUnavailableError(PdfExtractionError):
    """Raised when the PDF parsing/rendering engine cannot be used."""


class NoExtractableTextError(PdfExtractionError):
    """Raised when a PDF loads but yields no text at all."""


class MinimalTextError(PdfExtractionError):
    """Raised when a PDF yields too little text to be useful."""

    def __init__(self, message: str, partial_text: str = "") -> None:
        super().__init__(message)
        self.partial_text = partial_text


class OcrError(ExtractionError):
    """Raised when OCR recognition fails."""


class OcrInitializationError(OcrError):
    """Raised when the OCR engine cannot be initialized."""


class OcrNoTextError(OcrError):
    """Raised when OCR finishes but recognizes no readable text."""


class WordExtractionError(ExtractionError):
    """Raised when text cannot be extracted from a Word document."""


class LegacyWordFormatError(WordExtractionError):
    """Raised for binary .doc files, which are not supported."""
