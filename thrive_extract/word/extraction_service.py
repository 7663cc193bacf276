import io
import re

import docx

from thrive_extract.documents.exceptions import LegacyWordFormatError, WordExtractionError
from thrive_extract.documents.models import SourceFile
from thrive_extract.documents.outcomes import Ok
from thrive_extract.logging.logger import Log

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOCM_MEDIA_TYPE = "application/vnd.ms-word.document.macroEnabled.12"
LEGACY_DOC_MEDIA_TYPE = "application/msword"

WORD_MEDIA_TYPES = frozenset({DOCX_MEDIA_TYPE, DOCM_MEDIA_TYPE, LEGACY_DOC_MEDIA_TYPE})
_WORD_EXTENSION = re.compile(r"\.(docx?|docm)$", re.IGNORECASE)
_LEGACY_EXTENSION = re.compile(r"\.doc$", re.IGNORECASE)

MIN_WORD_TEXT_LENGTH = 10


class WordExtractionService:
    """Extracts raw text from .docx/.docm files using python-docx."""

    def is_word_document(self, file: SourceFile) -> bool:
        return file.media_type in WORD_MEDIA_TYPES or bool(_WORD_EXTENSION.search(file.filename))

    def extract(self, file: SourceFile) -> Ok:
        """Extract paragraph and table text from a Word document.

        Raises:
            LegacyWordFormatError: for binary .doc files.
            WordExtractionError: if the file cannot be parsed or holds no text.
        """
        if self._is_legacy_doc(file):
            raise LegacyWordFormatError(
                "Legacy .doc files are not supported. Please convert to .docx format "
                "before uploading."
            )

        Log.info(f"Word extraction starting: {file.filename} ({file.size} bytes)")
        try:
            document = docx.Document(io.BytesIO(file.data))
        except Exception as exc:
            raise WordExtractionError(
                f"Failed to extract text from Word document: {exc}"
            ) from exc

        text = "\n".join(_iter_text_blocks(document))
        Log.info(f"Word extraction completed: {len(text)} chars")
        self._validate(text)
        return Ok(text)

    @staticmethod
    def _is_legacy_doc(file: SourceFile) -> bool:
        return file.media_type == LEGACY_DOC_MEDIA_TYPE or bool(
            _LEGACY_EXTENSION.search(file.filename)
        )

    @staticmethod
    def _validate(text: str) -> None:
        stripped = text.strip()
        if not stripped:
            raise WordExtractionError(
                "No text found in Word document - document may be empty or corrupted."
            )
        if len(stripped) < MIN_WORD_TEXT_LENGTH:
            raise WordExtractionError(
                "Minimal text extracted - document may be primarily images or tables."
            )


def _iter_text_blocks(document):  # type: ignore[no-untyped-def]
    for paragraph in document.paragraphs:
        yield paragraph.text
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                yield "\t".join(cells)
