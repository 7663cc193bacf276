import re

from thrive_extract.documents.exceptions import OcrError, OcrNoTextError
from thrive_extract.documents.models import SourceFile
from thrive_extract.documents.outcomes import Degraded, Ok
from thrive_extract.logging.logger import Log
from thrive_extract.ocr.session import OcrSession

OCR_MEDIA_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/bmp",
        "image/tiff",
        "image/webp",
    }
)
_OCR_EXTENSION = re.compile(r"\.(jpe?g|png|gif|bmp|tiff?|webp)$", re.IGNORECASE)

MIN_CONFIDENT_CHARS = 20


class OcrService:
    """Recognizes text in raster images and checks the result is usable."""

    def __init__(
        self, session: OcrSession, min_confident_chars: int = MIN_CONFIDENT_CHARS
    ) -> None:
        self._session = session
        self._min_confident_chars = min_confident_chars

    @property
    def session(self) -> OcrSession:
        return self._session

    def can_process_with_ocr(self, file: SourceFile) -> bool:
        return file.media_type.lower() in OCR_MEDIA_TYPES or bool(
            _OCR_EXTENSION.search(file.filename)
        )

    def perform_ocr(self, file: SourceFile) -> Ok | Degraded:
        """Run OCR on one image file.

        Raises:
            OcrInitializationError: if the engine cannot be started.
            OcrNoTextError: if nothing readable was recognized.
            OcrError: if the engine fails during recognition.
        """
        Log.info(
            f"OCR starting: {file.filename} ({file.size} bytes, {file.media_type or 'unknown'})"
        )
        self._session.ensure_initialized()
        try:
            recognition = self._session.engine.recognize(file.data, self._session.language)
        except Exception as exc:
            raise OcrError(f"OCR failed: {exc}") from exc

        Log.info(
            f"OCR completed: {len(recognition.text)} chars, "
            f"confidence {recognition.confidence:.0f}%"
        )
        return self._validate(recognition.text)

    def _validate(self, text: str) -> Ok | Degraded:
        stripped = text.strip()
        if not stripped:
            raise OcrNoTextError(
                "No text could be extracted via OCR - image may be too low quality "
                "or contain no readable text."
            )
        if len(stripped) < self._min_confident_chars:
            Log.warning("Very little text extracted via OCR - results may be incomplete")
            return Degraded(
                text=text,
                reason="Very little text was recognized via OCR; results may be incomplete.",
            )
        return Ok(text)
