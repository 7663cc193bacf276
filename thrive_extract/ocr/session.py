from thrive_extract.documents.exceptions import OcrInitializationError
from thrive_extract.logging.logger import Log
from thrive_extract.ocr.base import BaseOcrEngine


class OcrSession:
    """Caller-owned handle on an OCR engine and its one-time initialization.

    Share one session between every service that should reuse the same
    initialized engine.
    """

    def __init__(self, engine: BaseOcrEngine, language: str = "eng") -> None:
        self.engine = engine
        self.language = language
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def ensure_initialized(self) -> None:
        """Initialize the engine on first use; later calls do nothing."""
        if self._initialized:
            return
        Log.info("Initializing OCR engine")
        try:
            self.engine.initialize()
        except Exception as exc:
            raise OcrInitializationError(f"Failed to initialize OCR: {exc}") from exc
        self._initialized = True
