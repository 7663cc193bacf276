from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OcrRecognition:
    """Raw engine output for one image."""

    text: str
    confidence: float = 0.0  # mean word confidence, 0-100


class BaseOcrEngine(ABC):
    """Contract for all OCR engine adapters."""

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the engine for recognition.

        Raises:
            Exception: any engine-specific failure; the session wraps it.
        """

    @abstractmethod
    def recognize(self, image_bytes: bytes, language: str) -> OcrRecognition:
        """Recognize text in an encoded raster image (PNG, JPEG, ...)."""
