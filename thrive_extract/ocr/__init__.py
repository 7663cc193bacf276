from thrive_extract.ocr.base import BaseOcrEngine, OcrRecognition
from thrive_extract.ocr.service import OcrService
from thrive_extract.ocr.session import OcrSession

__all__ = ["BaseOcrEngine", "OcrRecognition", "OcrService", "OcrSession"]
