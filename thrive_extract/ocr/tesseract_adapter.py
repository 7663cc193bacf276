import io

import pytesseract
from PIL import Image

from thrive_extract.logging.logger import Log
from thrive_extract.ocr.base import BaseOcrEngine, OcrRecognition


class TesseractAdapter(BaseOcrEngine):
    """Recognizes text with the Tesseract binary through pytesseract."""

    def __init__(self, tesseract_cmd: str = "", page_segmentation_mode: int = 3) -> None:
        self._tesseract_cmd = tesseract_cmd
        self._config = f"--psm {page_segmentation_mode}"

    def initialize(self) -> None:
        if self._tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self._tesseract_cmd
        version = pytesseract.get_tesseract_version()
        Log.info(f"Tesseract {version} ready")

    def recognize(self, image_bytes: bytes, language: str) -> OcrRecognition:
        with Image.open(io.BytesIO(image_bytes)) as image:
            # Palette and alpha images confuse Tesseract's binarization.
            if image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            text = pytesseract.image_to_string(image, lang=language, config=self._config)
            data = pytesseract.image_to_data(
                image,
                lang=language,
                config=self._config,
                output_type=pytesseract.Output.DICT,
            )
        return OcrRecognition(text=text, confidence=_mean_confidence(data.get("conf", [])))


def _mean_confidence(values: list[object]) -> float:
    scores = []
    for value in values:
        try:
            score = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
        if score >= 0:
            scores.append(score)
    return sum(scores) / len(scores) if scores else 0.0
