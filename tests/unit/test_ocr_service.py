from unittest.mock import MagicMock

import pytest

from thrive_extract.documents.exceptions import (
    OcrError,
    OcrInitializationError,
    OcrNoTextError,
)
from thrive_extract.documents.models import SourceFile
from thrive_extract.documents.outcomes import Degraded, Ok
from thrive_extract.ocr.base import OcrRecognition
from thrive_extract.ocr.service import OcrService
from thrive_extract.ocr.session import OcrSession


def _image(filename: str = "scan.png", media_type: str = "image/png") -> SourceFile:
    return SourceFile(filename=filename, media_type=media_type, data=b"\x89PNG fake")


class TestCanProcessWithOcr:
    @pytest.mark.parametrize(
        "media_type",
        ["image/jpeg", "image/jpg", "image/png", "image/gif", "image/bmp", "image/tiff", "image/webp"],
    )
    def test_accepts_supported_media_types(
        self, ocr_session: OcrSession, media_type: str
    ) -> None:
        service = OcrService(ocr_session)
        assert service.can_process_with_ocr(_image("upload", media_type))

    @pytest.mark.parametrize(
        "filename", ["a.JPG", "b.jpeg", "c.png", "d.gif", "e.bmp", "f.tif", "g.TIFF", "h.webp"]
    )
    def test_accepts_supported_extensions(self, ocr_session: OcrSession, filename: str) -> None:
        service = OcrService(ocr_session)
        assert service.can_process_with_ocr(_image(filename, ""))

    @pytest.mark.parametrize(
        ("filename", "media_type"),
        [("notes.txt", "text/plain"), ("scan.pdf", "application/pdf"), ("pic.svg", "image/svg+xml")],
    )
    def test_rejects_other_files(
        self, ocr_session: OcrSession, filename: str, media_type: str
    ) -> None:
        service = OcrService(ocr_session)
        assert not service.can_process_with_ocr(_image(filename, media_type))

    def test_is_idempotent_and_side_effect_free(
        self, ocr_session: OcrSession, ocr_engine: MagicMock
    ) -> None:
        service = OcrService(ocr_session)
        file = _image()
        assert service.can_process_with_ocr(file) == service.can_process_with_ocr(file)
        assert not ocr_session.initialized
        ocr_engine.initialize.assert_not_called()


class TestPerformOcr:
    def test_returns_recognized_text(self, ocr_session: OcrSession, ocr_engine: MagicMock) -> None:
        outcome = OcrService(ocr_session).perform_ocr(_image())

        assert outcome == Ok("Recognized assessment text from a scanned page image.")
        ocr_engine.recognize.assert_called_once_with(b"\x89PNG fake", "eng")

    def test_short_text_is_degraded_not_rejected(
        self, ocr_session: OcrSession, ocr_engine: MagicMock
    ) -> None:
        ocr_engine.recognize.return_value = OcrRecognition(text="  IQ 104  ", confidence=40)

        outcome = OcrService(ocr_session).perform_ocr(_image())

        assert isinstance(outcome, Degraded)
        assert outcome.text == "  IQ 104  "
        assert "Very little text" in outcome.reason

    def test_empty_text_raises_no_text_error(
        self, ocr_session: OcrSession, ocr_engine: MagicMock
    ) -> None:
        ocr_engine.recognize.return_value = OcrRecognition(text=" \n\t ", confidence=0)

        with pytest.raises(OcrNoTextError, match="No text could be extracted via OCR"):
            OcrService(ocr_session).perform_ocr(_image())

    def test_engine_failure_is_wrapped(
        self, ocr_session: OcrSession, ocr_engine: MagicMock
    ) -> None:
        ocr_engine.recognize.side_effect = RuntimeError("tesseract crashed")

        with pytest.raises(OcrError, match="OCR failed: tesseract crashed"):
            OcrService(ocr_session).perform_ocr(_image())

    def test_initializes_engine_once_across_calls(
        self, ocr_session: OcrSession, ocr_engine: MagicMock
    ) -> None:
        service = OcrService(ocr_session)
        service.perform_ocr(_image())
        service.perform_ocr(_image())

        ocr_engine.initialize.assert_called_once()
        assert ocr_session.initialized

    def test_services_sharing_a_session_share_initialization(
        self, ocr_session: OcrSession, ocr_engine: MagicMock
    ) -> None:
        OcrService(ocr_session).perform_ocr(_image())
        OcrService(ocr_session).perform_ocr(_image())

        ocr_engine.initialize.assert_called_once()


class TestOcrSession:
    def test_initialization_failure_is_wrapped(self, ocr_engine: MagicMock) -> None:
        ocr_engine.initialize.side_effect = OSError("tesseract not found")
        session = OcrSession(ocr_engine)

        with pytest.raises(OcrInitializationError, match="Failed to initialize OCR"):
            session.ensure_initialized()
        assert not session.initialized

    def test_retries_initialization_after_failure(self, ocr_engine: MagicMock) -> None:
        ocr_engine.initialize.side_effect = [OSError("missing"), None]
        session = OcrSession(ocr_engine)

        with pytest.raises(OcrInitializationError):
            session.ensure_initialized()
        session.ensure_initialized()

        assert session.initialized
        assert ocr_engine.initialize.call_count == 2
