from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from thrive_extract.config.settings import Settings
from thrive_extract.documents.file_processing import FileProcessingService
from thrive_extract.documents.models import DocumentKind, ProcessedDocument, SourceFile
from thrive_extract.documents.outcomes import Degraded, ExtractionOutcome, Fatal
from thrive_extract.documents.placeholders import placeholder_for, processing_failed_placeholder
from thrive_extract.logging.logger import Log
from thrive_extract.ocr.service import OcrService
from thrive_extract.ocr.session import OcrSession
from thrive_extract.ocr.tesseract_adapter import TesseractAdapter
from thrive_extract.pdf.extraction_service import PdfExtractionService
from thrive_extract.pdf.factory import PdfEngineFactory
from thrive_extract.pdf.layout import PageTextExtractor
from thrive_extract.pdf.steps import ExtractTextLayerStep, OcrFallbackStep, ValidateTextStep
from thrive_extract.word.extraction_service import WordExtractionService

PDF_MEDIA_TYPE = "application/pdf"
_GENERIC_BINARY = "application/octet-stream"

NO_CONTENT_REASON = "No readable content could be extracted"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DocumentProcessor:
    """Turns a batch of uploads into one ProcessedDocument per file.

    Never raises for a single file: whatever goes wrong, the document's
    content becomes placeholder text asking for manual review. Files are
    processed one after another to bound peak memory.
    """

    def __init__(
        self,
        pdf_service: PdfExtractionService,
        word_service: WordExtractionService,
        ocr_service: OcrService,
        file_service: FileProcessingService,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._pdf_service = pdf_service
        self._word_service = word_service
        self._ocr_service = ocr_service
        self._file_service = file_service
        self._clock = clock

    def classify(self, file: SourceFile) -> DocumentKind:
        media_type = file.media_type.lower()
        if media_type == PDF_MEDIA_TYPE or (
            media_type in ("", _GENERIC_BINARY) and file.extension == ".pdf"
        ):
            return DocumentKind.PDF
        if self._word_service.is_word_document(file):
            return DocumentKind.WORD
        if self._ocr_service.can_process_with_ocr(file):
            return DocumentKind.IMAGE
        return DocumentKind.OTHER

    def extract_text_from_file(self, file: SourceFile) -> str:
        kind = self.classify(file)
        Log.debug(f"{file.filename}: dispatching as {kind.value}")
        outcome = self._extract(kind, file)
        return self._render(kind, file, outcome)

    def process_documents(self, files: Iterable[SourceFile]) -> list[ProcessedDocument]:
        batch = list(files)
        Log.info(f"=== Processing {len(batch)} documents ===")

        processed: list[ProcessedDocument] = []
        for index, file in enumerate(batch):
            Log.info(f"--- Processing document {index + 1}/{len(batch)}: {file.filename} ---")
            started = self._clock()
            doc_id = f"doc_{int(started.timestamp() * 1000)}_{index}"
            try:
                content = self.extract_text_from_file(file)
            except Exception as exc:
                Log.exception(f"Failed to process {file.filename}: {exc}")
                content = processing_failed_placeholder(file, str(exc) or type(exc).__name__)
                doc_id = f"{doc_id}_failed"
            else:
                Log.info(f"Content extraction finished: {len(content)} characters")

            processed.append(
                ProcessedDocument(
                    id=doc_id,
                    filename=file.filename,
                    type=file.media_type,
                    content=content,
                    processed_date=_iso_timestamp(self._clock()),
                )
            )

        total = sum(len(doc.content) for doc in processed)
        Log.info(
            f"=== Document processing complete: {len(processed)} documents, "
            f"{total} characters ==="
        )
        return processed

    def _extract(self, kind: DocumentKind, file: SourceFile) -> ExtractionOutcome:
        try:
            if kind is DocumentKind.PDF:
                return self._pdf_service.extract(file)
            if kind is DocumentKind.WORD:
                return self._word_service.extract(file)
            if kind is DocumentKind.IMAGE:
                return self._ocr_service.perform_ocr(file)
            return self._file_service.extract(file)
        except Exception as exc:
            Log.error(
                f"{kind.value} extraction failed for {file.filename}, using fallback: "
                f"{type(exc).__name__}: {exc}"
            )
            return Fatal(
                reason=str(exc) or type(exc).__name__,
                partial_text=getattr(exc, "partial_text", ""),
            )

    @staticmethod
    def _render(kind: DocumentKind, file: SourceFile, outcome: ExtractionOutcome) -> str:
        if isinstance(outcome, Fatal):
            return placeholder_for(kind, file, outcome.reason, outcome.partial_text)
        if not outcome.text.strip():
            Log.warning(f"{file.filename} appears to be empty, using fallback")
            return placeholder_for(kind, file, NO_CONTENT_REASON)
        if isinstance(outcome, Degraded):
            return f"{outcome.text}\n\n[Note: {outcome.reason}]"
        return outcome.text


def build_document_processor(
    settings: Settings,
    ocr_session: OcrSession | None = None,
) -> DocumentProcessor:
    """Build a DocumentProcessor with all required services.

    Pass ``ocr_session`` to share an already initialized OCR engine.
    """
    Log.configure(settings.log_level)
    if ocr_session is None:
        ocr_session = OcrSession(
            TesseractAdapter(tesseract_cmd=settings.tesseract_cmd),
            language=settings.ocr_language,
        )
    ocr_service = OcrService(ocr_session, min_confident_chars=settings.ocr_min_confident_chars)
    pdf_service = PdfExtractionService(
        engine=PdfEngineFactory.create(settings),
        steps=[
            ExtractTextLayerStep(
                PageTextExtractor(
                    line_tolerance=settings.line_tolerance, word_gap=settings.word_gap
                )
            ),
            OcrFallbackStep(
                ocr_service,
                min_text_length=settings.min_text_length,
                max_pages=settings.ocr_max_pages,
                render_scale=settings.ocr_render_scale,
            ),
            ValidateTextStep(min_text_length=settings.min_text_length),
        ],
    )
    return DocumentProcessor(
        pdf_service=pdf_service,
        word_service=WordExtractionService(),
        ocr_service=ocr_service,
        file_service=FileProcessingService(),
    )
