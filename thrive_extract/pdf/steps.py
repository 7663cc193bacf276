from thrive_extract.documents.exceptions import (
    MinimalTextError,
    NoExtractableTextError,
    OcrInitializationError,
)
from thrive_extract.documents.models import SourceFile
from thrive_extract.logging.logger import Log
from thrive_extract.ocr.service import OcrService
from thrive_extract.pdf.base import iter_page_numbers
from thrive_extract.pdf.layout import PageTextExtractor
from thrive_extract.pdf.pipeline import PdfExtractionContext, PdfExtractionStep

MIN_TEXT_LENGTH = 50
OCR_MAX_PAGES = 10
OCR_RENDER_SCALE = 2.0

_PAGE_SEPARATOR = "\n\n"


class ExtractTextLayerStep(PdfExtractionStep):
    def __init__(self, page_extractor: PageTextExtractor) -> None:
        self._page_extractor = page_extractor

    def run(self, context: PdfExtractionContext) -> PdfExtractionContext:
        document = context.document
        Log.info(f"{context.file.filename}: reading text layer of {document.page_count} pages")
        for page_number in iter_page_numbers(document):
            try:
                fragments = document.text_fragments(page_number)
                page_text = self._page_extractor.extract(fragments, page_number)
            except Exception as exc:
                Log.error(
                    f"Page {page_number}: text extraction failed, page content will be "
                    f"missing: {type(exc).__name__}: {exc}"
                )
                context.failed_pages.append(page_number)
                continue
            context.text += page_text + _PAGE_SEPARATOR

        if document.page_count:
            Log.info(
                f"{context.file.filename}: text layer gave {len(context.text)} chars, "
                f"{len(context.text) // document.page_count} per page"
            )
        if context.failed_pages:
            pages = ", ".join(str(n) for n in context.failed_pages)
            context.notes.append(
                f"Text could not be read from page(s) {pages}; that content is missing."
            )
        return context


class OcrFallbackStep(PdfExtractionStep):
    """Re-reads scanned PDFs by rendering pages and running OCR on them."""

    def __init__(
        self,
        ocr_service: OcrService,
        min_text_length: int = MIN_TEXT_LENGTH,
        max_pages: int = OCR_MAX_PAGES,
        render_scale: float = OCR_RENDER_SCALE,
    ) -> None:
        self._ocr = ocr_service
        self._min_text_length = min_text_length
        self._max_pages = max_pages
        self._render_scale = render_scale

    def run(self, context: PdfExtractionContext) -> PdfExtractionContext:
        original_length = len(context.text.strip())
        if original_length >= self._min_text_length:
            return context

        Log.warning(
            f"{context.file.filename}: limited text extracted ({original_length} chars), "
            "this may be a scanned PDF; attempting OCR fallback"
        )
        try:
            self._ocr.session.ensure_initialized()
        except OcrInitializationError as exc:
            Log.warning(f"OCR fallback unavailable, keeping text layer: {exc}")
            return context

        ocr_text = self._ocr_pages(context)
        if len(ocr_text) <= original_length:
            Log.warning("OCR fallback did not improve text extraction")
            return context

        Log.info(f"OCR fallback successful, using {len(ocr_text)} chars of OCR text")
        context.text = ocr_text
        context.used_ocr = True
        context.notes = []
        page_count = context.document.page_count
        if page_count > self._max_pages:
            context.notes.append(
                f"This PDF contains {page_count} pages, but OCR processing was limited "
                f"to the first {self._max_pages} pages for performance reasons."
            )
        return context

    def _ocr_pages(self, context: PdfExtractionContext) -> str:
        document = context.document
        pages_to_read = min(document.page_count, self._max_pages)
        Log.info(f"Starting OCR for {pages_to_read} pages (limit: {self._max_pages})")

        texts: list[str] = []
        for page_number in iter_page_numbers(document, limit=self._max_pages):
            try:
                png = document.render_png(page_number, self._render_scale)
                image = SourceFile(
                    filename=f"page_{page_number}.png", media_type="image/png", data=png
                )
                outcome = self._ocr.perform_ocr(image)
            except Exception as exc:
                Log.error(f"OCR failed for page {page_number}: {type(exc).__name__}: {exc}")
                continue
            texts.append(outcome.text)
            Log.debug(f"OCR completed for page {page_number}")

        if document.page_count > self._max_pages:
            Log.warning(
                f"PDF has {document.page_count} pages but OCR was limited to "
                f"{self._max_pages} pages"
            )
        return _PAGE_SEPARATOR.join(texts).strip()


class ValidateTextStep(PdfExtractionStep):
    def __init__(self, min_text_length: int = MIN_TEXT_LENGTH) -> None:
        self._min_text_length = min_text_length

    def run(self, context: PdfExtractionContext) -> PdfExtractionContext:
        length = len(context.text.strip())
        if length == 0:
            raise NoExtractableTextError(
                "No extractable text found - this may be a scanned document or "
                "image-based PDF. The PDF loaded successfully but contains no readable text."
            )
        if length < self._min_text_length:
            raise MinimalTextError(
                "Minimal text extracted - document may be primarily images",
                partial_text=context.text.strip(),
            )
        return context
