from thrive_extract.documents.exceptions import PdfExtractionError
from thrive_extract.documents.models import SourceFile
from thrive_extract.documents.outcomes import ExtractionOutcome, Ok, with_note
from thrive_extract.logging.logger import Log
from thrive_extract.pdf.base import BasePdfEngine
from thrive_extract.pdf.pipeline import PdfExtractionContext, PdfExtractionStep


class PdfExtractionService:
    """Extracts a PDF's text layer, falling back to OCR for scanned documents.

    Pipeline: check engine -> open -> text layer -> OCR fallback -> validate.
    Pages are handled one at a time so only one rendered bitmap is alive.
    """

    def __init__(self, engine: BasePdfEngine, steps: list[PdfExtractionStep]) -> None:
        self._engine = engine
        self._steps = steps

    def extract(self, file: SourceFile) -> ExtractionOutcome:
        """Extract text from a PDF file.

        Raises:
            PdfExtractionError: if the engine is unavailable, the PDF cannot be
                parsed, or too little text was recovered.
        """
        Log.info(f"PDF extraction starting: {file.filename} ({file.size} bytes)")
        self._engine.ensure_available()
        try:
            with self._engine.open(file.data) as document:
                Log.info(f"{file.filename}: loaded {document.page_count} pages")
                context = PdfExtractionContext(file=file, document=document)
                for step in self._steps:
                    context = step.run(context)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"PDF processing failed: {exc}") from exc

        outcome: ExtractionOutcome = Ok(context.text.strip())
        for note in context.notes:
            outcome = with_note(outcome, note)
        Log.info(
            f"PDF extraction completed: {file.filename}, {len(context.text.strip())} chars"
            f"{' via OCR' if context.used_ocr else ''}"
        )
        return outcome
