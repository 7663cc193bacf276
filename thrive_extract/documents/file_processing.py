from thrive_extract.documents.models import SourceFile
from thrive_extract.documents.outcomes import ExtractionOutcome, Fatal, Ok
from thrive_extract.documents.placeholders import UNSUPPORTED_FILE_TYPE, format_file_size
from thrive_extract.logging.logger import Log

_UNTYPED_TEXT_EXTENSIONS = frozenset({".txt", ".md", ".csv"})


class FileProcessingService:
    """Reads plain-text uploads; everything else is left for manual review."""

    def is_text_file(self, file: SourceFile) -> bool:
        if file.media_type.lower().startswith("text/"):
            return True
        return not file.media_type and file.extension in _UNTYPED_TEXT_EXTENSIONS

    def extract(self, file: SourceFile) -> ExtractionOutcome:
        Log.info(
            f"File processing starting: {file.filename} "
            f"({file.media_type or 'unknown'}, {format_file_size(file.size)})"
        )
        if not self.is_text_file(file):
            Log.warning(f"Unsupported file type, using placeholder: {file.media_type!r}")
            return Fatal(reason=UNSUPPORTED_FILE_TYPE)

        text = file.data.decode("utf-8-sig", errors="replace")
        Log.info(f"Text file processed: {len(text)} characters extracted")
        return Ok(text)
