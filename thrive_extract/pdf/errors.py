from thrive_extract.documents.exceptions import PdfExtractionError

PASSWORD_PROTECTED_MESSAGE = "PDF is password protected and cannot be processed."


def _root_cause(exc: BaseException) -> BaseException:
    """Unwrap library wrappers such as pdfplumber's ``PdfminerException``."""
    if exc.args and isinstance(exc.args[0], BaseException):
        return exc.args[0]
    if not str(exc) and exc.__context__ is not None:
        return exc.__context__
    return exc


def describe_open_failure(engine: str, exc: Exception) -> PdfExtractionError:
    """Translate a library error raised while opening a PDF."""
    cause = _root_cause(exc)
    haystack = (
        f"{type(exc).__name__} {exc} {type(cause).__name__} {cause}".lower()
    )
    if "password" in haystack or "encrypt" in haystack:
        return PdfExtractionError(PASSWORD_PROTECTED_MESSAGE)
    detail = str(cause) or str(exc) or type(cause).__name__
    return PdfExtractionError(
        "Invalid PDF file - the file may be corrupted or not a valid PDF. "
        f"({engine}: {detail})"
    )
