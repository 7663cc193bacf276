import pytest

from thrive_extract.documents.models import DocumentKind, SourceFile
from thrive_extract.documents.placeholders import (
    UNSUPPORTED_FILE_TYPE,
    format_file_size,
    pdf_analysis_placeholder,
    placeholder_for,
)


def _file(filename: str, size: int, media_type: str = "") -> SourceFile:
    return SourceFile(filename=filename, media_type=media_type, data=b"\0" * size)


class TestFormatFileSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 bytes"),
            (10, "10 bytes"),
            (1023, "1023 bytes"),
            (1024, "1 KB"),
            (1536, "2 KB"),
            (50_000, "49 KB"),
            (1024 * 1024, "1 MB"),
            (5 * 1024 * 1024 + 512 * 1024, "6 MB"),
        ],
    )
    def test_formats(self, size: int, expected: str) -> None:
        assert format_file_size(size) == expected


class TestPdfAnalysisPlaceholder:
    def test_names_file_size_and_reason(self) -> None:
        text = pdf_analysis_placeholder(_file("report.pdf", 50_000), "Invalid PDF file")

        assert text.startswith("[PDF Document Analysis Required - report.pdf]")
        assert "- File size: 49 KB" in text
        assert "- Processing issue: Invalid PDF file" in text
        assert "requires manual review" in text
        assert "Partial content extracted" not in text

    def test_includes_partial_text(self) -> None:
        text = pdf_analysis_placeholder(_file("a.pdf", 10), "Minimal text", "Page 1 of 3")
        assert "Partial content extracted:\nPage 1 of 3" in text

    def test_blank_line_precedes_instructions(self) -> None:
        text = pdf_analysis_placeholder(_file("a.pdf", 10), "Minimal text")
        assert "- Processing issue: Minimal text\n\n\n\nIMPORTANT INSTRUCTIONS" in text

    def test_blank_line_follows_partial_text(self) -> None:
        text = pdf_analysis_placeholder(_file("a.pdf", 10), "Minimal text", "Page 1 of 3")
        assert (
            "- Processing issue: Minimal text\n\n"
            "Partial content extracted:\nPage 1 of 3\n\n\n\nIMPORTANT INSTRUCTIONS"
        ) in text


class TestPlaceholderFor:
    def test_word(self) -> None:
        text = placeholder_for(DocumentKind.WORD, _file("iep.docx", 2048), "corrupt")
        assert text.startswith("[Word Document - iep.docx]\nFile size: 2 KB\nError: corrupt")

    def test_image(self) -> None:
        text = placeholder_for(DocumentKind.IMAGE, _file("scan.png", 100), "blurry")
        assert text.startswith("[Image Document - scan.png]\nFile size: 100 bytes\nError: blurry")
        assert "requires manual review" in text

    def test_unsupported(self) -> None:
        text = placeholder_for(
            DocumentKind.OTHER, _file("data.xyz", 10, "chemical/x-xyz"), UNSUPPORTED_FILE_TYPE
        )
        assert text.startswith("[chemical/x-xyz file - data.xyz]\nFile size: 10 bytes")
        assert "requires manual review" in text

    def test_unsupported_without_media_type(self) -> None:
        text = placeholder_for(DocumentKind.OTHER, _file("data.xyz", 10), UNSUPPORTED_FILE_TYPE)
        assert text.startswith("[unknown file - data.xyz]")

    def test_other_failure(self) -> None:
        text = placeholder_for(DocumentKind.OTHER, _file("notes.txt", 0), "empty")
        assert text.startswith("[Error processing notes.txt: empty]")
