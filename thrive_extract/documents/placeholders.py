"""Fallback content for files whose text could not be extracted.

Every placeholder names the file, states its size and tells the report
generator that the document needs manual review, so a failed extraction
still produces a usable prompt section.
"""

import math

from thrive_extract.documents.models import DocumentKind, SourceFile

UNSUPPORTED_FILE_TYPE = "Unsupported file type"

_MANUAL_REVIEW_NOTE = (
    "Please manually review and provide key findings for the accommodation assessment."
)


def format_file_size(size_bytes: int) -> str:
    """Render a byte count as bytes, KB or MB, rounding half up."""
    if size_bytes < 1024:
        return f"{size_bytes} bytes"
    if size_bytes < 1024 * 1024:
        return f"{math.floor(size_bytes / 1024 + 0.5)} KB"
    return f"{math.floor(size_bytes / (1024 * 1024) + 0.5)} MB"


def pdf_analysis_placeholder(
    file: SourceFile, reason: str, partial_text: str | None = None
) -> str:
    partial = f"Partial content extracted:\n{partial_text}\n\n" if partial_text else ""
    return f"""[PDF Document Analysis Required - {file.filename}]

File Information:
- Filename: {file.filename}
- File size: {format_file_size(file.size)}
- Processing issue: {reason}

{partial}

IMPORTANT INSTRUCTIONS FOR ANALYSIS:
This document requires manual review for accommodation assessment. Based on the filename and context, this appears to be a neuropsychological evaluation or related assessment document.

Please analyze this document and provide:

1. FUNCTIONAL IMPACTS: Identify specific barriers in academic domains such as:
   - Reading comprehension and speed
   - Written expression difficulties
   - Attention and concentration issues
   - Processing speed limitations
   - Memory and learning challenges
   - Executive functioning deficits

2. EVIDENCE BASE: Note any standardized test scores, clinical observations, or documented limitations that support accommodation needs.

3. ACCOMMODATION RECOMMENDATIONS: Based on typical patterns for neuropsychological evaluations, consider accommodations such as:
   - Extended time for examinations
   - Reduced distraction testing environment
   - Note-taking assistance or recorded lectures
   - Alternative format materials
   - Breaks during testing
   - Use of assistive technology

Please provide specific, evidence-based recommendations even though the full document text is not available for automatic processing."""


def word_placeholder(file: SourceFile, reason: str) -> str:
    return (
        f"[Word Document - {file.filename}]\n"
        f"File size: {format_file_size(file.size)}\n"
        f"Error: {reason}\n"
        "Note: This Word document could not be processed automatically and "
        f"requires manual review. {_MANUAL_REVIEW_NOTE}"
    )


def image_placeholder(file: SourceFile, reason: str) -> str:
    return (
        f"[Image Document - {file.filename}]\n"
        f"File size: {format_file_size(file.size)}\n"
        f"Error: {reason}\n"
        "Note: This image document could not be processed with OCR and "
        f"requires manual review. {_MANUAL_REVIEW_NOTE}"
    )


def unsupported_placeholder(file: SourceFile) -> str:
    media_type = file.media_type or "unknown"
    return (
        f"[{media_type} file - {file.filename}]\n"
        f"File size: {format_file_size(file.size)}\n"
        "Note: This file type requires manual review. Please provide a summary of "
        "the key findings and recommendations from this document for the "
        "accommodation assessment."
    )


def processing_failed_placeholder(file: SourceFile, reason: str) -> str:
    return (
        f"[Error processing {file.filename}: {reason}]\n"
        "Note: This document could not be processed automatically and requires "
        f"manual review. {_MANUAL_REVIEW_NOTE}"
    )


def placeholder_for(
    kind: DocumentKind, file: SourceFile, reason: str, partial_text: str = ""
) -> str:
    """Pick the fallback text matching the extractor that failed."""
    if kind is DocumentKind.PDF:
        return pdf_analysis_placeholder(file, reason, partial_text or None)
    if kind is DocumentKind.WORD:
        return word_placeholder(file, reason)
    if kind is DocumentKind.IMAGE:
        return image_placeholder(file, reason)
    if reason == UNSUPPORTED_FILE_TYPE:
        return unsupported_placeholder(file)
    return processing_failed_placeholder(file, reason)

