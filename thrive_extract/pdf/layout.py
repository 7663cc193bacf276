"""Rebuilds reading-order text from positioned PDF text fragments.

The ordering is a heuristic: fragments within ``line_tolerance`` vertical
units count as one line and are read left to right, everything else is read
top to bottom. Multi-column and rotated layouts can interleave.
"""

from functools import cmp_to_key

from thrive_extract.documents.models import TextFragment
from thrive_extract.logging.logger import Log

LINE_TOLERANCE = 5.0
WORD_GAP = 10.0

_LOW_DENSITY_CHARS_PER_ITEM = 2
_SHORT_PAGE_CHARS = 50


def _reading_order(line_tolerance: float):  # type: ignore[no-untyped-def]
    def compare(a: TextFragment, b: TextFragment) -> float:
        if abs(a.y - b.y) > line_tolerance:
            return b.y - a.y
        return a.x - b.x

    return cmp_to_key(compare)


def sort_fragments(
    fragments: list[TextFragment], line_tolerance: float = LINE_TOLERANCE
) -> list[TextFragment]:
    """Return fragments top-to-bottom, left-to-right within a line."""
    return sorted(fragments, key=_reading_order(line_tolerance))


def reconstruct_page_text(
    fragments: list[TextFragment],
    line_tolerance: float = LINE_TOLERANCE,
    word_gap: float = WORD_GAP,
) -> str:
    """Join fragments into page text with newlines and word spacing."""
    parts: list[str] = []
    last_y: float | None = None
    last_end_x = 0.0

    for fragment in sort_fragments(fragments, line_tolerance):
        text = fragment.text.strip()
        if not text:
            continue
        if last_y is not None:
            if abs(fragment.y - last_y) > line_tolerance:
                parts.append("\n")
            elif fragment.x - last_end_x > word_gap:
                parts.append(" ")
        parts.append(text)
        last_y = fragment.y
        last_end_x = fragment.x + fragment.width

    return "".join(parts)


class PageTextExtractor:
    """Turns one page's text layer into text and reports suspicious pages."""

    def __init__(
        self, line_tolerance: float = LINE_TOLERANCE, word_gap: float = WORD_GAP
    ) -> None:
        self._line_tolerance = line_tolerance
        self._word_gap = word_gap

    def extract(self, fragments: list[TextFragment], page_number: int) -> str:
        Log.debug(f"Page {page_number}: found {len(fragments)} text items")
        if not fragments:
            Log.warning(
                f"Page {page_number}: no text items found - likely image-based or empty"
            )
            return ""

        page_text = reconstruct_page_text(fragments, self._line_tolerance, self._word_gap)

        density = len(page_text) / len(fragments)
        Log.debug(
            f"Page {page_number}: {len(page_text)} chars, density {density:.2f} chars/item"
        )
        if density < _LOW_DENSITY_CHARS_PER_ITEM:
            Log.warning(
                f"Page {page_number}: low text density ({density:.2f}) - "
                "possible extraction issues"
            )
        if len(page_text) < _SHORT_PAGE_CHARS:
            Log.warning(
                f"Page {page_number}: very short content ({len(page_text)} chars) - "
                "possible missing sections"
            )
        return page_text
