from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath


class DocumentKind(str, Enum):
    """Dispatch classification of an uploaded file."""

    PDF = "pdf"
    WORD = "word"
    IMAGE = "image"
    OTHER = "other"


@dataclass(frozen=True)
class SourceFile:
    """An uploaded file held in memory."""

    filename: str
    media_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lower()


@dataclass(frozen=True)
class TextFragment:
    """A positioned run of text from a PDF text layer.

    ``y`` grows upwards, so the top of the page has the largest value.
    """

    text: str
    x: float
    y: float
    width: float = 0.0


@dataclass(frozen=True)
class ProcessedDocument:
    """One extraction result handed to report generation."""

    id: str
    filename: str
    type: str
    content: str
    processed_date: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "filename": self.filename,
            "type": self.type,
            "content": self.content,
            "processed_date": self.processed_date,
        }
