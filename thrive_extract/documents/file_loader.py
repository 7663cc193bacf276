import mimetypes
from pathlib import Path

from thrive_extract.documents.exceptions import FileReadError
from thrive_extract.documents.models import SourceFile


def guess_media_type(filename: str) -> str:
    """Best guess of a file's MIME type from its name, or "" if unknown."""
    media_type, _encoding = mimetypes.guess_type(filename)
    return media_type or ""


class FileLoader:
    """Reads files from disk into in-memory SourceFile records."""

    def load(self, path: Path, media_type: str | None = None) -> SourceFile:
        """Read a file's bytes.

        Raises:
            FileNotFoundError: if nothing exists at ``path``.
            FileReadError: if the path exists but cannot be read as a file.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read {path}: {exc}") from exc
        return SourceFile(
            filename=path.name,
            media_type=media_type if media_type is not None else guess_media_type(path.name),
            data=data,
        )

    def load_many(self, paths: list[Path]) -> list[SourceFile]:
        return [self.load(path) for path in paths]
