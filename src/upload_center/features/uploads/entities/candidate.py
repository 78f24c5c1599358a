"""Upload candidate - a file picked or dropped for upload."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class UploadCandidate:
    """A file selected for upload, backed by a path or by in-memory content."""

    filename: str
    size: int
    path: Optional[Path] = None
    content: Optional[bytes] = None
    content_type: str = "application/octet-stream"

    def __post_init__(self):
        if not self.filename:
            raise ValueError("Candidate filename must not be empty")
        if self.size < 0:
            raise ValueError("Candidate size must not be negative")
        if self.path is None and self.content is None:
            raise ValueError("Candidate needs a path or content")

    @classmethod
    def from_path(cls, path) -> "UploadCandidate":
        """Build a candidate from a file on disk; size comes from the file system."""
        file_path = Path(path)
        return cls(filename=file_path.name, size=file_path.stat().st_size, path=file_path)

    @classmethod
    def from_bytes(cls, filename: str, content: bytes) -> "UploadCandidate":
        return cls(filename=filename, size=len(content), content=content)

    @property
    def extension(self) -> str:
        """Lower-case extension without the dot; empty when the name has none."""
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[1].lower()

    def read_bytes(self) -> bytes:
        if self.content is not None:
            return self.content
        return self.path.read_bytes()
