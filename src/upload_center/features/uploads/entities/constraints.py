"""Server-declared upload constraints."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from ....config.constants import MAX_UPLOAD_SIZE_BYTES


def normalize_extension(extension: str) -> str:
    """``".PDF"`` and ``"pdf"`` both become ``"pdf"``."""
    return extension.strip().lstrip(".").lower()


@dataclass(frozen=True)
class UploadConstraints:
    """Allowed extensions and size limit for uploads.

    An empty ``allowed_extensions`` set allows every extension.
    """

    allowed_extensions: FrozenSet[str] = field(default_factory=frozenset)
    max_file_size: int = MAX_UPLOAD_SIZE_BYTES

    @classmethod
    def from_extensions(
        cls,
        extensions: Optional[Iterable[str]],
        max_file_size: int = MAX_UPLOAD_SIZE_BYTES,
    ) -> "UploadConstraints":
        normalized = frozenset(
            normalize_extension(ext) for ext in (extensions or []) if ext and normalize_extension(ext)
        )
        return cls(allowed_extensions=normalized, max_file_size=max_file_size)

    @classmethod
    def allow_all(cls, max_file_size: int = MAX_UPLOAD_SIZE_BYTES) -> "UploadConstraints":
        return cls(allowed_extensions=frozenset(), max_file_size=max_file_size)

    @property
    def allows_all_extensions(self) -> bool:
        return not self.allowed_extensions

    def describe_extensions(self) -> str:
        """Comma separated, sorted list for user-facing messages."""
        return ", ".join(sorted(self.allowed_extensions))
