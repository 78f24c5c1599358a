"""Upload entities - domain objects and protocols."""

from .candidate import UploadCandidate
from .constraints import UploadConstraints, normalize_extension
from .receipt import UploadReceipt
from .upload_state import UploadState
from .protocols import UploadApi

__all__ = [
    "UploadCandidate",
    "UploadConstraints",
    "normalize_extension",
    "UploadReceipt",
    "UploadState",
    "UploadApi",
]
