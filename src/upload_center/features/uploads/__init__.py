"""Uploads feature for upload-center.

- entities/: candidates, constraints, receipts and workflow states
- utils/: local file validation
- services/: the upload workflow controller
"""

from .entities import (
    UploadCandidate,
    UploadConstraints,
    UploadReceipt,
    UploadState,
    UploadApi,
)
from .utils import validate_candidate
from .services import UploadController

__all__ = [
    "UploadCandidate",
    "UploadConstraints",
    "UploadReceipt",
    "UploadState",
    "UploadApi",
    "validate_candidate",
    "UploadController",
]
