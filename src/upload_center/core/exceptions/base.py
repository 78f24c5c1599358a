"""Base exceptions for upload-center.

All exceptions inherit from UploadCenterError and carry an error code and
structured details alongside the user-visible message.
"""

from typing import Any, Dict, Optional


class UploadCenterError(Exception):
    """Base exception for all upload-center errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


def create_error_response(exception: UploadCenterError) -> Dict[str, Any]:
    """Create a standardized error payload from an exception.

    Used by front ends that render or serialize failures.
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
