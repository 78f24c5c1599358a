"""Exception hierarchy for upload-center."""

from .base import UploadCenterError, create_error_response
from .client import (
    ConfigurationError,
    ValidationError,
    NetworkError,
    ServerError,
    AuthError,
    IdentityResolutionError,
    SessionClosedError,
    InvalidStateError,
)

__all__ = [
    "UploadCenterError",
    "create_error_response",
    "ConfigurationError",
    "ValidationError",
    "NetworkError",
    "ServerError",
    "AuthError",
    "IdentityResolutionError",
    "SessionClosedError",
    "InvalidStateError",
]
