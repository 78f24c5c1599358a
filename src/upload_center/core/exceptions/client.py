"""Client-side error taxonomy.

ValidationError is raised before any request is sent. NetworkError,
ServerError and AuthError describe failed requests. SessionClosedError
marks work that outlived the session it started in.
"""

from typing import Any, Dict, Optional

from .base import UploadCenterError


class ConfigurationError(UploadCenterError):
    """Raised when client settings are missing or invalid."""
    pass


class ValidationError(UploadCenterError):
    """Raised for client-detected input problems (never sent to the network)."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details, **kwargs)
        self.field = field


class NetworkError(UploadCenterError):
    """Raised when the transport fails or times out."""

    def __init__(self, message: str, timeout: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.timeout = timeout


class ServerError(UploadCenterError):
    """Raised for non-2xx responses or an ``error`` response envelope."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        details = kwargs.pop("details", None) or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details=details, **kwargs)
        self.status_code = status_code
        self.payload = payload or {}


class AuthError(ServerError):
    """Raised on 401 responses; invalidates the whole session."""
    pass


class IdentityResolutionError(AuthError):
    """Raised when the active user's profile cannot be resolved at session start."""
    pass


class SessionClosedError(UploadCenterError):
    """Raised when no session is active or it was cleared while a request was in flight."""
    pass


class InvalidStateError(UploadCenterError):
    """Raised when an operation is not allowed in the current workflow state."""
    pass
