"""Session services."""

from .session_service import Session, AUTHENTICATION_FAILED_MESSAGE

__all__ = [
    "Session",
    "AUTHENTICATION_FAILED_MESSAGE",
]
