"""Constants shared across upload-center features."""

from enum import Enum


MEBIBYTE = 1024 * 1024

# Largest file accepted for upload, inclusive
MAX_UPLOAD_SIZE_BYTES = 100 * MEBIBYTE

# Header carrying the active user's identifier on every backend request
USER_ID_HEADER = "X-User-Id"

GENERIC_UPLOAD_FAILURE = "Upload failed"
GENERIC_SERVER_FAILURE = "Request failed"


class Endpoints:
    """Backend endpoint paths."""

    HEALTH = "/health"
    CONFIG = "/config"
    APPLICATIONS = "/applications"
    UPLOAD = "/upload"
    UPLOADS = "/uploads"
    SHARE = "/share"
    DOWNLOAD = "/download"

    @staticmethod
    def application_locations(application_id: int) -> str:
        return f"/applications/{application_id}/locations"

    @staticmethod
    def share_upload(upload_id: int) -> str:
        return f"/share/{upload_id}"


class ResponseStatus(str, Enum):
    """Values of the ``status`` field in the backend response envelope."""
    SUCCESS = "success"
    ERROR = "error"


class RefreshReason(str, Enum):
    """Mutations that bump the refresh coordinator."""
    APPLICATION_CREATED = "application_created"
    LOCATION_CREATED = "location_created"
    UPLOAD_COMPLETED = "upload_completed"
