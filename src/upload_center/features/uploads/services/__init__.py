"""Upload services."""

from .upload_service import UploadController

__all__ = ["UploadController"]
