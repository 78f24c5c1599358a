"""HTTP clients for the Upload Center backend and the identity endpoint."""

from .base_client import BaseHttpClient, extract_message
from .client import UploadCenterApiClient
from .identity_client import IdentityClient

__all__ = [
    "BaseHttpClient",
    "extract_message",
    "UploadCenterApiClient",
    "IdentityClient",
]
