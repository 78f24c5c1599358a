"""Upload Center - async client engine for the Upload Center file service.

Resolves the active user, manages the Application/Location hierarchy,
validates and uploads files, and lists, downloads and shares stored
uploads against the Upload Center backend.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import ClientSettings, get_settings, reset_settings_cache

from .core.exceptions import (
    UploadCenterError,
    ConfigurationError,
    ValidationError,
    NetworkError,
    ServerError,
    AuthError,
    IdentityResolutionError,
    SessionClosedError,
    InvalidStateError,
)

from .features.session import User, Session
from .features.refresh import RefreshCoordinator, RefreshSubscription
from .features.hierarchy import Application, Location, ResourceCache, HierarchyController
from .features.uploads import (
    UploadCandidate,
    UploadConstraints,
    UploadReceipt,
    UploadState,
    UploadController,
)
from .features.registry import Upload, FilterSet, FileRegistryView
from .features.health import HealthStatus, HealthService

from .integrations.api import UploadCenterApiClient, IdentityClient
from .factory import UploadCenterClient, create_client

__all__ = [
    "__version__",
    # Configuration
    "ClientSettings",
    "get_settings",
    "reset_settings_cache",
    # Exceptions
    "UploadCenterError",
    "ConfigurationError",
    "ValidationError",
    "NetworkError",
    "ServerError",
    "AuthError",
    "IdentityResolutionError",
    "SessionClosedError",
    "InvalidStateError",
    # Session
    "User",
    "Session",
    # Refresh
    "RefreshCoordinator",
    "RefreshSubscription",
    # Hierarchy
    "Application",
    "Location",
    "ResourceCache",
    "HierarchyController",
    # Uploads
    "UploadCandidate",
    "UploadConstraints",
    "UploadReceipt",
    "UploadState",
    "UploadController",
    # Registry
    "Upload",
    "FilterSet",
    "FileRegistryView",
    # Health
    "HealthStatus",
    "HealthService",
    # Integrations
    "UploadCenterApiClient",
    "IdentityClient",
    "UploadCenterClient",
    "create_client",
]
