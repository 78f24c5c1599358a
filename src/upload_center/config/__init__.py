"""Configuration module for upload-center."""

from .constants import (
    MAX_UPLOAD_SIZE_BYTES,
    USER_ID_HEADER,
    Endpoints,
    ResponseStatus,
    RefreshReason,
)
from .settings import ClientSettings, get_settings, reset_settings_cache
from .logging_config import (
    setup_logging,
    get_logger,
    LoggingConfig,
    LogVerbosity,
    LogFormat,
)

__all__ = [
    "MAX_UPLOAD_SIZE_BYTES",
    "USER_ID_HEADER",
    "Endpoints",
    "ResponseStatus",
    "RefreshReason",
    "ClientSettings",
    "get_settings",
    "reset_settings_cache",
    "setup_logging",
    "get_logger",
    "LoggingConfig",
    "LogVerbosity",
    "LogFormat",
]
