"""Health feature for upload-center."""

from .entities import HealthStatus
from .services import HealthService, HealthApi

__all__ = [
    "HealthStatus",
    "HealthService",
    "HealthApi",
]
