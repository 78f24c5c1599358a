"""Health services."""

from .health_service import HealthService, HealthApi

__all__ = [
    "HealthService",
    "HealthApi",
]
