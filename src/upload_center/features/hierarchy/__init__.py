"""Hierarchy feature for upload-center.

- entities/: Application, Location and the backend protocol
- repositories/: the in-memory location cache
- services/: the hierarchy controller
"""

from .entities import Application, Location, HierarchyApi
from .repositories import ResourceCache
from .services import HierarchyController

__all__ = [
    "Application",
    "Location",
    "HierarchyApi",
    "ResourceCache",
    "HierarchyController",
]
