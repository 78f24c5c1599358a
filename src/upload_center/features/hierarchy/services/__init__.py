"""Hierarchy services."""

from .hierarchy_service import HierarchyController

__all__ = ["HierarchyController"]
