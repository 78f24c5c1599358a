"""Hierarchy entities - domain objects and protocols."""

from .application import Application
from .location import Location
from .protocols import HierarchyApi

__all__ = [
    "Application",
    "Location",
    "HierarchyApi",
]
