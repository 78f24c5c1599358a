"""Hierarchy repositories."""

from .location_cache import ResourceCache

__all__ = ["ResourceCache"]
