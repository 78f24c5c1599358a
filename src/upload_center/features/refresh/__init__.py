"""Refresh feature for upload-center.

Version counter that tells dependent views to re-fetch after a mutation.
"""

from .services import RefreshCoordinator, RefreshSubscription

__all__ = [
    "RefreshCoordinator",
    "RefreshSubscription",
]
