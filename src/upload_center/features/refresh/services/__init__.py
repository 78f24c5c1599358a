"""Refresh services."""

from .refresh_coordinator import RefreshCoordinator, RefreshSubscription

__all__ = [
    "RefreshCoordinator",
    "RefreshSubscription",
]
