"""Session entities - domain objects and protocols."""

from .user import User
from .protocols import IdentityProvider

__all__ = [
    "User",
    "IdentityProvider",
]
