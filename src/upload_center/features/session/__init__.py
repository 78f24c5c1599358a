"""Session feature for upload-center.

- entities/: the User record and the identity provider protocol
- services/: the Session context gating every operation
"""

from .entities import User, IdentityProvider
from .services import Session

__all__ = [
    "User",
    "IdentityProvider",
    "Session",
]
