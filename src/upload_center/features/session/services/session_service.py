"""Session context for the active user.

The session is the single owner of "who is using the client". It is
created explicitly, started by resolving the user through the identity
endpoint, and cleared on logout or when the backend rejects the user's
credentials. Every other component receives it by injection.

Clearing bumps ``generation``. Components capture a token from
``require_active()`` before awaiting a request and call
``ensure_current(token)`` before applying its result, so responses that
arrive after a logout are discarded instead of repopulating state.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from ....config.constants import USER_ID_HEADER
from ....core.exceptions import (
    UploadCenterError,
    IdentityResolutionError,
    SessionClosedError,
)
from ..entities.user import User
from ..entities.protocols import IdentityProvider

logger = logging.getLogger(__name__)

AUTHENTICATION_FAILED_MESSAGE = "Failed to authenticate. Please ensure you are logged into the domain."

ClearListener = Callable[[str], Any]


class Session:
    """Holds the authenticated user and gates every client operation."""

    def __init__(self, identity_provider: IdentityProvider):
        self._identity_provider = identity_provider
        self._user: Optional[User] = None
        self._generation = 0
        self._clear_listeners: List[ClearListener] = []
        self._start_lock = asyncio.Lock()

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def generation(self) -> int:
        """Number of times the session has been cleared."""
        return self._generation

    async def start(self) -> User:
        """Resolve the active user; a failure here is fatal for the session.

        Returns the already active user when called twice.
        """
        async with self._start_lock:
            if self._user is not None:
                return self._user

            token = self._generation
            try:
                profile = await self._identity_provider.get_current_user()
            except UploadCenterError as e:
                logger.error(f"Authentication error: {e}")
                raise IdentityResolutionError(
                    AUTHENTICATION_FAILED_MESSAGE,
                    details={"cause": str(e)},
                ) from e

            if token != self._generation:
                raise SessionClosedError("Session was cleared while resolving the user")

            try:
                user = User.from_profile(profile or {})
            except ValueError as e:
                logger.error(f"Identity endpoint returned an unusable profile: {e}")
                raise IdentityResolutionError(AUTHENTICATION_FAILED_MESSAGE) from e

            self._user = user
            logger.info(f"Session started for {user.user_name} ({user.display_name})")
            return user

    def require_active(self) -> int:
        """Return the current generation token or raise when nobody is signed in."""
        if self._user is None:
            raise SessionClosedError("No active session")
        return self._generation

    def is_current(self, token: int) -> bool:
        return self._user is not None and token == self._generation

    def ensure_current(self, token: int) -> None:
        """Raise when the session was cleared after ``token`` was taken."""
        if not self.is_current(token):
            raise SessionClosedError("Session was cleared while the request was in flight")

    def headers(self) -> Dict[str, str]:
        """Identity headers attached to backend requests."""
        if self._user is None:
            return {}
        return {USER_ID_HEADER: self._user.user_name}

    def add_clear_listener(self, listener: ClearListener) -> None:
        """Register a callback run with the clear reason whenever the session is wiped."""
        self._clear_listeners.append(listener)

    def clear(self, reason: str = "logout") -> None:
        """Wipe the user and all client state tied to it."""
        previous = self._user
        self._user = None
        self._generation += 1

        if previous is not None:
            logger.info(f"Session cleared for {previous.user_name}: {reason}")

        for listener in list(self._clear_listeners):
            try:
                listener(reason)
            except Exception as e:
                logger.error(f"Session clear listener failed: {e}")

    def logout(self) -> None:
        self.clear("logout")
