"""Protocol interfaces for session operations."""

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class IdentityProvider(Protocol):
    """Resolves the active user's directory profile."""

    async def get_current_user(self) -> Dict[str, Any]:
        """Return the raw profile of the user running the client."""
        ...
