"""Client for the external user-identity endpoint."""

import logging
from typing import Any, Dict

from ...core.exceptions import ServerError
from .base_client import BaseHttpClient

logger = logging.getLogger(__name__)


class IdentityClient(BaseHttpClient):
    """Fetches the profile of the user running the client.

    The endpoint is called at exactly the configured URL, takes no body and
    answers with the directory profile directly (no response envelope).
    """

    async def get_current_user(self) -> Dict[str, Any]:
        profile = await self._request_json("GET", self.base_url)
        if not isinstance(profile, dict):
            raise ServerError("Identity endpoint returned an unexpected payload")
        logger.debug(f"Resolved identity profile for {profile.get('userName')}")
        return profile
