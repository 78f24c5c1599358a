"""In-memory Application -> Location list store.

Only the hierarchy controller writes to it. A per-application lock lets
concurrent first reads share one fetch and keeps readers out while a
location create invalidates and refetches the entry.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..entities.location import Location

logger = logging.getLogger(__name__)


class ResourceCache:
    """Cached location lists keyed by application id."""

    def __init__(self):
        self._entries: Dict[int, List[Location]] = {}
        self._locks: Dict[int, asyncio.Lock] = {}

    def lock(self, application_id: int) -> asyncio.Lock:
        if application_id not in self._locks:
            self._locks[application_id] = asyncio.Lock()
        return self._locks[application_id]

    def get(self, application_id: int) -> Optional[List[Location]]:
        """Return a copy of the cached list, or None on a miss."""
        entry = self._entries.get(application_id)
        return list(entry) if entry is not None else None

    def contains(self, application_id: int) -> bool:
        return application_id in self._entries

    def store(self, application_id: int, locations: List[Location]) -> None:
        self._entries[application_id] = list(locations)
        logger.debug(f"Cached {len(locations)} locations for application {application_id}")

    def invalidate(self, application_id: int) -> None:
        if self._entries.pop(application_id, None) is not None:
            logger.debug(f"Invalidated locations for application {application_id}")

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
