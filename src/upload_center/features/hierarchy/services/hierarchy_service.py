"""Hierarchy controller.

Owns the application list and the location cache. Every mutation goes
through the backend and is followed by a fresh fetch; nothing is ever
inserted locally.
"""

import logging
from typing import List, Optional

from ....config.constants import RefreshReason
from ....core.exceptions import ValidationError
from ....utils.error_handling import operation_error_handler, log_operation
from ...session.services import Session
from ...refresh.services import RefreshCoordinator
from ..entities.application import Application
from ..entities.location import Location
from ..entities.protocols import HierarchyApi
from ..repositories.location_cache import ResourceCache

logger = logging.getLogger(__name__)


class HierarchyController:
    """Applications and their Locations as seen by the active user."""

    def __init__(
        self,
        api: HierarchyApi,
        session: Session,
        coordinator: RefreshCoordinator,
        cache: Optional[ResourceCache] = None,
    ):
        self._api = api
        self._session = session
        self._coordinator = coordinator
        self._cache = cache or ResourceCache()
        self._applications: Optional[List[Application]] = None

    @property
    def applications(self) -> List[Application]:
        """Last fetched application list; empty before the first fetch."""
        return list(self._applications or [])

    @property
    def applications_loaded(self) -> bool:
        return self._applications is not None

    @property
    def cache(self) -> ResourceCache:
        return self._cache

    def get_application(self, application_id: int) -> Optional[Application]:
        for application in self._applications or []:
            if application.id == application_id:
                return application
        return None

    def search_applications(self, term: str) -> List[Application]:
        """Case-insensitive substring match on application names."""
        needle = (term or "").strip().lower()
        if not needle:
            return self.applications
        return [app for app in self.applications if needle in app.name.lower()]

    def cached_locations(self, application_id: int) -> Optional[List[Location]]:
        return self._cache.get(application_id)

    def find_location(self, application_id: int, location_id: int) -> Optional[Location]:
        for location in self._cache.get(application_id) or []:
            if location.id == location_id:
                return location
        return None

    @operation_error_handler("list applications")
    @log_operation("list applications", include_result_summary=True)
    async def list_applications(self) -> List[Application]:
        token = self._session.require_active()
        applications = await self._api.list_applications()
        self._session.ensure_current(token)

        self._applications = list(applications)
        return list(applications)

    @operation_error_handler("create application")
    @log_operation("create application", include_timing=True, include_result_summary=True)
    async def create_application(self, name: str) -> Application:
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Application name is required", field="name")

        token = self._session.require_active()
        application = await self._api.create_application(clean_name)
        logger.info(f"Created application {application.id} ({application.name})")

        try:
            self._session.ensure_current(token)
            await self.list_applications()
        finally:
            await self._coordinator.bump(RefreshReason.APPLICATION_CREATED)

        return application

    @operation_error_handler("list locations")
    @log_operation("list locations", include_result_summary=True)
    async def list_locations(self, application_id: int) -> List[Location]:
        """Cached per application; concurrent first requests share one fetch."""
        token = self._session.require_active()

        cached = self._cache.get(application_id)
        if cached is not None:
            return cached

        async with self._cache.lock(application_id):
            # Another caller may have filled the entry while we waited
            cached = self._cache.get(application_id)
            if cached is not None:
                return cached

            locations = await self._api.list_locations(application_id)
            self._session.ensure_current(token)
            self._cache.store(application_id, locations)
            return list(locations)

    @operation_error_handler("create location")
    @log_operation("create location", include_timing=True, include_result_summary=True)
    async def create_location(self, application_id: int, location_name: str, path: str) -> Location:
        clean_name = (location_name or "").strip()
        clean_path = (path or "").strip()
        if not clean_name:
            raise ValidationError("Location name is required", field="location_name")
        if not clean_path:
            raise ValidationError("Location path is required", field="path")
        if self._applications is not None and self.get_application(application_id) is None:
            raise ValidationError(f"Unknown application: {application_id}", field="application_id")

        token = self._session.require_active()
        location = await self._api.create_location(application_id, clean_name, clean_path)
        logger.info(f"Created location {location.id} ({location.location_name}) in application {application_id}")

        try:
            async with self._cache.lock(application_id):
                self._session.ensure_current(token)
                self._cache.invalidate(application_id)
                fresh = await self._api.list_locations(application_id)
                self._session.ensure_current(token)
                self._cache.store(application_id, fresh)
        finally:
            await self._coordinator.bump(RefreshReason.LOCATION_CREATED)

        return location

    def reset(self, reason: str = "") -> None:
        """Drop the application list and every cached location list."""
        self._applications = None
        self._cache.clear()
