"""Composition root for the upload-center client.

Builds the session, the HTTP clients and the feature controllers from
settings and wires the session-clear and refresh hooks between them.
"""

import asyncio
import logging
from typing import List, Optional

import httpx

from .config.settings import ClientSettings, get_settings
from .features.session import Session, User
from .features.refresh import RefreshCoordinator, RefreshSubscription
from .features.hierarchy import HierarchyController, ResourceCache
from .features.uploads import UploadController
from .features.registry import FileRegistryView, FileSaver
from .features.health import HealthService
from .integrations.api import UploadCenterApiClient, IdentityClient

logger = logging.getLogger(__name__)


class UploadCenterClient:
    """One user's client: session, controllers and their shared state."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        identity_transport: Optional[httpx.AsyncBaseTransport] = None,
        saver: Optional[FileSaver] = None,
    ):
        self.settings = settings or get_settings()

        self.identity = IdentityClient(
            self.settings.user_api_url,
            timeout=self.settings.identity_timeout,
            transport=identity_transport,
            verify_ssl=self.settings.verify_ssl,
        )
        self.session = Session(self.identity)

        self.api = UploadCenterApiClient(
            self.settings.api_url,
            timeout=self.settings.request_timeout,
            header_provider=self.session.headers,
            on_unauthorized=lambda: self.session.clear("unauthorized"),
            transport=transport,
            verify_ssl=self.settings.verify_ssl,
        )

        self.coordinator = RefreshCoordinator()
        self.cache = ResourceCache()
        self.hierarchy = HierarchyController(self.api, self.session, self.coordinator, self.cache)
        self.uploads = UploadController(
            self.api,
            self.hierarchy,
            self.session,
            self.coordinator,
            settings=self.settings,
        )
        self.registry = FileRegistryView(self.api, self.session, saver=saver, settings=self.settings)
        self.health = HealthService(self.api)

        self.subscriptions: List[RefreshSubscription] = [
            self.coordinator.subscribe("applications", self.uploads.refresh_applications),
            self.coordinator.subscribe("uploads", self.registry.query),
        ]
        self._watchers: List[asyncio.Task] = []

        self.session.add_clear_listener(self.hierarchy.reset)
        self.session.add_clear_listener(self.uploads.reset)
        self.session.add_clear_listener(self.registry.reset)

        logger.debug(f"Upload center client configured for {self.settings.api_url}")

    async def start(self) -> User:
        """Resolve the active user."""
        return await self.session.start()

    async def refresh(self) -> int:
        """Run every subscriber whose data went stale since it last ran."""
        return await self.coordinator.sync_all()

    def start_watchers(self) -> None:
        """Keep subscribers up to date in background tasks."""
        if self._watchers:
            return
        self._watchers = [subscription.start() for subscription in self.subscriptions]

    async def stop_watchers(self) -> None:
        for task in self._watchers:
            task.cancel()
        if self._watchers:
            await asyncio.gather(*self._watchers, return_exceptions=True)
        self._watchers = []

    def logout(self) -> None:
        self.session.logout()

    async def close(self) -> None:
        await self.stop_watchers()
        await self.api.close()
        await self.identity.close()

    async def __aenter__(self) -> "UploadCenterClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def create_client(settings: Optional[ClientSettings] = None, **kwargs) -> UploadCenterClient:
    """Build a client from settings (environment-derived when omitted)."""
    return UploadCenterClient(settings=settings, **kwargs)
