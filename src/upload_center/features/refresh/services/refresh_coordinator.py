"""Change notification between the hierarchy, upload and registry views.

A single integer version is bumped once per successful mutation. Each
subscription remembers the last version it reacted to and re-runs its
callback at most once per observed change, so several bumps that land
before a subscriber gets to run collapse into one re-fetch.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

from ....config.constants import RefreshReason
from ....core.exceptions import UploadCenterError

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[], Awaitable[Any]]


class RefreshCoordinator:
    """Owns the data version counter."""

    def __init__(self):
        self._version = 0
        self._condition = asyncio.Condition()
        self._subscriptions: List["RefreshSubscription"] = []
        self._last_reason: Optional[RefreshReason] = None

    @property
    def version(self) -> int:
        return self._version

    @property
    def last_reason(self) -> Optional[RefreshReason]:
        return self._last_reason

    @property
    def subscriptions(self) -> List["RefreshSubscription"]:
        return list(self._subscriptions)

    async def bump(self, reason: RefreshReason) -> int:
        """Record one successful mutation and wake every watcher."""
        async with self._condition:
            self._version += 1
            self._last_reason = reason
            self._condition.notify_all()
        logger.debug(f"Data version bumped to {self._version} ({reason.value})")
        return self._version

    def subscribe(self, name: str, callback: RefreshCallback) -> "RefreshSubscription":
        """Register a dependent; it starts in sync with the current version."""
        subscription = RefreshSubscription(self, name, callback)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: "RefreshSubscription") -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    async def sync_all(self) -> int:
        """Run every stale subscription once; returns how many reacted."""
        reacted = 0
        for subscription in list(self._subscriptions):
            if await subscription.sync():
                reacted += 1
        return reacted

    async def wait_for_change(self, seen: int) -> int:
        async with self._condition:
            await self._condition.wait_for(lambda: self._version != seen)
            return self._version


class RefreshSubscription:
    """One dependent's view of the coordinator."""

    def __init__(self, coordinator: RefreshCoordinator, name: str, callback: RefreshCallback):
        self._coordinator = coordinator
        self._callback = callback
        self.name = name
        self.last_seen = coordinator.version

    @property
    def is_stale(self) -> bool:
        return self._coordinator.version != self.last_seen

    async def sync(self) -> bool:
        """React to the latest version if it changed since the last reaction.

        ``last_seen`` moves before the callback runs; bumps that arrive
        while it is running are picked up by the next call.
        """
        target = self._coordinator.version
        if target == self.last_seen:
            return False

        logger.debug(f"Refreshing {self.name} for version {target} (last seen {self.last_seen})")
        self.last_seen = target
        await self._callback()
        return True

    async def watch(self) -> None:
        """Long-running loop; cancel the task to stop it."""
        while True:
            await self._coordinator.wait_for_change(self.last_seen)
            try:
                await self.sync()
            except UploadCenterError as e:
                logger.warning(f"Refresh of {self.name} failed: {e}")
            except Exception as e:
                logger.error(f"Unexpected error refreshing {self.name}: {e}")

    def start(self) -> asyncio.Task:
        """Run ``watch`` as a background task on the running loop."""
        return asyncio.get_running_loop().create_task(self.watch(), name=f"refresh-{self.name}")
