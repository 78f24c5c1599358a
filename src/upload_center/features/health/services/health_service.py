"""Backend health probe."""

import logging
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from ....utils.error_handling import operation_error_handler
from ..entities.health_status import HealthStatus

logger = logging.getLogger(__name__)


@runtime_checkable
class HealthApi(Protocol):
    async def check_health(self) -> HealthStatus:
        ...


class HealthService:
    """Probes ``GET /health``; needs no active session."""

    def __init__(self, api: HealthApi):
        self._api = api
        self._last_status: Optional[HealthStatus] = None
        self._last_checked: Optional[datetime] = None

    @property
    def last_status(self) -> Optional[HealthStatus]:
        return self._last_status

    @property
    def last_checked(self) -> Optional[datetime]:
        return self._last_checked

    @operation_error_handler("check health")
    async def check(self) -> HealthStatus:
        self._last_checked = datetime.now(timezone.utc)
        try:
            status = await self._api.check_health()
        except Exception:
            self._last_status = None
            raise

        self._last_status = status
        if not status.is_online:
            logger.warning(f"Backend reports server state {status.server!r}")
        return status
