"""Tests for the backend health probe."""

from unittest.mock import AsyncMock

import pytest

from upload_center.core.exceptions import NetworkError
from upload_center.features.health import HealthService, HealthStatus


class TestHealthService:
    """Test health checks."""

    @pytest.mark.asyncio
    async def test_check_records_status(self):
        api = AsyncMock()
        api.check_health = AsyncMock(return_value=HealthStatus(server="running", debug_mode=True))
        service = HealthService(api)

        status = await service.check()

        assert status.is_online
        assert service.last_status is status
        assert service.last_checked is not None

    @pytest.mark.asyncio
    async def test_failed_probe_clears_status(self):
        api = AsyncMock()
        api.check_health = AsyncMock(side_effect=[HealthStatus(server="running", debug_mode=False), NetworkError("offline")])
        service = HealthService(api)

        await service.check()
        with pytest.raises(NetworkError):
            await service.check()

        assert service.last_status is None

    def test_status_from_payload(self):
        status = HealthStatus.from_dict({"server": "stopped", "debug_mode": False})
        assert not status.is_online
