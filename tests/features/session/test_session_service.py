"""Tests for the session context."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from upload_center.core.exceptions import IdentityResolutionError, NetworkError, SessionClosedError
from upload_center.features.session import Session, User
from upload_center.features.session.services import AUTHENTICATION_FAILED_MESSAGE


class TestUser:
    """Test the user entity."""

    def test_from_profile_maps_camel_case_keys(self, sample_profile):
        user = User.from_profile(sample_profile)

        assert user.user_name == "jdoe"
        assert user.display_name == "Jane Doe"
        assert user.employee_id == "E1001"
        assert user.email_address == "jane.doe@example.com"
        assert user.domain == "EXAMPLE"

    def test_initials(self, sample_profile):
        assert User.from_profile(sample_profile).initials == "JD"

    def test_initials_fall_back_to_display_name(self):
        user = User(user_name="x", display_name="Ada Lovelace", employee_id="")
        assert user.initials == "AL"

    def test_empty_user_name_rejected(self):
        with pytest.raises(ValueError):
            User(user_name="  ", display_name="Nobody", employee_id="")


class TestSession:
    """Test session lifecycle."""

    @pytest.mark.asyncio
    async def test_start_resolves_user(self, session):
        user = await session.start()

        assert session.is_authenticated
        assert session.user is user
        assert session.headers() == {"X-User-Id": "jdoe"}

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, session, identity_provider):
        await session.start()
        await session.start()

        identity_provider.get_current_user.assert_called_once()

    @pytest.mark.asyncio
    async def test_start_failure_is_identity_error(self, identity_provider):
        identity_provider.get_current_user = AsyncMock(side_effect=NetworkError("connection refused"))
        session = Session(identity_provider)

        with pytest.raises(IdentityResolutionError) as exc_info:
            await session.start()

        assert exc_info.value.message == AUTHENTICATION_FAILED_MESSAGE
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_profile_without_user_name_is_rejected(self, identity_provider):
        identity_provider.get_current_user = AsyncMock(return_value={"displayName": "Ghost"})
        session = Session(identity_provider)

        with pytest.raises(IdentityResolutionError):
            await session.start()

    @pytest.mark.asyncio
    async def test_clear_during_start_discards_user(self, sample_profile):
        gate = asyncio.Event()

        async def slow_profile():
            await gate.wait()
            return sample_profile

        provider = MagicMock()
        provider.get_current_user = slow_profile
        session = Session(provider)

        task = asyncio.create_task(session.start())
        await asyncio.sleep(0)
        session.clear("logout")
        gate.set()

        with pytest.raises(SessionClosedError):
            await task
        assert session.user is None

    def test_require_active_without_user(self, session):
        with pytest.raises(SessionClosedError):
            session.require_active()
        assert session.headers() == {}

    @pytest.mark.asyncio
    async def test_token_goes_stale_after_clear(self, active_session):
        token = active_session.require_active()
        active_session.logout()

        assert not active_session.is_current(token)
        with pytest.raises(SessionClosedError):
            active_session.ensure_current(token)

    @pytest.mark.asyncio
    async def test_clear_notifies_listeners(self, active_session):
        reasons = []
        active_session.add_clear_listener(reasons.append)

        generation = active_session.generation
        active_session.clear("unauthorized")

        assert reasons == ["unauthorized"]
        assert active_session.generation == generation + 1
        assert active_session.user is None

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_others(self, active_session):
        calls = []

        def broken(reason):
            raise RuntimeError("boom")

        active_session.add_clear_listener(broken)
        active_session.add_clear_listener(calls.append)
        active_session.logout()

        assert calls == ["logout"]
