"""Tests for the backend and identity HTTP clients."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from upload_center.core.exceptions import AuthError, NetworkError, ServerError
from upload_center.features.hierarchy import Application, Location
from upload_center.features.uploads import UploadCandidate
from upload_center.integrations.api import IdentityClient, UploadCenterApiClient


def success(data=None, message=None, status_code=200):
    body = {"status": "success"}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return httpx.Response(status_code, json=body)


def make_client(handler, **kwargs):
    kwargs.setdefault("header_provider", lambda: {"X-User-Id": "jdoe"})
    return UploadCenterApiClient(
        "http://api.test/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestErrorMapping:
    """Test how failed requests surface."""

    @pytest.mark.asyncio
    async def test_identity_header_on_every_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("X-User-Id"))
            return success([])

        async with make_client(handler) as client:
            await client.list_applications()
            await client.list_uploads({})

        assert seen == ["jdoe", "jdoe"]

    @pytest.mark.asyncio
    async def test_error_envelope_on_2xx(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "error", "message": "Application name taken"})

        async with make_client(handler) as client:
            with pytest.raises(ServerError, match="Application name taken"):
                await client.create_application("Billing")

    @pytest.mark.asyncio
    async def test_error_envelope_without_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "error"})

        async with make_client(handler) as client:
            with pytest.raises(ServerError, match="Request failed"):
                await client.list_applications()

    @pytest.mark.asyncio
    async def test_non_2xx_uses_payload_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"status": "error", "message": "Invalid file type"})

        async with make_client(handler) as client:
            with pytest.raises(ServerError) as exc_info:
                await client.list_uploads({})

        assert exc_info.value.message == "Invalid file type"
        assert exc_info.value.status_code == 400
        assert exc_info.value.payload["message"] == "Invalid file type"

    @pytest.mark.asyncio
    async def test_non_2xx_without_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        async with make_client(handler) as client:
            with pytest.raises(ServerError, match=r"Request failed \(502\)"):
                await client.list_applications()

    @pytest.mark.asyncio
    async def test_401_invokes_unauthorized_hook(self):
        on_unauthorized = MagicMock()

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Unknown user"})

        async with make_client(handler, on_unauthorized=on_unauthorized) as client:
            with pytest.raises(AuthError, match="Unknown user"):
                await client.list_applications()

        on_unauthorized.assert_called_once()

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.list_applications()

        assert exc_info.value.timeout is True

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.check_health()

        assert exc_info.value.timeout is False

    @pytest.mark.asyncio
    async def test_malformed_item_is_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/applications":
                return success([{"id": 1}])
            return success([{"id": "seven", "filename": "report.pdf"}])

        async with make_client(handler) as client:
            with pytest.raises(ServerError, match="Malformed item in response from /applications"):
                await client.list_applications()
            with pytest.raises(ServerError, match="Malformed item"):
                await client.list_uploads({})

    @pytest.mark.asyncio
    async def test_non_list_data_is_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return success({"id": 1, "name": "Billing"})

        async with make_client(handler) as client:
            with pytest.raises(ServerError, match="Expected a list"):
                await client.list_applications()


class TestEndpoints:
    """Test request shapes and response decoding."""

    @pytest.mark.asyncio
    async def test_allowed_extensions(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/config"
            return success({"allowed_extensions": [".pdf", ".png"]})

        async with make_client(handler) as client:
            assert await client.get_allowed_extensions() == [".pdf", ".png"]

    @pytest.mark.asyncio
    async def test_create_application(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert json.loads(request.content) == {"name": "Reports"}
            return success({"id": 3, "name": "Reports"}, status_code=201)

        async with make_client(handler) as client:
            assert await client.create_application("Reports") == Application(id=3, name="Reports")

    @pytest.mark.asyncio
    async def test_locations_carry_application_id(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/applications/5/locations"
            if request.method == "POST":
                assert json.loads(request.content) == {"location_name": "Inbox", "path": "/srv/inbox"}
                return success({"id": 9, "location_name": "Inbox", "path": "/srv/inbox"})
            return success([{"id": 9, "location_name": "Inbox", "path": "/srv/inbox"}])

        async with make_client(handler) as client:
            listed = await client.list_locations(5)
            created = await client.create_location(5, "Inbox", "/srv/inbox")

        expected = Location(id=9, application_id=5, location_name="Inbox", path="/srv/inbox")
        assert listed == [expected]
        assert created == expected

    @pytest.mark.asyncio
    async def test_upload_is_multipart(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/upload"
            assert request.headers["content-type"].startswith("multipart/form-data")
            body = request.content
            assert b'name="file"; filename="report.pdf"' in body
            assert b"%PDF-1.7" in body
            assert b'name="application_id"' in body
            assert b'name="location_id"' in body
            assert b'name="additional_path"' not in body
            return success(
                {
                    "upload_id": 42,
                    "filename": "report.pdf",
                    "size": 8,
                    "upload_time": "2024-05-01T09:30:00Z",
                    "file_location": "/data/report.pdf",
                },
                message="File uploaded successfully",
            )

        async with make_client(handler) as client:
            receipt = await client.upload_file(UploadCandidate.from_bytes("report.pdf", b"%PDF-1.7"), 1, 10)

        assert receipt.upload_id == 42
        assert receipt.upload_time.year == 2024
        assert receipt.file_location == "/data/report.pdf"

    @pytest.mark.asyncio
    async def test_upload_sends_additional_path(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert b'name="additional_path"' in request.content
            assert b"2024/q1" in request.content
            return success({"upload_id": 1, "filename": "a.pdf", "size": 1, "upload_time": None, "file_location": "/x"})

        async with make_client(handler) as client:
            await client.upload_file(UploadCandidate.from_bytes("a.pdf", b"x"), 1, 10, "2024/q1")

    @pytest.mark.asyncio
    async def test_list_uploads_params(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert dict(request.url.params) == {"search": "report", "location_id": "10"}
            return success([
                {
                    "id": 7,
                    "filename": "report.pdf",
                    "size": 2048,
                    "upload_time": "2024-05-01T09:30:00",
                    "user_id": "jdoe",
                    "file_location": "/data/report.pdf",
                    "download_count": 3,
                }
            ])

        async with make_client(handler) as client:
            uploads = await client.list_uploads({"search": "report", "location_id": "10"})

        assert uploads[0].download_count == 3
        assert uploads[0].user_id == "jdoe"

    @pytest.mark.asyncio
    async def test_share(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/share/7"
            assert json.loads(request.content) == {"shared_with": "asmith"}
            return success(message="File shared with asmith")

        async with make_client(handler) as client:
            assert await client.share_file(7, "asmith") == "File shared with asmith"

    @pytest.mark.asyncio
    async def test_download_encodes_filename(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.raw_path == b"/download/q1%20report%231.pdf"
            return httpx.Response(200, content=b"binary")

        async with make_client(handler) as client:
            assert await client.download_file("q1 report#1.pdf") == b"binary"

    @pytest.mark.asyncio
    async def test_health(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return success({"server": "running", "debug_mode": False})

        async with make_client(handler) as client:
            status = await client.check_health()

        assert status.is_online
        assert status.debug_mode is False


class TestIdentityClient:
    """Test the identity endpoint client."""

    @pytest.mark.asyncio
    async def test_get_current_user(self, sample_profile):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/user"
            return httpx.Response(200, json=sample_profile)

        client = IdentityClient("http://identity.test/api/user", transport=httpx.MockTransport(handler))
        try:
            profile = await client.get_current_user()
        finally:
            await client.close()

        assert profile["userName"] == "jdoe"

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["not", "a", "profile"])

        async with IdentityClient("http://identity.test/api/user", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ServerError):
                await client.get_current_user()
