"""Pytest configuration and fixtures for upload-center tests."""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio

from upload_center.config.settings import ClientSettings
from upload_center.features.session import Session
from upload_center.features.refresh import RefreshCoordinator
from upload_center.features.hierarchy import Application, Location, HierarchyController, ResourceCache
from upload_center.features.registry import Upload, DirectorySaver
from upload_center.factory import UploadCenterClient


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at fake hosts with a fast progress ticker."""
    return ClientSettings(
        api_url="http://api.test",
        user_api_url="http://identity.test/api/user",
        progress_interval=0.01,
        download_dir=tmp_path,
    )


@pytest.fixture
def sample_profile():
    """Directory profile as returned by the identity endpoint."""
    return {
        "userName": "jdoe",
        "displayName": "Jane Doe",
        "employeeId": "E1001",
        "samAccountName": "jdoe",
        "emailAddress": "jane.doe@example.com",
        "name": "Jane Doe",
        "givenName": "Jane",
        "middleName": None,
        "surname": "Doe",
        "description": "Engineer",
        "distinguishedName": "CN=Jane Doe,OU=Users,DC=example,DC=com",
        "domain": "EXAMPLE",
    }


@pytest.fixture
def identity_provider(sample_profile):
    """Mock identity endpoint."""
    provider = AsyncMock()
    provider.get_current_user = AsyncMock(return_value=sample_profile)
    return provider


@pytest.fixture
def session(identity_provider):
    """Session that has not been started."""
    return Session(identity_provider)


@pytest_asyncio.fixture
async def active_session(session):
    """Session with a resolved user."""
    await session.start()
    return session


@pytest.fixture
def coordinator():
    return RefreshCoordinator()


@pytest.fixture
def sample_applications():
    return [Application(id=1, name="Billing"), Application(id=2, name="Payroll")]


@pytest.fixture
def sample_locations():
    return {
        1: [Location(id=10, application_id=1, location_name="Invoices", path="/data/billing/invoices")],
        2: [Location(id=20, application_id=2, location_name="Slips", path="/data/payroll/slips")],
    }


@pytest.fixture
def hierarchy_api(sample_applications, sample_locations):
    """Mock backend for applications and locations."""
    api = AsyncMock()
    api.list_applications = AsyncMock(return_value=list(sample_applications))
    api.list_locations = AsyncMock(side_effect=lambda app_id: list(sample_locations.get(app_id, [])))
    api.create_application = AsyncMock(return_value=Application(id=3, name="Reports"))
    api.create_location = AsyncMock(
        return_value=Location(id=11, application_id=1, location_name="Receipts", path="/data/billing/receipts")
    )
    return api


@pytest.fixture
def hierarchy(hierarchy_api, active_session, coordinator):
    return HierarchyController(hierarchy_api, active_session, coordinator, ResourceCache())


@pytest.fixture
def sample_upload():
    return Upload(
        id=7,
        filename="report.pdf",
        size=2048,
        upload_time=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
        user_id="jdoe",
        file_location="/data/billing/invoices/report.pdf",
        download_count=3,
    )


class FakeBackend:
    """In-memory Upload Center backend served through ``httpx.MockTransport``."""

    def __init__(self, profile):
        self.profile = profile
        self.applications = [{"id": 1, "name": "Billing"}]
        self.locations = {1: [{"id": 10, "location_name": "Invoices", "path": "/data/billing/invoices"}]}
        self.uploads = []
        self.blobs = {}
        self.requests = []
        self.unauthorized = False

    @staticmethod
    def ok(data=None, message=None, status_code=200):
        return httpx.Response(status_code, json={"status": "success", "data": data, "message": message})

    def identity_handler(self, request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=self.profile)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unauthorized:
            return httpx.Response(401, json={"status": "error", "message": "Unknown user"})

        path = request.url.path
        method = request.method

        if path == "/health":
            return self.ok({"server": "running", "debug_mode": False})
        if path == "/config":
            return self.ok({"allowed_extensions": ["pdf", "png"]})
        if path == "/applications" and method == "GET":
            return self.ok(self.applications)
        if path == "/applications" and method == "POST":
            app = {"id": len(self.applications) + 1, "name": json.loads(request.content)["name"]}
            self.applications.append(app)
            return self.ok(app, status_code=201)
        if path.startswith("/applications/") and path.endswith("/locations"):
            app_id = int(path.split("/")[2])
            if method == "GET":
                return self.ok(self.locations.get(app_id, []))
            body = json.loads(request.content)
            location = {"id": 100 + sum(len(v) for v in self.locations.values()), **body}
            self.locations.setdefault(app_id, []).append(location)
            return self.ok(location, status_code=201)
        if path == "/upload":
            return self._upload(request)
        if path == "/uploads":
            search = request.url.params.get("search")
            listed = [u for u in self.uploads if not search or search in u["filename"]]
            return self.ok(listed)
        if path.startswith("/share/"):
            return self.ok(message=f"File shared with {json.loads(request.content)['shared_with']}")
        if path.startswith("/download/"):
            filename = unquote(path[len("/download/"):])
            for upload in self.uploads:
                if upload["filename"] == filename:
                    upload["download_count"] += 1
                    return httpx.Response(200, content=self.blobs[filename])
            return httpx.Response(404, json={"status": "error", "message": "File not found"})
        return httpx.Response(404, json={"status": "error", "message": "Not found"})

    def _upload(self, request: httpx.Request) -> httpx.Response:
        body = request.content
        file_part = body.split(b'filename="', 1)[1]
        filename = file_part.split(b'"', 1)[0].decode()
        content = file_part.split(b"\r\n\r\n", 1)[1].split(b"\r\n--", 1)[0]
        upload = {
            "id": len(self.uploads) + 1,
            "filename": filename,
            "size": len(content),
            "upload_time": "2024-05-01T09:30:00Z",
            "user_id": request.headers.get("X-User-Id"),
            "file_location": f"/data/{filename}",
            "download_count": 0,
        }
        self.uploads.append(upload)
        self.blobs[filename] = content
        return self.ok(
            {
                "upload_id": upload["id"],
                "filename": filename,
                "size": upload["size"],
                "upload_time": upload["upload_time"],
                "file_location": upload["file_location"],
            },
            message="File uploaded successfully",
        )


@pytest.fixture
def fake_backend(sample_profile):
    return FakeBackend(sample_profile)


@pytest.fixture
def client_factory(fake_backend, tmp_path):
    """Build clients wired to the fake backend."""
    def factory(settings):
        return UploadCenterClient(
            settings=settings,
            transport=httpx.MockTransport(fake_backend.handler),
            identity_transport=httpx.MockTransport(fake_backend.identity_handler),
            saver=DirectorySaver(tmp_path / "downloads"),
        )
    return factory
