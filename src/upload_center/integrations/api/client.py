"""
Async client for the Upload Center backend.

Every JSON endpoint answers with the envelope
``{"status": "success" | "error", "data": ..., "message": ...}``; an
``error`` envelope is raised as ServerError even on a 2xx response.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar
from urllib.parse import quote

from ...config.constants import Endpoints, ResponseStatus, GENERIC_SERVER_FAILURE
from ...core.exceptions import ServerError
from ...features.hierarchy.entities import Application, Location
from ...features.uploads.entities import UploadCandidate, UploadReceipt
from ...features.registry.entities import Upload
from ...features.health.entities import HealthStatus
from .base_client import BaseHttpClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

MALFORMED_ITEM_ERRORS = (KeyError, ValueError, TypeError, AttributeError)


class UploadCenterApiClient(BaseHttpClient):
    """Backend operations used by the hierarchy, upload, registry and health features."""

    async def _call(self, method: str, path: str, **kwargs) -> Tuple[Any, Optional[str]]:
        """Unwrap the response envelope into ``(data, message)``."""
        payload = await self._request_json(method, path, **kwargs)
        if not isinstance(payload, dict):
            raise ServerError(f"Unexpected response from {path}")

        message = payload.get("message")
        if payload.get("status") == ResponseStatus.ERROR.value:
            raise ServerError(message or GENERIC_SERVER_FAILURE, payload=payload)

        return payload.get("data"), message

    async def _call_data(self, method: str, path: str, **kwargs) -> Any:
        data, _ = await self._call(method, path, **kwargs)
        return data

    @staticmethod
    def _require_mapping(data: Any, path: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise ServerError(f"Missing data in response from {path}")
        return data

    @staticmethod
    def _parse(factory: Callable[..., T], item: Any, path: str, *args: Any) -> T:
        try:
            return factory(item, *args)
        except MALFORMED_ITEM_ERRORS as e:
            raise ServerError(f"Malformed item in response from {path}") from e

    def _parse_list(self, factory: Callable[..., T], data: Any, path: str, *args: Any) -> List[T]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise ServerError(f"Expected a list in response from {path}")
        return [self._parse(factory, item, path, *args) for item in data]

    # Configuration and health

    async def get_allowed_extensions(self) -> List[str]:
        data = self._require_mapping(await self._call_data("GET", Endpoints.CONFIG), Endpoints.CONFIG)
        return [str(ext) for ext in data.get("allowed_extensions") or []]

    async def check_health(self) -> HealthStatus:
        data = self._require_mapping(await self._call_data("GET", Endpoints.HEALTH), Endpoints.HEALTH)
        return self._parse(HealthStatus.from_dict, data, Endpoints.HEALTH)

    # Applications and locations

    async def list_applications(self) -> List[Application]:
        data = await self._call_data("GET", Endpoints.APPLICATIONS)
        return self._parse_list(Application.from_dict, data, Endpoints.APPLICATIONS)

    async def create_application(self, name: str) -> Application:
        data = await self._call_data("POST", Endpoints.APPLICATIONS, json={"name": name})
        return self._parse(Application.from_dict, self._require_mapping(data, Endpoints.APPLICATIONS), Endpoints.APPLICATIONS)

    async def list_locations(self, application_id: int) -> List[Location]:
        path = Endpoints.application_locations(application_id)
        data = await self._call_data("GET", path)
        return self._parse_list(Location.from_dict, data, path, application_id)

    async def create_location(self, application_id: int, location_name: str, path: str) -> Location:
        endpoint = Endpoints.application_locations(application_id)
        data = await self._call_data(
            "POST",
            endpoint,
            json={"location_name": location_name, "path": path},
        )
        return self._parse(Location.from_dict, self._require_mapping(data, endpoint), endpoint, application_id)

    # Uploads

    async def upload_file(
        self,
        candidate: UploadCandidate,
        application_id: int,
        location_id: int,
        additional_path: Optional[str] = None,
    ) -> UploadReceipt:
        """Send file and target as one multipart request."""
        form = {
            "application_id": str(application_id),
            "location_id": str(location_id),
        }
        if additional_path:
            form["additional_path"] = additional_path

        files = {"file": (candidate.filename, candidate.read_bytes(), candidate.content_type)}
        data = await self._call_data("POST", Endpoints.UPLOAD, data=form, files=files)
        return self._parse(UploadReceipt.from_dict, self._require_mapping(data, Endpoints.UPLOAD), Endpoints.UPLOAD)

    async def list_uploads(self, params: Dict[str, str]) -> List[Upload]:
        data = await self._call_data("GET", Endpoints.UPLOADS, params=params)
        return self._parse_list(Upload.from_dict, data, Endpoints.UPLOADS)

    async def share_file(self, upload_id: int, shared_with: str) -> str:
        _, message = await self._call(
            "POST",
            Endpoints.share_upload(upload_id),
            json={"shared_with": shared_with},
        )
        return message or "File shared successfully"

    async def download_file(self, filename: str) -> bytes:
        response = await self._request("GET", f"{Endpoints.DOWNLOAD}/{quote(filename, safe='')}")
        return response.content
