"""
Shared httpx plumbing for the backend and identity clients.

Maps transport failures to NetworkError, 401 responses to AuthError and any
other non-2xx response to ServerError, taking the message from the JSON
payload when the server sent one.
"""
import logging
from typing import Any, Callable, Dict, Optional

import httpx

from ...config.constants import GENERIC_SERVER_FAILURE
from ...core.exceptions import NetworkError, ServerError, AuthError

logger = logging.getLogger(__name__)

HeaderProvider = Callable[[], Dict[str, str]]


def _json_payload(response: httpx.Response) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def extract_message(response: httpx.Response) -> Optional[str]:
    """Return the ``message`` field of a JSON error payload, if any."""
    payload = _json_payload(response)
    if payload:
        message = payload.get("message") or payload.get("detail")
        if isinstance(message, str) and message.strip():
            return message
    return None


class BaseHttpClient:
    """Lazily created ``httpx.AsyncClient`` with error mapping."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        header_provider: Optional[HeaderProvider] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        verify_ssl: bool = True,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._header_provider = header_provider
        self._on_unauthorized = on_unauthorized
        self._transport = transport
        self._verify_ssl = verify_ssl
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_unauthorized_handler(self, handler: Optional[Callable[[], None]]) -> None:
        self._on_unauthorized = handler

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
                verify=self._verify_ssl,
            )
        return self._client

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send a request and raise the mapped error for any failure."""
        headers = dict(self._header_provider() if self._header_provider else {})
        headers.update(kwargs.pop("headers", None) or {})

        client = self._get_client()
        try:
            response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"API Error: {method} {path} timed out")
            raise NetworkError(f"Request timed out: {method} {path}", timeout=True) from e
        except httpx.RequestError as e:
            logger.error(f"API Error: {method} {path} failed: {e}")
            raise NetworkError(f"Could not reach server: {e}") from e

        if response.status_code == 401:
            logger.error(f"API Error: {method} {path} returned 401")
            if self._on_unauthorized:
                self._on_unauthorized()
            raise AuthError(
                extract_message(response) or "Authentication required",
                status_code=401,
                payload=_json_payload(response),
            )

        if not response.is_success:
            message = extract_message(response) or f"{GENERIC_SERVER_FAILURE} ({response.status_code})"
            logger.error(f"API Error: {method} {path} returned {response.status_code}: {message}")
            raise ServerError(message, status_code=response.status_code, payload=_json_payload(response))

        return response

    async def _request_json(self, method: str, path: str, **kwargs) -> Any:
        response = await self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                f"Invalid JSON response from {path}",
                status_code=response.status_code,
            ) from e

    async def close(self) -> None:
        """Close the client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
