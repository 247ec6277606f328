"""Outbound HTTP gateway shared by every remote call a view makes.

The gateway attaches the bearer token, turns failed responses into
notifications and, unless told otherwise, forces a logout on 401. Failed
GET requests resolve to an empty result so read-only pages keep rendering;
every other failed method raises ``ApiError`` so the caller can keep its
form state.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Protocol

import httpx

from friends_united_admin.services.session import ViewContext

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."

_STATUS_NOTIFICATIONS: dict[int, tuple[str, str]] = {
    HTTPStatus.UNAUTHORIZED: (
        "Unauthorized",
        "Your session has expired. Please log in again.",
    ),
    HTTPStatus.FORBIDDEN: (
        "Forbidden",
        "You do not have permission to access this resource.",
    ),
    HTTPStatus.NOT_FOUND: (
        "Not Found",
        "The requested resource was not found.",
    ),
    HTTPStatus.INTERNAL_SERVER_ERROR: (
        "Server Error",
        "An error occurred on the server. Please try again later.",
    ),
}


class ApiError(Exception):
    """A non-GET request failed; the notification has already been queued."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class ApiResponse:
    """Result of a gateway call. ``data`` is None for degraded GETs."""

    status_code: int
    data: object | None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300 and self.data is not None


class ApiGateway(Protocol):
    """Interface for outbound requests made on behalf of a view."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request and translate failures."""

    async def get(
        self, path: str, *, params: dict[str, str] | None = None
    ) -> ApiResponse:
        """Send a GET request."""

    async def post(
        self,
        path: str,
        *,
        json: object | None = None,
        params: dict[str, str] | None = None,
    ) -> ApiResponse:
        """Send a POST request with a JSON body."""


@dataclass
class HttpxApiGateway(ApiGateway):
    """Gateway implemented on a shared httpx client."""

    http_client: httpx.AsyncClient
    base_url: str
    context: ViewContext
    bearer: Callable[[], str | None] | None = None
    force_logout_on_401: bool = True

    async def request(  # noqa: PLR0913
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request through the shared client."""
        method = method.upper()
        request_headers = {"Accept": "application/json", **(headers or {})}
        token = self._token()
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            response = await self.http_client.request(
                method,
                url,
                params=params,
                json=json,
                content=content,
                headers=request_headers,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "Request failed before a response arrived",
                extra={"method": method, "url": url, "error": str(exc)},
            )
            self.context.notifier.error(
                "Unable to reach the server. Check your connection and try again.",
                title="Network Error",
            )
            if method == "GET":
                return ApiResponse(status_code=0, data=None)
            raise ApiError("Network error") from exc

        if response.is_success:
            return ApiResponse(status_code=response.status_code, data=_body(response))

        message = _error_message(response) or GENERIC_ERROR_MESSAGE
        self.context.notifier.error(message)
        self._handle_status(response.status_code, method, url)
        if method == "GET":
            return ApiResponse(status_code=response.status_code, data=None)
        raise ApiError(message, status_code=response.status_code)

    async def get(
        self, path: str, *, params: dict[str, str] | None = None
    ) -> ApiResponse:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: object | None = None,
        params: dict[str, str] | None = None,
    ) -> ApiResponse:
        return await self.request("POST", path, json=json, params=params)

    def _token(self) -> str | None:
        if self.bearer is not None:
            return self.bearer()
        return self.context.token_store.get()

    def _handle_status(self, status_code: int, method: str, url: str) -> None:
        notification = _STATUS_NOTIFICATIONS.get(status_code)
        if notification is None:
            logger.warning(
                "Request failed",
                extra={"method": method, "url": url, "status": status_code},
            )
            return
        title, description = notification
        self.context.notifier.error(description, title=title)
        if status_code == HTTPStatus.UNAUTHORIZED and self.force_logout_on_401:
            self.context.force_logout()


def _body(response: httpx.Response) -> object | None:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {"text": response.text}


def _error_message(response: httpx.Response) -> str | None:
    """Extract a human readable message from an error body."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    error = payload.get("error")
    if isinstance(error, dict):
        description = error.get("description")
        if isinstance(description, str) and description:
            return description
    return None
