"""Cloud Tasks v2 REST client."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from taskpilot.contracts.client import CloudTasksClient
from taskpilot.contracts.exceptions import AuthenticationError, TransportError
from taskpilot.contracts.wire import CreateTaskRequest, DeleteTaskRequest, ListTasksPage, ListTasksRequest, WireTask
from taskpilot.providers.cloudtasks._retrying_transport import RetryingTransport

_LOG = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://cloudtasks.googleapis.com"

_STATUS_BY_HTTP_CODE = {
    400: "INVALID_ARGUMENT",
    401: "UNAUTHENTICATED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    409: "ALREADY_EXISTS",
    429: "RESOURCE_EXHAUSTED",
    503: "UNAVAILABLE",
}


class CloudTasksRestClient(CloudTasksClient):
    """Thin httpx adapter over the ``v2`` REST surface of Cloud Tasks."""

    def __init__(
        self,
        *,
        token: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._endpoint = endpoint.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> CloudTasksRestClient:
        await self._open_transport()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def list_tasks(self, request: ListTasksRequest) -> ListTasksPage:
        params: dict[str, str | int] = {
            "pageSize": request.page_size,
            "responseView": request.response_view.value,
        }
        if request.page_token:
            params["pageToken"] = request.page_token

        payload = await self._request("GET", f"{request.parent}/tasks", params=params)
        try:
            return ListTasksPage.model_validate(payload)
        except ValidationError as exc:
            raise TransportError(f"invalid listTasks response for {request.parent}: {exc}") from exc

    async def create_task(self, request: CreateTaskRequest) -> WireTask:
        body = {
            "task": request.task.model_dump(mode="json", by_alias=True, exclude_none=True),
            "responseView": request.response_view.value,
        }
        payload = await self._request("POST", f"{request.parent}/tasks", json=body)
        try:
            return WireTask.model_validate(payload)
        except ValidationError as exc:
            raise TransportError(f"invalid createTask response for {request.task.name}: {exc}") from exc

    async def delete_task(self, request: DeleteTaskRequest) -> None:
        await self._request("DELETE", request.name)

    async def _open_transport(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=f"{self._endpoint}/v2/",
            headers={"Authorization": f"Bearer {self._token}"},
            transport=RetryingTransport(transport=self._transport, max_retries=self._max_retries),
            timeout=httpx.Timeout(self._timeout),
        )

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise TransportError("Client is not initialized. Use 'async with'.")
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str | int] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        client = self._require_client()
        _LOG.debug("%s %s", method, path)
        try:
            response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise self._status_error(method, path, response)
        if not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {path} returned invalid JSON", http_status=response.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise TransportError(f"{method} {path} returned a non-object payload", http_status=response.status_code)
        return payload

    @staticmethod
    def _status_error(method: str, path: str, response: httpx.Response) -> TransportError:
        status = _STATUS_BY_HTTP_CODE.get(response.status_code)
        message = response.reason_phrase
        try:
            error = response.json().get("error", {})
        except (ValueError, AttributeError):
            error = {}
        if isinstance(error, dict):
            status = error.get("status") or status
            message = error.get("message") or message

        text = f"{method} {path} failed with HTTP {response.status_code} ({status or 'UNKNOWN'}): {message}"
        if response.status_code in {401, 403}:
            return AuthenticationError(text, status=status, http_status=response.status_code)
        return TransportError(text, status=status, http_status=response.status_code)
