"""Cloud Tasks v2 wire resources.

Field names are snake_case in Python and camelCase on the JSON wire. In JSON,
``scheduleTime`` is an RFC 3339 string and ``body`` is base64; in Python they
are a :class:`Timestamp` and raw bytes.
"""

from __future__ import annotations

import base64
import binascii
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from taskpilot.contracts.task import Timestamp

MAX_PAGE_SIZE = 1000


class ResponseView(StrEnum):
    BASIC = "BASIC"
    FULL = "FULL"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WireOAuthToken(_WireModel):
    service_account_email: str = ""
    scope: str = ""


class WireOidcToken(_WireModel):
    service_account_email: str = ""
    audience: str = ""


class WireHttpRequest(_WireModel):
    model_config = ConfigDict(extra="allow")

    url: str = ""
    http_method: str = "HTTP_METHOD_UNSPECIFIED"
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes | None = None
    oauth_token: WireOAuthToken | None = None
    oidc_token: WireOidcToken | None = None

    @field_validator("body", mode="before")
    @classmethod
    def _decode_body(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as exc:
                raise ValueError("body is not valid base64") from exc
        return value

    @field_serializer("body", when_used="json")
    def _encode_body(self, value: bytes | None) -> str | None:
        if value is None:
            return None
        return base64.b64encode(value).decode("ascii")

    def extra_authorization_variants(self) -> list[str]:
        """Names of populated ``*Token`` fields this model does not know about."""
        extra = self.model_extra or {}
        return sorted(key for key, value in extra.items() if key.endswith("Token") and value is not None)


class WireTask(_WireModel):
    name: str = ""
    schedule_time: Timestamp | None = None
    http_request: WireHttpRequest | None = None
    app_engine_http_request: dict[str, Any] | None = None

    @field_serializer("schedule_time", when_used="json")
    def _encode_schedule_time(self, value: Timestamp | None) -> str | None:
        if value is None:
            return None
        return value.isoformat()


class ListTasksRequest(BaseModel):
    parent: str
    page_size: int = Field(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    page_token: str = ""
    response_view: ResponseView = ResponseView.BASIC


class ListTasksPage(_WireModel):
    tasks: list[WireTask] = Field(default_factory=list)
    next_page_token: str = ""


class CreateTaskRequest(BaseModel):
    parent: str
    task: WireTask
    response_view: ResponseView = ResponseView.BASIC


class DeleteTaskRequest(BaseModel):
    name: str
