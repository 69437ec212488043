"""Task contracts."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from taskpilot import identity

NANOS_PER_SECOND = 1_000_000_000

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_RFC3339 = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d{1,9}))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def _split_datetime(value: datetime) -> dict[str, int]:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    delta = value - _EPOCH
    return {"seconds": delta.days * 86_400 + delta.seconds, "nanos": delta.microseconds * 1_000}


def _parse_rfc3339(value: str) -> dict[str, int]:
    match = _RFC3339.match(value.strip())
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")

    base = datetime.fromisoformat(match["base"].replace(" ", "T").replace("t", "T"))
    offset = match["offset"]
    if offset in {"Z", "z"}:
        tz = UTC
    else:
        sign = 1 if offset[0] == "+" else -1
        hours, minutes = offset[1:].split(":")
        tz = timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))

    parts = _split_datetime(base.replace(tzinfo=tz))
    parts["nanos"] = int((match["frac"] or "").ljust(9, "0"))
    return parts


class Timestamp(BaseModel):
    """Nanosecond-resolution instant, stored as seconds + nanos since the Unix epoch.

    Accepts a ``datetime`` (naive values are taken as UTC), integer nanoseconds
    since the epoch, an RFC 3339 string with up to nine fractional digits, or a
    ``{"seconds": ..., "nanos": ...}`` mapping.
    """

    seconds: int = 0
    nanos: int = Field(default=0, ge=0, lt=NANOS_PER_SECOND)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, datetime):
            return _split_datetime(data)
        if isinstance(data, int) and not isinstance(data, bool):
            seconds, nanos = divmod(data, NANOS_PER_SECOND)
            return {"seconds": seconds, "nanos": nanos}
        if isinstance(data, str):
            return _parse_rfc3339(data)
        return data

    @classmethod
    def from_unix_nano(cls, value: int) -> Timestamp:
        return cls.model_validate(value)

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        return cls.model_validate(value)

    @classmethod
    def parse(cls, value: str) -> Timestamp:
        return cls.model_validate(value)

    @property
    def unix_nano(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.nanos

    def to_datetime(self) -> datetime:
        """Aware UTC ``datetime``; sub-microsecond precision is truncated."""
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1_000)

    def isoformat(self) -> str:
        whole = (_EPOCH + timedelta(seconds=self.seconds)).replace(tzinfo=None).isoformat(timespec="seconds")
        if self.nanos == 0:
            fraction = ""
        elif self.nanos % 1_000_000 == 0:
            fraction = f".{self.nanos // 1_000_000:03d}"
        elif self.nanos % 1_000 == 0:
            fraction = f".{self.nanos // 1_000:06d}"
        else:
            fraction = f".{self.nanos:09d}"
        return f"{whole}{fraction}Z"


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class HttpRequest(BaseModel):
    method: str = HttpMethod.GET.value
    url: str
    headers: dict[str, list[str]] = Field(default_factory=dict)
    body: bytes | None = None

    model_config = {"frozen": True}

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _wrap_single_values(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: [item] if isinstance(item, str) else item for key, item in value.items()}
        return value


class OAuthToken(BaseModel):
    type: Literal["oauth"] = "oauth"
    service_account_email: str
    scope: str = ""

    model_config = {"frozen": True}


class OIDCToken(BaseModel):
    type: Literal["oidc"] = "oidc"
    service_account_email: str
    audience: str = ""

    model_config = {"frozen": True}


Authorization = Annotated[OAuthToken | OIDCToken, Field(discriminator="type")]


def _strip_trailing_slash(url: str) -> str:
    return url.removesuffix("/")


class Task(BaseModel):
    """One scheduled HTTP dispatch.

    ``version`` 0 means "unset"; the engine assigns 1 on create. Tasks are
    frozen: the engine returns copies instead of mutating caller values.
    """

    queue_path: str = ""
    prefix: str = ""
    id: str
    scheduled_at: Timestamp
    request: HttpRequest
    authorization: Authorization | None = None
    version: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def comparison_key(self) -> str:
        return identity.comparison_key(self.prefix, self.id, self.scheduled_at.unix_nano)

    @property
    def task_id(self) -> str:
        return identity.encode(self.prefix, self.id, self.scheduled_at.unix_nano, self.version)

    @property
    def task_name(self) -> str:
        return identity.task_name(self.queue_path, self.task_id)

    def matches(self, remote: Task) -> bool:
        """Whether *remote* already satisfies this desired task.

        Body and headers are not compared; bump ``version`` to force a
        payload-only change through.
        """
        if self.comparison_key != remote.comparison_key:
            return False
        if self.version > remote.version:
            return False
        if self.authorization != remote.authorization:
            return False
        return self.request.method == remote.request.method and _strip_trailing_slash(
            self.request.url
        ) == _strip_trailing_slash(remote.request.url)
