"""Configuration contracts."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from taskpilot.contracts.wire import MAX_PAGE_SIZE
from taskpilot.identity import queue_path

_PATH_SEGMENT = re.compile(r"[A-Za-z0-9._-]+")
_PREFIX = re.compile(r"[A-Za-z0-9_-]*")


class TaskPilotConfig(BaseModel):
    project: str
    location: str
    queue: str
    prefix: str
    auth: str = "gcloud"
    token: str | None = None
    gcloud_account: str | None = None
    tasks_path: Path = Path("tasks.json")
    endpoint: str = "https://cloudtasks.googleapis.com"
    page_size: int = Field(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    max_retries: int = Field(default=3, ge=0, le=10)
    timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}

    @field_validator("project", "location", "queue")
    @classmethod
    def validate_path_segment(cls, value: str) -> str:
        if not _PATH_SEGMENT.fullmatch(value):
            raise ValueError(f"invalid queue path segment: {value!r}")
        return value

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, value: str) -> str:
        if not value:
            raise ValueError("prefix must be non-empty so unrelated tasks in the queue are left alone")
        if not _PREFIX.fullmatch(value):
            raise ValueError("prefix may only contain letters, digits, hyphens and underscores")
        return value

    @model_validator(mode="after")
    def validate_auth_token(self) -> TaskPilotConfig:
        token = (self.token or "").strip()
        if self.gcloud_account and self.auth != "gcloud":
            raise ValueError("gcloud_account is only used when auth is 'gcloud'")
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth not in {"gcloud", "env", "token"}:
            raise ValueError("auth must be one of: gcloud, env, token")
        return self

    @property
    def queue_path(self) -> str:
        return queue_path(self.project, self.location, self.queue)
