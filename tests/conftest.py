"""Shared test fixtures for taskpilot tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskpilot.contracts.task import Task
from tests.fakes.client import PREFIX, FakeCloudTasksClient, get_task, post_task


@pytest.fixture
def remote_post() -> Task:
    return post_task()


@pytest.fixture
def remote_get() -> Task:
    return get_task()


@pytest.fixture
def fake_client(remote_post: Task, remote_get: Task) -> FakeCloudTasksClient:
    """Queue holding the two managed fixture tasks."""
    return FakeCloudTasksClient([remote_post, remote_get])


@pytest.fixture
def config_payload(tmp_path: Path) -> dict[str, object]:
    return {
        "project": "tokyo-rain-123",
        "location": "asia-northeast1",
        "queue": "scheduler",
        "prefix": PREFIX,
        "auth": "token",
        "token": "ya29.test-token",
        "tasks_path": "tasks.json",
    }


@pytest.fixture
def config_file(tmp_path: Path, config_payload: dict[str, object]) -> Path:
    path = tmp_path / "taskpilot.json"
    path.write_text(json.dumps(config_payload), encoding="utf-8")
    return path


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            {
                "tasks": [
                    {
                        "id": "id",
                        "scheduled_at": "1970-01-01T00:00:01.000000002Z",
                        "request": {
                            "method": "post",
                            "url": "https://example.com",
                            "headers": {"Content-Type": "application/json"},
                            "body": '{"payload":"test"}',
                        },
                        "authorization": {
                            "type": "oauth",
                            "service_account_email": "test@example.com",
                            "scope": "https://www.googleapis.com/auth/calendar",
                        },
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    return path

