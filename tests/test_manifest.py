from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskpilot.contracts.exceptions import ManifestLoadError
from taskpilot.contracts.task import OAuthToken, Timestamp
from taskpilot.manifest import load_tasks


def test_loads_tasks(manifest_file: Path) -> None:
    (task,) = load_tasks(manifest_file)

    assert task.id == "id"
    assert task.queue_path == ""
    assert task.version == 0
    assert task.scheduled_at == Timestamp(seconds=1, nanos=2)
    assert task.request.method == "POST"
    assert task.request.headers == {"Content-Type": ["application/json"]}
    assert task.request.body == b'{"payload":"test"}'
    assert task.authorization == OAuthToken(
        service_account_email="test@example.com",
        scope="https://www.googleapis.com/auth/calendar",
    )


def test_empty_manifest(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("{}", encoding="utf-8")

    assert load_tasks(path) == []


def test_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestLoadError, match="missing task manifest"):
        load_tasks(tmp_path / "tasks.json")


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[", encoding="utf-8")

    with pytest.raises(ManifestLoadError, match="invalid JSON"):
        load_tasks(path)


@pytest.mark.parametrize(
    "payload",
    [
        {"tasks": [{"id": "x", "request": {"url": "https://example.com"}}]},
        {"tasks": [{"id": "x", "scheduled_at": "tomorrow", "request": {"url": "https://example.com"}}]},
        {"tasks": [], "queue": "other"},
        {
            "tasks": [
                {
                    "id": "x",
                    "scheduled_at": "2030-01-01T00:00:00Z",
                    "request": {"url": "https://example.com"},
                    "authorization": {"type": "basic"},
                }
            ]
        },
    ],
)
def test_schema_errors(tmp_path: Path, payload: dict[str, object]) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ManifestLoadError, match="validation failed"):
        load_tasks(path)
