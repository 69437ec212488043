"""Load the desired task set from a JSON manifest."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from taskpilot.contracts.exceptions import ManifestLoadError
from taskpilot.contracts.task import Task


class TaskManifest(BaseModel):
    """Top-level manifest document: ``{"tasks": [...]}``.

    Entries usually leave ``queue_path`` and ``prefix`` out; the engine fills
    them in from the config it runs with.
    """

    tasks: list[Task] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


def load_tasks(path: str | Path) -> list[Task]:
    """Read and validate the manifest at *path*.

    Raises:
        ManifestLoadError: If the file is missing, unreadable, contains
            invalid JSON, or does not match the manifest schema.
    """
    manifest_path = Path(path)
    if not manifest_path.exists():
        raise ManifestLoadError(f"missing task manifest: {manifest_path}")

    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestLoadError(f"invalid JSON in task manifest {manifest_path}: {exc}") from exc
    except OSError as exc:
        raise ManifestLoadError(f"failed to read task manifest: {manifest_path}") from exc

    try:
        return TaskManifest.model_validate(payload).tasks
    except ValidationError as exc:
        raise ManifestLoadError(f"task manifest validation failed: {exc}") from exc
