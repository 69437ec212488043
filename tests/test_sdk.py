from __future__ import annotations

from pathlib import Path

import pytest

from taskpilot import TaskPilot, load_config
from taskpilot.contracts.config import TaskPilotConfig
from taskpilot.contracts.task import Task
from tests.fakes.client import QUEUE_PATH, FakeCloudTasksClient
from tests.fakes.progress import RecordingProgress


@pytest.mark.asyncio
async def test_sync_reconciles_manifest(
    config_file: Path, manifest_file: Path, fake_client: FakeCloudTasksClient
) -> None:
    tp = TaskPilot(config=load_config(config_file), client=fake_client)

    result = await tp.sync()

    assert [task.task_id for task in result.plan.unchanged] == ["test_id_3b9aca02v1"]
    assert result.deleted == [f"{QUEUE_PATH}/tasks/test_get_2540be401v2"]
    assert result.created == []
    assert fake_client.entered == fake_client.exited == 1


@pytest.mark.asyncio
async def test_sync_dry_run_lists_but_does_not_mutate(
    config_file: Path, manifest_file: Path, fake_client: FakeCloudTasksClient
) -> None:
    tp = TaskPilot(config=load_config(config_file), client=fake_client)

    result = await tp.sync(dry_run=True)

    assert result.dry_run
    assert result.plan.deletes == [f"{QUEUE_PATH}/tasks/test_get_2540be401v2"]
    assert len(fake_client.list_calls) == 1
    assert fake_client.mutations == []


@pytest.mark.asyncio
async def test_sync_accepts_explicit_tasks(config_file: Path, fake_client: FakeCloudTasksClient) -> None:
    progress = RecordingProgress()
    tp = TaskPilot(config=load_config(config_file), client=fake_client, progress=progress)

    result = await tp.sync([])

    assert len(result.deleted) == 2
    assert ("done", "Delete") in progress.events


@pytest.mark.asyncio
async def test_list_tasks(config_file: Path, fake_client: FakeCloudTasksClient, remote_post: Task, remote_get: Task) -> None:
    tp = TaskPilot(config=load_config(config_file), client=fake_client)

    assert await tp.list_tasks() == [remote_post, remote_get]


@pytest.mark.asyncio
async def test_from_config_resolves_token_and_builds_client(
    monkeypatch: pytest.MonkeyPatch, config_file: Path, fake_client: FakeCloudTasksClient
) -> None:
    seen: list[str] = []

    def _create_client(config: TaskPilotConfig, *, token: str) -> FakeCloudTasksClient:
        seen.append(token)
        return fake_client

    monkeypatch.setattr("taskpilot.sdk.create_client", _create_client)
    tp = await TaskPilot.from_config(load_config(config_file))

    await tp.list_tasks()

    assert seen == ["ya29.test-token"]


def test_load_tasks_reads_configured_manifest(config_file: Path, manifest_file: Path) -> None:
    tp = TaskPilot(config=load_config(config_file))

    assert [task.id for task in tp.load_tasks()] == ["id"]
