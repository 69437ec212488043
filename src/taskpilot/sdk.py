"""SDK composition root for taskpilot."""

from __future__ import annotations

from collections.abc import Iterable

from taskpilot.auth import create_token_resolver
from taskpilot.config import load_config
from taskpilot.contracts.client import CloudTasksClient
from taskpilot.contracts.config import TaskPilotConfig
from taskpilot.contracts.sync import SyncResult
from taskpilot.contracts.task import Task
from taskpilot.engine import SyncEngine
from taskpilot.engine.progress import SyncProgress
from taskpilot.manifest import load_tasks
from taskpilot.providers import create_client


class TaskPilot:
    """taskpilot SDK public API."""

    def __init__(
        self,
        *,
        config: TaskPilotConfig,
        client: CloudTasksClient | None = None,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._progress = progress

    @classmethod
    async def from_config(
        cls,
        config: TaskPilotConfig,
        *,
        progress: SyncProgress | None = None,
    ) -> TaskPilot:
        return cls(config=config, progress=progress)

    @property
    def config(self) -> TaskPilotConfig:
        return self._config

    def load_tasks(self) -> list[Task]:
        return load_tasks(self._config.tasks_path)

    async def sync(self, tasks: Iterable[Task] | None = None, *, dry_run: bool = False) -> SyncResult:
        """Converge the configured queue on *tasks* (the manifest when omitted).

        Dry runs still list the remote queue so the returned plan is accurate;
        they never create or delete anything.
        """
        desired = list(tasks) if tasks is not None else self.load_tasks()
        client = await self._resolve_client()
        async with client:
            return await self._engine(client).sync(desired, dry_run=dry_run)

    async def list_tasks(self) -> list[Task]:
        """All managed tasks currently in the configured queue."""
        client = await self._resolve_client()
        async with client:
            return [task async for task in self._engine(client).list()]

    def _engine(self, client: CloudTasksClient) -> SyncEngine:
        return SyncEngine(
            client,
            self._config.queue_path,
            self._config.prefix,
            page_size=self._config.page_size,
            progress=self._progress,
        )

    async def _resolve_client(self) -> CloudTasksClient:
        if self._client is not None:
            return self._client

        token = await create_token_resolver(self._config).resolve()
        return create_client(self._config, token=token)


__all__ = ["TaskPilot", "load_config", "load_tasks"]
