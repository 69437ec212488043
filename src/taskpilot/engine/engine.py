"""Queue reconciliation engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from taskpilot import identity
from taskpilot.contracts.client import CloudTasksClient, TaskLister
from taskpilot.contracts.exceptions import TaskAlreadyExistsError, TaskValidationError, TransportError
from taskpilot.contracts.sync import SyncPlan, SyncResult
from taskpilot.contracts.task import Task
from taskpilot.contracts.wire import MAX_PAGE_SIZE, CreateTaskRequest, DeleteTaskRequest, ResponseView
from taskpilot.convert import task_to_wire
from taskpilot.engine.progress import NullSyncProgress, SyncPhase, SyncProgress
from taskpilot.iterator import TaskIterator

_LOG = logging.getLogger(__name__)

ALREADY_EXISTS = "ALREADY_EXISTS"


class SyncEngine:
    """Converges the managed tasks of one queue on a desired set.

    The remote queue only supports create/list/delete, so a changed task is
    replaced: the old remote task is deleted and the desired task is created
    under a higher version. All deletes run before any create, strictly in
    sequence, and the first failure aborts the run without rollback. Every
    decision is recomputed from live remote state, so a failed sync is safe
    to re-run.
    """

    def __init__(
        self,
        client: CloudTasksClient,
        queue_path: str,
        prefix: str,
        *,
        lister: TaskLister | None = None,
        page_size: int = MAX_PAGE_SIZE,
        progress: SyncProgress | None = None,
    ) -> None:
        self._client = client
        self._lister: TaskLister = lister or client
        self._queue_path = queue_path
        self._prefix = prefix
        self._page_size = page_size
        self._progress: SyncProgress = progress or NullSyncProgress()

    @property
    def queue_path(self) -> str:
        return self._queue_path

    @property
    def prefix(self) -> str:
        return self._prefix

    def list(self) -> TaskIterator:
        """Fresh iterator over the managed remote tasks; no call is made until it is advanced."""
        return TaskIterator(self._lister, self._queue_path, self._prefix, page_size=self._page_size)

    async def sync(self, tasks: Iterable[Task], *, dry_run: bool = False) -> SyncResult:
        plan = await self.plan(tasks)
        if dry_run:
            return SyncResult(plan=plan, dry_run=True)
        return await self.apply(plan)

    async def plan(self, tasks: Iterable[Task]) -> SyncPlan:
        """Diff *tasks* against the queue without mutating anything.

        Each remote task is either unchanged (it satisfies the desired task
        with the same comparison key), stale (no desired task has its key) or
        superseded (same key, different method/URL/authorization, or a newer
        desired version). Superseded desired tasks come back as copies whose
        version is above every conflicting remote version.
        """
        desired = self._desired_by_key(tasks)
        deletes: list[str] = []
        unchanged: list[Task] = []

        self._progress.phase_start(SyncPhase.DISCOVER)
        try:
            async for remote in self.list():
                key = remote.comparison_key
                wanted = desired.get(key)
                if wanted is None:
                    _LOG.debug("Stale task %s", remote.task_name)
                    deletes.append(remote.task_name)
                elif wanted.matches(remote):
                    _LOG.debug("Unchanged task %s", remote.task_name)
                    del desired[key]
                    unchanged.append(remote)
                else:
                    _LOG.debug("Superseded task %s", remote.task_name)
                    deletes.append(remote.task_name)
                    if wanted.version <= remote.version:
                        desired[key] = wanted.model_copy(update={"version": remote.version + 1})
                self._progress.item_done(SyncPhase.DISCOVER, remote.task_name)
            self._progress.phase_done(SyncPhase.DISCOVER)
        except BaseException as exc:
            self._progress.phase_error(SyncPhase.DISCOVER, exc)
            raise

        return SyncPlan(
            queue_path=self._queue_path,
            prefix=self._prefix,
            deletes=deletes,
            creates=list(desired.values()),
            unchanged=unchanged,
        )

    async def apply(self, plan: SyncPlan) -> SyncResult:
        deleted: list[str] = []
        created: list[str] = []
        try:
            await self._run_deletes(plan.deletes, deleted)
            await self._run_creates(plan.creates, created)
        except Exception as exc:
            exc.add_note(f"applied {len(deleted)} deletes and {len(created)} creates before the failure")
            raise

        _LOG.info("Synced %s: %d deleted, %d created", self._queue_path, len(deleted), len(created))
        return SyncResult(plan=plan, deleted=deleted, created=created)

    async def create(self, task: Task) -> Task:
        """Create *task* remotely and return it with the version it was created under."""
        task = self._bind(task)
        identity.validate(task)
        request = CreateTaskRequest(parent=task.queue_path, task=task_to_wire(task), response_view=ResponseView.BASIC)

        _LOG.debug("Creating task %s", task.task_name)
        try:
            await self._client.create_task(request)
        except TransportError as exc:
            if exc.status == ALREADY_EXISTS:
                raise TaskAlreadyExistsError(task.task_name) from exc
            exc.add_note(f"while creating task {task.task_name}")
            raise
        return task

    async def delete(self, name: str) -> None:
        _LOG.debug("Deleting task %s", name)
        try:
            await self._client.delete_task(DeleteTaskRequest(name=name))
        except TransportError as exc:
            exc.add_note(f"while deleting task {name}")
            raise

    async def _run_deletes(self, names: list[str], deleted: list[str]) -> None:
        self._progress.phase_start(SyncPhase.DELETE, total=len(names))
        try:
            for name in names:
                await self.delete(name)
                deleted.append(name)
                self._progress.item_done(SyncPhase.DELETE, name)
            self._progress.phase_done(SyncPhase.DELETE)
        except BaseException as exc:
            self._progress.phase_error(SyncPhase.DELETE, exc)
            raise

    async def _run_creates(self, tasks: list[Task], created: list[str]) -> None:
        self._progress.phase_start(SyncPhase.CREATE, total=len(tasks))
        try:
            for task in tasks:
                created_task = await self.create(task)
                created.append(created_task.task_name)
                self._progress.item_done(SyncPhase.CREATE, created_task.task_name)
            self._progress.phase_done(SyncPhase.CREATE)
        except BaseException as exc:
            self._progress.phase_error(SyncPhase.CREATE, exc)
            raise

    def _desired_by_key(self, tasks: Iterable[Task]) -> dict[str, Task]:
        desired: dict[str, Task] = {}
        for task in tasks:
            bound = self._bind(task)
            identity.validate(bound)
            key = bound.comparison_key
            if key in desired:
                raise TaskValidationError(f"duplicate task {bound.id!r} scheduled at {bound.scheduled_at.isoformat()}")
            desired[key] = bound
        return desired

    def _bind(self, task: Task) -> Task:
        """Fill in queue/prefix/version defaults; reject tasks aimed at another queue or prefix."""
        updates: dict[str, object] = {}
        if not task.queue_path:
            updates["queue_path"] = self._queue_path
        elif task.queue_path != self._queue_path:
            raise TaskValidationError(f"task {task.id!r} targets queue {task.queue_path}, not {self._queue_path}")
        if not task.prefix:
            updates["prefix"] = self._prefix
        elif task.prefix != self._prefix:
            raise TaskValidationError(f"task {task.id!r} has prefix {task.prefix!r}, not {self._prefix!r}")
        if task.version == 0:
            updates["version"] = 1
        if not updates:
            return task
        return task.model_copy(update=updates)
