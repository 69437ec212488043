"""Remote queue client contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from taskpilot.contracts.wire import CreateTaskRequest, DeleteTaskRequest, ListTasksPage, ListTasksRequest, WireTask


class TaskLister(ABC):
    @abstractmethod
    async def list_tasks(self, request: ListTasksRequest) -> ListTasksPage: ...  # pragma: no cover


class CloudTasksClient(TaskLister):
    """Queue-scoped create/list/delete. There is no update primitive.

    Implementations raise :class:`~taskpilot.contracts.exceptions.TransportError`
    with the remote ``status`` set (``ALREADY_EXISTS`` on create collisions).
    """

    @abstractmethod
    async def __aenter__(self) -> CloudTasksClient: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def create_task(self, request: CreateTaskRequest) -> WireTask: ...  # pragma: no cover

    @abstractmethod
    async def delete_task(self, request: DeleteTaskRequest) -> None: ...  # pragma: no cover
