"""Paginated iterator over the managed tasks of one queue."""

from __future__ import annotations

import logging

from taskpilot import identity
from taskpilot.contracts.client import TaskLister
from taskpilot.contracts.task import Task
from taskpilot.contracts.wire import MAX_PAGE_SIZE, ListTasksRequest, ResponseView, WireTask
from taskpilot.convert import task_from_wire

_LOG = logging.getLogger(__name__)


class TaskIterator:
    """Single-pass async iterator of decoded tasks owned by *prefix*.

    Pages are fetched lazily: nothing is requested before the first advance,
    and page N+1 is requested only once page N is exhausted. Tasks whose name
    lacks the prefix are skipped; an owned task that fails to decode aborts
    iteration. This is not a snapshot; concurrent writers can cause
    duplicates or gaps at page boundaries.

    ``await iterator.next()`` raises :class:`StopAsyncIteration` at the end.
    """

    def __init__(self, lister: TaskLister, queue_path: str, prefix: str, *, page_size: int = MAX_PAGE_SIZE) -> None:
        self._lister = lister
        self._queue_path = queue_path
        self._prefix = prefix
        self._page_size = page_size
        self._name_prefix = identity.task_name(queue_path, prefix)

        self._page: list[WireTask] = []
        self._position = 0
        self._page_token = ""
        self._started = False
        self._pages = 0

    @property
    def queue_path(self) -> str:
        return self._queue_path

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def pages_fetched(self) -> int:
        return self._pages

    def __aiter__(self) -> TaskIterator:
        return self

    async def __anext__(self) -> Task:
        return await self.next()

    async def next(self) -> Task:
        while True:
            if self._position >= len(self._page):
                if self._started and not self._page_token:
                    raise StopAsyncIteration
                await self._fetch_page()
                continue

            wire = self._page[self._position]
            self._position += 1

            if not wire.name.startswith(self._name_prefix):
                continue

            return task_from_wire(self._queue_path, self._prefix, wire)

    async def _fetch_page(self) -> None:
        request = ListTasksRequest(
            parent=self._queue_path,
            page_size=self._page_size,
            page_token=self._page_token,
            response_view=ResponseView.BASIC,
        )
        page = await self._lister.list_tasks(request)
        self._started = True
        self._pages += 1
        self._page = page.tasks
        self._position = 0
        self._page_token = page.next_page_token
        _LOG.debug(
            "Fetched task page %d for %s (%d tasks, more=%s)",
            self._pages,
            self._queue_path,
            len(page.tasks),
            bool(page.next_page_token),
        )
