"""Progress reporting for a sync run.

A run goes through up to three phases: ``Discover`` streams the remote queue
(its size is unknown up front), then ``Delete`` and ``Create`` apply the plan
with known totals. Every processed task name is reported as it completes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import StrEnum

_LOG = logging.getLogger(__name__)


class SyncPhase(StrEnum):
    DISCOVER = "Discover"
    DELETE = "Delete"
    CREATE = "Create"


class SyncProgress(ABC):
    """Observer of sync phases. Callbacks must not raise."""

    @abstractmethod
    def phase_start(self, phase: SyncPhase, total: int | None = None) -> None:
        """*total* is ``None`` while discovering."""
        ...  # pragma: no cover

    @abstractmethod
    def item_done(self, phase: SyncPhase, name: str) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: SyncPhase) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: SyncPhase, error: BaseException) -> None:
        ...  # pragma: no cover


class NullSyncProgress(SyncProgress):
    def phase_start(self, phase: SyncPhase, total: int | None = None) -> None:
        pass

    def item_done(self, phase: SyncPhase, name: str) -> None:
        pass

    def phase_done(self, phase: SyncPhase) -> None:
        pass

    def phase_error(self, phase: SyncPhase, error: BaseException) -> None:
        pass


class LoggingSyncProgress(SyncProgress):
    """Reports phases through :mod:`logging`; used when no live display is wanted."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or _LOG
        self._counts: dict[SyncPhase, int] = {}

    def phase_start(self, phase: SyncPhase, total: int | None = None) -> None:
        self._counts[phase] = 0
        if total is None:
            self._log.info("%s started", phase)
        else:
            self._log.info("%s started (%d tasks)", phase, total)

    def item_done(self, phase: SyncPhase, name: str) -> None:
        self._counts[phase] = self._counts.get(phase, 0) + 1
        self._log.debug("%s: %s", phase, name)

    def phase_done(self, phase: SyncPhase) -> None:
        self._log.info("%s done (%d tasks)", phase, self._counts.get(phase, 0))

    def phase_error(self, phase: SyncPhase, error: BaseException) -> None:
        self._log.error("%s failed after %d tasks: %s", phase, self._counts.get(phase, 0), error)
