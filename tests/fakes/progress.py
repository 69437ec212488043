"""Progress observer that records every callback."""

from __future__ import annotations

from taskpilot.engine.progress import SyncPhase, SyncProgress


class RecordingProgress(SyncProgress):
    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def phase_start(self, phase: SyncPhase, total: int | None = None) -> None:
        self.events.append(("start", str(phase), str(total)))

    def item_done(self, phase: SyncPhase, name: str) -> None:
        self.events.append(("item", str(phase), name))

    def phase_done(self, phase: SyncPhase) -> None:
        self.events.append(("done", str(phase)))

    def phase_error(self, phase: SyncPhase, error: BaseException) -> None:
        self.events.append(("error", str(phase), type(error).__name__))
