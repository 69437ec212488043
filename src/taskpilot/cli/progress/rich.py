"""Rich-based sync progress display."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from taskpilot.engine.progress import SyncPhase, SyncProgress


class RichSyncProgress(SyncProgress):
    """Live terminal progress, one row per sync phase.

    Use as a context manager so the live display is started and stopped::

        with RichSyncProgress() as progress:
            result = await engine.sync(tasks)

    The last task id handled in each phase is shown beside its bar.
    """

    _PHASE_LABELS: ClassVar[dict[SyncPhase, str]] = {
        SyncPhase.DISCOVER: "[cyan]Discover[/]",
        SyncPhase.DELETE: "[red]Delete[/]",
        SyncPhase.CREATE: "[green]Create[/]",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>14}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("[dim]{task.fields[current]}"),
            console=self._console,
            transient=False,
        )
        self._rows: dict[SyncPhase, RichTaskID] = {}

    def __enter__(self) -> RichSyncProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: SyncPhase, total: int | None = None) -> None:
        label = self._PHASE_LABELS.get(phase, str(phase))
        self._rows[phase] = self._progress.add_task(label, total=total, current="")

    def item_done(self, phase: SyncPhase, name: str) -> None:
        row = self._rows.get(phase)
        if row is not None:
            self._progress.update(row, advance=1, current=name.rsplit("/", 1)[-1])

    def phase_done(self, phase: SyncPhase) -> None:
        row = self._rows.get(phase)
        if row is None:
            return
        task = self._progress.tasks[row]
        # Discover has no total until the listing ends.
        total = task.total if task.total is not None else task.completed
        self._progress.update(row, total=total, completed=total, current="")

    def phase_error(self, phase: SyncPhase, error: BaseException) -> None:
        row = self._rows.get(phase)
        if row is None:
            return
        self._progress.update(row, description=f"[red]✗[/red] {phase:>10}")
