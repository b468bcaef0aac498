"""Rich progress display for batch scoring commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing_extensions import override

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .protocols import ProgressReporter


def _build_progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=Console(stderr=True),
        transient=True,
    )


@dataclass
class CliProgressReporter(ProgressReporter):
    """Shows one progress bar per batch run."""

    _progress: Progress = field(default_factory=_build_progress)
    _task_id: TaskID | None = None

    @override
    def start(self, label: str, total: int | None) -> None:
        if self._task_id is None:
            self._progress.start()
        else:
            self._progress.remove_task(self._task_id)
        self._task_id = self._progress.add_task(label, total=total)

    @override
    def advance(self, count: int) -> None:
        if self._task_id is not None:
            self._progress.advance(self._task_id, count)

    @override
    def finish(self) -> None:
        if self._task_id is None:
            return
        self._progress.remove_task(self._task_id)
        self._task_id = None
        self._progress.stop()
