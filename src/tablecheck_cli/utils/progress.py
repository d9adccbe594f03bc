"""Rich progress bars for commands that walk through table records."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from tablecheck.validations.record import ProgressCallback

__all__ = ["RecordProgress", "progress_tracker"]


@dataclass
class RecordProgress:
    """Counts processed records and mirrors the count on a progress bar."""

    progress: Progress
    task_id: TaskID
    console: Console
    total: int
    noun: str = "records"
    processed: int = 0
    done: bool = False

    def advance(self, step: int = 1) -> None:
        self.processed += step
        self.progress.update(
            self.task_id,
            advance=step,
            description=f"Processed {self.processed}/{self.total} {self.noun}",
        )

    @property
    def callback(self) -> ProgressCallback:
        """The per-record hook expected by the validation engine."""

        return self.advance

    def succeed(self, message: str) -> None:
        self.progress.update(self.task_id, completed=max(self.total, 1))
        self.done = True
        self.console.print(f"[bold green]✔ {message}[/bold green]")

    def fail(self, message: str) -> None:
        self.done = True
        self.console.print(f"[bold red]✖ {message}[/bold red]")


@contextmanager
def progress_tracker(
    title: str,
    *,
    total: int,
    noun: str = "records",
    console: Optional[Console] = None,
) -> Iterator[RecordProgress]:
    """Show a titled bar for *total* items and yield its :class:`RecordProgress`.

    An empty table still renders a completed bar.
    """

    output = console or Console()
    output.rule(f"[bold cyan]{title}")

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=None),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=output,
    ) as progress:
        task_id = progress.add_task(f"Processing {noun}", total=max(total, 1))
        tracker = RecordProgress(progress, task_id, output, total, noun)
        try:
            yield tracker
        except Exception:
            if not tracker.done:
                tracker.fail(f"{title} failed.")
            raise
        if not tracker.done:
            tracker.succeed(f"{title} completed.")
