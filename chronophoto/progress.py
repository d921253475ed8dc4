"""Progress display for the transfer stage."""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn


class ProgressContext:
    """Wraps an optional rich progress task; inactive contexts do nothing."""

    def __init__(self, progress: Optional[Progress] = None, task: Optional[TaskID] = None):
        self.progress = progress
        self.task = task

    @property
    def is_active(self) -> bool:
        return self.progress is not None and self.task is not None

    def advance(self, current_name: Optional[str] = None) -> None:
        """Step the bar by one file, naming it when given."""
        if not self.is_active:
            return
        if current_name:
            self.progress.update(self.task, description=f"Organizing {current_name}")
        self.progress.advance(self.task, 1)


@contextmanager
def transfer_progress(console: Console, total: int, enabled: bool) -> Iterator[ProgressContext]:
    """Yield a progress context for `total` transfers, or an inactive one."""
    if not enabled or total == 0:
        yield ProgressContext()
        return

    columns = (
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
    )
    with Progress(*columns, console=console, transient=True) as progress:
        task = progress.add_task("Organizing files", total=total)
        yield ProgressContext(progress, task)
