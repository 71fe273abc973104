# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI output helpers."""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn

console = Console()


@contextmanager
def progress_spinner(description: str, transient: bool = True, no_progress: bool = False) -> Iterator[TaskID | None]:
    """Display a progress spinner during long-running operations.

    Yields:
        TaskID for progress updates, or None when progress is disabled
    """
    if no_progress:
        yield None
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=transient
    ) as progress:
        task = progress.add_task(description, total=None)
        try:
            yield task
        finally:
            progress.update(task, completed=True)


def format_status(status: str, is_success: bool) -> str:
    """Format status with color (green=success, red=failure)."""
    color = "green" if is_success else "red"
    return f"[{color}]{status}[/{color}]"


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")
