# codechunk/cli/ui/progress.py
"""
Progress bar for ingestion runs.

The total is only known once the diff has been computed, so the bar starts
indeterminate and picks the total up from the first progress callback.
"""

from __future__ import annotations

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from codechunk.cli.ui.console import console


class IngestProgress:
    """
    Usage:
        with IngestProgress("Ingesting") as on_progress:
            await coordinator.ingest_all(source, on_progress=on_progress)
    """

    def __init__(self, description: str = "Ingesting"):
        self.description = description
        self.progress = None
        self.task = None

    def __enter__(self):
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("{task.fields[errors]} failed"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self.progress.__enter__()
        self.task = self.progress.add_task(self.description, total=None, errors=0)
        return self.update

    def update(self, processed: int, total: int, errors: int) -> None:
        self.progress.update(self.task, completed=processed, total=total, errors=errors)

    def __exit__(self, *args):
        self.progress.__exit__(*args)


__all__ = ["IngestProgress"]
