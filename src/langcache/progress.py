"""Rich progress display for fetch runs.

Two tiers:

* **Units** -- (locale, resource) pairs finished out of those discovered
  so far; the total grows as language links come in
* **Status text** -- the file most recently written or skipped
"""

from __future__ import annotations

from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class FetchProgressTracker:
    """Rich progress tracker for one pipeline run.

    Usage::

        with FetchProgressTracker("Transcripts") as tracker:
            tracker.add_units(45)
            tracker.file_written("cached/ted-talks/1880/txt/en.txt")
            tracker.unit_done()
    """

    def __init__(self, description: str) -> None:
        self._description = description
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("{task.fields[status]}", style="dim"),
        )
        self._task: TaskID | None = None
        self._total = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        self._progress.start()
        self._task = self._progress.add_task(
            f"[green]{self._description}", total=None, status="starting..."
        )

    def stop(self) -> None:
        self._progress.stop()

    def __enter__(self) -> FetchProgressTracker:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_units(self, count: int) -> None:
        """Grow the total by *count* newly discovered units."""
        self._total += count
        if self._task is not None:
            self._progress.update(self._task, total=self._total)

    def unit_done(self) -> None:
        if self._task is not None:
            self._progress.advance(self._task, 1)

    def file_written(self, path: str) -> None:
        self._set_status(escape(_truncate_path(path)))

    def file_skipped(self, path: str) -> None:
        self._set_status(f"[yellow]skip[/yellow] {escape(_truncate_path(path))}")

    def unit_failed(self, label: str) -> None:
        self._set_status(f"[red]FAIL[/red] {escape(label)}")

    def _set_status(self, status: str) -> None:
        if self._task is not None:
            self._progress.update(self._task, status=status)


def _truncate_path(path: str, max_len: int = 40) -> str:
    """Truncate a path for display, keeping its end."""
    if len(path) <= max_len:
        return path
    return "..." + path[-(max_len - 3) :]
