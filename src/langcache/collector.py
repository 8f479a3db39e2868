"""Run-wide accumulation of page records, counters and failures.

One :class:`RunCollector` is created per pipeline run and passed to every
unit of work. Units only ever merge into it, and the event loop switches
tasks only at ``await`` points, so each merge is atomic without a lock.
Porting the pipelines to threads would require guarding these methods.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Iterable

from langcache.models import RunSummary, UnitFailure

logger = logging.getLogger(__name__)


class RunCollector:
    """Accumulates results from concurrently running units."""

    def __init__(self, progress: Any | None = None) -> None:
        self.pages: dict[str, Any] = {}
        self.summary = RunSummary()
        self._progress = progress

    # ------------------------------------------------------------------
    # Page bundle
    # ------------------------------------------------------------------

    def merge_pages(self, pages: dict[str, Any]) -> None:
        """Merge page records keyed by page id; later records win."""
        self.pages.update(pages)

    def manifest(self) -> dict[str, Any]:
        return {"pages": self.pages}

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def record_written(self, path: object) -> int:
        self.summary.written += 1
        n = self.summary.written + self.summary.skipped
        logger.info("%d (Wrote %s)", n, path)
        if self._progress is not None:
            self._progress.file_written(str(path))
        return n

    def record_skipped(self, path: object) -> int:
        self.summary.skipped += 1
        n = self.summary.written + self.summary.skipped
        logger.info("%d (%s already written)", n, path)
        if self._progress is not None:
            self._progress.file_skipped(str(path))
        return n

    def record_failure(self, label: str, error: BaseException) -> None:
        self.summary.failures.append(UnitFailure(label=label, error=error))
        logger.error("%s failed: %s", label, error)
        if self._progress is not None:
            self._progress.unit_failed(label)


async def gather_settled(
    collector: RunCollector,
    units: Iterable[tuple[str, Awaitable[Any]]],
) -> list[Any]:
    """Run labelled awaitables concurrently and record every failure.

    A failing unit never cancels its siblings. Failed units yield ``None``
    in the returned list, which keeps the input order.

    Args:
        collector: Receives one :class:`UnitFailure` per exception.
        units: ``(label, awaitable)`` pairs.

    Returns:
        Each unit's result, or ``None`` where it failed.
    """
    labelled = list(units)
    results = await asyncio.gather(
        *(aw for _, aw in labelled), return_exceptions=True
    )
    settled: list[Any] = []
    for (label, _), result in zip(labelled, results):
        if isinstance(result, Exception):
            collector.record_failure(label, result)
            settled.append(None)
        elif isinstance(result, BaseException):
            raise result
        else:
            settled.append(result)
    return settled
