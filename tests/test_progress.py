"""Tests for the progress tracker's task bookkeeping."""

from __future__ import annotations

from langcache.progress import FetchProgressTracker, _truncate_path


def test_events_before_start_are_ignored():
    tracker = FetchProgressTracker("Test")
    tracker.add_units(3)
    tracker.file_written("a.txt")
    tracker.file_skipped("b.txt")
    tracker.unit_failed("Gravity [es]")
    tracker.unit_done()


def test_total_grows_and_units_advance():
    with FetchProgressTracker("Test") as tracker:
        tracker.add_units(2)
        tracker.add_units(1)
        tracker.file_written("cached/wikipedia/Gravity/txt/en.txt")
        tracker.unit_done()
        tracker.unit_failed("Gravity [es]")
        tracker.unit_done()
        task = tracker._progress.tasks[0]
    assert task.total == 3
    assert task.completed == 2
    assert task.fields["status"] == "[red]FAIL[/red] Gravity \\[es]"


def test_truncate_path_keeps_tail():
    long_path = "cached/wikipedia/Albert Einstein/html/zh-min-nan.html"
    short = _truncate_path(long_path)
    assert len(short) == 40
    assert short.endswith("zh-min-nan.html")
    assert _truncate_path("a/b.txt") == "a/b.txt"
