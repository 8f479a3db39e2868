"""Tests for cache filesystem helpers."""

from __future__ import annotations

import pytest

from langcache.storage import (
    count_files,
    dumps_json,
    file_exists,
    read_json,
    reset_dir,
    write_json,
    write_text,
)


def test_dumps_json_tab_indented_and_ordered():
    assert dumps_json({"b": 1, "a": [True]}) == '{\n\t"b": 1,\n\t"a": [\n\t\ttrue\n\t]\n}'


def test_dumps_json_keeps_non_ascii():
    assert dumps_json({"t": "目"}) == '{\n\t"t": "目"\n}'


def test_write_and_read_json(tmp_path):
    path = tmp_path / "x.json"
    write_json(path, {"pages": {"1": {"title": "Ω"}}})
    assert read_json(path) == {"pages": {"1": {"title": "Ω"}}}


def test_write_text_keeps_newlines_exact(tmp_path):
    path = tmp_path / "x.txt"
    write_text(path, "a\n\nb")
    assert path.read_bytes() == b"a\n\nb"


def test_reset_dir_creates_missing(tmp_path):
    target = tmp_path / "a" / "b"
    reset_dir(target)
    assert target.is_dir()


def test_reset_dir_empties_existing(tmp_path):
    target = tmp_path / "talk"
    (target / "json").mkdir(parents=True)
    (target / "json" / "en.json").write_text("{}")
    (target / "stale.txt").write_text("old")
    reset_dir(target)
    assert target.is_dir()
    assert list(target.iterdir()) == []


def test_file_exists_ignores_directories(tmp_path):
    (tmp_path / "d.json").mkdir()
    (tmp_path / "f.json").write_text("{}")
    assert not file_exists(tmp_path / "d.json")
    assert file_exists(tmp_path / "f.json")
    assert not file_exists(tmp_path / "missing.json")


def test_count_files_by_suffix(tmp_path):
    (tmp_path / "a.txt").write_text("")
    (tmp_path / "b.txt").write_text("")
    (tmp_path / "c.json").write_text("")
    assert count_files(tmp_path, ".txt") == 2
    assert count_files(tmp_path / "missing", ".txt") == 0


def test_write_text_replaces_existing(tmp_path):
    path = tmp_path / "en.txt"
    write_text(path, "old")
    write_text(path, "new")
    assert path.read_text(encoding="utf-8") == "new"
    assert [p.name for p in tmp_path.iterdir()] == ["en.txt"]


def test_failed_write_leaves_no_file(tmp_path):
    path = tmp_path / "en.txt"
    with pytest.raises(UnicodeEncodeError):
        write_text(path, "broken \ud800")
    assert list(tmp_path.iterdir()) == []


def test_failed_write_keeps_previous_content(tmp_path):
    path = tmp_path / "en.json"
    write_json(path, {"ok": True})
    with pytest.raises(UnicodeEncodeError):
        write_json(path, {"ok": "\ud800"})
    assert read_json(path) == {"ok": True}
    assert [p.name for p in tmp_path.iterdir()] == ["en.json"]
