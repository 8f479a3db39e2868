"""Tests for the cache inventory."""

from __future__ import annotations

import json

from langcache.status import CacheEntry, manifest_page_count, scan_cache


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


def test_missing_root(tmp_path):
    assert scan_cache(tmp_path / "nothing") == []


def test_counts_per_talk_and_title(tmp_path):
    _touch(tmp_path / "ted-talks" / "1880" / "json" / "en.json")
    _touch(tmp_path / "ted-talks" / "1880" / "txt" / "en.txt")
    _touch(tmp_path / "ted-talks" / "1880" / "txt" / "ja.txt")
    _touch(tmp_path / "wikipedia" / "Gravity" / "html" / "es.html")
    _touch(tmp_path / "wikipedia" / "Eye" / "txt" / "ja.txt")
    _touch(tmp_path / "wikipedia" / "lang-links.json")

    assert scan_cache(tmp_path) == [
        CacheEntry("ted", "1880", json_files=1, txt_files=2, html_files=0),
        CacheEntry("wikipedia", "Eye", json_files=0, txt_files=1, html_files=0),
        CacheEntry("wikipedia", "Gravity", json_files=0, txt_files=0, html_files=1),
    ]


def test_manifest_page_count(tmp_path):
    assert manifest_page_count(tmp_path) is None
    manifest = tmp_path / "wikipedia" / "lang-links.json"
    manifest.parent.mkdir(parents=True)
    manifest.write_text(json.dumps({"pages": {"11": {}, "22": {}}}), encoding="utf-8")
    assert manifest_page_count(tmp_path) == 2
