"""Inventory of what a previous run left in the cache."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from langcache.constants import TED_SUBDIR, WIKI_MANIFEST_NAME, WIKI_SUBDIR
from langcache.storage import count_files, read_json


@dataclass(slots=True)
class CacheEntry:
    """File counts for one talk or one article title."""

    source: str  # "ted" or "wikipedia"
    name: str
    json_files: int
    txt_files: int
    html_files: int


def _scan(base: Path, source: str, with_html: bool) -> list[CacheEntry]:
    if not base.is_dir():
        return []
    entries = []
    for d in sorted(p for p in base.iterdir() if p.is_dir()):
        entries.append(
            CacheEntry(
                source=source,
                name=d.name,
                json_files=count_files(d / "json", ".json"),
                txt_files=count_files(d / "txt", ".txt"),
                html_files=count_files(d / "html", ".html") if with_html else 0,
            )
        )
    return entries


def scan_cache(output_root: Path) -> list[CacheEntry]:
    """List cached talks, then cached article titles, each sorted by name."""
    return _scan(output_root / TED_SUBDIR, "ted", with_html=False) + _scan(
        output_root / WIKI_SUBDIR, "wikipedia", with_html=True
    )


def manifest_page_count(output_root: Path) -> int | None:
    """Number of page records in the Wikipedia manifest, or None if absent."""
    path = output_root / WIKI_SUBDIR / WIKI_MANIFEST_NAME
    if not path.is_file():
        return None
    return len(read_json(path).get("pages", {}))
