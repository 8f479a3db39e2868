"""Filesystem helpers for the content cache.

All helpers are blocking; the pipelines call them through
``asyncio.to_thread`` so file I/O does not stall other units.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

JSON_INDENT = "\t"


def dumps_json(value: Any) -> str:
    """Serialize *value* tab-indented, keeping key order and non-ASCII text."""
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)


def ensure_dirs(*dirs: Path) -> None:
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)


def reset_dir(path: Path) -> None:
    """Create *path* if needed and delete everything inside it."""
    path.mkdir(parents=True, exist_ok=True)
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
    logger.debug("Emptied %s", path)


def write_text(path: Path, content: str) -> None:
    """Write *content* as UTF-8 through a temporary file renamed onto *path*.

    A failed write leaves no file at *path*, so a later run that skips
    existing files will retry it.
    """
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(content, encoding="utf-8", newline="")
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def write_json(path: Path, value: Any) -> None:
    write_text(path, dumps_json(value))


def read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def file_exists(path: Path) -> bool:
    return path.is_file()


def count_files(directory: Path, suffix: str) -> int:
    """Count files ending in *suffix* directly inside *directory* (0 if absent)."""
    if not directory.is_dir():
        return 0
    return sum(1 for p in directory.iterdir() if p.is_file() and p.suffix == suffix)
