"""Shared pytest fixtures for langcache tests.

Provides a fast-retrying config, an in-memory stand-in for the JSON HTTP
client, and canned TED and MediaWiki payloads. No network access is made.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from urllib.parse import urlsplit

import pytest

from langcache.config import FetchConfig


class FakeJsonClient:
    """Answers ``get_json`` from a handler and records every call."""

    def __init__(self, handler: Callable[[str, dict[str, str]], Any]) -> None:
        self.handler = handler
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        params = dict(params or {})
        self.calls.append((url, params))
        result = self.handler(url, params)
        if isinstance(result, Exception):
            raise result
        return result

    def calls_for(self, key: str, value: str) -> list[tuple[str, dict[str, str]]]:
        return [c for c in self.calls if c[1].get(key) == value]


def transcript_payload(*paragraphs: list[str], start: float = 0) -> dict:
    """Build a TED transcript response from lists of cue texts."""
    t = start
    out = []
    for cues in paragraphs:
        items = []
        for text in cues:
            items.append({"time": t, "text": text})
            t += 1000
        out.append({"cues": items})
    return {"paragraphs": out}


class WikiFixture:
    """Canned MediaWiki responses for a small set of articles.

    ``articles`` maps an English title to ``(pageid, [(lang, localized title), ...])``.
    Any ``(lang, title)`` in ``broken_extracts`` gets an extract response
    without the ``extract`` field.
    """

    def __init__(
        self,
        articles: dict[str, tuple[int, list[tuple[str, str]]]],
        broken_extracts: set[tuple[str, str]] | None = None,
    ) -> None:
        self.articles = articles
        self.broken_extracts = broken_extracts or set()

    @staticmethod
    def locale_of(url: str) -> str:
        return urlsplit(url).hostname.split(".", 1)[0]

    def __call__(self, url: str, params: dict[str, str]) -> Any:
        lang = self.locale_of(url)
        if params.get("prop") == "langlinks":
            title = params["titles"]
            pageid, links = self.articles[title]
            return {
                "batchcomplete": "",
                "query": {
                    "pages": {
                        str(pageid): {
                            "pageid": pageid,
                            "ns": 0,
                            "title": title,
                            "langlinks": [{"lang": code, "*": t} for code, t in links],
                        }
                    }
                },
            }
        if params.get("prop") == "extracts":
            title = params["titles"]
            page = {"pageid": 7, "ns": 0, "title": title}
            if (lang, title) not in self.broken_extracts:
                page["extract"] = f"{title} ({lang}) plain text."
            return {"batchcomplete": "", "query": {"pages": {"7": page}}}
        if params.get("action") == "parse":
            title = params["page"]
            return {
                "parse": {
                    "pageid": 7,
                    "title": title,
                    "text": {"*": f"<p>{title} ({lang})</p>"},
                }
            }
        raise AssertionError(f"unexpected request {url} {params}")


@pytest.fixture
def fast_config(tmp_path: Path) -> FetchConfig:
    """Config rooted in tmp_path with three attempts and no backoff delay."""
    return FetchConfig(
        output_root=tmp_path / "cached",
        max_attempts=3,
        backoff_min=0,
        backoff_max=0,
        timeout_seconds=1,
    )


@pytest.fixture
def gravity_articles() -> dict[str, tuple[int, list[tuple[str, str]]]]:
    return {
        "Gravity": (11, [("es", "Gravedad"), ("fr", "Gravitation")]),
        "Eye": (22, [("ja", "目"), ("zh-min-nan", "Ba̍k-chiu")]),
    }
