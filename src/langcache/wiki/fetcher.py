"""Fetch every language version of a set of Wikipedia articles.

For each canonical title the base-locale API lists the article's
language links. Every (locale, title) pair then becomes a unit that
writes ``json/<lang>.json``, ``txt/<lang>.txt`` and ``html/<lang>.html``
under the title's directory. Files that already exist are skipped, so a
re-run only fetches what is missing. A ``lang-links.json`` manifest of all
discovered page records is written once every title has finished.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from langcache.collector import RunCollector, gather_settled
from langcache.constants import WIKI_BASE_LOCALE, WIKI_MANIFEST_NAME
from langcache.exceptions import InvalidTitleError
from langcache.models import LangLink, Locale, RunSummary
from langcache.schemas import (
    ExtractResponse,
    LangLinksResponse,
    ParseResponse,
    first_page,
)
from langcache.storage import dumps_json, ensure_dirs, file_exists, write_json, write_text
from langcache.wiki.client import ApiPayload, WikiClient

logger = logging.getLogger(__name__)

Renderer = Callable[[ApiPayload[ExtractResponse], ApiPayload[ParseResponse]], str]


def validate_title(title: str) -> str:
    """Return *title* if it is usable as a single directory name.

    Raises:
        InvalidTitleError: If *title* is empty, is ``.`` or ``..``, or
            contains a path separator or NUL.
    """
    if title.strip() in ("", ".", "..") or any(c in title for c in "/\\\0"):
        raise InvalidTitleError(f"Title cannot be used as a directory name: {title!r}")
    return title


def _render_txt(text: ApiPayload[ExtractResponse], html: ApiPayload[ParseResponse]) -> str:
    return first_page(text.parsed.query.pages, source="extract").extract


def _render_html(text: ApiPayload[ExtractResponse], html: ApiPayload[ParseResponse]) -> str:
    return html.parsed.parse.text.markup


def _render_json(text: ApiPayload[ExtractResponse], html: ApiPayload[ParseResponse]) -> str:
    return dumps_json({"text": text.raw, "html": html.raw})


class WikiFetcher:
    """Caches all language versions of the given articles.

    Usage::

        fetcher = WikiFetcher(WikiClient(client), titles, Path("cached/wikipedia"))
        summary = await fetcher.run()

    Args:
        wiki: MediaWiki query client.
        titles: Canonical article titles in the base locale.
        root: Directory holding one subdirectory per title and the manifest.
        base_locale: Locale the titles are written in.
        progress: Optional progress tracker (omit for headless mode).
    """

    def __init__(
        self,
        wiki: WikiClient,
        titles: Iterable[str],
        root: Path,
        base_locale: Locale | None = None,
        progress: Any | None = None,
    ) -> None:
        self._wiki = wiki
        self.titles = [validate_title(t) for t in titles]
        self.root = root
        self.base_locale = base_locale or Locale.parse(WIKI_BASE_LOCALE)
        self._progress = progress

    @property
    def manifest_path(self) -> Path:
        return self.root / WIKI_MANIFEST_NAME

    def title_dir(self, title: str) -> Path:
        return self.root / title

    def build_worklist(self, title: str, response: LangLinksResponse) -> list[LangLink]:
        """The base locale with the canonical title, then every discovered link."""
        page = first_page(response.query.pages, source=f"langlinks ({title})")
        return [
            LangLink(self.base_locale, title),
            *(LangLink(Locale.parse(link.lang), link.title) for link in page.langlinks),
        ]

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    async def _write(self, path: Path, content: str, collector: RunCollector) -> None:
        await asyncio.to_thread(write_text, path, content)
        collector.record_written(path)

    async def _process_link(
        self, title_dir: Path, link: LangLink, collector: RunCollector
    ) -> None:
        try:
            await self._cache_link(title_dir, link, collector)
        finally:
            if self._progress is not None:
                self._progress.unit_done()

    async def _cache_link(
        self, title_dir: Path, link: LangLink, collector: RunCollector
    ) -> None:
        lang = link.locale.code
        targets: dict[Path, Renderer] = {
            title_dir / "txt" / f"{lang}.txt": _render_txt,
            title_dir / "html" / f"{lang}.html": _render_html,
            title_dir / "json" / f"{lang}.json": _render_json,
        }

        missing: list[tuple[Path, Renderer]] = []
        for path, render in targets.items():
            if await asyncio.to_thread(file_exists, path):
                collector.record_skipped(path)
            else:
                missing.append((path, render))

        if missing:
            text = await self._wiki.get_text_content(link)
            html = await self._wiki.get_html_content(link)
            rendered = [(path, render(text, html)) for path, render in missing]
            await gather_settled(
                collector,
                (
                    (f"write {path}", self._write(path, content, collector))
                    for path, content in rendered
                ),
            )

    async def _process_title(self, title: str, collector: RunCollector) -> None:
        payload = await self._wiki.get_lang_links(self.base_locale, title)
        collector.merge_pages(payload.raw["query"]["pages"])
        links = self.build_worklist(title, payload.parsed)
        logger.info("%s: %d language versions", title, len(links))

        title_dir = self.title_dir(title)
        await asyncio.to_thread(
            ensure_dirs,
            title_dir / "json",
            title_dir / "txt",
            title_dir / "html",
        )
        if self._progress is not None:
            self._progress.add_units(len(links))

        await gather_settled(
            collector,
            (
                (f"{title} [{link.locale}]", self._process_link(title_dir, link, collector))
                for link in links
            ),
        )

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    async def run(self) -> RunSummary:
        """Process every title concurrently, then write the manifest.

        Returns:
            Summary whose failures list every unit that raised.
        """
        collector = RunCollector(self._progress)
        await asyncio.to_thread(ensure_dirs, self.root)

        await gather_settled(
            collector,
            ((title, self._process_title(title, collector)) for title in self.titles),
        )

        await asyncio.to_thread(write_json, self.manifest_path, collector.manifest())
        logger.info(
            "Wrote manifest %s (%d pages)", self.manifest_path, len(collector.pages)
        )
        return collector.summary
