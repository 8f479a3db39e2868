"""Fetch one talk's transcripts in every locale and cache them.

For each locale the validated transcript is written as JSON and as plain
text. The talk directory is emptied at the start of every run, so the
cache always reflects the latest run only.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable

from langcache.client import JsonApiClient
from langcache.collector import RunCollector, gather_settled
from langcache.constants import TED_TRANSCRIPT_URL
from langcache.models import Locale, RunSummary
from langcache.schemas import Transcript, validate_response
from langcache.storage import ensure_dirs, reset_dir, write_json, write_text
from langcache.text import transcript_to_plain_text

logger = logging.getLogger(__name__)


def transcript_url(talk_id: int) -> str:
    return TED_TRANSCRIPT_URL.format(talk_id=talk_id)


class TranscriptFetcher:
    """Downloads transcripts for one talk.

    Usage::

        fetcher = TranscriptFetcher(client, 1880, locales, Path("cached/ted-talks"))
        summary = await fetcher.run()

    Args:
        client: HTTP client used for every request.
        talk_id: TED talk identifier.
        locales: Locales to fetch, in order.
        root: Directory holding one subdirectory per talk.
        progress: Optional progress tracker (omit for headless mode).
    """

    def __init__(
        self,
        client: JsonApiClient,
        talk_id: int,
        locales: Iterable[Locale],
        root: Path,
        progress: Any | None = None,
    ) -> None:
        self._client = client
        self.talk_id = talk_id
        self.locales = list(locales)
        self.talk_dir = root / str(talk_id)
        self.json_dir = self.talk_dir / "json"
        self.txt_dir = self.talk_dir / "txt"
        self._progress = progress

    async def fetch_transcript(self, locale: Locale) -> Transcript:
        """Fetch and validate the transcript for *locale*."""
        url = transcript_url(self.talk_id)
        data = await self._client.get_json(url, {"language": locale.code})
        return validate_response(Transcript, data, source=f"{url}?language={locale}")

    async def _write_locale(self, locale: Locale, collector: RunCollector) -> None:
        transcript = await self.fetch_transcript(locale)

        json_path = self.json_dir / f"{locale}.json"
        txt_path = self.txt_dir / f"{locale}.txt"

        await asyncio.to_thread(write_json, json_path, transcript.model_dump())
        collector.record_written(json_path)
        await asyncio.to_thread(
            write_text, txt_path, transcript_to_plain_text(transcript, locale)
        )
        collector.record_written(txt_path)

    async def _fetch_locale(self, locale: Locale, collector: RunCollector) -> None:
        try:
            await self._write_locale(locale, collector)
        finally:
            if self._progress is not None:
                self._progress.unit_done()

    async def run(self) -> RunSummary:
        """Empty the talk directory, then fetch every locale concurrently.

        A failing locale is recorded in the summary; the others still run.
        """
        collector = RunCollector(self._progress)

        await asyncio.to_thread(reset_dir, self.talk_dir)
        await asyncio.to_thread(ensure_dirs, self.json_dir, self.txt_dir)

        logger.info(
            "Fetching talk %d transcripts in %d locales", self.talk_id, len(self.locales)
        )
        if self._progress is not None:
            self._progress.add_units(len(self.locales))

        await gather_settled(
            collector,
            (
                (f"transcript {self.talk_id} [{locale}]", self._fetch_locale(locale, collector))
                for locale in self.locales
            ),
        )

        summary = collector.summary
        logger.info(
            "Talk %d: %d files written, %d locales failed",
            self.talk_id,
            summary.written,
            summary.failed,
        )
        return summary
