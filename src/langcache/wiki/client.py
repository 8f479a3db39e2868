"""MediaWiki API queries used by the Wikipedia pipeline.

Three operations against ``https://<locale>.wikipedia.org/w/api.php``:

* ``prop=langlinks`` -- every locale carrying an equivalent article
* ``prop=extracts`` with ``explaintext`` -- the article as plain text
* ``action=parse`` with ``prop=text`` -- the rendered article markup

Each call returns the validated model together with the decoded JSON,
which is what gets cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from langcache.client import JsonApiClient
from langcache.constants import WIKI_API_URL, WIKI_LANGLINKS_LIMIT
from langcache.models import LangLink, Locale
from langcache.schemas import (
    ExtractResponse,
    LangLinksResponse,
    ParseResponse,
    validate_response,
)

M = TypeVar("M", bound=BaseModel)

# Sent with every request: anonymous CORS origin and JSON output.
_COMMON_PARAMS = {"origin": "*", "format": "json"}


@dataclass
class ApiPayload(Generic[M]):
    """A decoded response and its validated view."""

    raw: Any
    parsed: M


def api_url(locale: Locale) -> str:
    return WIKI_API_URL.format(locale=locale.code)


class WikiClient:
    """Typed access to the three MediaWiki queries."""

    def __init__(self, client: JsonApiClient) -> None:
        self._client = client

    async def _query(
        self, locale: Locale, params: dict[str, str], model: type[M]
    ) -> ApiPayload[M]:
        url = api_url(locale)
        data = await self._client.get_json(url, {**_COMMON_PARAMS, **params})
        detail = params.get("titles") or params.get("page") or ""
        parsed = validate_response(model, data, source=f"{url} ({detail})")
        return ApiPayload(raw=data, parsed=parsed)

    async def get_lang_links(
        self, locale: Locale, title: str
    ) -> ApiPayload[LangLinksResponse]:
        return await self._query(
            locale,
            {
                "action": "query",
                "prop": "langlinks",
                "titles": title,
                "lllimit": str(WIKI_LANGLINKS_LIMIT),
            },
            LangLinksResponse,
        )

    async def get_text_content(self, link: LangLink) -> ApiPayload[ExtractResponse]:
        return await self._query(
            link.locale,
            {
                "action": "query",
                "prop": "extracts",
                "explaintext": "",
                "titles": link.title,
            },
            ExtractResponse,
        )

    async def get_html_content(self, link: LangLink) -> ApiPayload[ParseResponse]:
        return await self._query(
            link.locale,
            {
                "action": "parse",
                "page": link.title,
                "prop": "text",
            },
            ParseResponse,
        )
