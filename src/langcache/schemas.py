"""Pydantic models for the TED and MediaWiki API responses.

Each model declares only the fields the pipelines read. Unknown keys are
ignored by validation; callers that need the untouched payload keep the
decoded JSON alongside the validated model.
"""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    StringConstraints,
    ValidationError,
)

from langcache.exceptions import SchemaError
from langcache.models import LOCALE_PATTERN

M = TypeVar("M", bound=BaseModel)

# MediaWiki keys pages by their numeric id rendered as a string.
PageId = Annotated[str, StringConstraints(pattern=r"^\d+$")]
LangCode = Annotated[str, StringConstraints(pattern=LOCALE_PATTERN)]


# ---------------------------------------------------------------------------
# TED transcript
# ---------------------------------------------------------------------------


class Cue(BaseModel):
    """A timed fragment of transcript text."""

    time: StrictInt | StrictFloat
    text: StrictStr

    model_config = ConfigDict(extra="ignore")


class Paragraph(BaseModel):
    cues: list[Cue]

    model_config = ConfigDict(extra="ignore")


class Transcript(BaseModel):
    """Transcript of one talk in one locale, in playback order."""

    paragraphs: list[Paragraph]

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# MediaWiki: prop=langlinks
# ---------------------------------------------------------------------------


class LangLinkEntry(BaseModel):
    lang: LangCode
    title: StrictStr = Field(alias="*")

    model_config = ConfigDict(extra="ignore")


class LangLinksPage(BaseModel):
    pageid: StrictInt
    ns: StrictInt
    title: StrictStr
    langlinks: list[LangLinkEntry]

    model_config = ConfigDict(extra="ignore")


class LangLinksQuery(BaseModel):
    pages: dict[PageId, LangLinksPage]


class LangLinksResponse(BaseModel):
    query: LangLinksQuery

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# MediaWiki: prop=extracts
# ---------------------------------------------------------------------------


class ExtractPage(BaseModel):
    pageid: StrictInt
    ns: StrictInt
    title: StrictStr
    extract: StrictStr

    model_config = ConfigDict(extra="ignore")


class ExtractQuery(BaseModel):
    pages: dict[PageId, ExtractPage]


class ExtractResponse(BaseModel):
    query: ExtractQuery

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# MediaWiki: action=parse
# ---------------------------------------------------------------------------


class ParsedText(BaseModel):
    markup: StrictStr = Field(alias="*")


class ParsedPage(BaseModel):
    pageid: StrictInt
    title: StrictStr
    text: ParsedText

    model_config = ConfigDict(extra="ignore")


class ParseResponse(BaseModel):
    parse: ParsedPage

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def validate_response(model: type[M], data: Any, source: str) -> M:
    """Validate decoded JSON against *model*.

    Args:
        model: The pydantic model describing the expected shape.
        data: Decoded JSON value.
        source: Human-readable origin (usually the request URL) for errors.

    Returns:
        The validated model instance.

    Raises:
        SchemaError: Listing every failing field location.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        problems = [
            (".".join(str(part) for part in err["loc"]), err["msg"])
            for err in e.errors()
        ]
        raise SchemaError(source, problems) from e


def first_page(pages: dict[str, M], source: str) -> M:
    """Return the first page of a ``query.pages`` mapping.

    Raises:
        SchemaError: If the mapping is empty.
    """
    for page in pages.values():
        return page
    raise SchemaError(source, [("query.pages", "no pages returned")])
