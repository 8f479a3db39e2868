"""Plain-text rendering of validated transcripts."""

from __future__ import annotations

import re

from langcache.constants import COMPACT_SCRIPT_LANGUAGES
from langcache.models import Locale
from langcache.schemas import Transcript

_WHITESPACE_RE = re.compile(r"\s+")

PARAGRAPH_SEPARATOR = "\n\n"


def word_joiner(locale: Locale) -> str:
    """Return the string placed between words for *locale*.

    Scripts written without inter-word spaces (Chinese, Japanese) join
    with the empty string; everything else joins with a single space.
    """
    return "" if locale.language in COMPACT_SCRIPT_LANGUAGES else " "


def collapse_whitespace(text: str, joiner: str) -> str:
    """Replace every whitespace run in *text* with *joiner*, trimming the ends."""
    return _WHITESPACE_RE.sub(joiner, text.strip())


def transcript_to_plain_text(transcript: Transcript, locale: Locale) -> str:
    """Render *transcript* as paragraphs separated by blank lines.

    Cues keep playback order. Empty cues are dropped so that no two
    joiners ever end up adjacent.
    """
    joiner = word_joiner(locale)
    paragraphs = []
    for paragraph in transcript.paragraphs:
        cues = (collapse_whitespace(cue.text, joiner) for cue in paragraph.cues)
        paragraphs.append(joiner.join(cue for cue in cues if cue))
    return PARAGRAPH_SEPARATOR.join(paragraphs)
