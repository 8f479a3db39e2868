"""Multilingual content cache for TED transcripts and Wikipedia articles."""

__version__ = "0.1.0"

from langcache.models import LangLink, Locale, RunSummary, UnitFailure

__all__ = [
    "LangLink",
    "Locale",
    "RunSummary",
    "UnitFailure",
    "__version__",
]
