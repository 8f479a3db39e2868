"""Exception types for fetch, validation and locale failures."""

from __future__ import annotations


class LangcacheError(Exception):
    """Base class for every error raised by langcache."""


class FetchError(LangcacheError):
    """A request could not be completed."""


class TransientError(FetchError):
    """Network failure or non-success status that may succeed on retry."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SchemaError(LangcacheError):
    """A decoded response does not have the expected shape.

    ``problems`` lists one ``(location, message)`` pair per failing field,
    where location is a dotted path such as ``paragraphs.0.cues.2.time``.
    """

    def __init__(self, source: str, problems: list[tuple[str, str]]) -> None:
        self.source = source
        self.problems = problems
        details = "; ".join(f"{loc or '<root>'}: {msg}" for loc, msg in problems)
        super().__init__(f"Invalid response from {source}: {details}")


class InvalidLocaleError(LangcacheError, ValueError):
    """A string is not a usable locale code."""


class InvalidTitleError(LangcacheError, ValueError):
    """An article title cannot be used as a cache directory name."""
