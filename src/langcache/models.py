"""Data models for locales, language links and run results."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from langcache.exceptions import InvalidLocaleError

LOCALE_PATTERN = r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$"
_LOCALE_RE = re.compile(LOCALE_PATTERN)


@dataclass(frozen=True, slots=True)
class Locale:
    """A lowercase locale code such as ``en``, ``zh-cn`` or ``zh-min-nan``.

    Build instances with :meth:`parse`; it is the only place codes are checked.
    """

    code: str

    @classmethod
    def parse(cls, value: str) -> Locale:
        """Validate *value* and wrap it.

        Raises:
            InvalidLocaleError: If *value* is not lowercase alphanumeric
                subtags joined by hyphens.
        """
        if not isinstance(value, str) or not _LOCALE_RE.match(value):
            raise InvalidLocaleError(f"Invalid locale code: {value!r}")
        return cls(value)

    @property
    def language(self) -> str:
        """Base language subtag (``zh`` for ``zh-cn``)."""
        return self.code.split("-", 1)[0]

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True, slots=True)
class LangLink:
    """An article title in one locale."""

    locale: Locale
    title: str


@dataclass(slots=True)
class UnitFailure:
    """A unit of work that ended in an exception."""

    label: str
    error: BaseException

    def describe(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class RunSummary:
    """Counters and failures for one pipeline run."""

    written: int = 0
    skipped: int = 0
    failures: list[UnitFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def to_dict(self) -> dict[str, int]:
        return {"written": self.written, "skipped": self.skipped, "failed": self.failed}
