"""
Canonical data models for date input parsing.

This module defines immutable value types that represent validated calendar
dates, locale definitions, shortcut tokens and parse outcomes.
"""

import calendar
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from ..errors import InvalidCalendarDateError, LocaleDefinitionError

MIN_YEAR = 1
MAX_YEAR = 9999

FORMAT_ERROR_MESSAGE = "invalid date format"

_PATTERN_TOKEN_RE = re.compile(r"YYYY|MM|DD")


@dataclass(frozen=True, order=True)
class CalendarDate:
    """Pure calendar date with no time-of-day or timezone."""
    year: int
    month: int         # 1-12
    day: int           # 1-31, valid for (year, month)

    def __post_init__(self):
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise InvalidCalendarDateError(
                f"Year {self.year} outside {MIN_YEAR}-{MAX_YEAR}",
                year=self.year, month=self.month, day=self.day
            )
        if not 1 <= self.month <= 12:
            raise InvalidCalendarDateError(
                f"Month {self.month} outside 1-12",
                year=self.year, month=self.month, day=self.day
            )
        last_day = calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= last_day:
            raise InvalidCalendarDateError(
                f"Day {self.day} outside 1-{last_day} for {self.year}-{self.month:02d}",
                year=self.year, month=self.month, day=self.day
            )

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        """Build from a datetime.date (or datetime, whose clock is ignored)."""
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        """YYYY-MM-DD representation."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class LocaleDefinition:
    """Formatting/parsing definition for one language tag."""
    tag: str                # e.g. "en-US"
    language: str           # dateparser language code for month/day names
    short_pattern: str      # e.g. "MM/DD/YYYY"

    def __post_init__(self):
        tokens = _PATTERN_TOKEN_RE.findall(self.short_pattern)
        if sorted(tokens) != ["DD", "MM", "YYYY"]:
            raise LocaleDefinitionError(
                f"Short pattern {self.short_pattern!r} must contain YYYY, MM and DD exactly once",
                tag=self.tag, pattern=self.short_pattern
            )
        separators = _PATTERN_TOKEN_RE.sub("", self.short_pattern)
        if any(ch.isalnum() for ch in separators):
            raise LocaleDefinitionError(
                f"Short pattern {self.short_pattern!r} may only use punctuation separators",
                tag=self.tag, pattern=self.short_pattern
            )

    @property
    def date_order(self) -> str:
        """Component order of the short pattern: "MDY", "DMY" or "YMD"."""
        tokens = _PATTERN_TOKEN_RE.findall(self.short_pattern)
        return "".join(token[0] for token in tokens)

    @property
    def month_first(self) -> bool:
        """True when month precedes day in the short pattern."""
        order = self.date_order
        return order.index("M") < order.index("D")


class ShortcutUnit(str, Enum):
    """Unit of a relative shortcut token."""
    DAY = "d"
    MONTH = "m"
    YEAR = "y"


@dataclass(frozen=True)
class ShortcutToken:
    """Relative-date shorthand such as "d", "d3", "m1" or "y2"."""
    unit: ShortcutUnit
    count: int = 0


class FailureKind(str, Enum):
    """Why a raw input could not be turned into a date."""
    INVALID_FORMAT = "invalid_format"          # No grammar matched
    INVALID_COMPONENT = "invalid_component"    # Grammar matched, range check failed


@dataclass(frozen=True)
class FormatError:
    """Typed parse failure surfaced to the caller as a validation message."""
    kind: FailureKind
    raw: str
    message: str = FORMAT_ERROR_MESSAGE


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing one committed input string."""

    date: Optional[CalendarDate] = None
    error: Optional[FormatError] = None

    # Processing metadata
    grammar: Optional[str] = field(default=None, compare=False)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        """True for blank input, which resolves to "no date" without an error."""
        return self.date is None and self.error is None

    @classmethod
    def success_with_date(cls, parsed: CalendarDate, grammar: Optional[str] = None):
        """Create successful result with a date."""
        return cls(date=parsed, grammar=grammar)

    @classmethod
    def failure(cls, kind: FailureKind, raw: str, grammar: Optional[str] = None):
        """Create failed result."""
        return cls(error=FormatError(kind=kind, raw=raw), grammar=grammar)

    @classmethod
    def empty(cls):
        """Create result for blank input."""
        return cls()
