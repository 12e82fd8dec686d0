"""
Canonical timestamp codec.

Calendar dates are stored as ISO-8601 instants anchored at UTC midnight
("2025-07-08T00:00:00.000Z"). Decoding reads only the leading YYYY-MM-DD of a
string and never applies a timezone conversion, so a value such as
"2025-07-08T18:30:00Z" is July 8 for every consumer, including ones east of
UTC where the instant already falls on July 9.
"""

import re
from datetime import UTC, datetime, time
from typing import Optional

import structlog

from ..errors import InvalidCalendarDateError, MalformedTimestampError
from ..logging.config import loggable_text
from .models import CalendarDate

logger = structlog.get_logger(__name__)

CANONICAL_SUFFIX = "T00:00:00.000Z"

_DATE_PREFIX_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?![0-9])")


def encode(value: CalendarDate) -> str:
    """
    Encode a calendar date as a UTC-midnight ISO instant.

    Args:
        value: Calendar date to store

    Returns:
        Canonical timestamp, e.g. "2025-07-08T00:00:00.000Z"
    """
    return f"{value.isoformat()}{CANONICAL_SUFFIX}"


def parse_canonical(value: str) -> CalendarDate:
    """
    Extract the calendar date from a canonical or ISO-prefixed string.

    Args:
        value: "2025-07-08", "2025-07-08T00:00:00.000Z",
            "2025-07-08T18:30:00+05:30", ...

    Returns:
        CalendarDate taken from the YYYY-MM-DD prefix

    Raises:
        MalformedTimestampError: If the prefix is missing or out of range
    """
    if not isinstance(value, str):
        raise MalformedTimestampError(
            f"Canonical value must be a string, got {type(value).__name__}",
            raw_data=repr(value), expected_format="YYYY-MM-DD"
        )

    match = _DATE_PREFIX_RE.match(value.strip())
    if match is None:
        raise MalformedTimestampError(
            f"Value {value!r} does not start with a YYYY-MM-DD date",
            raw_data=value, expected_format="YYYY-MM-DD"
        )

    year, month, day = (int(group) for group in match.groups())
    try:
        return CalendarDate(year, month, day)
    except InvalidCalendarDateError as e:
        raise MalformedTimestampError(
            f"Value {value!r} has an out-of-range date: {e}",
            raw_data=value, expected_format="YYYY-MM-DD"
        ) from e


def decode(value: Optional[str]) -> Optional[CalendarDate]:
    """
    Decode a canonical or ISO-prefixed string, returning None on failure.

    Args:
        value: Stored value; None and "" mean "no date"

    Returns:
        CalendarDate, or None for missing or malformed input
    """
    if not value:
        return None

    try:
        return parse_canonical(value)
    except MalformedTimestampError as e:
        logger.debug("Canonical value not decodable", raw=loggable_text(e.raw_data), reason=str(e))
        return None


def midnight_instant(value: CalendarDate) -> datetime:
    """Aware UTC datetime at 00:00, the storage anchor."""
    return datetime.combine(value.to_date(), time(0, 0), tzinfo=UTC)


def noon_instant(value: CalendarDate) -> datetime:
    """
    Aware UTC datetime at 12:00 for handing a date to picker collaborators.

    Any consumer offset within +/-12h still lands on the same calendar day.
    """
    return datetime.combine(value.to_date(), time(12, 0), tzinfo=UTC)
