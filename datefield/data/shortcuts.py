"""
Shortcut token parsing.

Recognizes relative-date shorthand typed into a date field and resolves it
against "today":

    d    today              d3   today + 3 days
    m1   today + 1 month    y2   today + 2 years

Month and year steps clamp the day to the end of shorter months.
"""

import re
from datetime import date
from typing import Optional

import structlog

from ..errors import DateOverflowError
from ..utils.time import NowProvider, add_days, add_months, add_years, resolve_today
from .models import CalendarDate, ShortcutToken, ShortcutUnit

logger = structlog.get_logger(__name__)

_SHORTCUT_RE = re.compile(r"^([dmy])(\d*)$")

# Any count longer than this leaves years 1-9999 whatever the unit
_MAX_COUNT_DIGITS = 9


def match_shortcut(text: str) -> Optional[ShortcutToken]:
    """
    Match raw input against the shortcut grammar.

    Args:
        text: Raw field text; surrounding whitespace and case are ignored

    Returns:
        ShortcutToken, or None when the input is not a shortcut

    Raises:
        DateOverflowError: If the count has too many digits to be a date offset
    """
    match = _SHORTCUT_RE.match(text.strip().lower())
    if match is None:
        return None

    unit, digits = match.groups()
    significant = digits.lstrip("0")
    if len(significant) > _MAX_COUNT_DIGITS:
        raise DateOverflowError(
            f"Shortcut count of {len(digits)} digits leaves the supported range",
            unit=ShortcutUnit(unit).name.lower(), count=None
        )
    return ShortcutToken(unit=ShortcutUnit(unit), count=int(significant) if significant else 0)


def resolve_shortcut(token: ShortcutToken, today: date) -> CalendarDate:
    """
    Resolve a shortcut token against a reference date.

    Args:
        token: Parsed shortcut
        today: Reference date

    Returns:
        Resolved calendar date

    Raises:
        DateOverflowError: If the offset leaves years 1-9999
    """
    if token.unit is ShortcutUnit.DAY:
        resolved = add_days(today, token.count)
    elif token.unit is ShortcutUnit.MONTH:
        resolved = add_months(today, token.count)
    else:
        resolved = add_years(today, token.count)

    return CalendarDate.from_date(resolved)


def parse_shortcut(text: str, now_provider: Optional[NowProvider] = None) -> Optional[CalendarDate]:
    """
    Parse and resolve a shortcut in one step.

    Args:
        text: Raw field text
        now_provider: Source of "today", read at call time

    Returns:
        Resolved date, or None if the text is not a shortcut or overflows
    """
    try:
        token = match_shortcut(text)
        if token is None:
            return None
        return resolve_shortcut(token, resolve_today(now_provider))
    except DateOverflowError as e:
        logger.warning("Shortcut offset out of range", unit=e.unit, count=e.count)
        return None
