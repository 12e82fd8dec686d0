"""
Relative navigation over committed dates (Ctrl+Arrow stepping).

Month and year steps clamp the day-of-month, so Jan 31 + 1 month is the last
day of February. A step that would leave years 1-9999 returns the date
unchanged.
"""

import structlog

from ..errors import DateOverflowError
from ..utils.time import add_months, add_years
from .models import CalendarDate

logger = structlog.get_logger(__name__)


def shift_month(value: CalendarDate, delta: int) -> CalendarDate:
    """Step a date by whole months."""
    try:
        return CalendarDate.from_date(add_months(value.to_date(), delta))
    except DateOverflowError:
        logger.debug("Month navigation at calendar bound", date=value.isoformat(), delta=delta)
        return value


def shift_year(value: CalendarDate, delta: int) -> CalendarDate:
    """Step a date by whole years; Feb 29 lands on Feb 28 in common years."""
    try:
        return CalendarDate.from_date(add_years(value.to_date(), delta))
    except DateOverflowError:
        logger.debug("Year navigation at calendar bound", date=value.isoformat(), delta=delta)
        return value
