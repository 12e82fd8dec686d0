"""
Wall-clock and calendar arithmetic utilities.

This module provides the default "today" source used when no now provider is
injected, plus month/year stepping that clamps the day-of-month to the end of
shorter months (Jan 31 + 1 month -> Feb 28/29).
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..errors import DateOverflowError

NowProvider = Callable[[], date]


def wall_clock_today() -> date:
    """
    Get the current local wall-clock date.

    Returns:
        Today's date in the process's local timezone, read at call time
    """
    return datetime.now().date()


def resolve_today(now_provider: Optional[NowProvider] = None) -> date:
    """
    Evaluate a now provider, falling back to the wall clock.

    Args:
        now_provider: Optional zero-argument callable returning a date

    Returns:
        The provider's date (a datetime is truncated to its date)
    """
    if now_provider is None:
        return wall_clock_today()

    today = now_provider()
    if isinstance(today, datetime):
        return today.date()
    return today


def add_days(start: date, days: int) -> date:
    """Add a (possibly negative) number of days."""
    try:
        return start + timedelta(days=days)
    except OverflowError as e:
        raise DateOverflowError(
            f"Adding {days} days to {start.isoformat()} leaves the supported range",
            unit="day", count=days
        ) from e


def add_months(start: date, months: int) -> date:
    """
    Add a (possibly negative) number of months, clamping the day-of-month.

    Args:
        start: Date to step from
        months: Months to add

    Returns:
        Date in the target month; the day is clamped to that month's last day

    Raises:
        DateOverflowError: If the target year leaves 1-9999
    """
    month_index = start.year * 12 + (start.month - 1) + months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1

    if not 1 <= year <= 9999:
        raise DateOverflowError(
            f"Adding {months} months to {start.isoformat()} leaves the supported range",
            unit="month", count=months
        )

    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def add_years(start: date, years: int) -> date:
    """Add a (possibly negative) number of years; Feb 29 clamps to Feb 28."""
    try:
        return add_months(start, years * 12)
    except DateOverflowError as e:
        raise DateOverflowError(
            f"Adding {years} years to {start.isoformat()} leaves the supported range",
            unit="year", count=years
        ) from e
