"""Display formatting of calendar dates in a locale's short-date pattern."""

import re
from typing import Optional

from .models import CalendarDate, LocaleDefinition

_TOKEN_RE = re.compile(r"YYYY|MM|DD")


def format_date(value: CalendarDate, locale: LocaleDefinition) -> str:
    """
    Render a date with the locale's short pattern.

    Args:
        value: Date to render
        locale: Locale supplying the pattern, e.g. "MM/DD/YYYY"

    Returns:
        Zero-padded display string, e.g. "07/08/2025"
    """
    components = {
        "YYYY": f"{value.year:04d}",
        "MM": f"{value.month:02d}",
        "DD": f"{value.day:02d}",
    }
    return _TOKEN_RE.sub(lambda match: components[match.group(0)], locale.short_pattern)


def render_display(value: Optional[CalendarDate], locale: LocaleDefinition) -> str:
    """Render a date for the field, or "" when there is no date."""
    if value is None:
        return ""
    return format_date(value, locale)
