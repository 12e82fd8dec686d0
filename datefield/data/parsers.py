"""
Flexible date string parsing for committed field text.

Grammars are tried in a fixed precedence order and the first one whose head
pattern matches decides the outcome; a match that fails range validation is
an error and is never retried against later grammars:

    1. D/D        current year, month/day order from the locale
    2. D/D/YY     year = two_digit_year_base + YY
    3. D/D/YYYY   year as typed
    4. locale     the locale's own numeric short pattern (e.g. DD.MM.YYYY)
    5. YYYY-M-D   year-first dates ("-", "/" or "."), ISO time part allowed,
                  read year-month-day in every locale
    6. D-D-Y      "-", "." or space separated numbers, read like the slash grammars
    7. text       localized text such as "8 juillet 2025" via dateparser

Purely numeric input never reaches dateparser, so its DATE_ORDER and century
rules never reinterpret typed digits.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from functools import lru_cache
from typing import Any, Optional

import dateparser
import structlog

from ..errors import InvalidCalendarDateError
from ..logging.config import loggable_text
from ..utils.time import NowProvider, resolve_today
from .models import MAX_YEAR, MIN_YEAR, CalendarDate, FailureKind, LocaleDefinition, ParseResult

logger = structlog.get_logger(__name__)

_NO_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{1,2})$")
_SHORT_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2})$")
_FULL_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_RE = re.compile(
    r"^(\d{4})([-/.])(\d{1,2})\2(\d{1,2})"
    r"(?:[T ]\d{1,2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:?\d{2})?)?$",
    re.IGNORECASE,
)
_SEPARATED_RE = re.compile(r"^(\d{1,2})([-. ])(\d{1,2})\2(\d{2}|\d{4})$")
_NUMERIC_RE = re.compile(r"^[\d\s./-]+$")

_PATTERN_GROUPS = {
    "YYYY": r"(?P<year>\d{4})",
    "MM": r"(?P<month>\d{1,2})",
    "DD": r"(?P<day>\d{1,2})",
}


@dataclass(frozen=True)
class ParserSettings:
    """Knobs for numeric grammar interpretation."""
    two_digit_year_base: int = 2000      # "4/5/23" -> 2023
    strict_day_of_month: bool = True     # Reject Feb 30 instead of rolling to Mar 2


@lru_cache(maxsize=64)
def compile_short_pattern(short_pattern: str) -> re.Pattern:
    """Compile a short pattern such as "DD.MM.YYYY" into an anchored regex."""
    parts = re.split(r"(YYYY|MM|DD)", short_pattern)
    body = "".join(_PATTERN_GROUPS.get(part, re.escape(part)) for part in parts)
    return re.compile(f"^{body}$")


def build_date(
    year: int,
    month: int,
    day: int,
    raw: str,
    grammar: str,
    settings: ParserSettings
) -> ParseResult:
    """
    Validate numeric components and build a calendar date.

    Args:
        year: Four-digit year
        month: Month as typed
        day: Day as typed
        raw: Original input, carried into any FormatError
        grammar: Name of the grammar that matched
        settings: Parser settings

    Returns:
        ParseResult with a date, or INVALID_COMPONENT failure
    """
    if not 1 <= month <= 12 or not 1 <= day <= 31 or not MIN_YEAR <= year <= MAX_YEAR:
        logger.debug("Date components out of range", grammar=grammar,
                     year=year, month=month, day=day)
        return ParseResult.failure(FailureKind.INVALID_COMPONENT, raw, grammar=grammar)

    try:
        return ParseResult.success_with_date(CalendarDate(year, month, day), grammar=grammar)
    except InvalidCalendarDateError:
        if settings.strict_day_of_month:
            logger.debug("Day not valid for month", grammar=grammar,
                         year=year, month=month, day=day)
            return ParseResult.failure(FailureKind.INVALID_COMPONENT, raw, grammar=grammar)

    # Lenient: roll the overflow forward from the first of the month
    rolled = date(year, month, 1) + timedelta(days=day - 1)
    return ParseResult.success_with_date(CalendarDate.from_date(rolled), grammar=grammar)


def _order_components(first: int, second: int, locale: LocaleDefinition) -> tuple[int, int]:
    """Return (month, day) from two slash-separated numbers."""
    if locale.month_first:
        return first, second
    return second, first


def _parse_locale_text(text: str, locale: LocaleDefinition, today: date) -> Optional[CalendarDate]:
    """Parse localized free text ("July 8, 2025", "8 juillet 2025")."""
    settings: dict[str, Any] = {
        "DATE_ORDER": locale.date_order,
        "STRICT_PARSING": True,
        "REQUIRE_PARTS": ["day", "month", "year"],
        "PREFER_DAY_OF_MONTH": "first",
        "RETURN_AS_TIMEZONE_AWARE": False,
        "RELATIVE_BASE": datetime.combine(today, time()),
    }

    try:
        parsed = dateparser.parse(text, languages=[locale.language], settings=settings)
    except ValueError as e:
        # Unknown language codes from custom locale tables land here
        logger.warning("Locale text parsing unavailable", tag=locale.tag,
                       language=locale.language, reason=str(e))
        return None

    if parsed is None:
        return None

    try:
        return CalendarDate.from_date(parsed)
    except InvalidCalendarDateError:
        return None


def parse(
    text: str,
    locale: LocaleDefinition,
    now_provider: Optional[NowProvider] = None,
    settings: Optional[ParserSettings] = None
) -> ParseResult:
    """
    Parse committed field text into a calendar date.

    Args:
        text: Raw field text
        locale: Locale deciding month/day order and the native grammar
        now_provider: Source of the current year for "D/D" input
        settings: Parser settings, defaults to ParserSettings()

    Returns:
        ParseResult: a date, a FormatError, or empty for blank input
    """
    settings = settings or ParserSettings()
    raw = text
    text = text.strip()

    if not text:
        return ParseResult.empty()

    match = _NO_YEAR_RE.match(text)
    if match:
        month, day = _order_components(int(match.group(1)), int(match.group(2)), locale)
        year = resolve_today(now_provider).year
        return build_date(year, month, day, raw, "slash_no_year", settings)

    match = _SHORT_YEAR_RE.match(text)
    if match:
        month, day = _order_components(int(match.group(1)), int(match.group(2)), locale)
        year = settings.two_digit_year_base + int(match.group(3))
        return build_date(year, month, day, raw, "slash_short_year", settings)

    match = _FULL_YEAR_RE.match(text)
    if match:
        month, day = _order_components(int(match.group(1)), int(match.group(2)), locale)
        return build_date(int(match.group(3)), month, day, raw, "slash_full_year", settings)

    match = compile_short_pattern(locale.short_pattern).match(text)
    if match:
        return build_date(
            int(match.group("year")), int(match.group("month")), int(match.group("day")),
            raw, "locale_pattern", settings
        )

    match = _ISO_RE.match(text)
    if match:
        return build_date(
            int(match.group(1)), int(match.group(3)), int(match.group(4)),
            raw, "year_first", settings
        )

    match = _SEPARATED_RE.match(text)
    if match:
        month, day = _order_components(int(match.group(1)), int(match.group(3)), locale)
        year_token = match.group(4)
        if len(year_token) == 2:
            year = settings.two_digit_year_base + int(year_token)
        else:
            year = int(year_token)
        return build_date(year, month, day, raw, "separated", settings)

    if _NUMERIC_RE.match(text):
        logger.debug("Numeric input matched no grammar", tag=locale.tag, raw=loggable_text(raw))
        return ParseResult.failure(FailureKind.INVALID_FORMAT, raw)

    parsed = _parse_locale_text(text, locale, resolve_today(now_provider))
    if parsed is not None:
        return ParseResult.success_with_date(parsed, grammar="locale_text")

    logger.debug("No date grammar matched", tag=locale.tag, raw=loggable_text(raw))
    return ParseResult.failure(FailureKind.INVALID_FORMAT, raw)
