"""
Date input error classifications.

These exceptions describe malformed or out-of-range date values met while
building calendar dates or decoding canonical timestamps. User keystrokes
never raise them across the parse boundary; parsers convert them into
FormatError values.
"""

from typing import Optional, Dict, Any


class DateInputError(Exception):
    """Base class for date value issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InvalidCalendarDateError(DateInputError):
    """Year, month or day outside the valid calendar range."""

    def __init__(self, message: str, year: Optional[int] = None,
                 month: Optional[int] = None, day: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.year = year
        self.month = month
        self.day = day


class MalformedTimestampError(DateInputError):
    """Canonical value exists but does not start with a YYYY-MM-DD date."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class DateOverflowError(DateInputError):
    """Date arithmetic left the representable year range."""

    def __init__(self, message: str, unit: Optional[str] = None,
                 count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.unit = unit
        self.count = count
