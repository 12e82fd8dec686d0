"""
Error classification system for date input handling.

This module provides the exception hierarchy for malformed date values and
for configuration failures. User-facing parse failures are returned as
FormatError values instead (see datefield.data.models).
"""

from .input_errors import (
    DateInputError,
    InvalidCalendarDateError,
    MalformedTimestampError,
    DateOverflowError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    LocaleDefinitionError,
)

__all__ = [
    # Date Input Errors
    "DateInputError",
    "InvalidCalendarDateError",
    "MalformedTimestampError",
    "DateOverflowError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "LocaleDefinitionError",
]
