"""
System failure error classifications for unrecoverable errors.

These exceptions represent setup problems, such as bad configuration or
locale tables, that must be fixed before the engine can be used.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable setup failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """Configuration values failed validation."""

    def __init__(self, message: str, field: Optional[str] = None,
                 errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.errors = errors or []


class LocaleDefinitionError(SystemFailureError):
    """A locale table entry cannot be used for parsing or formatting."""

    def __init__(self, message: str, tag: Optional[str] = None,
                 pattern: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.tag = tag
        self.pattern = pattern
