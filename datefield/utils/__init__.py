"""
Utility functions module.

Common helpers for wall-clock time and calendar arithmetic shared across
the parsing, navigation and field-session layers.

Time Semantics:
- "Today" is ALWAYS obtained through an injectable now provider
- The default provider reads the local wall-clock date at call time
- Calendar arithmetic clamps the day-of-month instead of rolling over
"""
