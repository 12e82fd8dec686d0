"""
Datefield - Date Input Parsing and Normalization Engine

Interprets free-form date-field keystrokes (shortcut tokens, partial dates,
locale-formatted strings) into calendar dates, stores them as timezone-safe
canonical ISO timestamps, and renders them back in the locale's short format.
"""

__version__ = "0.1.0"
__author__ = "Datefield Team"
