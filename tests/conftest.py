"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date

from datefield.data.locales import resolve_locale
from datefield.data.models import LocaleDefinition
from datefield.engine import DateInputEngine


FIXED_TODAY = date(2025, 1, 15)


@pytest.fixture
def fixed_today() -> date:
    """Reference date returned by the fixed now provider."""
    return FIXED_TODAY


@pytest.fixture
def now_provider():
    """Now provider pinned to 2025-01-15."""
    return lambda: FIXED_TODAY


@pytest.fixture
def en_us() -> LocaleDefinition:
    """US English locale (MM/DD/YYYY)."""
    return resolve_locale("en-US")


@pytest.fixture
def en_gb() -> LocaleDefinition:
    """British English locale (DD/MM/YYYY)."""
    return resolve_locale("en-GB")


@pytest.fixture
def de() -> LocaleDefinition:
    """German locale (DD.MM.YYYY)."""
    return resolve_locale("de")


@pytest.fixture
def engine(now_provider) -> DateInputEngine:
    """US English engine with a fixed now provider."""
    return DateInputEngine(locale_tag="en-US", now_provider=now_provider)
