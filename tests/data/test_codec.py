"""Tests for canonical timestamp encoding and decoding."""

import os
import time

import pytest
from datetime import UTC, datetime, timedelta, timezone

from datefield.data.codec import (
    decode, encode, midnight_instant, noon_instant, parse_canonical
)
from datefield.data.models import CalendarDate
from datefield.errors import MalformedTimestampError
from datefield.state.field import DateFieldSession


class TestEncode:
    """Test canonical encoding."""

    def test_encodes_utc_midnight(self):
        """Should produce a zero-time ISO instant with a Z suffix."""
        assert encode(CalendarDate(2025, 7, 8)) == "2025-07-08T00:00:00.000Z"

    def test_pads_small_years(self):
        """Should zero-pad years below 1000."""
        assert encode(CalendarDate(987, 1, 2)) == "0987-01-02T00:00:00.000Z"

    @pytest.mark.parametrize("value", [
        CalendarDate(2025, 7, 8),
        CalendarDate(2024, 2, 29),
        CalendarDate(1, 1, 1),
        CalendarDate(9999, 12, 31),
    ])
    def test_decode_inverts_encode(self, value):
        """Decoding an encoded date should return the same date."""
        assert decode(encode(value)) == value


class TestDecode:
    """Test canonical decoding."""

    def test_time_component_does_not_shift_date(self):
        """An evening UTC timestamp stays on its own calendar day."""
        assert decode("2025-07-08T18:30:00Z") == CalendarDate(2025, 7, 8)

    def test_offset_is_ignored(self):
        """Offsets are not applied; the date prefix is authoritative."""
        assert decode("2025-07-08T23:59:59-11:00") == CalendarDate(2025, 7, 8)
        assert decode("2025-07-08T00:30:00+05:30") == CalendarDate(2025, 7, 8)

    def test_date_only_string(self):
        """Should accept a bare YYYY-MM-DD value."""
        assert decode("2025-07-08") == CalendarDate(2025, 7, 8)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_value_is_none(self, value):
        """Missing values decode to no date."""
        assert decode(value) is None

    @pytest.mark.parametrize("value", [
        "07/08/2025",
        "2025-7-8",
        "2025-13-01T00:00:00.000Z",
        "2025-02-30",
        "2025-00-10",
        "20250708",
        "2025-07-081",
        "not a date",
    ])
    def test_malformed_value_is_none(self, value):
        """Malformed or out-of-range prefixes decode to None."""
        assert decode(value) is None

    def test_parse_canonical_raises_for_malformed(self):
        """The strict form should raise with the raw value attached."""
        with pytest.raises(MalformedTimestampError) as exc_info:
            parse_canonical("2025/07/08")

        assert exc_info.value.raw_data == "2025/07/08"
        assert exc_info.value.expected_format == "YYYY-MM-DD"
        assert exc_info.value.recoverable is True

    def test_parse_canonical_rejects_non_string(self):
        """Non-string values are malformed rather than crashing."""
        with pytest.raises(MalformedTimestampError):
            parse_canonical(20250708)


class TestInstants:
    """Test aware datetime anchors."""

    def test_midnight_instant(self):
        """Storage anchor is 00:00 UTC."""
        instant = midnight_instant(CalendarDate(2025, 7, 8))
        assert instant == datetime(2025, 7, 8, 0, 0, tzinfo=UTC)

    def test_noon_instant_survives_any_offset(self):
        """The noon anchor lands on the same day from UTC-11 through UTC+11."""
        instant = noon_instant(CalendarDate(2025, 7, 8))
        assert instant == datetime(2025, 7, 8, 12, 0, tzinfo=UTC)

        for hours in range(-11, 12):
            local = instant.astimezone(timezone(timedelta(hours=hours)))
            assert local.date().isoformat() == "2025-07-08"


@pytest.fixture
def local_timezone(request):
    """Run a test with the process timezone set to ``request.param``."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    previous = os.environ.get("TZ")
    os.environ["TZ"] = request.param
    time.tzset()
    try:
        yield request.param
    finally:
        if previous is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = previous
        time.tzset()


@pytest.mark.parametrize("local_timezone", [
    "Pacific/Kiritimati",
    "Pacific/Pago_Pago",
    "America/Los_Angeles",
    "Asia/Kolkata",
], indirect=True)
class TestLocalTimezoneIndependence:
    """Test that the host timezone never shifts stored dates."""

    def test_decode_keeps_written_date(self, local_timezone):
        """An evening UTC value stays on its own day in any zone."""
        assert decode("2025-07-08T18:30:00Z") == CalendarDate(2025, 7, 8)

    def test_round_trip(self, local_timezone):
        value = CalendarDate(2025, 12, 31)
        assert encode(value) == "2025-12-31T00:00:00.000Z"
        assert decode(encode(value)) == value

    def test_field_keeps_day(self, local_timezone, engine):
        """Display and re-save of an API timestamp name the same day."""
        field = DateFieldSession(engine, value="2025-07-08T18:30:00Z")

        assert field.display_text == "07/08/2025"
        assert field.value == "2025-07-08T00:00:00.000Z"
