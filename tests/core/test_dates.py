"""
Tests for wire timestamp parsing.
"""

from datetime import datetime, timedelta, timezone

import pytest

from ollamakit import parse_timestamp


class TestParseTimestamp:
    """Fractional and whole-second ISO-8601 forms."""

    def test_fractional_utc(self):
        assert parse_timestamp("2023-01-01T12:34:56.789Z") == datetime(
            2023, 1, 1, 12, 34, 56, 789000, tzinfo=timezone.utc
        )

    def test_whole_seconds_with_offset(self):
        parsed = parse_timestamp("2023-04-15T12:30:45-07:00")
        assert parsed == datetime(2023, 4, 15, 12, 30, 45, tzinfo=timezone(timedelta(hours=-7)))
        assert parsed.utcoffset() == timedelta(hours=-7)

    def test_nanosecond_fraction_is_truncated(self):
        parsed = parse_timestamp("2024-05-14T17:59:25.123456789Z")
        assert parsed.microsecond == 123456

    def test_fraction_with_offset(self):
        parsed = parse_timestamp("2024-06-01T08:00:00.5+02:00")
        assert parsed.microsecond == 500000
        assert parsed.utcoffset() == timedelta(hours=2)

    @pytest.mark.parametrize("literal", ["invalid-date", "2023-01-01", "2023-01-01T12:34:56"])
    def test_invalid(self, literal):
        with pytest.raises(ValueError, match=f"Invalid date: {literal}"):
            parse_timestamp(literal)
