"""Tests for common.datetime module."""

from datetime import datetime, timedelta, timezone

import pytest

from common.datetime import format_display_date, parse_datetime


class TestParseDatetime:
    def test_datetime_passthrough(self) -> None:
        dt = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert parse_datetime(dt) is dt

    def test_rfc2822_with_gmt(self) -> None:
        result = parse_datetime("Mon, 01 Jan 2024 12:00:00 GMT")
        assert result == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_iso_string_with_z_suffix(self) -> None:
        result = parse_datetime("2024-01-01T12:00:00Z")
        assert result == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_timezone_abbreviation(self) -> None:
        result = parse_datetime("Mon, 01 Jan 2024 12:00:00 PST")
        assert result.utcoffset() == timedelta(hours=-8)

    def test_naive_result_assumed_utc(self) -> None:
        assert parse_datetime("2024-01-01 12:00:00").tzinfo == timezone.utc

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_datetime("")

    def test_garbage_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_datetime("not a date at all")


class TestFormatDisplayDate:
    def test_day_and_month_abbreviation(self) -> None:
        assert format_display_date(datetime(2024, 3, 5, tzinfo=timezone.utc)) == "05 - Mar"

    def test_december(self) -> None:
        assert format_display_date(datetime(2023, 12, 31)) == "31 - Dec"
