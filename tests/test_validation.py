from datetime import datetime, timezone

import pytest

from exceptions import InvalidStartTimeError
from validation import parse_start_time, validate_phone

NOW = datetime(2026, 5, 10, 12, 0)


@pytest.mark.parametrize("raw, reason", [
    ("abc", "only contain"),
    ("123", "at least 6 digits"),
    ("+-() ", "at least one digit"),
    ("", "required"),
    ("   ", "required"),
    ("11 4444#5555", "only contain"),
])
def test_invalid_phones(raw, reason):
    result = validate_phone(raw)

    assert result.valid is False
    assert reason in result.reason


@pytest.mark.parametrize("raw", ["+54 11 1234-5678", "(011) 4444-5555", "123456"])
def test_valid_phones(raw):
    result = validate_phone(raw)

    assert result.valid is True
    assert result.reason is None


def test_start_time_is_combined_from_parts():
    assert parse_start_time("11/05/2026", 10, 30, now=NOW) == datetime(2026, 5, 11, 10, 30)


def test_later_today_is_accepted():
    assert parse_start_time("10/05/2026", 15, 0, now=NOW) == datetime(2026, 5, 10, 15, 0)


@pytest.mark.parametrize("text, hour, message", [
    ("2026-05-11", 10, "format"),
    ("31/02/2026", 10, "Check the day"),
    ("09/05/2026", 10, "past dates"),
    ("10/05/2026", 9, "cannot be in the past"),
    ("11/05/2026", 25, "valid hour"),
])
def test_bad_start_times(text, hour, message):
    with pytest.raises(InvalidStartTimeError, match=message):
        parse_start_time(text, hour, 0, now=NOW)


def test_start_time_keeps_the_timezone_of_now():
    aware_now = NOW.replace(tzinfo=timezone.utc)

    start = parse_start_time("11/05/2026", 10, 30, now=aware_now)

    assert start == datetime(2026, 5, 11, 10, 30, tzinfo=timezone.utc)


def test_start_time_defaults_to_local_aware_time():
    start = parse_start_time("01/01/2999", 10, 0)

    assert start.tzinfo is not None
    assert (start.year, start.hour, start.minute) == (2999, 10, 0)
