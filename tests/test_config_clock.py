from datetime import datetime, timedelta, timezone

import pytest

from bloader.config.basic import ConfigError
from bloader.config.clock import DEFAULT_CLOCK_FORMAT, parse_layout, validate_clock


def test_parse_default_layout():
    parsed = parse_layout(DEFAULT_CLOCK_FORMAT, "2023-01-02T12:34:56Z")
    assert parsed == datetime(2023, 1, 2, 12, 34, 56, tzinfo=timezone.utc)


def test_parse_reference_time_with_itself():
    parsed = parse_layout(DEFAULT_CLOCK_FORMAT, DEFAULT_CLOCK_FORMAT)
    assert (parsed.year, parsed.month, parsed.day) == (2006, 1, 2)
    assert (parsed.hour, parsed.minute, parsed.second) == (15, 4, 5)


def test_parse_numeric_offset():
    parsed = parse_layout("2006-01-02 15:04:05 -07:00", "2024-03-04 05:06:07 +09:00")
    assert parsed.utcoffset() == timedelta(hours=9)
    assert parsed.hour == 5


def test_parse_z_offset_accepts_z():
    parsed = parse_layout("2006-01-02T15:04:05Z07:00", "2024-03-04T05:06:07Z")
    assert parsed.utcoffset() == timedelta(0)


def test_parse_month_names_case_insensitive():
    parsed = parse_layout("Jan 2, 2006", "feb 3, 2024")
    assert (parsed.year, parsed.month, parsed.day) == (2024, 2, 3)


def test_parse_twelve_hour_clock():
    parsed = parse_layout("2006-01-02 3:04PM", "2024-05-06 1:30PM")
    assert parsed.hour == 13
    midnight = parse_layout("2006-01-02 3:04PM", "2024-05-06 12:00AM")
    assert midnight.hour == 0


def test_parse_fraction_is_kept():
    parsed = parse_layout("2006-01-02 15:04:05.000", "2024-05-06 07:08:09.250")
    assert parsed.microsecond == 250000


def test_parse_mismatch_raises():
    with pytest.raises(ValueError):
        parse_layout(DEFAULT_CLOCK_FORMAT, "2023-01-02 12:34:56")


def test_parse_out_of_range_month_raises():
    with pytest.raises(ValueError):
        parse_layout("2006-01-02", "2024-13-01")


def test_parse_invalid_day_raises():
    with pytest.raises(ValueError):
        parse_layout("2006-01-02", "2023-02-30")


def test_validate_clock_defaults():
    clock = validate_clock({})
    assert clock.format == DEFAULT_CLOCK_FORMAT
    assert not clock.fake.enabled
    assert clock.fake.time is None


def test_validate_clock_rejects_format_that_cannot_read_reference():
    with pytest.raises(ConfigError, match="format"):
        validate_clock({"format": "2006-01-02"})


def test_validate_clock_fake_requires_time():
    with pytest.raises(ConfigError, match="time"):
        validate_clock({"fake": {"enabled": True}})


def test_validate_clock_fake_rejects_bad_time():
    with pytest.raises(ConfigError):
        validate_clock({"fake": {"enabled": True, "time": "yesterday"}})


def test_validate_clock_fake_time_parsed():
    clock = validate_clock({"fake": {"enabled": "true", "time": "2023-01-02T12:34:56Z"}})
    assert clock.fake.enabled
    assert clock.fake.time == datetime(2023, 1, 2, 12, 34, 56, tzinfo=timezone.utc)