"""Clock section of the configuration and reference-layout time parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from bloader.config.basic import ConfigError, _as_bool, _opt_str, _section

DEFAULT_CLOCK_FORMAT = "2006-01-02T15:04:05Z"

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_DAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

_ZERO_KINDS = {
    "1": "zero_month",
    "2": "zero_day",
    "3": "zero_hour12",
    "4": "zero_minute",
    "5": "zero_second",
    "6": "year2",
}
_OFFSET_SUFFIXES = ("070000", "07:00:00", "0700", "07:00", "07")
_OFFSET_PATTERNS = {
    "070000": r"[+-]\d{6}",
    "07:00:00": r"[+-]\d{2}:\d{2}:\d{2}",
    "0700": r"[+-]\d{4}",
    "07:00": r"[+-]\d{2}:\d{2}",
    "07": r"[+-]\d{2}",
}
_FIXED_PATTERNS = {
    "year": r"\d{4}",
    "year2": r"\d{2}",
    "month": r"\d{1,2}",
    "zero_month": r"\d{2}",
    "month_name": "(?i:" + "|".join(_MONTHS) + ")",
    "month_abbr": "(?i:" + "|".join(m[:3] for m in _MONTHS) + ")",
    "weekday_name": "(?i:" + "|".join(_DAYS) + ")",
    "weekday_abbr": "(?i:" + "|".join(d[:3] for d in _DAYS) + ")",
    "day": r"\d{1,2}",
    "zero_day": r"\d{2}",
    "day_space": r" ?\d{1,2}",
    "hour": r"\d{1,2}",
    "hour12": r"\d{1,2}",
    "zero_hour12": r"\d{2}",
    "minute": r"\d{1,2}",
    "zero_minute": r"\d{2}",
    "second": r"\d{1,2}",
    "zero_second": r"\d{2}",
    "ampm_upper": "AM|PM",
    "ampm_lower": "am|pm",
    "zone_name": r"[A-Z]{3,5}",
    "frac_opt": r"(?:[.,]\d{1,9})?",
    "frac_trailing": r"(?:[.,]\d+)?",
}
_FRACTIONS = ("frac_fixed", "frac_opt")


def _std_at(layout: str, i: int) -> tuple[str, int] | None:
    rest = layout[i:]
    head = rest[0]
    if head == "J":
        if rest.startswith("January"):
            return "month_name", 7
        if rest.startswith("Jan"):
            return "month_abbr", 3
    elif head == "M":
        if rest.startswith("Monday"):
            return "weekday_name", 6
        if rest.startswith("Mon"):
            return "weekday_abbr", 3
        if rest.startswith("MST"):
            return "zone_name", 3
    elif head == "0":
        if len(rest) >= 2 and rest[1] in _ZERO_KINDS:
            return _ZERO_KINDS[rest[1]], 2
    elif head == "1":
        if rest.startswith("15"):
            return "hour", 2
        return "month", 1
    elif head == "2":
        if rest.startswith("2006"):
            return "year", 4
        return "day", 1
    elif head == "_":
        if rest.startswith("_2") and not rest.startswith("_2006"):
            return "day_space", 2
    elif head in "345":
        return {"3": "hour12", "4": "minute", "5": "second"}[head], 1
    elif head == "P":
        if rest.startswith("PM"):
            return "ampm_upper", 2
    elif head == "p":
        if rest.startswith("pm"):
            return "ampm_lower", 2
    elif head in "-Z":
        for suffix in _OFFSET_SUFFIXES:
            if rest.startswith(suffix, 1):
                return ("offset" if head == "-" else "offset_z"), 1 + len(suffix)
    elif head in ".,":
        if len(rest) > 1 and rest[1] in "09":
            digit = rest[1]
            end = 1
            while end < len(rest) and rest[end] == digit:
                end += 1
            if not (end < len(rest) and rest[end].isdigit()):
                return ("frac_fixed" if digit == "0" else "frac_opt"), end
    return None


def _tokenize(layout: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    literal: list[str] = []
    i = 0
    while i < len(layout):
        std = _std_at(layout, i)
        if std is None:
            literal.append(layout[i])
            i += 1
            continue
        kind, length = std
        if literal:
            tokens.append(("literal", "".join(literal)))
            literal = []
        tokens.append((kind, layout[i:i + length]))
        i += length
    if literal:
        tokens.append(("literal", "".join(literal)))
    return tokens


@lru_cache(maxsize=64)
def _compile(layout: str) -> tuple[re.Pattern[str], tuple[str, ...]]:
    tokens = _tokenize(layout)
    parts: list[str] = []
    kinds: list[str] = []

    def emit(kind: str, pattern: str) -> None:
        parts.append(f"({pattern})")
        kinds.append(kind)

    for index, (kind, text) in enumerate(tokens):
        if kind == "literal":
            parts.append(re.escape(text))
        elif kind == "offset":
            emit(kind, _OFFSET_PATTERNS[text[1:]])
        elif kind == "offset_z":
            emit(kind, "Z|" + _OFFSET_PATTERNS[text[1:]])
        elif kind == "frac_fixed":
            emit(kind, rf"[.,]\d{{{len(text) - 1}}}")
        else:
            emit(kind, _FIXED_PATTERNS[kind])
        if kind in ("second", "zero_second"):
            following = tokens[index + 1][0] if index + 1 < len(tokens) else None
            if following not in _FRACTIONS:
                emit("frac_trailing", _FIXED_PATTERNS["frac_trailing"])
    return re.compile("".join(parts)), tuple(kinds)


def _ranged(text: str, low: int, high: int, what: str) -> int:
    number = int(text.strip())
    if not low <= number <= high:
        raise ValueError(f"{what} out of range: {number}")
    return number


def _offset(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours, minutes, seconds = int(digits[:2]), int(digits[2:4] or 0), int(digits[4:6] or 0)
    return timezone(sign * timedelta(hours=hours, minutes=minutes, seconds=seconds))


def parse_layout(layout: str, value: str) -> datetime:
    """Parse ``value`` against a reference-time layout such as ``2006-01-02``.

    Parts missing from the layout default to year 1, January 1st, midnight,
    UTC. Raises ValueError when the value does not fit the layout.
    """
    pattern, kinds = _compile(layout)
    match = pattern.fullmatch(value)
    if match is None:
        raise ValueError(f"cannot parse {value!r} as {layout!r}")

    year, month, day = 1, 1, 1
    hour = minute = second = microsecond = 0
    pm: bool | None = None
    tz: timezone | None = None

    for kind, text in zip(kinds, match.groups()):
        if kind == "year":
            year = int(text)
        elif kind == "year2":
            short = int(text)
            year = short + (1900 if short >= 69 else 2000)
        elif kind in ("month", "zero_month"):
            month = _ranged(text, 1, 12, "month")
        elif kind == "month_name":
            month = [m.lower() for m in _MONTHS].index(text.lower()) + 1
        elif kind == "month_abbr":
            month = [m[:3].lower() for m in _MONTHS].index(text.lower()) + 1
        elif kind in ("day", "zero_day", "day_space"):
            day = _ranged(text, 1, 31, "day")
        elif kind == "hour":
            hour = _ranged(text, 0, 23, "hour")
        elif kind in ("hour12", "zero_hour12"):
            hour = _ranged(text, 0, 12, "hour")
        elif kind in ("minute", "zero_minute"):
            minute = _ranged(text, 0, 59, "minute")
        elif kind in ("second", "zero_second"):
            second = _ranged(text, 0, 59, "second")
        elif kind in ("ampm_upper", "ampm_lower"):
            pm = text.lower() == "pm"
        elif kind == "zone_name":
            tz = timezone.utc if text == "UTC" else timezone(timedelta(0), text)
        elif kind in ("offset", "offset_z"):
            tz = _offset(text)
        elif kind in ("frac_fixed", "frac_opt", "frac_trailing") and text:
            microsecond = int(text[1:10].ljust(9, "0")) // 1000

    if pm is True and hour < 12:
        hour += 12
    elif pm is False and hour == 12:
        hour = 0

    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz or timezone.utc)


@dataclass(frozen=True)
class FakeTimeConfig:
    """A fixed moment the application clock reports, when enabled."""

    enabled: bool = False
    time: datetime | None = None


@dataclass(frozen=True)
class ClockConfig:
    """Time layout used for display and parsing, and the fake clock setting."""

    format: str = DEFAULT_CLOCK_FORMAT
    fake: FakeTimeConfig = field(default_factory=FakeTimeConfig)


def validate_clock(raw: Any) -> ClockConfig:
    """Validate the clock section."""
    section = _section(raw, "clock")
    layout = _opt_str(section, "format")
    if layout is None:
        layout = DEFAULT_CLOCK_FORMAT
    try:
        parse_layout(layout, DEFAULT_CLOCK_FORMAT)
    except ValueError as exc:
        raise ConfigError(f"clock.format: invalid clock format {layout!r}") from exc

    fake = _section(section.get("fake"), "clock.fake")
    if not _as_bool(fake, "enabled"):
        return ClockConfig(format=layout, fake=FakeTimeConfig())

    raw_time = fake.get("time")
    if isinstance(raw_time, datetime):
        moment = raw_time if raw_time.tzinfo else raw_time.replace(tzinfo=timezone.utc)
        return ClockConfig(format=layout, fake=FakeTimeConfig(enabled=True, time=moment))
    time_text = _opt_str(fake, "time")
    if time_text is None:
        raise ConfigError("clock.fake.time: fake time is required")
    try:
        moment = parse_layout(layout, time_text)
    except ValueError as exc:
        raise ConfigError(f"clock.fake.time: invalid fake time {time_text!r}") from exc
    return ClockConfig(format=layout, fake=FakeTimeConfig(enabled=True, time=moment))