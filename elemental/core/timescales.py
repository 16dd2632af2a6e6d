# elemental/core/timescales.py
# -----------------------------------------------------------------------------
# Civil calendar → Julian Day.
#
# Public API:
#   to_julian_day(date, time=(12, 0)) -> float
#
# Guarantees:
#   • Proleptic-Gregorian integer algorithm, noon-based day number.
#   • 2000-01-01 12:00 → 2451545.0 exactly (J2000).
#   • +1 calendar day → +1.0 JD at a fixed time of day.
#   • Inputs are pre-parsed numbers; text parsing lives in core.validators.
#   • Out-of-range fields raise InvalidDateTime (never clamped).
#   • No time zones, no leap seconds: the clock time is taken as given.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Tuple

from elemental.core.errors import InvalidDateTime

__all__ = [
    "DEFAULT_TIME",
    "MAX_ABS_YEAR",
    "J2000",
    "to_julian_day",
    "julian_day_number",
    "coerce_date",
    "coerce_time",
]

J2000: float = 2451545.0
DEFAULT_TIME: Tuple[int, int] = (12, 0)

# |year| bound; keeps the day number well inside float range
MAX_ABS_YEAR = 999_999

# ───────────────────────────── Coercion ─────────────────────────────

def _as_int(name: str, v: Any) -> int:
    # bool is an int subclass; a True month is a caller bug, not January
    if isinstance(v, bool) or not isinstance(v, int):
        raise InvalidDateTime(f"{name} must be an integer, got {v!r}")
    return v


def coerce_date(date: Any) -> Tuple[int, int, int]:
    """Accept (y, m, d), {'year','month','day'} or anything with those attributes."""
    if isinstance(date, dict):
        try:
            parts = (date["year"], date["month"], date["day"])
        except KeyError as e:
            raise InvalidDateTime(f"date is missing {e.args[0]!r}") from e
    elif all(hasattr(date, a) for a in ("year", "month", "day")):
        parts = (date.year, date.month, date.day)
    else:
        try:
            parts = tuple(date)
        except TypeError:
            raise InvalidDateTime(f"unsupported date value {date!r}") from None
        if len(parts) != 3:
            raise InvalidDateTime("date must have exactly (year, month, day)")

    year = _as_int("year", parts[0])
    month = _as_int("month", parts[1])
    day = _as_int("day", parts[2])
    if not -MAX_ABS_YEAR <= year <= MAX_ABS_YEAR:
        raise InvalidDateTime(f"year must be within \xb1{MAX_ABS_YEAR}")
    if not 1 <= month <= 12:
        raise InvalidDateTime(f"month must be 1..12, got {month}")
    last = _days_in_month(year, month)
    if not 1 <= day <= last:
        raise InvalidDateTime(f"day must be 1..{last} for {year:04d}-{month:02d}, got {day}")
    return year, month, day


def coerce_time(time: Any) -> Tuple[int, int]:
    """Accept (h, m), {'hour','minute'}, a datetime.time, or None for noon."""
    if time is None:
        return DEFAULT_TIME
    if isinstance(time, dict):
        try:
            parts = (time["hour"], time["minute"])
        except KeyError as e:
            raise InvalidDateTime(f"time is missing {e.args[0]!r}") from e
    elif hasattr(time, "hour") and hasattr(time, "minute"):
        parts = (time.hour, time.minute)
    else:
        try:
            parts = tuple(time)
        except TypeError:
            raise InvalidDateTime(f"unsupported time value {time!r}") from None
        if len(parts) != 2:
            raise InvalidDateTime("time must have exactly (hour, minute)")

    hour = _as_int("hour", parts[0])
    minute = _as_int("minute", parts[1])
    if not 0 <= hour <= 23:
        raise InvalidDateTime(f"hour must be 0..23, got {hour}")
    if not 0 <= minute <= 59:
        raise InvalidDateTime(f"minute must be 0..59, got {minute}")
    return hour, minute


def _days_in_month(year: int, month: int) -> int:
    # proleptic Gregorian for any year, unlike datetime (1..9999)
    if month == 2:
        leap = year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
        return 29 if leap else 28
    return 30 if month in (4, 6, 9, 11) else 31

# ───────────────────────────── Julian Day ─────────────────────────────

def julian_day_number(year: int, month: int, day: int) -> int:
    """Integer Julian Day Number of the civil date (the JD at its noon)."""
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return (
        day + (153 * m + 2) // 5 + 365 * y
        + y // 4 - y // 100 + y // 400 - 32045
    )


def to_julian_day(date: Any, time: Any = DEFAULT_TIME) -> float:
    """
    Julian Day for a civil date and clock time.

    `date` is (year, month, day) or equivalent; `time` is (hour, minute),
    defaulting to 12:00. Raises InvalidDateTime on malformed or out-of-range
    fields.
    """
    year, month, day = coerce_date(date)
    hour, minute = coerce_time(time)
    return julian_day_number(year, month, day) + (hour - 12) / 24 + minute / 1440
