"""Time-of-day and calendar arithmetic used by the working-time calculations."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

SECONDS_PER_DAY = 24 * 60 * 60

# anchor used to add durations to a time of day
_ANCHOR = date(2000, 1, 1)


def second_of_day(value: time) -> int:
    """Whole seconds since midnight, sub-second fraction truncated."""

    return value.hour * 3600 + value.minute * 60 + value.second


def to_rounded_second(value: time) -> int:
    """Seconds since midnight, rounded up only when the fraction exceeds half a second.

    ``time.max`` (23:59:59.999999) therefore maps to 86400, the end of the day.
    """

    second = second_of_day(value)
    if value.microsecond > 500_000:
        second += 1
    return second


def delta_days(start: date, end: date) -> int:
    """Number of calendar days from ``start`` to ``end`` (negative when ``end`` is earlier)."""

    return (end - start).days


def plus_duration(value: time, duration: timedelta) -> time:
    """Add ``duration`` to a time of day, wrapping past midnight."""

    return (datetime.combine(_ANCHOR, value) + duration).time()


__all__ = [
    "SECONDS_PER_DAY",
    "second_of_day",
    "to_rounded_second",
    "delta_days",
    "plus_duration",
]
