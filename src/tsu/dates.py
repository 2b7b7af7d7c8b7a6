"""
Calendar arithmetic on UTC days since 1970-01-01.

All functions are pure. Dates are proleptic Gregorian and carry no timezone
beyond "UTC seconds since epoch".
"""

import time
from typing import Optional

from .exceptions import DateOutOfRange, InvalidFormat
from .models import CalendarDate, is_leap_year, month_lengths

SECONDS_PER_DAY = 86400
EPOCH_YEAR = 1970

__all__ = [
    "SECONDS_PER_DAY",
    "add_days_to_date",
    "date_to_epoch_days",
    "epoch_days_to_date",
    "is_leap_year",
    "parse_timestamp",
    "today",
]


def epoch_days_to_date(days: int) -> CalendarDate:
    """
    Convert a day count since 1970-01-01 to a calendar date.

    Whole years are subtracted until the remainder fits in the current year,
    then whole months until it fits in the current month.

    Args:
        days: Non-negative number of days since the epoch

    Returns:
        The corresponding CalendarDate

    Raises:
        DateOutOfRange: If ``days`` is negative
    """
    if days < 0:
        raise DateOutOfRange(f"Day count before epoch: {days}")

    year = EPOCH_YEAR
    remaining = days

    while True:
        days_in_year = 366 if is_leap_year(year) else 365
        if remaining < days_in_year:
            break
        remaining -= days_in_year
        year += 1

    month = 1
    for days_in_month in month_lengths(year):
        if remaining < days_in_month:
            break
        remaining -= days_in_month
        month += 1

    return CalendarDate(year, month, remaining + 1)


def date_to_epoch_days(date: CalendarDate) -> int:
    """Number of days from 1970-01-01 to ``date``."""
    if date.year < EPOCH_YEAR:
        raise DateOutOfRange(f"Date before epoch: {date}")

    days = 0
    for year in range(EPOCH_YEAR, date.year):
        days += 366 if is_leap_year(year) else 365

    days += sum(month_lengths(date.year)[: date.month - 1])
    return days + date.day - 1


def add_days_to_date(date: CalendarDate, delta: int) -> CalendarDate:
    """
    Shift ``date`` by ``delta`` days (may be negative).

    Raises:
        DateOutOfRange: If the result would fall before 1970-01-01
    """
    new_days = date_to_epoch_days(date) + delta
    if new_days < 0:
        raise DateOutOfRange(f"{date} {delta:+d} days is before 1970-01-01")
    return epoch_days_to_date(new_days)


def parse_timestamp(text: str) -> int:
    """
    Parse ``YYYY-MM-DD HH:MM`` into UTC epoch seconds.

    This is the timestamp form returned by the NOAA API when
    ``time_zone=gmt``. Seconds are implicitly zero.

    Raises:
        InvalidFormat: If the date or time part is missing, a field is not
            numeric, or a field is out of range
        DateOutOfRange: If the date falls before 1970
    """
    parts = text.split(" ")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise InvalidFormat(f"Expected 'YYYY-MM-DD HH:MM', got {text!r}")
    date_part, time_part = parts[0], parts[1]

    date = CalendarDate.parse(date_part)

    time_fields = time_part.split(":")
    if len(time_fields) < 2:
        raise InvalidFormat(f"Expected HH:MM time, got {time_part!r}")
    try:
        hour = int(time_fields[0])
        minute = int(time_fields[1])
    except ValueError as e:
        raise InvalidFormat(f"Non-numeric time field in {text!r}") from e

    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise InvalidFormat(f"Time out of range in {text!r}")

    return date_to_epoch_days(date) * SECONDS_PER_DAY + hour * 3600 + minute * 60


def today(now: Optional[int] = None) -> CalendarDate:
    """UTC calendar date of ``now`` (defaults to the current time)."""
    if now is None:
        now = int(time.time())
    return epoch_days_to_date(now // SECONDS_PER_DAY)
