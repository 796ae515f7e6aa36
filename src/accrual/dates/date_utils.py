"""Date utility functions for day count and calendar calculations."""

import datetime
from typing import Any, Union

from accrual.errors import InvalidArgumentError

DateLike = Union[datetime.date, datetime.datetime]

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


def to_date(value: Any, name: str = "date") -> datetime.date:
    """Validate a date argument, truncating datetimes to their date.

    Args:
        value: Candidate date
        name: Argument name used in the error message

    Returns:
        The value as a plain ``datetime.date``

    Raises:
        InvalidArgumentError: If the value is ``None`` or not a date
    """
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    if isinstance(value, datetime.datetime):
        return value.date()
    if not isinstance(value, datetime.date):
        raise InvalidArgumentError(f"{name} must be a date, got {type(value).__name__}")
    return value


def in_order(date1: Any, date2: Any, name1: str = "date1", name2: str = "date2"):
    """Validate two dates and check that ``date1 <= date2``."""
    first = to_date(date1, name1)
    second = to_date(date2, name2)
    if first > second:
        raise InvalidArgumentError(f"{name1} ({first}) must be on or before {name2} ({second})")
    return first, second


def is_leap_year(year: int) -> bool:
    """Check if a year is a leap year in the proleptic Gregorian calendar."""
    return (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Get the number of days in a specific month.

    Args:
        year: Year
        month: Month (1-12)

    Returns:
        Number of days in the month
    """
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    elif month in (4, 6, 9, 11):
        return 30
    elif month == 2:
        return 29 if is_leap_year(year) else 28
    else:
        raise InvalidArgumentError(f"Invalid month: {month}")


def days_in_year(year: int) -> int:
    """Get the number of days in a year (366 for leap years, 365 otherwise)."""
    return 366 if is_leap_year(year) else 365


def add_months(date: datetime.date, months: int) -> datetime.date:
    """Add a number of months to a date.

    If the resulting day does not exist (e.g., Jan 31 + 1 month) the date
    is clamped to the last valid day of the target month.
    """
    total_months = date.month + months
    year = date.year + (total_months - 1) // 12
    month = ((total_months - 1) % 12) + 1

    day = min(date.day, days_in_month(year, month))
    return datetime.date(year, month, day)


def add_years(date: datetime.date, years: int) -> datetime.date:
    """Add a number of years to a date.

    Feb 29 maps to Feb 28 when the target year is not a leap year, so
    Feb 29 is only produced when the input is Feb 29 and the target year
    is a leap year.
    """
    year = date.year + years
    day = date.day
    if date.month == 2 and day == 29 and not is_leap_year(year):
        day = 28
    return datetime.date(year, date.month, day)


def date_diff_days(date1: datetime.date, date2: datetime.date) -> int:
    """Number of calendar days from ``date1`` to ``date2`` (signed)."""
    return (date2 - date1).days


def day_of_year(date: datetime.date) -> int:
    """Ordinal day within the year, 1 for January 1st."""
    return date.timetuple().tm_yday


def end_of_month(date: datetime.date) -> datetime.date:
    """Get the last day of the month for a given date."""
    return datetime.date(date.year, date.month, days_in_month(date.year, date.month))


def is_end_of_month(date: datetime.date) -> bool:
    """Check if a date is the last day of its month."""
    return date.day == days_in_month(date.year, date.month)


def is_last_day_of_february(date: datetime.date) -> bool:
    """Check if a date is Feb 28 in a common year or Feb 29 in a leap year."""
    return date.month == 2 and is_end_of_month(date)


def next_leap_day(date: datetime.date) -> datetime.date:
    """First February 29th strictly after ``date``."""
    year = date.year
    if date.month > 2 or (date.month == 2 and date.day == 29):
        year += 1
    while not is_leap_year(year):
        year += 1
    return datetime.date(year, 2, 29)


def next_or_same_leap_day(date: datetime.date) -> datetime.date:
    """First February 29th on or after ``date``."""
    if date.month == 2 and date.day == 29:
        return date
    return next_leap_day(date)


def nth_weekday(year: int, month: int, weekday: int, n: int) -> datetime.date:
    """The ``n``-th given weekday of a month (Monday=0).

    Useful for floating holidays such as the third Monday of January.
    """
    first = datetime.date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + datetime.timedelta(days=offset + 7 * (n - 1))


def last_weekday(year: int, month: int, weekday: int) -> datetime.date:
    """The last given weekday of a month (Monday=0)."""
    last = end_of_month(datetime.date(year, month, 1))
    return last - datetime.timedelta(days=(last.weekday() - weekday) % 7)


def easter_date(year: int) -> datetime.date:
    """Calculate Easter Sunday for a given year using Meeus/Jones/Butcher algorithm."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1

    return datetime.date(year, month, day)
