"""Rule-based holiday generation for the built-in market calendars.

Each rule returns the listed (non-weekend) holidays of one year. Calendars
are materialised from these rules over :data:`HOLIDAY_YEARS` when first
requested from the registry.
"""

import datetime
from typing import Callable, Dict, List

from accrual.dates.date_utils import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    easter_date,
    last_weekday,
    nth_weekday,
)

HOLIDAY_YEARS = range(1950, 2100)

_ONE_DAY = datetime.timedelta(days=1)


def _sunday_to_monday(date: datetime.date) -> datetime.date:
    return date + _ONE_DAY if date.weekday() == SUNDAY else date


def _weekend_to_monday(date: datetime.date) -> datetime.date:
    if date.weekday() == SATURDAY:
        return date + 2 * _ONE_DAY
    return _sunday_to_monday(date)


def euta_holidays(year: int) -> List[datetime.date]:
    """TARGET (Trans-European Automated Real-time Gross settlement Express Transfer) holidays."""
    holidays = [
        datetime.date(year, 1, 1),
        datetime.date(year, 12, 25),
    ]
    if year >= 2000:
        easter = easter_date(year)
        holidays.append(easter - 2 * _ONE_DAY)  # Good Friday
        holidays.append(easter + _ONE_DAY)  # Easter Monday
        holidays.append(datetime.date(year, 5, 1))
        holidays.append(datetime.date(year, 12, 26))
    if year in (1999, 2001):
        holidays.append(datetime.date(year, 12, 31))
    return holidays


def usny_holidays(year: int) -> List[datetime.date]:
    """New York Federal Reserve bank holidays.

    Holidays falling on a Sunday are observed on the Monday; Saturday
    holidays are not moved.
    """
    holidays = [
        _sunday_to_monday(datetime.date(year, 1, 1)),
        nth_weekday(year, 2, MONDAY, 3),  # Washington's Birthday
        last_weekday(year, 5, MONDAY),  # Memorial Day
        _sunday_to_monday(datetime.date(year, 7, 4)),
        nth_weekday(year, 9, MONDAY, 1),  # Labor Day
        nth_weekday(year, 10, MONDAY, 2),  # Columbus Day
        _sunday_to_monday(datetime.date(year, 11, 11)),
        nth_weekday(year, 11, THURSDAY, 4),  # Thanksgiving
        _sunday_to_monday(datetime.date(year, 12, 25)),
    ]
    if year >= 1986:
        holidays.append(nth_weekday(year, 1, MONDAY, 3))  # Martin Luther King Jr. Day
    if year >= 2022:
        holidays.append(_sunday_to_monday(datetime.date(year, 6, 19)))
    return holidays


_GBLO_EARLY_MAY = {1995: datetime.date(1995, 5, 8), 2020: datetime.date(2020, 5, 8)}
_GBLO_SPRING = {
    2002: datetime.date(2002, 6, 4),
    2012: datetime.date(2012, 6, 4),
    2022: datetime.date(2022, 6, 2),
}
_GBLO_SPECIAL = {
    1999: [datetime.date(1999, 12, 31)],
    2002: [datetime.date(2002, 6, 3)],
    2011: [datetime.date(2011, 4, 29)],
    2012: [datetime.date(2012, 6, 5)],
    2022: [datetime.date(2022, 6, 3), datetime.date(2022, 9, 19)],
    2023: [datetime.date(2023, 5, 8)],
}


def gblo_holidays(year: int) -> List[datetime.date]:
    """London bank holidays (England and Wales)."""
    easter = easter_date(year)
    holidays = [
        _weekend_to_monday(datetime.date(year, 1, 1)),
        easter - 2 * _ONE_DAY,  # Good Friday
        easter + _ONE_DAY,  # Easter Monday
        _GBLO_EARLY_MAY.get(year, nth_weekday(year, 5, MONDAY, 1)),
        _GBLO_SPRING.get(year, last_weekday(year, 5, MONDAY)),
        last_weekday(year, 8, MONDAY),  # Summer Bank Holiday
    ]

    # Christmas and Boxing Day with substitute days
    christmas = datetime.date(year, 12, 25)
    if christmas.weekday() == SATURDAY:
        holidays.extend([datetime.date(year, 12, 27), datetime.date(year, 12, 28)])
    elif christmas.weekday() == SUNDAY:
        holidays.extend([datetime.date(year, 12, 26), datetime.date(year, 12, 27)])
    elif christmas.weekday() == FRIDAY:  # Boxing Day on Saturday
        holidays.extend([christmas, datetime.date(year, 12, 28)])
    else:
        holidays.extend([christmas, datetime.date(year, 12, 26)])

    holidays.extend(_GBLO_SPECIAL.get(year, []))
    return holidays


HOLIDAY_RULES: Dict[str, Callable[[int], List[datetime.date]]] = {
    "EUTA": euta_holidays,
    "USNY": usny_holidays,
    "GBLO": gblo_holidays,
}
