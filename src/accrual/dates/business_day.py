"""Business day conventions for date adjustments.

Business day conventions determine how dates that fall on non-business days
(weekends or holidays) are adjusted to valid business days.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import TYPE_CHECKING

from accrual.dates.date_utils import DateLike, to_date
from accrual.errors import InvalidArgumentError, NotFoundError

if TYPE_CHECKING:
    from accrual.dates.calendar import HolidayCalendar


class BusinessDayConvention(Enum):
    """Rules for rolling a date onto a business day of a calendar."""

    NO_ADJUST = "NoAdjust"
    FOLLOWING = "Following"
    MODIFIED_FOLLOWING = "ModifiedFollowing"
    PRECEDING = "Preceding"
    MODIFIED_PRECEDING = "ModifiedPreceding"
    NEAREST = "Nearest"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def of(cls, name: str) -> "BusinessDayConvention":
        """Look up a convention by its name, e.g. ``"ModifiedFollowing"``."""
        try:
            return cls(name)
        except ValueError:
            raise NotFoundError("business day convention", name, [c.value for c in cls]) from None

    def adjust(self, date: DateLike, calendar: "HolidayCalendar") -> datetime.date:
        """Adjust a date according to the convention.

        Args:
            date: Date to adjust
            calendar: Holiday calendar to use

        Returns:
            Adjusted date
        """
        date = to_date(date)
        if calendar is None:
            raise InvalidArgumentError("calendar must not be None")
        return _ADJUSTERS[self](date, calendar)


def _unadjusted(date: datetime.date, calendar: "HolidayCalendar") -> datetime.date:
    return date


def _following(date: datetime.date, calendar: "HolidayCalendar") -> datetime.date:
    return calendar.next_or_same(date)


def _preceding(date: datetime.date, calendar: "HolidayCalendar") -> datetime.date:
    return calendar.previous_or_same(date)


def _modified_following(date: datetime.date, calendar: "HolidayCalendar") -> datetime.date:
    adjusted = calendar.next_or_same(date)
    # If we crossed into next month, go backward instead
    if adjusted.month != date.month:
        adjusted = calendar.previous_or_same(date)
    return adjusted


def _modified_preceding(date: datetime.date, calendar: "HolidayCalendar") -> datetime.date:
    adjusted = calendar.previous_or_same(date)
    # If we crossed into previous month, go forward instead
    if adjusted.month != date.month:
        adjusted = calendar.next_or_same(date)
    return adjusted


def _nearest(date: datetime.date, calendar: "HolidayCalendar") -> datetime.date:
    """Closest business day; forward wins when both are equally far."""
    if calendar.is_business_day(date):
        return date
    forward = calendar.next(date)
    backward = calendar.previous(date)
    if (forward - date) <= (date - backward):
        return forward
    return backward


_ADJUSTERS = {
    BusinessDayConvention.NO_ADJUST: _unadjusted,
    BusinessDayConvention.FOLLOWING: _following,
    BusinessDayConvention.MODIFIED_FOLLOWING: _modified_following,
    BusinessDayConvention.PRECEDING: _preceding,
    BusinessDayConvention.MODIFIED_PRECEDING: _modified_preceding,
    BusinessDayConvention.NEAREST: _nearest,
}

# Convenience instances
NO_ADJUST = BusinessDayConvention.NO_ADJUST
FOLLOWING = BusinessDayConvention.FOLLOWING
MODIFIED_FOLLOWING = BusinessDayConvention.MODIFIED_FOLLOWING
PRECEDING = BusinessDayConvention.PRECEDING
MODIFIED_PRECEDING = BusinessDayConvention.MODIFIED_PRECEDING
NEAREST = BusinessDayConvention.NEAREST
