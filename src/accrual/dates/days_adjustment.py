"""Offsets of a date by a number of calendar or business days."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import ClassVar, Optional

from accrual.dates.business_day import BusinessDayConvention
from accrual.dates.calendar import NO_HOLIDAYS, HolidayCalendar
from accrual.dates.date_utils import DateLike
from accrual.errors import InvalidArgumentError


@dataclass(frozen=True)
class DaysAdjustment:
    """A single day offset followed by an optional business day adjustment.

    The date is first shifted by ``days`` business days of ``calendar``
    (calendar days when the calendar is ``NO_HOLIDAYS``), then ``adjustment``
    is applied using ``result_calendar``, which defaults to ``calendar``.

    Attributes:
        days: Signed number of days to shift
        calendar: Calendar used to count the shift
        adjustment: Convention applied after the shift
        result_calendar: Calendar the result must be a business day of
    """

    days: int
    calendar: HolidayCalendar = NO_HOLIDAYS
    adjustment: BusinessDayConvention = BusinessDayConvention.NO_ADJUST
    result_calendar: Optional[HolidayCalendar] = None

    NONE: ClassVar["DaysAdjustment"]

    def __post_init__(self):
        if isinstance(self.days, bool) or not isinstance(self.days, int):
            raise InvalidArgumentError(f"days must be an integer, got {self.days!r}")
        if not isinstance(self.calendar, HolidayCalendar):
            raise InvalidArgumentError(f"calendar must be a HolidayCalendar, got {self.calendar!r}")
        if not isinstance(self.adjustment, BusinessDayConvention):
            raise InvalidArgumentError(
                f"adjustment must be a BusinessDayConvention, got {self.adjustment!r}"
            )
        if self.result_calendar is not None and not isinstance(self.result_calendar, HolidayCalendar):
            raise InvalidArgumentError(
                f"result_calendar must be a HolidayCalendar, got {self.result_calendar!r}"
            )

    @classmethod
    def of_calendar_days(
        cls,
        days: int,
        adjustment: BusinessDayConvention = BusinessDayConvention.NO_ADJUST,
        result_calendar: Optional[HolidayCalendar] = None,
    ) -> "DaysAdjustment":
        """Shift by calendar days, optionally adjusting the result to ``result_calendar``."""
        return cls(days, NO_HOLIDAYS, adjustment, result_calendar)

    @classmethod
    def of_business_days(
        cls,
        days: int,
        calendar: HolidayCalendar,
        adjustment: BusinessDayConvention = BusinessDayConvention.NO_ADJUST,
        result_calendar: Optional[HolidayCalendar] = None,
    ) -> "DaysAdjustment":
        """Shift by business days of ``calendar``."""
        return cls(days, calendar, adjustment, result_calendar)

    @property
    def effective_result_calendar(self) -> HolidayCalendar:
        """Calendar used for the final business day adjustment."""
        return self.result_calendar if self.result_calendar is not None else self.calendar

    def adjust(self, date: DateLike) -> datetime.date:
        """Apply the offset and then the business day adjustment to ``date``."""
        shifted = self.calendar.shift(date, self.days)
        return self.adjustment.adjust(shifted, self.effective_result_calendar)

    def __str__(self) -> str:
        unit = "calendar" if self.calendar is NO_HOLIDAYS else "business"
        text = f"{self.days} {unit} day{'' if abs(self.days) == 1 else 's'}"
        if self.calendar is not NO_HOLIDAYS:
            text += f" using calendar {self.calendar}"
        if self.adjustment is not BusinessDayConvention.NO_ADJUST:
            text += f" then apply {self.adjustment} using calendar {self.effective_result_calendar}"
        return text


DaysAdjustment.NONE = DaysAdjustment(0)
