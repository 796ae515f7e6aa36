"""Date utilities for accrual calculations.

This package provides:

- Day count conventions (Act/360, Act/Act ICMA, 30E/360 ISDA, etc.)
- Holiday calendars (EUTA, USNY, GBLO, weekend-only calendars)
- Business day conventions (Following, Modified Following, Preceding, etc.)
- Business and calendar day offsets
- Schedule period context for context-sensitive conventions
"""

from accrual.dates.business_day import BusinessDayConvention
from accrual.dates.calendar import (
    FRI_SAT,
    NO_HOLIDAYS,
    SAT_SUN,
    THU_FRI,
    HolidayCalendar,
    available_calendars,
    get_calendar,
    register_calendar,
)
from accrual.dates.day_count import DayCount, year_fraction
from accrual.dates.days_adjustment import DaysAdjustment
from accrual.dates.schedule_info import (
    Frequency,
    SchedulePeriodContext,
    SchedulePeriodType,
)

__all__ = [
    # Calendar
    "HolidayCalendar",
    "NO_HOLIDAYS",
    "SAT_SUN",
    "FRI_SAT",
    "THU_FRI",
    "get_calendar",
    "register_calendar",
    "available_calendars",
    # Business day
    "BusinessDayConvention",
    "DaysAdjustment",
    # Day count
    "DayCount",
    "year_fraction",
    # Schedule context
    "Frequency",
    "SchedulePeriodContext",
    "SchedulePeriodType",
]
