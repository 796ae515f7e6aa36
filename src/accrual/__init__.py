"""Accrual: day count conventions, holiday calendars and index date mapping."""

from __future__ import annotations

from accrual.dates import (
    FRI_SAT,
    NO_HOLIDAYS,
    SAT_SUN,
    THU_FRI,
    BusinessDayConvention,
    DayCount,
    DaysAdjustment,
    Frequency,
    HolidayCalendar,
    SchedulePeriodContext,
    SchedulePeriodType,
    available_calendars,
    get_calendar,
    register_calendar,
    year_fraction,
)
from accrual.errors import (
    AccrualError,
    InvalidArgumentError,
    MissingContextError,
    NotFoundError,
    UnsupportedCombinationError,
)
from accrual.index import FxIndexDateMapper, available_fx_indices, get_fx_index, register_fx_index

__version__ = "0.1.0"

__all__ = [
    "AccrualError",
    "BusinessDayConvention",
    "DayCount",
    "DaysAdjustment",
    "FRI_SAT",
    "Frequency",
    "FxIndexDateMapper",
    "HolidayCalendar",
    "InvalidArgumentError",
    "MissingContextError",
    "NO_HOLIDAYS",
    "NotFoundError",
    "SAT_SUN",
    "SchedulePeriodContext",
    "SchedulePeriodType",
    "THU_FRI",
    "UnsupportedCombinationError",
    "available_calendars",
    "available_fx_indices",
    "get_calendar",
    "get_fx_index",
    "register_calendar",
    "register_fx_index",
    "year_fraction",
]
