"""Schedule period context consumed by context-sensitive day count conventions.

Schedule generation itself lives with the callers. A day count only needs
to know a few facts about the period it is applied to: the nominal
frequency, the period end date, whether the end date is the schedule's
maturity, whether the end-of-month rule applies and the period's position
in the schedule (its stub classification).
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from accrual.dates.date_utils import add_months, to_date
from accrual.errors import InvalidArgumentError, MissingContextError, NotFoundError


class Frequency(Enum):
    """Nominal periodic frequency, valued by its ISO-8601 style period code."""

    ANNUAL = "P12M"
    SEMI_ANNUAL = "P6M"
    TRI_ANNUAL = "P4M"
    QUARTERLY = "P3M"
    BI_MONTHLY = "P2M"
    MONTHLY = "P1M"
    FOUR_WEEKLY = "P4W"
    TWO_WEEKLY = "P2W"
    WEEKLY = "P1W"
    DAILY = "P1D"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, code: str) -> "Frequency":
        """Parse a period code such as ``"P6M"``, ``"6M"`` or ``"P1Y"``."""
        if not isinstance(code, str):
            raise InvalidArgumentError(f"Frequency code must be a string, got {code!r}")
        text = code.strip().upper()
        if not text.startswith("P"):
            text = "P" + text
        match = re.fullmatch(r"P(\d+)([YMWD])", text)
        if match and match.group(2) == "Y":
            text = f"P{int(match.group(1)) * 12}M"
        try:
            return cls(text)
        except ValueError:
            raise NotFoundError("frequency", code, [f.value for f in cls]) from None

    @property
    def months(self) -> int:
        """Months per period, 0 for week or day based frequencies."""
        amount, unit = int(self.value[1:-1]), self.value[-1]
        return amount if unit == "M" else 0

    @property
    def days(self) -> int:
        """Days per period, 0 for month based frequencies."""
        amount, unit = int(self.value[1:-1]), self.value[-1]
        if unit == "W":
            return amount * 7
        return amount if unit == "D" else 0

    @property
    def events_per_year(self) -> int:
        """Number of periods per year (a day counts as 1/364 of a year)."""
        if self.months:
            return 12 // self.months
        return 364 // self.days

    def add_to(self, date: datetime.date, periods: int = 1) -> datetime.date:
        """Step ``date`` by a number of periods, clamping to month end where needed."""
        if self.months:
            return add_months(date, self.months * periods)
        return date + datetime.timedelta(days=self.days * periods)


class SchedulePeriodType(Enum):
    """Position of a period within its schedule."""

    INITIAL = "Initial"
    NORMAL = "Normal"
    FINAL = "Final"
    TERM = "Term"

    @classmethod
    def classify(cls, index: int, period_count: int) -> "SchedulePeriodType":
        """Classify the period at ``index`` of a schedule with ``period_count`` periods.

        A single-period schedule is ``TERM``; otherwise the first period is
        ``INITIAL``, the last is ``FINAL`` and the rest are ``NORMAL``.
        """
        if period_count < 1 or not 0 <= index < period_count:
            raise InvalidArgumentError(
                f"Period index {index} out of range for schedule of {period_count} periods"
            )
        if period_count == 1:
            return cls.TERM
        if index == 0:
            return cls.INITIAL
        if index == period_count - 1:
            return cls.FINAL
        return cls.NORMAL


@dataclass(frozen=True)
class SchedulePeriodContext:
    """Facts about a schedule period needed by some day count conventions.

    Attributes:
        is_schedule_end_date: True when the end date being queried is the
            schedule's final (maturity) date
        is_end_of_month_convention: True when month-end dates roll to month ends
        frequency: Nominal frequency of the schedule
        period_end_date: Unadjusted end date of the period
        period_type: Stub classification of the period
    """

    is_schedule_end_date: bool = False
    is_end_of_month_convention: bool = True
    frequency: Optional[Frequency] = None
    period_end_date: Optional[datetime.date] = None
    period_type: Optional[SchedulePeriodType] = None

    DEFAULT: ClassVar["SchedulePeriodContext"]

    def __post_init__(self):
        if not isinstance(self.is_schedule_end_date, bool):
            raise InvalidArgumentError("is_schedule_end_date must be a bool")
        if not isinstance(self.is_end_of_month_convention, bool):
            raise InvalidArgumentError("is_end_of_month_convention must be a bool")
        if self.frequency is not None and not isinstance(self.frequency, Frequency):
            raise InvalidArgumentError(f"frequency must be a Frequency, got {self.frequency!r}")
        if self.period_end_date is not None:
            object.__setattr__(self, "period_end_date", to_date(self.period_end_date, "period_end_date"))
        if self.period_type is not None and not isinstance(self.period_type, SchedulePeriodType):
            raise InvalidArgumentError(f"period_type must be a SchedulePeriodType, got {self.period_type!r}")

    def require_frequency(self) -> Frequency:
        if self.frequency is None:
            raise MissingContextError("Schedule context has no frequency")
        return self.frequency

    def require_period_end_date(self) -> datetime.date:
        if self.period_end_date is None:
            raise MissingContextError("Schedule context has no period end date")
        return self.period_end_date

    def require_period_type(self) -> SchedulePeriodType:
        if self.period_type is None:
            raise MissingContextError("Schedule context has no period type")
        return self.period_type


SchedulePeriodContext.DEFAULT = SchedulePeriodContext()
