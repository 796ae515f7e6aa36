"""Day count conventions for financial calculations.

Day count conventions determine how interest accrues between two dates by
turning a date pair into a fraction of a year. Each convention is a member
of the closed :class:`DayCount` enumeration, valued by its canonical name,
and computed by a stateless rule function.

Some conventions need to know about the schedule period they are applied
to (frequency, period end, end-of-month rule, maturity); that information
is passed as a :class:`~accrual.dates.schedule_info.SchedulePeriodContext`.

References:
    - ISDA 2006 definitions, section 4.16
    - ISDA "EMU and market conventions" (1999) Actual/Actual examples
    - AFB master agreement (Act/Act AFB)
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from accrual.dates.date_utils import (
    DateLike,
    add_years,
    date_diff_days,
    day_of_year,
    days_in_year,
    end_of_month,
    in_order,
    is_end_of_month,
    is_last_day_of_february,
    is_leap_year,
    next_leap_day,
    next_or_same_leap_day,
    to_date,
)
from accrual.dates.schedule_info import (
    Frequency,
    SchedulePeriodContext,
    SchedulePeriodType,
)
from accrual.errors import InvalidArgumentError, NotFoundError, UnsupportedCombinationError


class DayCount(Enum):
    """Standard day count conventions, valued by canonical name."""

    ONE_ONE = "1/1"
    ACT_ACT_ISDA = "Act/Act ISDA"
    ACT_ACT_ICMA = "Act/Act ICMA"
    ACT_ACT_AFB = "Act/Act AFB"
    ACT_365_ACTUAL = "Act/365 Actual"
    ACT_365L = "Act/365L"
    ACT_360 = "Act/360"
    ACT_364 = "Act/364"
    ACT_365F = "Act/365F"
    ACT_365_25 = "Act/365.25"
    NL_365 = "NL/365"
    THIRTY_360_ISDA = "30/360 ISDA"
    THIRTY_U_360 = "30U/360"
    THIRTY_E_360_ISDA = "30E/360 ISDA"
    THIRTY_E_360 = "30E/360"
    THIRTY_EPLUS_360 = "30E+/360"

    @property
    def canonical_name(self) -> str:
        """Canonical name, e.g. ``"Act/Act ISDA"``."""
        return self.value

    def __str__(self) -> str:
        return self.value

    @classmethod
    def of(cls, name: str) -> "DayCount":
        """Look up a convention by canonical name or a known alias.

        Raises:
            InvalidArgumentError: If the name is not a string
            NotFoundError: If the name is not registered
        """
        if not isinstance(name, str):
            raise InvalidArgumentError(f"Day count name must be a string, got {name!r}")
        try:
            return cls(name)
        except ValueError:
            pass
        try:
            return _ALIASES[name.upper()]
        except KeyError:
            raise NotFoundError("day count", name, cls.lookup_all()) from None

    @classmethod
    def lookup_all(cls) -> Dict[str, "DayCount"]:
        """All registered conventions keyed by canonical name."""
        return {member.value: member for member in cls}

    def fraction(
        self,
        date1: DateLike,
        date2: DateLike,
        context: Optional[SchedulePeriodContext] = None,
    ) -> float:
        """Year fraction between two dates.

        Args:
            date1: Start date, on or before ``date2``
            date2: End date
            context: Schedule period context; the default context is used
                when omitted

        Returns:
            Year fraction according to the convention

        Raises:
            InvalidArgumentError: If a date is missing or the dates are out of order
            MissingContextError: If the convention needs an absent context field
            UnsupportedCombinationError: If the context cannot be used with the convention
        """
        first, second = in_order(date1, date2)
        return _RULES[self].fraction(first, second, _context(context))

    def day_count(
        self,
        date1: DateLike,
        date2: DateLike,
        context: Optional[SchedulePeriodContext] = None,
    ) -> int:
        """Number of days between two dates as counted by the convention.

        Actual conventions return calendar days, NL/365 excludes leap days and
        the 30/360 family returns its adjusted 30-day-month count.
        """
        first, second = in_order(date1, date2)
        return _RULES[self].days(first, second, _context(context))

    def relative_fraction(
        self,
        date1: DateLike,
        date2: DateLike,
        context: Optional[SchedulePeriodContext] = None,
    ) -> float:
        """Signed year fraction, negative when ``date2`` is before ``date1``."""
        first = to_date(date1, "date1")
        second = to_date(date2, "date2")
        if second < first:
            return -self.fraction(second, first, context)
        return self.fraction(first, second, context)


def year_fraction(
    date1: DateLike,
    date2: DateLike,
    convention: Union[DayCount, str],
    context: Optional[SchedulePeriodContext] = None,
) -> float:
    """Calculate the year fraction between two dates using a convention or its name.

    Example:
        >>> from datetime import date
        >>> year_fraction(date(2011, 12, 28), date(2012, 2, 28), "Act/360") == 62 / 360
        True
    """
    if not isinstance(convention, DayCount):
        convention = DayCount.of(convention)
    return convention.fraction(date1, date2, context)


def _context(context: Optional[SchedulePeriodContext]) -> SchedulePeriodContext:
    if context is None:
        return SchedulePeriodContext.DEFAULT
    if not isinstance(context, SchedulePeriodContext):
        raise InvalidArgumentError(f"context must be a SchedulePeriodContext, got {context!r}")
    return context


class _Rule:
    """Fraction and day count functions of one convention."""

    __slots__ = ("fraction", "days")

    def __init__(self, fraction: Callable, days: Callable):
        self.fraction = fraction
        self.days = days


def _actual_days(date1: datetime.date, date2: datetime.date, context=None) -> int:
    return date_diff_days(date1, date2)


def _fixed_denominator(denominator: float) -> _Rule:
    return _Rule(lambda d1, d2, ctx: date_diff_days(d1, d2) / denominator, _actual_days)


# ---------------------------------------------------------------------------
# Actual conventions


def _one_one(date1, date2, context) -> float:
    return 1.0


def _act_act_isda(date1, date2, context) -> float:
    """Split the period at each January 1st and use each year's own length."""
    y1 = date1.year
    y2 = date2.year
    first_year_length = days_in_year(y1)
    if y1 == y2:
        return (day_of_year(date2) - day_of_year(date1)) / first_year_length
    first_remainder = first_year_length - day_of_year(date1) + 1
    second_remainder = day_of_year(date2) - 1
    second_year_length = days_in_year(y2)
    return first_remainder / first_year_length + second_remainder / second_year_length + (y2 - y1 - 1)


def _act_act_afb(date1, date2, context) -> float:
    """Whole years counted back from the end date, then an actual fraction.

    Rolling back from Feb 29 lands on Feb 29 only in leap years; rolling back
    from Feb 28 never lands on Feb 29. Rolling stops once the remainder is
    under one year (possibly empty).
    """
    end = date2
    start = add_years(date2, -1)
    years = 0
    while start >= date1:
        years += 1
        end = start
        start = add_years(date2, -(years + 1))
    remainder_days = date_diff_days(date1, end)
    denominator = 366.0 if next_or_same_leap_day(date1) < end else 365.0
    return years + remainder_days / denominator


def _act_365_actual(date1, date2, context) -> float:
    denominator = 365.0 if next_leap_day(date1) > date2 else 366.0
    return date_diff_days(date1, date2) / denominator


def _act_365l(date1, date2, context) -> float:
    if date1 == date2:
        return 0.0
    period_end = context.require_period_end_date()
    frequency = context.require_frequency()
    if frequency is Frequency.ANNUAL:
        leap = next_leap_day(date1) <= period_end
    else:
        leap = is_leap_year(period_end.year)
    return date_diff_days(date1, date2) / (366.0 if leap else 365.0)


def _leap_days_between(date1, date2) -> int:
    """Count of February 29ths in ``(date1, date2]``."""
    count = 0
    leap_day = next_leap_day(date1)
    while leap_day <= date2:
        count += 1
        leap_day = next_leap_day(leap_day)
    return count


def _nl_365_days(date1, date2, context=None) -> int:
    return date_diff_days(date1, date2) - _leap_days_between(date1, date2)


def _nl_365(date1, date2, context) -> float:
    return _nl_365_days(date1, date2) / 365.0


# ---------------------------------------------------------------------------
# Actual/Actual ICMA


def _icma_roll(base: datetime.date, date: datetime.date, eom: bool) -> datetime.date:
    """Move ``date`` to its month end when the EOM rule applies to ``base``."""
    if eom and is_end_of_month(base):
        return end_of_month(date)
    return date


def _icma_part(prev_nominal, next_nominal, start, end, frequency: Frequency) -> float:
    """Contribution of one nominal period ``[prev_nominal, next_nominal)``."""
    if end > prev_nominal:
        accrued = date_diff_days(max(start, prev_nominal), min(end, next_nominal))
        nominal = date_diff_days(prev_nominal, next_nominal)
        return accrued / (frequency.events_per_year * nominal)
    return 0.0


def _icma_backward(start, end, period_end, eom, frequency) -> float:
    # nominal periods built backward from the period end
    current = period_end
    previous = _icma_roll(period_end, frequency.add_to(period_end, -1), eom)
    result = 0.0
    while previous > start:
        result += _icma_part(previous, current, start, end, frequency)
        current = previous
        previous = _icma_roll(period_end, frequency.add_to(current, -1), eom)
    return result + _icma_part(previous, current, start, end, frequency)


def _icma_forward(start, end, period_end, eom, frequency) -> float:
    # nominal periods built forward from the stub start
    current = start
    following = _icma_roll(start, frequency.add_to(start, 1), eom)
    result = 0.0
    while following < period_end:
        result += _icma_part(current, following, start, end, frequency)
        current = following
        following = _icma_roll(start, frequency.add_to(current, 1), eom)
    return result + _icma_part(current, following, start, end, frequency)


def _act_act_icma(date1, date2, context) -> float:
    if date1 == date2:
        return 0.0
    period_type = context.require_period_type()
    if period_type is SchedulePeriodType.TERM:
        raise UnsupportedCombinationError("Act/Act ICMA cannot be used with a 'Term' period")
    period_end = context.require_period_end_date()
    frequency = context.require_frequency()
    eom = context.is_end_of_month_convention
    if period_type is SchedulePeriodType.FINAL:
        return _icma_forward(date1, date2, period_end, eom, frequency)
    return _icma_backward(date1, date2, period_end, eom, frequency)


# ---------------------------------------------------------------------------
# 30/360 family: each rule adjusts the day numbers, then counts 30-day months

_Ymd = Tuple[int, int, int, int, int, int]


def _thirty_360_days(ymd: _Ymd) -> int:
    y1, m1, d1, y2, m2, d2 = ymd
    return (y2 - y1) * 360 + (m2 - m1) * 30 + (d2 - d1)


def _thirty_360_isda_ymd(date1, date2, context) -> _Ymd:
    d1 = date1.day
    d2 = date2.day
    if d1 == 31:
        d1 = 30
    if d2 == 31 and d1 == 30:
        d2 = 30
    return date1.year, date1.month, d1, date2.year, date2.month, d2


def _thirty_u_360_ymd(date1, date2, context) -> _Ymd:
    d1 = date1.day
    d2 = date2.day
    if context.is_end_of_month_convention and is_last_day_of_february(date1):
        if is_last_day_of_february(date2):
            d2 = 30
        d1 = 30
    if d2 == 31 and d1 >= 30:
        d2 = 30
    if d1 == 31:
        d1 = 30
    return date1.year, date1.month, d1, date2.year, date2.month, d2


def _thirty_e_360_isda_ymd(date1, date2, context) -> _Ymd:
    d1 = date1.day
    d2 = date2.day
    if d1 == 31 or is_last_day_of_february(date1):
        d1 = 30
    if d2 == 31 or (is_last_day_of_february(date2) and not context.is_schedule_end_date):
        d2 = 30
    return date1.year, date1.month, d1, date2.year, date2.month, d2


def _thirty_e_360_ymd(date1, date2, context) -> _Ymd:
    return date1.year, date1.month, min(date1.day, 30), date2.year, date2.month, min(date2.day, 30)


def _thirty_eplus_360_ymd(date1, date2, context) -> _Ymd:
    m2 = date2.month
    d2 = date2.day
    if d2 == 31:
        # 31st rolls to the 1st of the following month
        m2 += 1
        d2 = 1
    return date1.year, date1.month, min(date1.day, 30), date2.year, m2, d2


def _thirty_360(ymd_rule) -> _Rule:
    return _Rule(
        lambda d1, d2, ctx: _thirty_360_days(ymd_rule(d1, d2, ctx)) / 360.0,
        lambda d1, d2, ctx: _thirty_360_days(ymd_rule(d1, d2, ctx)),
    )


_RULES: Dict[DayCount, _Rule] = {
    DayCount.ONE_ONE: _Rule(_one_one, _actual_days),
    DayCount.ACT_ACT_ISDA: _Rule(_act_act_isda, _actual_days),
    DayCount.ACT_ACT_ICMA: _Rule(_act_act_icma, _actual_days),
    DayCount.ACT_ACT_AFB: _Rule(_act_act_afb, _actual_days),
    DayCount.ACT_365_ACTUAL: _Rule(_act_365_actual, _actual_days),
    DayCount.ACT_365L: _Rule(_act_365l, _actual_days),
    DayCount.ACT_360: _fixed_denominator(360.0),
    DayCount.ACT_364: _fixed_denominator(364.0),
    DayCount.ACT_365F: _fixed_denominator(365.0),
    DayCount.ACT_365_25: _fixed_denominator(365.25),
    DayCount.NL_365: _Rule(_nl_365, _nl_365_days),
    DayCount.THIRTY_360_ISDA: _thirty_360(_thirty_360_isda_ymd),
    DayCount.THIRTY_U_360: _thirty_360(_thirty_u_360_ymd),
    DayCount.THIRTY_E_360_ISDA: _thirty_360(_thirty_e_360_isda_ymd),
    DayCount.THIRTY_E_360: _thirty_360(_thirty_e_360_ymd),
    DayCount.THIRTY_EPLUS_360: _thirty_360(_thirty_eplus_360_ymd),
}

# Market aliases accepted by DayCount.of (upper-cased keys)
_ALIASES: Dict[str, DayCount] = {
    "ACT/360": DayCount.ACT_360,
    "ACTUAL/360": DayCount.ACT_360,
    "A/360": DayCount.ACT_360,
    "ACT/364": DayCount.ACT_364,
    "ACT/365F": DayCount.ACT_365F,
    "ACT/365 FIXED": DayCount.ACT_365F,
    "ACTUAL/365F": DayCount.ACT_365F,
    "A/365F": DayCount.ACT_365F,
    "ACT/365.25": DayCount.ACT_365_25,
    "ACT/365L": DayCount.ACT_365L,
    "ACT/365 ACTUAL": DayCount.ACT_365_ACTUAL,
    "ACT/ACT": DayCount.ACT_ACT_ISDA,
    "ACT/ACT ISDA": DayCount.ACT_ACT_ISDA,
    "ACTUAL/ACTUAL": DayCount.ACT_ACT_ISDA,
    "ACT/ACT ICMA": DayCount.ACT_ACT_ICMA,
    "ACT/ACT ISMA": DayCount.ACT_ACT_ICMA,
    "ACT/ACT AFB": DayCount.ACT_ACT_AFB,
    "NL/365": DayCount.NL_365,
    "30/360": DayCount.THIRTY_360_ISDA,
    "30/360 ISDA": DayCount.THIRTY_360_ISDA,
    "30U/360": DayCount.THIRTY_U_360,
    "30/360 US": DayCount.THIRTY_U_360,
    "30E/360": DayCount.THIRTY_E_360,
    "30/360 EUROPEAN": DayCount.THIRTY_E_360,
    "30E/360 ISDA": DayCount.THIRTY_E_360_ISDA,
    "30E+/360": DayCount.THIRTY_EPLUS_360,
}

# Convenience aliases
ONE_ONE = DayCount.ONE_ONE
ACT_ACT_ISDA = DayCount.ACT_ACT_ISDA
ACT_ACT_ICMA = DayCount.ACT_ACT_ICMA
ACT_ACT_AFB = DayCount.ACT_ACT_AFB
ACT_365_ACTUAL = DayCount.ACT_365_ACTUAL
ACT_365L = DayCount.ACT_365L
ACT_360 = DayCount.ACT_360
ACT_364 = DayCount.ACT_364
ACT_365F = DayCount.ACT_365F
ACT_365_25 = DayCount.ACT_365_25
NL_365 = DayCount.NL_365
THIRTY_360_ISDA = DayCount.THIRTY_360_ISDA
THIRTY_U_360 = DayCount.THIRTY_U_360
THIRTY_E_360_ISDA = DayCount.THIRTY_E_360_ISDA
THIRTY_E_360 = DayCount.THIRTY_E_360
THIRTY_EPLUS_360 = DayCount.THIRTY_EPLUS_360
