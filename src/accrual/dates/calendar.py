"""Holiday calendars for financial markets.

A :class:`HolidayCalendar` is an immutable named set of holiday dates plus a
weekend rule. It answers business day queries used for settlement, date
adjustment and index date mapping. Calendars are resolved by name through a
process-wide registry that builds the rule-based market calendars on first
lookup.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Tuple

import numpy as np

from accrual.dates.date_utils import (
    FRIDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    DateLike,
    to_date,
)
from accrual.dates.holiday_rules import HOLIDAY_RULES, HOLIDAY_YEARS
from accrual.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

_ONE_DAY = datetime.timedelta(days=1)


@dataclass(frozen=True)
class HolidayCalendar:
    """Immutable business day calendar.

    Attributes:
        name: Unique calendar name, e.g. ``"EUTA"`` or ``"Sat/Sun"``
        holidays: Listed holiday dates
        weekend_days: Weekday numbers that are never business days (Monday=0)
    """

    name: str
    holidays: FrozenSet[datetime.date] = field(default=frozenset(), repr=False)
    weekend_days: FrozenSet[int] = frozenset({SATURDAY, SUNDAY})
    _busdaycal: np.busdaycalendar = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgumentError("Calendar name must be a non-empty string")
        holidays = frozenset(to_date(day, "holiday") for day in self.holidays)
        weekend_days = frozenset(int(day) for day in self.weekend_days)
        if not weekend_days <= set(range(7)):
            raise InvalidArgumentError(f"Weekend days must be in 0..6, got {sorted(weekend_days)}")
        if len(weekend_days) == 7:
            raise InvalidArgumentError(f"Calendar {self.name} has no business days")
        object.__setattr__(self, "holidays", holidays)
        object.__setattr__(self, "weekend_days", weekend_days)
        weekmask = [0 if day in weekend_days else 1 for day in range(7)]
        object.__setattr__(
            self,
            "_busdaycal",
            np.busdaycalendar(
                weekmask=weekmask,
                holidays=np.array(sorted(holidays), dtype="datetime64[D]"),
            ),
        )

    def __hash__(self) -> int:
        return hash((self.name, self.weekend_days, len(self.holidays)))

    def __str__(self) -> str:
        return self.name

    @classmethod
    def of(cls, name: str) -> "HolidayCalendar":
        """Look up a calendar by name (see :func:`get_calendar`)."""
        return get_calendar(name)

    def is_holiday(self, date: DateLike) -> bool:
        """Check if a date is a weekend day or a listed holiday."""
        date = to_date(date)
        return date.weekday() in self.weekend_days or date in self.holidays

    def is_business_day(self, date: DateLike) -> bool:
        """Check if a date is a business day."""
        return not self.is_holiday(date)

    def next(self, date: DateLike) -> datetime.date:
        """Business day strictly after ``date``."""
        return self.next_or_same(to_date(date) + _ONE_DAY)

    def next_or_same(self, date: DateLike) -> datetime.date:
        """``date`` itself if it is a business day, otherwise the following business day."""
        current = to_date(date)
        while self.is_holiday(current):
            current += _ONE_DAY
        return current

    def previous(self, date: DateLike) -> datetime.date:
        """Business day strictly before ``date``."""
        return self.previous_or_same(to_date(date) - _ONE_DAY)

    def previous_or_same(self, date: DateLike) -> datetime.date:
        """``date`` itself if it is a business day, otherwise the preceding business day."""
        current = to_date(date)
        while self.is_holiday(current):
            current -= _ONE_DAY
        return current

    def shift(self, date: DateLike, amount: int) -> datetime.date:
        """Shift a date by a number of business days.

        Each step moves to the strictly next (or previous, for negative
        amounts) business day, so shifting a holiday by one lands on the
        first business day after it. A zero amount returns the date as-is.

        Args:
            date: Starting date
            amount: Number of business days to move (can be negative)

        Returns:
            Shifted date
        """
        current = to_date(date)
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidArgumentError(f"amount must be an integer, got {amount!r}")
        step = self.next if amount > 0 else self.previous
        for _ in range(abs(amount)):
            current = step(current)
        return current

    def days_between(self, date1: DateLike, date2: DateLike) -> int:
        """Calendar days from ``date1`` to ``date2`` (negative if ``date2`` is earlier)."""
        return (to_date(date2, "date2") - to_date(date1, "date1")).days

    def business_days_between(self, date1: DateLike, date2: DateLike) -> int:
        """Count business days in ``[date1, date2)``.

        Negative when ``date2`` is before ``date1``, counting ``[date2, date1)``.
        """
        start = np.datetime64(to_date(date1, "date1"), "D")
        end = np.datetime64(to_date(date2, "date2"), "D")
        return int(np.busday_count(start, end, busdaycal=self._busdaycal))

    def holidays_between(self, date1: DateLike, date2: DateLike) -> List[datetime.date]:
        """Listed holidays in ``[date1, date2]``, sorted (weekends excluded)."""
        start = to_date(date1, "date1")
        end = to_date(date2, "date2")
        return sorted(day for day in self.holidays if start <= day <= end)

    def combined_with(self, other: "HolidayCalendar") -> "HolidayCalendar":
        """Calendar whose holidays are the holidays of either calendar."""
        if not isinstance(other, HolidayCalendar):
            raise InvalidArgumentError(f"Cannot combine with {other!r}")
        if other == self or other is NO_HOLIDAYS:
            return self
        if self is NO_HOLIDAYS:
            return other
        return HolidayCalendar(
            name=f"{self.name}+{other.name}",
            holidays=self.holidays | other.holidays,
            weekend_days=self.weekend_days | other.weekend_days,
        )


NO_HOLIDAYS = HolidayCalendar("NoHolidays", weekend_days=frozenset())
SAT_SUN = HolidayCalendar("Sat/Sun", weekend_days=frozenset({SATURDAY, SUNDAY}))
FRI_SAT = HolidayCalendar("Fri/Sat", weekend_days=frozenset({FRIDAY, SATURDAY}))
THU_FRI = HolidayCalendar("Thu/Fri", weekend_days=frozenset({THURSDAY, FRIDAY}))

_REGISTERED: Dict[str, HolidayCalendar] = {
    calendar.name: calendar for calendar in (NO_HOLIDAYS, SAT_SUN, FRI_SAT, THU_FRI)
}
_ALIASES: Dict[str, str] = {"TARGET": "EUTA"}


def rule_based_calendar(
    name: str,
    years: Iterable[int] = HOLIDAY_YEARS,
    weekend_days: FrozenSet[int] = frozenset({SATURDAY, SUNDAY}),
) -> HolidayCalendar:
    """Materialise a calendar from the named holiday rule over ``years``."""
    try:
        rule = HOLIDAY_RULES[name]
    except KeyError:
        raise NotFoundError("holiday rule", name, HOLIDAY_RULES) from None
    holidays = set()
    for year in years:
        holidays.update(day for day in rule(year) if day.weekday() not in weekend_days)
    logger.debug("Built calendar %s with %d holidays", name, len(holidays))
    return HolidayCalendar(name=name, holidays=frozenset(holidays), weekend_days=weekend_days)


@lru_cache(maxsize=None)
def _built_in(name: str) -> HolidayCalendar:
    return rule_based_calendar(name)


def _resolve_single(name: str) -> HolidayCalendar:
    name = _ALIASES.get(name, name)
    if name in _REGISTERED:
        return _REGISTERED[name]
    if name in HOLIDAY_RULES:
        return _built_in(name)
    raise NotFoundError("calendar", name, available_calendars())


def get_calendar(name: str) -> HolidayCalendar:
    """Get a calendar by name.

    Names joined with ``+`` (e.g. ``"EUTA+USNY"``) resolve to the combined
    calendar of their parts.

    Raises:
        InvalidArgumentError: If the name is not a non-empty string
        NotFoundError: If any part of the name is not a known calendar
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError(f"Calendar name must be a non-empty string, got {name!r}")
    parts = tuple(part.strip() for part in name.split("+"))
    if len(parts) == 1:
        return _resolve_single(parts[0])
    return _combined(parts)


@lru_cache(maxsize=None)
def _combined(parts: Tuple[str, ...]) -> HolidayCalendar:
    # registry entries are never replaced
    calendar = _resolve_single(parts[0])
    for part in parts[1:]:
        calendar = calendar.combined_with(_resolve_single(part))
    return calendar


def register_calendar(calendar: HolidayCalendar) -> HolidayCalendar:
    """Register a calendar under its name; duplicate names are rejected."""
    if not isinstance(calendar, HolidayCalendar):
        raise InvalidArgumentError(f"Expected a HolidayCalendar, got {calendar!r}")
    key = calendar.name
    if "+" in key:
        raise InvalidArgumentError(f"Calendar name must not contain '+': {key}")
    if key in _REGISTERED or key in HOLIDAY_RULES or key in _ALIASES:
        raise InvalidArgumentError(f"Duplicate calendar name: {key}")
    _REGISTERED[key] = calendar
    logger.debug("Registered calendar %s", key)
    return calendar


def available_calendars() -> List[str]:
    """Names of all calendars that can be looked up (aliases excluded)."""
    return sorted(set(_REGISTERED) | set(HOLIDAY_RULES))


__all__ = [
    "FRI_SAT",
    "HolidayCalendar",
    "NO_HOLIDAYS",
    "SAT_SUN",
    "THU_FRI",
    "available_calendars",
    "get_calendar",
    "register_calendar",
    "rule_based_calendar",
]
