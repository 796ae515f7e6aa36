"""
FX rate indices and their fixing/maturity date mapping.

An FX rate is fixed on a fixing date and refers to an exchange that settles
on a later maturity (spot) date. This module maps between the two dates for
a given index and keeps a name-keyed registry of standard indices.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Dict, List

from accrual.dates.calendar import NO_HOLIDAYS, HolidayCalendar, get_calendar
from accrual.dates.date_utils import DateLike, to_date
from accrual.dates.days_adjustment import DaysAdjustment
from accrual.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

_ONE_DAY = datetime.timedelta(days=1)


@dataclass(frozen=True)
class FxIndexDateMapper:
    """
    Fixing and maturity date rules of an FX rate index.

    Attributes:
        fixing_calendar: Calendar on which the index can be fixed
        maturity_date_offset: Offset from fixing date to maturity date
        name: Index name (e.g., "ECB_EUR_USD")
    """

    fixing_calendar: HolidayCalendar
    maturity_date_offset: DaysAdjustment
    name: str = ""

    def __post_init__(self):
        if not isinstance(self.fixing_calendar, HolidayCalendar):
            raise InvalidArgumentError(f"fixing_calendar must be a HolidayCalendar, got {self.fixing_calendar!r}")
        if not isinstance(self.maturity_date_offset, DaysAdjustment):
            raise InvalidArgumentError(
                f"maturity_date_offset must be a DaysAdjustment, got {self.maturity_date_offset!r}"
            )
        if not isinstance(self.name, str):
            raise InvalidArgumentError(f"name must be a string, got {self.name!r}")

    @classmethod
    def of(cls, name: str) -> "FxIndexDateMapper":
        """Look up a registered index by name (see :func:`get_fx_index`)."""
        return get_fx_index(name)

    def __str__(self) -> str:
        return self.name or (
            f"FxIndex[fixing={self.fixing_calendar}, maturity={self.maturity_date_offset}]"
        )

    def maturity_from_fixing(self, fixing_date: DateLike) -> datetime.date:
        """Maturity date for a fixing date.

        A fixing date that is not a valid fixing day is first moved to the
        next valid fixing day, then the maturity offset is applied.
        """
        fixing = self.fixing_calendar.next_or_same(to_date(fixing_date, "fixing_date"))
        return self.maturity_date_offset.adjust(fixing)

    def fixing_from_maturity(self, maturity_date: DateLike) -> datetime.date:
        """Latest valid fixing date whose maturity is on or before ``maturity_date``.

        The maturity date is first moved onto a business day of the calendar
        the offset adjusts its results to (the fixing calendar when that is
        NoHolidays). The search then walks back one calendar day at a time.
        """
        maturity = to_date(maturity_date, "maturity_date")
        effective_calendar = self._maturity_calendar()
        effective_day = effective_calendar.next_or_same(maturity)
        candidate = effective_day
        while (
            self.maturity_date_offset.adjust(candidate) > effective_day
            or self.fixing_calendar.is_holiday(candidate)
        ):
            candidate -= _ONE_DAY
        logger.debug(
            "Fixing date for maturity %s on %s: %s (%d days back)",
            maturity,
            self,
            candidate,
            (effective_day - candidate).days,
        )
        return candidate

    def _maturity_calendar(self) -> HolidayCalendar:
        calendar = self.maturity_date_offset.effective_result_calendar
        if calendar is NO_HOLIDAYS:
            return self.fixing_calendar
        return calendar


def _standard_index(name: str, fixing_calendar: str, settlement_calendar: str) -> FxIndexDateMapper:
    """Index fixed on one calendar and settling two business days later on another."""
    return FxIndexDateMapper(
        fixing_calendar=get_calendar(fixing_calendar),
        maturity_date_offset=DaysAdjustment.of_business_days(2, get_calendar(settlement_calendar)),
        name=name,
    )


# =============================================================================
# Registry
# =============================================================================

_STANDARD_INDICES = {
    "ECB_EUR_USD": ("EUTA", "EUTA+USNY"),
    "ECB_EUR_GBP": ("EUTA", "EUTA+GBLO"),
    "WM_GBP_USD": ("GBLO", "GBLO+USNY"),
}

FX_INDEX_REGISTRY: Dict[str, FxIndexDateMapper] = {}


def get_fx_index(name: str) -> FxIndexDateMapper:
    """
    Get an FX index by name.

    Standard indices are built on first lookup, which builds their calendars.

    Raises:
        NotFoundError: If the index is not registered
    """
    if not isinstance(name, str):
        raise InvalidArgumentError(f"FX index name must be a string, got {name!r}")
    if name not in FX_INDEX_REGISTRY and name in _STANDARD_INDICES:
        FX_INDEX_REGISTRY[name] = _standard_index(name, *_STANDARD_INDICES[name])
    try:
        return FX_INDEX_REGISTRY[name]
    except KeyError:
        raise NotFoundError("FX index", name, available_fx_indices()) from None


def register_fx_index(index: FxIndexDateMapper) -> FxIndexDateMapper:
    """Register an index under its name; duplicate names are rejected."""
    if not isinstance(index, FxIndexDateMapper):
        raise InvalidArgumentError(f"Expected an FxIndexDateMapper, got {index!r}")
    if not index.name:
        raise InvalidArgumentError("Only named FX indices can be registered")
    if index.name in FX_INDEX_REGISTRY or index.name in _STANDARD_INDICES:
        raise InvalidArgumentError(f"Duplicate FX index name: {index.name}")
    FX_INDEX_REGISTRY[index.name] = index
    logger.debug("Registered FX index %s", index.name)
    return index


def available_fx_indices() -> List[str]:
    """Names of all FX indices that can be looked up."""
    return sorted(set(FX_INDEX_REGISTRY) | set(_STANDARD_INDICES))


__all__ = [
    "FX_INDEX_REGISTRY",
    "FxIndexDateMapper",
    "available_fx_indices",
    "get_fx_index",
    "register_fx_index",
]
