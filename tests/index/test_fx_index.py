"""Tests for FX index fixing and maturity date mapping."""

import datetime

import pytest

from accrual.dates.business_day import FOLLOWING
from accrual.dates.calendar import get_calendar
from accrual.dates.days_adjustment import DaysAdjustment
from accrual.errors import InvalidArgumentError, NotFoundError
from accrual.index.fx_index import (
    FxIndexDateMapper,
    available_fx_indices,
    get_fx_index,
    register_fx_index,
)


@pytest.fixture
def eur_usd():
    return get_fx_index("ECB_EUR_USD")


class TestMaturityFromFixing:
    """Tests for the forward mapping."""

    def test_regular_week(self, eur_usd):
        assert eur_usd.maturity_from_fixing(datetime.date(2024, 6, 11)) == datetime.date(2024, 6, 13)

    def test_settlement_holiday_skipped(self, eur_usd):
        # Juneteenth is a New York holiday
        assert eur_usd.maturity_from_fixing(datetime.date(2024, 6, 18)) == datetime.date(2024, 6, 21)

    def test_fixing_holiday_moved_forward(self, eur_usd):
        # Good Friday is not a TARGET fixing day
        assert eur_usd.maturity_from_fixing(datetime.date(2024, 3, 29)) == datetime.date(2024, 4, 4)

    def test_none_rejected(self, eur_usd):
        with pytest.raises(InvalidArgumentError):
            eur_usd.maturity_from_fixing(None)


class TestFixingFromMaturity:
    """Tests for the backward search."""

    def test_regular_week(self, eur_usd):
        assert eur_usd.fixing_from_maturity(datetime.date(2024, 6, 13)) == datetime.date(2024, 6, 11)

    def test_latest_fixing_with_same_maturity(self, eur_usd):
        """Both Jun 18 and Jun 19 settle on Jun 21; the later fixing is returned."""
        assert eur_usd.fixing_from_maturity(datetime.date(2024, 6, 21)) == datetime.date(2024, 6, 19)

    def test_maturity_on_holiday(self, eur_usd):
        # Saturday before Easter, effective maturity is Tuesday Apr 2
        assert eur_usd.fixing_from_maturity(datetime.date(2024, 3, 30)) == datetime.date(2024, 3, 27)

    def test_maturity_on_settlement_only_holiday(self, eur_usd):
        """A New York holiday maturity is moved onto the settlement calendar."""
        # Jul 4 2014 is open for TARGET, the effective maturity is Monday Jul 7
        fixing = eur_usd.fixing_from_maturity(datetime.date(2014, 7, 4))
        assert fixing == datetime.date(2014, 7, 2)
        assert eur_usd.maturity_from_fixing(fixing) == datetime.date(2014, 7, 7)

    def test_calendar_day_offset_uses_fixing_calendar(self):
        mapper = FxIndexDateMapper(
            fixing_calendar=get_calendar("EUTA"),
            maturity_date_offset=DaysAdjustment.of_calendar_days(2),
        )
        # Saturday maturity becomes Monday Jun 17 on the fixing calendar
        assert mapper.fixing_from_maturity(datetime.date(2024, 6, 15)) == datetime.date(2024, 6, 14)

    @pytest.mark.parametrize("day", [4, 5, 6, 7, 8, 11, 12, 13, 14, 15])
    def test_round_trip(self, eur_usd, day):
        fixing = datetime.date(2024, 3, day)
        assert eur_usd.fixing_from_maturity(eur_usd.maturity_from_fixing(fixing)) == fixing

    def test_result_calendar_sets_effective_maturity(self):
        """Maturities are moved onto the offset's result calendar before searching."""
        mapper = FxIndexDateMapper(
            fixing_calendar=get_calendar("EUTA"),
            maturity_date_offset=DaysAdjustment.of_calendar_days(2, FOLLOWING, get_calendar("USNY")),
        )
        # Juneteenth moves the effective maturity to Jun 20
        assert mapper.fixing_from_maturity(datetime.date(2024, 6, 19)) == datetime.date(2024, 6, 18)
        assert mapper.maturity_from_fixing(datetime.date(2024, 6, 18)) == datetime.date(2024, 6, 20)

    def test_none_rejected(self, eur_usd):
        with pytest.raises(InvalidArgumentError):
            eur_usd.fixing_from_maturity(None)


class TestRegistry:
    """Tests for the FX index registry."""

    @pytest.mark.parametrize(
        "name,fixing,settlement",
        [
            ("ECB_EUR_USD", "EUTA", "EUTA+USNY"),
            ("ECB_EUR_GBP", "EUTA", "EUTA+GBLO"),
            ("WM_GBP_USD", "GBLO", "GBLO+USNY"),
        ],
    )
    def test_standard_indices(self, name, fixing, settlement):
        index = get_fx_index(name)
        assert index.name == name
        assert index.fixing_calendar.name == fixing
        assert index.maturity_date_offset.days == 2
        assert index.maturity_date_offset.calendar.name == settlement
        assert str(index) == name

    def test_of(self):
        assert FxIndexDateMapper.of("ECB_EUR_USD") is get_fx_index("ECB_EUR_USD")

    def test_available(self):
        assert {"ECB_EUR_USD", "ECB_EUR_GBP", "WM_GBP_USD"} <= set(available_fx_indices())

    def test_unknown(self):
        with pytest.raises(NotFoundError, match="NOPE"):
            get_fx_index("NOPE")

    def test_register(self):
        index = FxIndexDateMapper(
            fixing_calendar=get_calendar("USNY"),
            maturity_date_offset=DaysAdjustment.of_business_days(1, get_calendar("USNY")),
            name="TEST_USD_CAD",
        )
        assert register_fx_index(index) is index
        assert get_fx_index("TEST_USD_CAD") is index

    def test_register_duplicate(self):
        index = FxIndexDateMapper(
            fixing_calendar=get_calendar("EUTA"),
            maturity_date_offset=DaysAdjustment.NONE,
            name="ECB_EUR_USD",
        )
        with pytest.raises(InvalidArgumentError, match="Duplicate"):
            register_fx_index(index)

    def test_register_unnamed(self):
        index = FxIndexDateMapper(get_calendar("EUTA"), DaysAdjustment.NONE)
        with pytest.raises(InvalidArgumentError):
            register_fx_index(index)

    def test_invalid_construction(self):
        with pytest.raises(InvalidArgumentError):
            FxIndexDateMapper("EUTA", DaysAdjustment.NONE)
        with pytest.raises(InvalidArgumentError):
            FxIndexDateMapper(get_calendar("EUTA"), 2)
