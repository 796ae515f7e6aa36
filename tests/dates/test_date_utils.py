"""Tests for date arithmetic helpers."""

import datetime

import pytest

from accrual.dates.date_utils import (
    MONDAY,
    THURSDAY,
    add_months,
    add_years,
    day_of_year,
    days_in_month,
    easter_date,
    in_order,
    is_last_day_of_february,
    is_leap_year,
    last_weekday,
    next_leap_day,
    next_or_same_leap_day,
    nth_weekday,
    to_date,
)
from accrual.errors import InvalidArgumentError


class TestLeapYears:
    """Tests for leap year helpers."""

    @pytest.mark.parametrize("year,expected", [(2000, True), (1900, False), (2024, True), (2023, False)])
    def test_is_leap_year(self, year, expected):
        assert is_leap_year(year) is expected

    def test_days_in_february(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28

    def test_invalid_month(self):
        with pytest.raises(InvalidArgumentError):
            days_in_month(2024, 13)

    def test_next_leap_day_is_strictly_after(self):
        assert next_leap_day(datetime.date(2012, 2, 29)) == datetime.date(2016, 2, 29)
        assert next_leap_day(datetime.date(2012, 2, 28)) == datetime.date(2012, 2, 29)
        assert next_leap_day(datetime.date(2096, 3, 1)) == datetime.date(2104, 2, 29)

    def test_next_or_same_leap_day(self):
        assert next_or_same_leap_day(datetime.date(2012, 2, 29)) == datetime.date(2012, 2, 29)
        assert next_or_same_leap_day(datetime.date(2012, 3, 1)) == datetime.date(2016, 2, 29)

    def test_last_day_of_february(self):
        assert is_last_day_of_february(datetime.date(2011, 2, 28))
        assert not is_last_day_of_february(datetime.date(2012, 2, 28))
        assert is_last_day_of_february(datetime.date(2012, 2, 29))


class TestArithmetic:
    """Tests for month and year arithmetic."""

    def test_add_months_clamps(self):
        assert add_months(datetime.date(2024, 1, 31), 1) == datetime.date(2024, 2, 29)
        assert add_months(datetime.date(2024, 3, 31), -1) == datetime.date(2024, 2, 29)
        assert add_months(datetime.date(2024, 11, 15), 3) == datetime.date(2025, 2, 15)

    def test_add_years_from_leap_day(self):
        assert add_years(datetime.date(2008, 2, 29), -1) == datetime.date(2007, 2, 28)
        assert add_years(datetime.date(2008, 2, 29), -4) == datetime.date(2004, 2, 29)

    def test_add_years_never_creates_leap_day(self):
        assert add_years(datetime.date(2005, 2, 28), -1) == datetime.date(2004, 2, 28)

    def test_day_of_year(self):
        assert day_of_year(datetime.date(2012, 1, 1)) == 1
        assert day_of_year(datetime.date(2012, 12, 31)) == 366


class TestWeekdaysAndEaster:
    """Tests for floating holiday helpers."""

    def test_nth_weekday(self):
        # Thanksgiving 2024
        assert nth_weekday(2024, 11, THURSDAY, 4) == datetime.date(2024, 11, 28)

    def test_last_weekday(self):
        # Memorial Day 2024
        assert last_weekday(2024, 5, MONDAY) == datetime.date(2024, 5, 27)

    @pytest.mark.parametrize(
        "year,expected",
        [(2024, datetime.date(2024, 3, 31)), (2025, datetime.date(2025, 4, 20)), (2000, datetime.date(2000, 4, 23))],
    )
    def test_easter(self, year, expected):
        assert easter_date(year) == expected


class TestValidation:
    """Tests for argument validation."""

    def test_to_date_truncates_datetime(self):
        result = to_date(datetime.datetime(2024, 1, 1, 10, 30))
        assert result == datetime.date(2024, 1, 1)
        assert type(result) is datetime.date

    @pytest.mark.parametrize("value", [None, "2024-01-01", 20240101])
    def test_to_date_rejects(self, value):
        with pytest.raises(InvalidArgumentError):
            to_date(value)

    def test_in_order(self):
        first = datetime.date(2024, 1, 1)
        second = datetime.date(2024, 1, 2)
        assert in_order(first, second) == (first, second)
        assert in_order(first, first) == (first, first)
        with pytest.raises(InvalidArgumentError, match="on or before"):
            in_order(second, first)
