"""Tests for the calendar primitives."""

from datetime import datetime

import pytest

from calexpr.calendar import (
    FixedClock,
    add,
    add_calendar,
    add_fixed,
    end_of,
    start_of,
    weekday_name,
)
from calexpr.errors import OutOfRange
from calexpr.units import Unit


def test_add_fixed_weeks():
    assert add_fixed(datetime(2024, 2, 26), Unit.WEEK, 1) == datetime(2024, 3, 4)


def test_add_fixed_negative_seconds():
    assert add_fixed(datetime(2024, 1, 1), Unit.SECOND, -1) == datetime(
        2023, 12, 31, 23, 59, 59
    )


def test_add_fixed_rejects_calendar_units():
    with pytest.raises(ValueError, match="add_calendar"):
        add_fixed(datetime(2024, 1, 1), Unit.MONTH, 1)


def test_add_calendar_rejects_fixed_units():
    with pytest.raises(ValueError, match="add_fixed"):
        add_calendar(datetime(2024, 1, 1), Unit.DAY, 1)


def test_add_calendar_clamps_day():
    assert add_calendar(datetime(2024, 1, 31), Unit.MONTH, 1) == datetime(2024, 2, 29)
    assert add_calendar(datetime(2023, 1, 31), Unit.MONTH, 1) == datetime(2023, 2, 28)
    assert add_calendar(datetime(2024, 2, 29), Unit.YEAR, -4) == datetime(2020, 2, 29)


def test_add_dispatches_on_unit():
    assert add(datetime(2024, 1, 31), Unit.MONTH, 1) == datetime(2024, 2, 29)
    assert add(datetime(2024, 1, 31), Unit.DAY, 1) == datetime(2024, 2, 1)


def test_out_of_range():
    with pytest.raises(OutOfRange):
        add_fixed(datetime(1, 1, 1), Unit.DAY, -1)

    with pytest.raises(OutOfRange):
        add_calendar(datetime(9999, 6, 1), Unit.YEAR, 1)


@pytest.mark.parametrize("year", [1904, 2000, 2004, 2024, 2096])
def test_february_in_leap_years(year):
    assert end_of(datetime(year, 2, 1), "month").day == 29


@pytest.mark.parametrize("year", [1900, 2001, 2023, 2100])
def test_february_in_common_years(year):
    assert end_of(datetime(year, 2, 1), "month").day == 28


def test_start_of_periods():
    dt = datetime(2024, 3, 15, 9, 30, 12, 500)

    assert start_of(dt, "day") == datetime(2024, 3, 15)
    assert start_of(dt, "week") == datetime(2024, 3, 11)
    assert start_of(dt, "month") == datetime(2024, 3, 1)
    assert start_of(dt, "year") == datetime(2024, 1, 1)


def test_end_of_periods():
    dt = datetime(2024, 4, 10, 9, 30)

    assert end_of(dt, "day") == datetime(2024, 4, 10, 23, 59, 59)
    assert end_of(dt, "week") == datetime(2024, 4, 14, 23, 59, 59)
    assert end_of(dt, "month") == datetime(2024, 4, 30, 23, 59, 59)
    assert end_of(dt, "year") == datetime(2024, 12, 31, 23, 59, 59)


def test_invalid_period():
    with pytest.raises(ValueError, match="Valid periods"):
        start_of(datetime(2024, 1, 1), "fortnight")  # type: ignore[arg-type]


def test_weekday_name():
    assert weekday_name(datetime(2024, 3, 15)) == "Friday"
    assert weekday_name(datetime(2024, 3, 11)) == "Monday"


def test_fixed_clock_drops_microseconds():
    clock = FixedClock(datetime(2024, 3, 15, 9, 30, 0, 123456))
    assert clock.now() == datetime(2024, 3, 15, 9, 30)
