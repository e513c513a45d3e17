"""Tests for skip predicates and marks."""

import pytest

from calexpr.predicates import (
    EndOfYear,
    IsPeriodStart,
    Matches,
    MomentValue,
    MonthIs,
    MonthStart,
    OnMark,
    WeekdayIs,
)
from calexpr.timetype import moment

FRIDAY = moment(2024, 3, 15)
SATURDAY = moment(2024, 3, 16)
SUNDAY = moment(2024, 3, 17)


def test_weekday_single_day():
    assert WeekdayIs("friday").apply(FRIDAY)
    assert not WeekdayIs("friday").apply(SATURDAY)


def test_weekday_names_are_case_insensitive():
    assert WeekdayIs(["Saturday", "SUNDAY"]).apply(SUNDAY)


def test_invalid_weekday_name():
    with pytest.raises(ValueError, match="Invalid day name: 'funday'"):
        WeekdayIs("funday")


def test_month_by_number_and_name():
    assert MonthIs(3).apply(FRIDAY)
    assert MonthIs("march").apply(FRIDAY)
    assert MonthIs([1, "December"]).apply(moment(2024, 12, 25))
    assert not MonthIs([1, "December"]).apply(FRIDAY)


def test_invalid_month():
    with pytest.raises(ValueError, match=r"\[1, 12\]"):
        MonthIs(13)

    with pytest.raises(ValueError, match="Invalid month name"):
        MonthIs("smarch")


def test_period_start_ignores_time_of_day():
    assert IsPeriodStart("month").apply(moment(2024, 3, 1, 10, 0, 0))
    assert not IsPeriodStart("month").apply(moment(2024, 3, 2))


def test_week_and_year_start():
    # 11 March 2024 is a Monday
    assert IsPeriodStart("week").apply(moment(2024, 3, 11))
    assert not IsPeriodStart("week").apply(FRIDAY)
    assert IsPeriodStart("year").apply(moment(2024, 1, 1, 23, 0, 0))


def test_day_is_not_a_valid_start_period():
    with pytest.raises(ValueError, match="IsPeriodStart"):
        IsPeriodStart("day")  # type: ignore[arg-type]


def test_marks_resolve_relative_to_cursor():
    assert EndOfYear().resolve(FRIDAY) == moment(2024, 12, 31, 23, 59, 59)
    assert MonthStart().resolve(FRIDAY) == moment(2024, 3, 1, 0, 0, 0)
    assert MomentValue(moment(2020, 7, 4)).resolve(FRIDAY) == moment(2020, 7, 4)


def test_on_mark_matches_by_day():
    assert OnMark(EndOfYear()).apply(moment(2024, 12, 31, 8, 0, 0))
    assert not OnMark(EndOfYear()).apply(moment(2024, 12, 30))
    assert OnMark(MomentValue(moment(2024, 7, 4))).apply(moment(2024, 7, 4, 15, 0, 0))


def test_matches_wraps_a_callable():
    thirteenth = Matches(lambda m: m.date().day == 13)

    assert thirteenth.apply(moment(2024, 9, 13))
    assert not thirteenth.apply(FRIDAY)


def test_composition():
    weekend = WeekdayIs("saturday") | WeekdayIs("sunday")
    march_weekend = weekend & MonthIs("march")

    assert weekend.apply(SUNDAY)
    assert not weekend.apply(FRIDAY)
    assert march_weekend.apply(SATURDAY)
    assert not march_weekend.apply(moment(2024, 4, 6))
    assert (~weekend).apply(FRIDAY)
