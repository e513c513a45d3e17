"""Gregorian calendar primitives.

Thin adapter over ``datetime`` and python-dateutil's ``relativedelta``. All
leap-year and month-length rules come from those libraries; nothing in
calexpr reimplements them. Values here are plain ``datetime`` objects; the
``Moment`` wrapper in :mod:`calexpr.timetype` delegates to these functions.
"""

from datetime import datetime, timedelta
from typing import Literal, Protocol, TypeAlias

from dateutil.relativedelta import relativedelta

from calexpr.errors import OutOfRange
from calexpr.units import Unit

Period: TypeAlias = Literal["day", "week", "month", "year"]

PERIODS: tuple[Period, ...] = ("day", "week", "month", "year")

# Index matches datetime.weekday()
DAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# Index + 1 matches datetime.month
MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Reads the host clock in local time, truncated to whole seconds."""

    def now(self) -> datetime:
        return datetime.now().replace(microsecond=0)


class FixedClock:
    """Always reports the same instant. Used by tests and ``--now``."""

    def __init__(self, instant: datetime):
        self.instant: datetime = instant.replace(microsecond=0)

    def now(self) -> datetime:
        return self.instant


def add_fixed(dt: datetime, unit: Unit, count: int) -> datetime:
    """Add ``count`` fixed-length units (seconds through weeks) as elapsed time."""
    if not unit.is_fixed:
        raise ValueError(
            f"add_fixed() only handles seconds through weeks, got {unit.value}.\n"
            f"Use add_calendar() for months and years."
        )
    try:
        return dt + timedelta(seconds=unit.seconds * count)
    except OverflowError as exc:
        raise OutOfRange(
            f"{dt.isoformat()} {count:+d} {unit.render(abs(count))} "
            f"is outside the representable calendar range"
        ) from exc


def add_calendar(dt: datetime, unit: Unit, count: int) -> datetime:
    """Add months or years, clamping the day down to the target month's length.

    2024-01-31 + 1 month is 2024-02-29, never 2024-03-02.
    """
    if unit is Unit.MONTH:
        delta = relativedelta(months=count)
    elif unit is Unit.YEAR:
        delta = relativedelta(years=count)
    else:
        raise ValueError(
            f"add_calendar() only handles months and years, got {unit.value}.\n"
            f"Use add_fixed() for seconds through weeks."
        )
    try:
        return dt + delta
    except (OverflowError, ValueError) as exc:
        raise OutOfRange(
            f"{dt.isoformat()} {count:+d} {unit.render(abs(count))} "
            f"is outside the representable calendar range"
        ) from exc


def add(dt: datetime, unit: Unit, count: int) -> datetime:
    if unit.is_fixed:
        return add_fixed(dt, unit, count)
    return add_calendar(dt, unit, count)


def start_of(dt: datetime, period: Period) -> datetime:
    midnight = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "day":
        return midnight
    if period == "week":
        # Weeks start on Monday (ISO 8601)
        try:
            return midnight - timedelta(days=midnight.weekday())
        except OverflowError as exc:
            raise OutOfRange(f"week containing {dt.date()} starts before year 1") from exc
    if period == "month":
        return midnight.replace(day=1)
    if period == "year":
        return midnight.replace(month=1, day=1)
    raise ValueError(_bad_period(period))


def end_of(dt: datetime, period: Period) -> datetime:
    """Last whole second of the period containing ``dt``."""
    last_second = dict(hour=23, minute=59, second=59, microsecond=0)
    if period == "day":
        return dt.replace(**last_second)
    if period == "week":
        try:
            sunday = dt + timedelta(days=6 - dt.weekday())
        except OverflowError as exc:
            raise OutOfRange(f"week containing {dt.date()} ends after year 9999") from exc
        return sunday.replace(**last_second)
    if period == "month":
        # relativedelta(day=31) clamps to the month's last day
        return (dt + relativedelta(day=31)).replace(**last_second)
    if period == "year":
        return dt.replace(month=12, day=31, **last_second)
    raise ValueError(_bad_period(period))


def weekday_name(dt: datetime) -> str:
    return DAY_NAMES[dt.weekday()].capitalize()


def _bad_period(period: str) -> str:
    valid = ", ".join(PERIODS)
    return f"Invalid period: {period!r}\nValid periods: {valid}"
