"""Values produced by evaluation: ``Moment`` and ``Duration``.

A ``Moment`` is a calendar date with optional time-of-day and UTC offset. It
may be partially specified (year only, year and month, ...) until it is
normalized. A ``Duration`` keeps every (unit, signed magnitude) pair it was
built from, in order, because month and year steps have no fixed length and
must be replayed against a concrete date.

Example:
    >>> from calexpr.timetype import moment, months, days
    >>> str(moment(2024, 1, 31) + months(1))
    '2024-02-29T00:00:00'
    >>> str(days(1) - days(2) + days(3))
    '1day - 2days + 3days'
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Literal, TypeAlias

from typing_extensions import override

from calexpr import calendar
from calexpr.calendar import Clock, Period, SystemClock
from calexpr.errors import IncompatibleOperands, InvalidDate
from calexpr.units import Unit

Operator: TypeAlias = Literal["+", "-"]

# Normalization defaults: the start of whatever period was left unspecified
_DEFAULTS = {"month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0}
_ORDER = ("year", "month", "day", "hour", "minute", "second")


@dataclass(frozen=True, kw_only=True)
class Moment:
    year: int
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    offset: timedelta | None = None

    def __post_init__(self) -> None:
        # Components can only be omitted from the right: no day without a month
        missing = False
        for name in _ORDER:
            value = getattr(self, name)
            if value is None:
                missing = True
            elif missing:
                raise ValueError(
                    f"Moment {name} ({value}) given without all coarser fields.\n"
                    f"Got: {self._fields()}\n"
                    f"Partial moments may only omit trailing components, "
                    f"e.g. Moment(year=2024, month=3)"
                )

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Moment":
        return cls(
            year=dt.year,
            month=dt.month,
            day=dt.day,
            hour=dt.hour,
            minute=dt.minute,
            second=dt.second,
            offset=dt.utcoffset(),
        )

    @property
    def is_complete(self) -> bool:
        return self.second is not None

    def _fields(self) -> dict[str, int]:
        return {k: getattr(self, k) for k in _ORDER if getattr(self, k) is not None}

    def normalized(self) -> "Moment":
        """Fill missing components with the start of their period.

        ``2024`` becomes 2024-01-01T00:00:00 and ``2024-03`` becomes
        2024-03-01T00:00:00.
        """
        fields = {**_DEFAULTS, **self._fields()}
        return Moment(offset=self.offset, **fields)

    def to_datetime(self) -> datetime:
        full = self.normalized()
        tzinfo = timezone(self.offset) if self.offset is not None else None
        try:
            return datetime(
                full.year,
                full.month,  # type: ignore[arg-type]
                full.day,  # type: ignore[arg-type]
                full.hour,  # type: ignore[arg-type]
                full.minute,  # type: ignore[arg-type]
                full.second,  # type: ignore[arg-type]
                tzinfo=tzinfo,
            )
        except ValueError as exc:
            raise InvalidDate(full._fields(), str(exc)) from exc

    def date(self) -> date:
        return self.to_datetime().date()

    def shift(self, duration: "Duration") -> "Moment":
        """Apply each amount of ``duration`` in the order it was stored."""
        return Moment.from_datetime(duration.apply(self.to_datetime()))

    def __add__(self, other: Any) -> "TimeType":
        if isinstance(other, (Moment, Duration)):
            return combine(self, "+", other)
        return NotImplemented

    def __sub__(self, other: Any) -> "TimeType":
        if isinstance(other, (Moment, Duration)):
            return combine(self, "-", other)
        return NotImplemented

    def start_of(self, period: Period) -> "Moment":
        return Moment.from_datetime(calendar.start_of(self.to_datetime(), period))

    def end_of(self, period: Period) -> "Moment":
        return Moment.from_datetime(calendar.end_of(self.to_datetime(), period))

    def start_of_day(self) -> "Moment":
        return self.start_of("day")

    def start_of_week(self) -> "Moment":
        return self.start_of("week")

    def start_of_month(self) -> "Moment":
        return self.start_of("month")

    def start_of_year(self) -> "Moment":
        return self.start_of("year")

    def end_of_day(self) -> "Moment":
        return self.end_of("day")

    def end_of_week(self) -> "Moment":
        return self.end_of("week")

    def end_of_month(self) -> "Moment":
        return self.end_of("month")

    def end_of_year(self) -> "Moment":
        return self.end_of("year")

    def dayname(self) -> str:
        return calendar.weekday_name(self.to_datetime())

    @override
    def __str__(self) -> str:
        """ISO-8601 text for the components that are present."""
        text = f"{self.year:04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
        if self.day is not None:
            text += f"-{self.day:02d}"
        if self.hour is not None:
            text += f"T{self.hour:02d}"
        if self.minute is not None:
            text += f":{self.minute:02d}"
        if self.second is not None:
            text += f":{self.second:02d}"
            if self.offset is not None:
                text += _render_offset(self.offset)
        return text


def _render_offset(offset: timedelta) -> str:
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}{minutes % 60:02d}"


@dataclass(frozen=True)
class Amount:
    """One magnitude of one unit. The sign is kept apart from the operator."""

    magnitude: int
    unit: Unit
    sign: int = 1

    def __post_init__(self) -> None:
        if self.magnitude < 0:
            raise ValueError(
                f"Amount magnitude must be >= 0, got {self.magnitude}.\n"
                f"Use sign=-1 for a negative amount: Amount(5, Unit.DAY, sign=-1)"
            )
        if self.sign not in (1, -1):
            raise ValueError(f"Amount sign must be +1 or -1, got {self.sign}")

    @property
    def signed(self) -> int:
        return self.sign * self.magnitude

    def negated(self) -> "Amount":
        return Amount(self.magnitude, self.unit, sign=-self.sign)

    @override
    def __str__(self) -> str:
        text = f"{self.magnitude}{self.unit.render(self.magnitude)}"
        return text if self.sign > 0 else f"-{text}"


@dataclass(frozen=True, eq=False)
class Duration:
    amounts: tuple[tuple[Unit, int], ...] = field(default=())

    @classmethod
    def of(cls, *amounts: Amount) -> "Duration":
        return cls(tuple((a.unit, a.signed) for a in amounts))

    def _significant(self) -> tuple[tuple[Unit, int], ...]:
        """Canonical form used for equality and hashing.

        Zero-magnitude entries are identity steps and drop out. Neighbouring
        amounts of the same fixed unit sum, so ``1day - 2days + 3days`` equals
        ``2days``. Month and year steps never merge: each one clamps the day
        of month, so ``+1 month +1 month`` can differ from ``+2 months``.
        """
        merged: list[tuple[Unit, int]] = []
        for unit, count in self.amounts:
            if count == 0:
                continue
            if merged and unit.is_fixed and merged[-1][0] is unit:
                total = merged.pop()[1] + count
                if total != 0:
                    merged.append((unit, total))
            else:
                merged.append((unit, count))
        return tuple(merged)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._significant() == other._significant()

    @override
    def __hash__(self) -> int:
        return hash(self._significant())

    def __neg__(self) -> "Duration":
        return Duration(tuple((unit, -count) for unit, count in self.amounts))

    def __add__(self, other: Any) -> "TimeType":
        if isinstance(other, (Moment, Duration)):
            return combine(self, "+", other)
        return NotImplemented

    def __sub__(self, other: Any) -> "TimeType":
        if isinstance(other, (Moment, Duration)):
            return combine(self, "-", other)
        return NotImplemented

    @property
    def is_fixed(self) -> bool:
        """True when every amount has a fixed length in seconds."""
        return all(unit.is_fixed for unit, _ in self.amounts)

    def total_seconds(self) -> int:
        if not self.is_fixed:
            calendar_units = sorted(
                {unit.value for unit, _ in self.amounts if not unit.is_fixed}
            )
            raise ValueError(
                f"Duration {self} contains calendar units "
                f"({', '.join(calendar_units)}) with no fixed length.\n"
                f"Hint: apply it to a Moment instead: moment + duration"
            )
        return sum(unit.seconds * count for unit, count in self.amounts)

    def apply(self, dt: datetime) -> datetime:
        for unit, count in self.amounts:
            dt = calendar.add(dt, unit, count)
        return dt

    @override
    def __str__(self) -> str:
        """Canonical text, accepted back by the parser."""
        if not self.amounts:
            return "0seconds"
        parts: list[str] = []
        for unit, count in self.amounts:
            word = f"{abs(count)}{unit.render(abs(count))}"
            if not parts:
                # The grammar has no leading sign; open with a zero of the same unit
                parts.append(word if count >= 0 else f"0{unit.render(0)} - {word}")
            else:
                parts.append(f"{'-' if count < 0 else '+'} {word}")
        return " ".join(parts)


TimeType: TypeAlias = Moment | Duration


def combine(left: TimeType, op: Operator, right: TimeType) -> TimeType:
    """Add or subtract two evaluated values.

    Duration +/- Duration concatenates the amounts without collapsing them.
    Moment +/- Duration replays the amounts against the moment. Anything else
    (a date on the right-hand side) is an error.
    """
    if op not in ("+", "-"):
        raise ValueError(f"Invalid operator: {op!r}\nValid operators: +, -")
    if isinstance(right, Duration):
        step = right if op == "+" else -right
        if isinstance(left, Duration):
            return Duration(left.amounts + step.amounts)
        if isinstance(left, Moment):
            return left.shift(step)
    raise IncompatibleOperands(left, op, right)


def moment(
    year: int,
    month: int | None = None,
    day: int | None = None,
    hour: int | None = None,
    minute: int | None = None,
    second: int | None = None,
    *,
    offset: timedelta | None = None,
) -> Moment:
    return Moment(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        offset=offset,
    )


def now(clock: Clock | None = None) -> Moment:
    return Moment.from_datetime((clock or SystemClock()).now())


def today(clock: Clock | None = None) -> Moment:
    return now(clock)


def yesterday(clock: Clock | None = None) -> Moment:
    return now(clock).shift(days(-1))


def tomorrow(clock: Clock | None = None) -> Moment:
    return now(clock).shift(days(1))


def seconds(n: int) -> Duration:
    return Duration(((Unit.SECOND, n),))


def minutes(n: int) -> Duration:
    return Duration(((Unit.MINUTE, n),))


def hours(n: int) -> Duration:
    return Duration(((Unit.HOUR, n),))


def days(n: int) -> Duration:
    return Duration(((Unit.DAY, n),))


def weeks(n: int) -> Duration:
    return Duration(((Unit.WEEK, n),))


def months(n: int) -> Duration:
    return Duration(((Unit.MONTH, n),))


def years(n: int) -> Duration:
    return Duration(((Unit.YEAR, n),))
