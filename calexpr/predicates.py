"""Skip predicates and marks for iterators.

A predicate answers one question about a Moment. Iterators consult their skip
predicates before yielding each candidate and step past any that match.
Predicates compose with ``|``, ``&`` and ``~``:

    >>> weekend = WeekdayIs(["saturday", "sunday"])
    >>> skip = weekend | MonthIs("december")

Marks name a calendar boundary relative to some cursor (``EndOfYear``,
``MonthStart``) or a fixed date (``MomentValue``).
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from typing_extensions import override

from calexpr.calendar import DAY_NAMES, MONTH_NAMES, Period
from calexpr.timetype import Moment


class Predicate(ABC):

    @abstractmethod
    def apply(self, moment: Moment) -> bool:
        pass

    def __or__(self, other: "Predicate") -> "Predicate":
        return Or(self, other)

    def __and__(self, other: "Predicate") -> "Predicate":
        return And(self, other)

    def __invert__(self) -> "Predicate":
        return Not(self)


class Or(Predicate):
    def __init__(self, *predicates: Predicate):
        super().__init__()
        self.predicates: tuple[Predicate, ...] = predicates

    @override
    def apply(self, moment: Moment) -> bool:
        return any(p.apply(moment) for p in self.predicates)


class And(Predicate):
    def __init__(self, *predicates: Predicate):
        super().__init__()
        self.predicates: tuple[Predicate, ...] = predicates

    @override
    def apply(self, moment: Moment) -> bool:
        return all(p.apply(moment) for p in self.predicates)


class Not(Predicate):
    def __init__(self, predicate: Predicate):
        super().__init__()
        self.predicate: Predicate = predicate

    @override
    def apply(self, moment: Moment) -> bool:
        return not self.predicate.apply(moment)


def _lookup(name: str, names: tuple[str, ...], kind: str) -> int:
    lowered = name.lower()
    if lowered not in names:
        valid = ", ".join(names)
        raise ValueError(f"Invalid {kind} name: '{name}'\nValid {kind}s: {valid}\n")
    return names.index(lowered)


class MonthIs(Predicate):
    """Matches moments in the given month(s), by number (1-12) or name."""

    def __init__(self, months: int | str | list[int | str]):
        values = months if isinstance(months, list) else [months]
        self.months: frozenset[int] = frozenset(self._month(v) for v in values)

    @staticmethod
    def _month(value: int | str) -> int:
        if isinstance(value, str):
            return _lookup(value, MONTH_NAMES, "month") + 1
        if not 1 <= value <= 12:
            raise ValueError(f"month must be in range [1, 12], got {value}")
        return value

    @override
    def apply(self, moment: Moment) -> bool:
        return moment.date().month in self.months


class WeekdayIs(Predicate):
    """Matches moments falling on the given day(s) of the week."""

    def __init__(self, days: str | list[str]):
        if isinstance(days, str):
            days = [days]
        # datetime.weekday() numbering, Monday == 0
        self.weekdays: frozenset[int] = frozenset(
            _lookup(day, DAY_NAMES, "day") for day in days
        )

    @override
    def apply(self, moment: Moment) -> bool:
        return moment.date().weekday() in self.weekdays


class IsPeriodStart(Predicate):
    """Matches moments on the first day of their week, month or year.

    Time of day is ignored.
    """

    def __init__(self, period: Period):
        if period not in ("week", "month", "year"):
            raise ValueError(
                f"Invalid period for IsPeriodStart: {period!r}\n"
                f"Valid periods: week, month, year"
            )
        self.period: Period = period

    @override
    def apply(self, moment: Moment) -> bool:
        return moment.date() == moment.start_of(self.period).date()


class Matches(Predicate):
    """Wraps any ``Moment -> bool`` callable."""

    def __init__(self, fn: Callable[[Moment], bool]):
        self.fn: Callable[[Moment], bool] = fn

    @override
    def apply(self, moment: Moment) -> bool:
        return bool(self.fn(moment))


class Mark(ABC):

    @abstractmethod
    def resolve(self, cursor: Moment) -> Moment:
        """The concrete moment this mark names, relative to ``cursor``."""
        pass


@dataclass(frozen=True)
class EndOfYear(Mark):
    @override
    def resolve(self, cursor: Moment) -> Moment:
        return cursor.end_of_year()


@dataclass(frozen=True)
class MonthStart(Mark):
    @override
    def resolve(self, cursor: Moment) -> Moment:
        return cursor.start_of_month()


@dataclass(frozen=True)
class MomentValue(Mark):
    moment: Moment

    @override
    def resolve(self, cursor: Moment) -> Moment:
        return self.moment


class OnMark(Predicate):
    """Matches moments on the same calendar day as the mark resolves to."""

    def __init__(self, mark: Mark):
        self.mark: Mark = mark

    @override
    def apply(self, moment: Moment) -> bool:
        return moment.date() == self.mark.resolve(moment).date()
