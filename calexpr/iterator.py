"""Lazy, pull-based sequences of dates.

An ``IteratorSpec`` describes a sequence: where it starts, how far each step
moves, which candidates to skip and when to stop. Iterating a spec creates a
fresh ``DateIterator`` each time, so a spec can be replayed from its start
but an iterator cannot be rewound.

Without an ``until`` condition the sequence is infinite. The iterator never
stops on its own; callers must bound how much they pull:

    >>> from itertools import islice
    >>> from calexpr.timetype import moment, weeks
    >>> spec = IteratorSpec(start=moment(2024, 1, 1), step=weeks(1))
    >>> [str(m) for m in islice(spec, 2)]
    ['2024-01-01T00:00:00', '2024-01-08T00:00:00']

An iterator whose skip predicates reject every candidate and that has no
``until`` condition blocks forever on the first pull.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice

from typing_extensions import override

from calexpr.errors import EvalError, IteratorConfigError, OutOfRange
from calexpr.predicates import Mark, Predicate
from calexpr.timetype import Duration, Moment


class UntilCondition(ABC):

    @abstractmethod
    def reached(self, cursor: Moment, produced: int) -> bool:
        """True once the iterator must stop, checked before each candidate."""
        pass

    def spent(self, produced: int) -> bool:
        """True when no further moment can be produced, wherever the cursor goes."""
        return False

    def bind(self, start: Moment) -> "UntilCondition":
        """Resolve anything relative to the iterator's start."""
        return self


@dataclass(frozen=True)
class BeforeMoment(UntilCondition):
    """Stop once the cursor's date reaches ``moment``'s date.

    The comparison is by calendar day; time of day is ignored, so the bound
    itself is never produced.
    """

    moment: Moment

    @override
    def reached(self, cursor: Moment, produced: int) -> bool:
        return cursor.date() >= self.moment.date()


@dataclass(frozen=True)
class Count(UntilCondition):
    """Stop after ``n`` moments have been produced. Skipped ones do not count."""

    n: int

    def __post_init__(self) -> None:
        if self.n < 0:
            raise IteratorConfigError(
                f"Count must be >= 0, got {self.n}.\n"
                f"Example: Count(4) or '2024-01-01 weekly 4 times'"
            )

    @override
    def reached(self, cursor: Moment, produced: int) -> bool:
        return self.spent(produced)

    @override
    def spent(self, produced: int) -> bool:
        return produced >= self.n


@dataclass(frozen=True)
class BeforeMark(UntilCondition):
    """Like ``BeforeMoment``, with the bound resolved against the start."""

    mark: Mark

    @override
    def reached(self, cursor: Moment, produced: int) -> bool:
        raise IteratorConfigError(
            "BeforeMark must be bound to a start moment before use.\n"
            "Hint: iterate an IteratorSpec instead of calling reached() directly"
        )

    @override
    def bind(self, start: Moment) -> UntilCondition:
        return BeforeMoment(self.mark.resolve(start))


@dataclass(frozen=True)
class IteratorSpec:
    start: Moment
    step: Duration
    skip: tuple[Predicate, ...] = field(default=())
    until: UntilCondition | None = None

    def __post_init__(self) -> None:
        # Accept any iterable of predicates
        object.__setattr__(self, "skip", tuple(self.skip))

        origin = self.start.to_datetime()
        try:
            stationary = self.step.apply(origin) == origin
        except OutOfRange:
            stationary = False
        if stationary:
            raise IteratorConfigError(
                f"Iterator step must move the date, got '{self.step}'.\n"
                f"Example: IteratorSpec(start=..., step=days(1))"
            )

    @property
    def is_bounded(self) -> bool:
        return self.until is not None

    def __iter__(self) -> "DateIterator":
        return DateIterator(self)

    def take(self, n: int) -> list[Moment]:
        """The first ``n`` moments, or fewer if the sequence ends first."""
        return list(islice(self, n))


class State(Enum):
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


class DateIterator(Iterator[Moment]):
    """Cursor over one pass of an IteratorSpec.

    Not safe to advance from several threads at once.
    """

    def __init__(self, spec: IteratorSpec):
        self.spec: IteratorSpec = spec
        self.state: State = State.ACTIVE
        self.cursor: Moment = Moment.from_datetime(spec.start.to_datetime())
        self.produced: int = 0
        self._until: UntilCondition | None = (
            spec.until.bind(self.cursor) if spec.until is not None else None
        )
        self._advance_due = False

    @override
    def __iter__(self) -> "DateIterator":
        return self

    @override
    def __next__(self) -> Moment:
        if self.state is State.EXHAUSTED:
            raise StopIteration

        if self._advance_due:
            # A finished count must not step past the last moment it produced
            if self._until is not None and self._until.spent(self.produced):
                self.state = State.EXHAUSTED
                raise StopIteration
            self._advance()

        while True:
            if self._until is not None and self._until.reached(
                self.cursor, self.produced
            ):
                self.state = State.EXHAUSTED
                raise StopIteration

            if any(p.apply(self.cursor) for p in self.spec.skip):
                self._advance()
                continue

            self.produced += 1
            # Step past this moment on the following pull
            self._advance_due = True
            return self.cursor

    def _advance(self) -> None:
        self._advance_due = False
        try:
            self.cursor = self.cursor.shift(self.spec.step)
        except EvalError:
            self.state = State.EXHAUSTED
            raise
