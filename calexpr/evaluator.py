"""Evaluation of parsed phrases into moments, durations and iterators.

Example:
    >>> from calexpr.calendar import FixedClock
    >>> from datetime import datetime
    >>> clock = FixedClock(datetime(2024, 3, 15, 9, 30))
    >>> str(calculate("today - 5 days", clock))
    '2024-03-10T09:30:00'
    >>> str(calculate("1day - 2days + 3days"))
    '1day - 2days + 3days'
    >>> [str(m) for m in iterate("2024-01-31 monthly 3 times")]
    ['2024-01-31T00:00:00', '2024-02-29T00:00:00', '2024-03-29T00:00:00']
"""

from calexpr import ast
from calexpr.calendar import Clock, Period
from calexpr.errors import ExpectedMoment
from calexpr.iterator import BeforeMoment, Count, IteratorSpec, UntilCondition
from calexpr.parser import parse_iterator, parse_timetype
from calexpr.timetype import Duration, Moment, TimeType, combine


def evaluate(expr: ast.Expression) -> TimeType:
    """Reduce an expression tree to a Moment or a Duration.

    Binary operations are evaluated left operand first; the parser already
    builds left-leaning trees, so chains read in natural order.
    """
    if isinstance(expr, ast.Literal):
        return Duration.of(expr.amount)
    if isinstance(expr, ast.ExactDate):
        # Normalizes missing fields and checks the date exists
        return Moment.from_datetime(expr.moment.to_datetime())
    if isinstance(expr, ast.BinaryOp):
        left = evaluate(expr.left)
        right = evaluate(expr.right)
        return combine(left, expr.op, right)
    raise TypeError(
        f"Cannot evaluate {type(expr).__name__!r}.\n"
        f"Expected one of: Literal, ExactDate, BinaryOp"
    )


def evaluate_iterator(expr: ast.IteratorExpr) -> IteratorSpec:
    start = evaluate(expr.start)
    if not isinstance(start, Moment):
        raise ExpectedMoment(start, "The start of an iterator")

    until: UntilCondition | None = None
    if isinstance(expr.until, ast.UntilDate):
        until = BeforeMoment(_moment(evaluate(expr.until.date), "An until date"))
    elif isinstance(expr.until, ast.UntilTimes):
        until = Count(expr.until.count)

    return IteratorSpec(start=start, step=Duration.of(expr.step), until=until)


def partial_until_warnings(expr: ast.IteratorExpr) -> list[str]:
    """Explain ``until`` dates that stop earlier than they probably should.

    ``until 2024`` means "before 2024-01-01", not "through the end of 2024".
    The behavior is intentional; this only describes it.
    """
    if not isinstance(expr.until, ast.UntilDate):
        return []
    bound = expr.until.date.moment
    if bound.day is not None:
        return []
    resolved = bound.normalized()
    return [
        f"'until {bound}' is read as 'until {resolved.year:04d}-"
        f"{resolved.month:02d}-{resolved.day:02d}': iteration stops before "
        f"the start of that period, not at its end"
    ]


def calculate(source: str, clock: Clock | None = None) -> TimeType:
    """Parse and evaluate a timetype phrase."""
    return evaluate(parse_timetype(source, clock))


def iterate(source: str, clock: Clock | None = None) -> IteratorSpec:
    """Parse and evaluate an iterator phrase into a restartable IteratorSpec."""
    return evaluate_iterator(parse_iterator(source, clock))


def _moment(value: TimeType, where: str) -> Moment:
    if not isinstance(value, Moment):
        raise ExpectedMoment(value, where)
    return value


def start_of(value: TimeType, period: Period) -> Moment:
    return _moment(value, f"start_of({period!r})").start_of(period)


def end_of(value: TimeType, period: Period) -> Moment:
    return _moment(value, f"end_of({period!r})").end_of(period)


def start_of_day(value: TimeType) -> Moment:
    return start_of(value, "day")


def start_of_week(value: TimeType) -> Moment:
    return start_of(value, "week")


def start_of_month(value: TimeType) -> Moment:
    return start_of(value, "month")


def start_of_year(value: TimeType) -> Moment:
    return start_of(value, "year")


def end_of_day(value: TimeType) -> Moment:
    return end_of(value, "day")


def end_of_week(value: TimeType) -> Moment:
    return end_of(value, "week")


def end_of_month(value: TimeType) -> Moment:
    return end_of(value, "month")


def end_of_year(value: TimeType) -> Moment:
    return end_of(value, "year")


def dayname(value: TimeType) -> str:
    return _moment(value, "dayname()").dayname()
