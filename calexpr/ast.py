"""Parse tree for date and duration phrases.

``Expression`` is a closed union of three node kinds. Trees are immutable and
hold no resources; the evaluator matches on them exhaustively.
"""

from dataclasses import dataclass
from typing import TypeAlias

from calexpr.errors import IncompatibleOperands
from calexpr.timetype import Amount, Moment, Operator


@dataclass(frozen=True)
class Literal:
    amount: Amount


@dataclass(frozen=True)
class ExactDate:
    """A date literal, or a resolved ``today``/``yesterday``/``tomorrow``.

    ``moment`` may be partial; evaluation normalizes it.
    """

    moment: Moment
    alias: str | None = None


@dataclass(frozen=True)
class BinaryOp:
    left: "Expression"
    op: Operator
    right: "Expression"

    def __post_init__(self) -> None:
        if self.op not in ("+", "-"):
            raise ValueError(f"Invalid operator: {self.op!r}\nValid operators: +, -")
        if contains_date(self.right):
            # A date may only appear as the leftmost operand
            raise IncompatibleOperands(self.left, self.op, self.right)


Expression: TypeAlias = Literal | ExactDate | BinaryOp


def contains_date(expr: Expression) -> bool:
    if isinstance(expr, ExactDate):
        return True
    if isinstance(expr, BinaryOp):
        return contains_date(expr.left) or contains_date(expr.right)
    return False


@dataclass(frozen=True)
class UntilDate:
    date: ExactDate


@dataclass(frozen=True)
class UntilTimes:
    count: int


UntilClause: TypeAlias = UntilDate | UntilTimes


@dataclass(frozen=True)
class IteratorExpr:
    """``<date_expr> <iter_spec> [<until_spec>]`` as parsed."""

    start: Expression
    step: Amount
    until: UntilClause | None = None
