"""Error taxonomy for lexing, parsing, evaluation and iterator configuration.

Every error is an ordinary exception carrying the context needed to explain
it (input position, offending text, field names, operand kinds). Nothing here
terminates the process; the command surface turns these into messages.
"""

from typing import Any


class CalexprError(Exception):
    """Base class for all calexpr errors."""


class LexError(CalexprError, ValueError):
    def __init__(self, msg: str, position: int, text: str):
        super().__init__(f"position {position}: {msg}")
        self.position: int = position
        self.text: str = text


class UnknownToken(LexError):
    def __init__(self, position: int, text: str):
        super().__init__(
            f"unknown token {text!r}\n"
            f"Hint: units are words like 'days', 'weeks', 'months' "
            f"and aliases like 'daily', 'weekly'",
            position,
            text,
        )


class MalformedNumber(LexError):
    def __init__(self, position: int, text: str):
        super().__init__(
            f"malformed number {text!r}\n"
            f"Hint: only whole numbers are allowed, e.g. '90min' instead of '1.5hours'",
            position,
            text,
        )


class ParseError(CalexprError, ValueError):
    def __init__(self, msg: str, position: int):
        super().__init__(f"position {position}: {msg}")
        self.position: int = position


class UnexpectedToken(ParseError):
    def __init__(self, position: int, found: str, expected: str):
        super().__init__(f"expected {expected}, found {found!r}", position)
        self.found: str = found
        self.expected: str = expected


class UnexpectedEndOfInput(ParseError):
    def __init__(self, position: int, expected: str):
        super().__init__(f"expected {expected}, found end of input", position)
        self.expected: str = expected


class InvalidDateComponent(ParseError):
    def __init__(self, position: int, field: str, value: int, low: int, high: int):
        super().__init__(
            f"{field} must be in range [{low}, {high}], got {value}", position
        )
        self.field: str = field
        self.value: int = value


class EvalError(CalexprError):
    pass


class IncompatibleOperands(EvalError, TypeError):
    def __init__(self, left: Any, op: str, right: Any):
        left_kind = type(left).__name__
        right_kind = type(right).__name__
        super().__init__(
            f"Cannot apply '{op}' to {left_kind} and {right_kind}.\n"
            f"Hint: a date can only be shifted by an amount: "
            f"'2024-01-31 + 1 month', not '2024-01-31 + 2024-02-01'"
        )
        self.left: Any = left
        self.op: str = op
        self.right: Any = right


class InvalidDate(EvalError, ValueError):
    def __init__(self, fields: dict[str, int], reason: str):
        pretty = "-".join(
            f"{fields[k]:02d}" for k in ("year", "month", "day") if k in fields
        )
        super().__init__(f"{pretty} is not a valid calendar date: {reason}")
        self.fields: dict[str, int] = fields


class OutOfRange(EvalError, OverflowError):
    pass


class ExpectedMoment(EvalError, TypeError):
    def __init__(self, got: Any, where: str):
        super().__init__(
            f"{where} must evaluate to a date, got {type(got).__name__}: {got}\n"
            f"Hint: start an iterator from a date, e.g. '2024-01-01 weekly'"
        )
        self.got: Any = got


class IteratorConfigError(CalexprError, ValueError):
    pass
