"""Recursive descent parser for date and duration phrases.

Grammar:
    operator    = "+" | "-"
    amount      = NUMBER UNIT | ALIAS
    amount_expr = amount (operator amount)*
    exact_date  = "today" | "yesterday" | "tomorrow"
                | YYYY ["-" MM ["-" DD ["T" HH [":" MM [":" SS [offset]]]]]]
    offset      = ("+" | "-") HHMM
    date_expr   = exact_date (operator amount)*
    timetype    = date_expr | amount_expr
    iter_spec   = ALIAS | ["every"] NUMBER UNIT
    until_spec  = "until" exact_date | NUMBER "times"
    iterator    = date_expr iter_spec [until_spec]

Operator chains fold left to right: ``1day - 2days + 3days`` is
``(1day - 2days) + 3days``.

``today``, ``yesterday`` and ``tomorrow`` are resolved against the parser's
clock while parsing, so a parsed expression means the same thing no matter
when it is evaluated.
"""

from datetime import timedelta

from calexpr import ast
from calexpr.calendar import Clock, SystemClock
from calexpr.errors import InvalidDateComponent, UnexpectedEndOfInput, UnexpectedToken
from calexpr.lexer import (
    ALIAS,
    DATE_PART,
    DATE_SEP,
    EOF,
    KEYWORD,
    NUMBER,
    OFFSET_SIGN,
    OPERATOR,
    UNIT,
    Lexer,
    Token,
)
from calexpr.timetype import Amount, Moment, now
from calexpr.units import ALIAS_WORDS, UNIT_WORDS, Unit

DATE_ALIASES = {"today": 0, "yesterday": -1, "tomorrow": 1}

# field -> (separator that introduces it, low, high)
_DATE_FIELDS = (
    ("month", "-", 1, 12),
    ("day", "-", 1, 31),
    ("hour", "T", 0, 23),
    ("minute", ":", 0, 59),
    ("second", ":", 0, 59),
)


class Parser:
    """Recursive descent parser with one token of lookahead."""

    def __init__(self, tokens: list[Token], clock: Clock | None = None):
        self.tokens = tokens
        self.pos = 0
        self.clock: Clock = clock or SystemClock()

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[idx]

    def at(self, *types: str) -> bool:
        return self.peek().type in types

    def at_keyword(self, *words: str) -> bool:
        tok = self.peek()
        return tok.type == KEYWORD and tok.value in words

    def consume(self, ttype: str, expected: str) -> Token:
        tok = self.peek()
        if tok.type != ttype:
            raise self._unexpected(expected)
        self.pos += 1
        return tok

    def consume_keyword(self, word: str) -> Token:
        if not self.at_keyword(word):
            raise self._unexpected(f"'{word}'")
        return self.consume(KEYWORD, f"'{word}'")

    def _unexpected(self, expected: str) -> UnexpectedToken | UnexpectedEndOfInput:
        tok = self.peek()
        if tok.type == EOF:
            return UnexpectedEndOfInput(tok.position, expected)
        return UnexpectedToken(tok.position, tok.value, expected)

    def expect_end(self) -> None:
        if not self.at(EOF):
            raise self._unexpected("end of input")

    def parse_timetype(self) -> ast.Expression:
        """Parse a complete timetype phrase."""
        expr = self.parse_date_expr() if self._at_exact_date() else self.parse_amount_expr()
        self.expect_end()
        return expr

    def parse_iterator(self) -> ast.IteratorExpr:
        """Parse a complete iterator phrase."""
        start = self.parse_date_expr()
        step = self.parse_iter_spec()
        until = None
        if not self.at(EOF):
            until = self.parse_until_spec()
        self.expect_end()
        return ast.IteratorExpr(start=start, step=step, until=until)

    def _at_exact_date(self) -> bool:
        return self.at(DATE_PART) or self.at_keyword(*DATE_ALIASES)

    def parse_date_expr(self) -> ast.Expression:
        return self._fold(self.parse_exact_date())

    def parse_amount_expr(self) -> ast.Expression:
        return self._fold(ast.Literal(self.parse_amount()))

    def _fold(self, left: ast.Expression) -> ast.Expression:
        while self.at(OPERATOR):
            op = self.consume(OPERATOR, "'+' or '-'").value
            right = ast.Literal(self.parse_amount())
            left = ast.BinaryOp(left, op, right)  # type: ignore[arg-type]
        return left

    def parse_amount(self) -> Amount:
        if self.at(ALIAS):
            return Amount(1, ALIAS_WORDS[self.consume(ALIAS, "a unit alias").value])
        if self.at(NUMBER):
            number = int(self.consume(NUMBER, "a number").value)
            return Amount(number, self.parse_unit())
        raise self._unexpected("an amount such as '5 days' or 'weekly'")

    def parse_unit(self) -> Unit:
        return UNIT_WORDS[self.consume(UNIT, "a unit such as 'days'").value]

    def parse_exact_date(self) -> ast.ExactDate:
        tok = self.peek()
        if tok.type == KEYWORD and tok.value in DATE_ALIASES:
            self.pos += 1
            base = now(self.clock)
            shift = DATE_ALIASES[tok.value]
            if shift:
                base = Moment.from_datetime(base.to_datetime() + timedelta(days=shift))
            return ast.ExactDate(base, alias=tok.value)

        year_tok = self.consume(DATE_PART, "a date such as '2024-01-31' or 'today'")
        fields = {"year": self._component(year_tok, "year", 1, 9999)}

        for name, separator, low, high in _DATE_FIELDS:
            sep = self.peek()
            if sep.type != DATE_SEP or sep.value != separator:
                break
            self.pos += 1
            part = self.consume(DATE_PART, f"{name} digits")
            fields[name] = self._component(part, name, low, high)

        offset = None
        if self.at(OFFSET_SIGN):
            sign = -1 if self.consume(OFFSET_SIGN, "'+' or '-'").value == "-" else 1
            part = self.consume(DATE_PART, "a UTC offset such as +0130")
            hours = self._component(
                Token(DATE_PART, part.value[:2], part.position), "offset hour", 0, 23
            )
            minutes = self._component(
                Token(DATE_PART, part.value[2:], part.position + 2),
                "offset minute",
                0,
                59,
            )
            offset = sign * timedelta(hours=hours, minutes=minutes)

        return ast.ExactDate(Moment(offset=offset, **fields))

    def _component(self, tok: Token, field: str, low: int, high: int) -> int:
        value = int(tok.value)
        if not low <= value <= high:
            raise InvalidDateComponent(tok.position, field, value, low, high)
        return value

    def parse_iter_spec(self) -> Amount:
        if self.at(ALIAS):
            return self.parse_amount()
        if self.at_keyword("every"):
            self.consume_keyword("every")
        if self.at(NUMBER):
            return self.parse_amount()
        raise self._unexpected("a repetition such as 'weekly' or '2 days'")

    def parse_until_spec(self) -> ast.UntilClause:
        if self.at_keyword("until"):
            self.consume_keyword("until")
            return ast.UntilDate(self.parse_exact_date())
        if self.at(NUMBER):
            count = int(self.consume(NUMBER, "a number").value)
            self.consume_keyword("times")
            return ast.UntilTimes(count)
        raise self._unexpected("'until <date>' or '<n> times'")


def parse_timetype(source: str, clock: Clock | None = None) -> ast.Expression:
    """Parse a date or duration phrase such as ``"today - 5 days"``."""
    return Parser(Lexer(source).tokens, clock).parse_timetype()


def parse_iterator(source: str, clock: Clock | None = None) -> ast.IteratorExpr:
    """Parse a repeating date phrase such as ``"2024-01-01 weekly 4 times"``."""
    return Parser(Lexer(source).tokens, clock).parse_iterator()
