"""Lexer for date and duration phrases.

Turns ``"2024-01-31 + 1month"`` into a flat list of classified tokens. No
range checking happens here: ``2024-13-45`` lexes fine and is rejected by the
parser, which knows which field each number belongs to.
"""

import re
from dataclasses import dataclass

from calexpr.errors import MalformedNumber, UnknownToken
from calexpr.units import ALIAS_WORDS, KEYWORDS, UNIT_WORDS

NUMBER = "NUMBER"
OPERATOR = "OPERATOR"
UNIT = "UNIT"
ALIAS = "ALIAS"
KEYWORD = "KEYWORD"
DATE_PART = "DATE_PART"
DATE_SEP = "DATE_SEP"
OFFSET_SIGN = "OFFSET_SIGN"
EOF = "EOF"


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    position: int


_WS = re.compile(r"\s+")
_WORD = re.compile(r"[A-Za-z]+")
_DIGITS = re.compile(r"\d+")
_DECIMAL = re.compile(r"\d+[.,]\d+")

# YYYY[-MM[-DD[THH[:MM[:SS[(+|-)HHMM]]]]]]
_DATE = re.compile(
    r"(?P<year>\d{4})"
    r"(?:-(?P<month>\d{2})"
    r"(?:-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2})"
    r"(?::(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})"
    r"(?P<offset>[+-]\d{4})?"
    r")?)?)?)?)?"
)

_DATE_FIELDS = ("month", "day", "hour", "minute", "second")


class Lexer:
    """Tokenizer for the timetype and iterator grammars."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: list[Token] = []
        self._tokenise()

    def _tokenise(self) -> None:
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char.isspace():
                self.pos += 1
            elif char.isdigit():
                self._digits()
            elif char in "+-":
                self._emit(OPERATOR, char)
            elif _WORD.match(char):
                self._word()
            else:
                raise UnknownToken(self.pos, char)

        self.tokens.append(Token(EOF, "", self.pos))

    def _emit(self, ttype: str, value: str) -> None:
        self.tokens.append(Token(ttype, value, self.pos))
        self.pos += len(value)

    def _digits(self) -> None:
        decimal = _DECIMAL.match(self.source, self.pos)
        if decimal:
            raise MalformedNumber(self.pos, decimal.group(0))

        digits = _DIGITS.match(self.source, self.pos).group(0)  # type: ignore[union-attr]
        if len(digits) == 4 and not self._counted_word_follows(self.pos + 4):
            self._date()
        else:
            self._emit(NUMBER, digits)

    def _counted_word_follows(self, end: int) -> bool:
        """True when the digits ending at ``end`` are a count ("2024 days", "5 times")."""
        ws = _WS.match(self.source, end)
        if ws:
            end = ws.end()
        word = _WORD.match(self.source, end)
        return word is not None and (
            word.group(0) in UNIT_WORDS or word.group(0) == "times"
        )

    def _date(self) -> None:
        start = self.pos
        match = _DATE.match(self.source, start)
        assert match is not None  # four digits always match the year

        self.tokens.append(Token(DATE_PART, match.group("year"), start))
        for name in _DATE_FIELDS:
            value = match.group(name)
            if value is None:
                break
            at = match.start(name)
            separator = self.source[at - 1]
            self.tokens.append(Token(DATE_SEP, separator, at - 1))
            self.tokens.append(Token(DATE_PART, value, at))

        offset = match.group("offset")
        if offset is not None:
            at = match.start("offset")
            self.tokens.append(Token(OFFSET_SIGN, offset[0], at))
            self.tokens.append(Token(DATE_PART, offset[1:], at + 1))

        self.pos = match.end()

    def _word(self) -> None:
        word = _WORD.match(self.source, self.pos).group(0)  # type: ignore[union-attr]
        if word in KEYWORDS:
            self._emit(KEYWORD, word)
        elif word in UNIT_WORDS:
            self._emit(UNIT, word)
        elif word in ALIAS_WORDS:
            self._emit(ALIAS, word)
        else:
            raise UnknownToken(self.pos, word)


def tokenize(source: str) -> list[Token]:
    return Lexer(source).tokens
