"""Tests for the phrase lexer."""

import pytest

from calexpr.errors import MalformedNumber, UnknownToken
from calexpr.lexer import tokenize


def kinds(source: str) -> list[tuple[str, str]]:
    return [(t.type, t.value) for t in tokenize(source)]


def test_number_and_unit_without_space():
    """Test that '5days' splits into a number and a unit word."""
    assert kinds("5days") == [("NUMBER", "5"), ("UNIT", "days"), ("EOF", "")]


def test_whitespace_is_discarded():
    assert kinds("5 min  +\t12 min") == [
        ("NUMBER", "5"),
        ("UNIT", "min"),
        ("OPERATOR", "+"),
        ("NUMBER", "12"),
        ("UNIT", "min"),
        ("EOF", ""),
    ]


def test_date_then_operator():
    """Test a full date followed by an amount."""
    assert kinds("2024-01-31 + 1month") == [
        ("DATE_PART", "2024"),
        ("DATE_SEP", "-"),
        ("DATE_PART", "01"),
        ("DATE_SEP", "-"),
        ("DATE_PART", "31"),
        ("OPERATOR", "+"),
        ("NUMBER", "1"),
        ("UNIT", "month"),
        ("EOF", ""),
    ]


def test_datetime_with_offset():
    assert kinds("2017-01-01T22:00:11+0130") == [
        ("DATE_PART", "2017"),
        ("DATE_SEP", "-"),
        ("DATE_PART", "01"),
        ("DATE_SEP", "-"),
        ("DATE_PART", "01"),
        ("DATE_SEP", "T"),
        ("DATE_PART", "22"),
        ("DATE_SEP", ":"),
        ("DATE_PART", "00"),
        ("DATE_SEP", ":"),
        ("DATE_PART", "11"),
        ("OFFSET_SIGN", "+"),
        ("DATE_PART", "0130"),
        ("EOF", ""),
    ]


def test_four_digits_before_unit_is_a_number():
    """Test that '2024 days' is a count of days, not the year 2024."""
    assert kinds("2024 days")[0] == ("NUMBER", "2024")
    assert kinds("1000 times")[0] == ("NUMBER", "1000")


def test_four_digits_before_alias_is_a_year():
    assert kinds("2024 weekly") == [
        ("DATE_PART", "2024"),
        ("ALIAS", "weekly"),
        ("EOF", ""),
    ]


def test_spaced_minus_after_date_is_an_operator():
    assert kinds("2024-01 - 5 days")[3] == ("OPERATOR", "-")


def test_keywords():
    assert kinds("today daily until tomorrow") == [
        ("KEYWORD", "today"),
        ("ALIAS", "daily"),
        ("KEYWORD", "until"),
        ("KEYWORD", "tomorrow"),
        ("EOF", ""),
    ]


def test_out_of_range_components_still_lex():
    """Range checks belong to the parser."""
    assert [t.value for t in tokenize("2024-13-45")][:5] == [
        "2024",
        "-",
        "13",
        "-",
        "45",
    ]


def test_positions():
    tokens = tokenize("today - 5 days")
    assert [t.position for t in tokens] == [0, 6, 8, 10, 14]


def test_unknown_word():
    with pytest.raises(UnknownToken) as exc_info:
        tokenize("5 fortnights")

    assert exc_info.value.position == 2
    assert exc_info.value.text == "fortnights"


def test_words_are_case_sensitive():
    with pytest.raises(UnknownToken, match="Days"):
        tokenize("5 Days")


def test_unknown_character():
    with pytest.raises(UnknownToken) as exc_info:
        tokenize("5days * 2")

    assert exc_info.value.text == "*"
    assert exc_info.value.position == 6


def test_decimal_is_malformed():
    with pytest.raises(MalformedNumber, match="1.5"):
        tokenize("1.5hours")
