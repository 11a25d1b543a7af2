"""Tests for input coercion helpers."""

from decimal import Decimal

import pytest

from core.errors import ValidationError
from core.validation import (
    is_blank,
    optional_text,
    parse_int,
    parse_positive_int,
    parse_price,
    require_text,
)


@pytest.mark.parametrize("value", [None, "", "   ", "\n"])
def test_is_blank(value):
    assert is_blank(value)


@pytest.mark.parametrize("value", ["x", 0, False])
def test_not_blank(value):
    assert not is_blank(value)


def test_require_text_strips():
    assert require_text("  Intro  ", "title") == "Intro"


def test_require_text_names_field():
    with pytest.raises(ValidationError, match="title is required"):
        require_text(" ", "title")


def test_optional_text():
    assert optional_text("") is None
    assert optional_text(None) is None
    assert optional_text("https://v.example/1") == "https://v.example/1"


@pytest.mark.parametrize(
    "value,expected",
    [(7, 7), ("7", 7), (" 12 ", 12), (3.0, 3), ("3.5", None), ("abc", None),
     (None, None), (True, None), (float("nan"), None)],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected


@pytest.mark.parametrize("value", [0, -1, "x", None])
def test_parse_positive_int_rejects(value):
    with pytest.raises(ValidationError):
        parse_positive_int(value, "duration")


@pytest.mark.parametrize(
    "value,expected",
    [("49.99", "49.99"), (10, "10.00"), (0, "0.00"), (None, "0"), ("free", "0"),
     ("-3", "0"), ("NaN", "0"), (True, "0"), ("1e30", "0"), ("100000000", "0"),
     ("99999999.99", "99999999.99")],
)
def test_parse_price(value, expected):
    assert parse_price(value) == Decimal(expected)
