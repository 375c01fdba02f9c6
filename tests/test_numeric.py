from decimal import Decimal

import pytest

from asc_parser.errors import NumericParseError
from asc_parser.grammar.numeric import (
    U32_MAX,
    decode_decimal,
    decode_optional_decimal,
    decode_signed,
    decode_unsigned,
    is_decimal,
)


@pytest.mark.parametrize(
    "token, expected",
    [
        ("512.3", Decimal("512.3")),
        ("-0.5", Decimal("-0.5")),
        ("+7", Decimal(7)),
        (".25", Decimal("0.25")),
        ("3.", Decimal(3)),
        ("1.5e2", Decimal(150)),
        ("2E-3", Decimal("0.002")),
    ],
)
def test_decode_decimal_accepts_fixed_and_scientific(token, expected):
    assert decode_decimal(token) == expected


def test_decode_decimal_keeps_exact_digits():
    assert str(decode_decimal("38.50")) == "38.50"


@pytest.mark.parametrize("token", ["", ".", "abc", "1.2.3", "NaN", "inf", "Infinity", "1e", "--1", "12a"])
def test_decode_decimal_rejects_garbage(token):
    with pytest.raises(NumericParseError):
        decode_decimal(token)


def test_optional_decimal_placeholder():
    assert decode_optional_decimal(".") is None
    assert decode_optional_decimal("0.0") == Decimal(0)
    with pytest.raises(NumericParseError):
        decode_optional_decimal("x")


def test_is_decimal():
    assert is_decimal("1012")
    assert is_decimal("1e3")
    assert not is_decimal("MSG")
    assert not is_decimal(".")


def test_decode_unsigned_range():
    assert decode_unsigned("0") == 0
    assert decode_unsigned("+5") == 5
    assert decode_unsigned(str(U32_MAX)) == U32_MAX
    with pytest.raises(NumericParseError):
        decode_unsigned(str(U32_MAX + 1))
    with pytest.raises(NumericParseError):
        decode_unsigned("-1")
    with pytest.raises(NumericParseError):
        decode_unsigned("1.0")


def test_decode_unsigned_wide_maximum():
    assert decode_unsigned("18446744073709551615", 2**64 - 1) == 2**64 - 1


def test_decode_signed():
    assert decode_signed("-10") == -10
    assert decode_signed("20") == 20
    with pytest.raises(NumericParseError):
        decode_signed("2147483648")
    with pytest.raises(NumericParseError):
        decode_signed("1,")
