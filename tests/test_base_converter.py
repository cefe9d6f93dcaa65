from decimal import Decimal

import pytest

from MultiCalc import BaseConverter
from MultiCalc import CalculatorConstants as C
from MultiCalc import error as E


@pytest.mark.parametrize("value, from_base, to_base, expected", [
    ("FF", "HEX", "BIN", "11111111"),
    ("11111111", "BIN", "HEX", "FF"),
    ("-10", "DEC", "HEX", "-A"),
    ("777", "OCT", "DEC", "511"),
    ("12.7", "DEC", "BIN", "1100"),
])
def test_convert_to_base(value, from_base, to_base, expected):
    assert BaseConverter.convert_to_base(value, from_base, to_base) == expected


@pytest.mark.parametrize("value", ["", None, "Error", "Overflow", "2"])
def test_unparsable_input_renders_zero(value):
    assert BaseConverter.convert_to_base(value, "BIN", "DEC") == "0"


def test_unknown_base_raises():
    with pytest.raises(E.BaseError):
        BaseConverter.convert_to_base("1", "DEC", "TRI")


def test_out_of_range_raises_overflow():
    with pytest.raises(E.CalculationError) as info:
        BaseConverter.convert_to_base(str(C.MAX_VALUE + 1), "DEC", "HEX")
    assert info.value.code == E.OVERFLOW


def test_format_truncates_toward_zero():
    assert BaseConverter.format_for_base(Decimal("255.9"), "HEX") == "FF"
    assert BaseConverter.format_for_base(Decimal("-5.5"), "BIN") == "-101"


def test_digit_validation():
    assert not BaseConverter.is_valid_digit("2", "BIN")
    assert BaseConverter.is_valid_digit("f", "HEX")
    assert BaseConverter.is_valid_for_base("-1010", "BIN")
    assert not BaseConverter.is_valid_for_base("19", "OCT")
    assert not BaseConverter.is_valid_for_base("", "DEC")


BASE_PAIRS = [(first, second) for first in C.BASES for second in C.BASES if first != second]


@pytest.mark.parametrize("first, second", BASE_PAIRS)
@pytest.mark.parametrize("magnitude", [0, 1, -1, 255, C.MAX_VALUE, C.MIN_VALUE])
def test_conversion_round_trip(first, second, magnitude):
    text = BaseConverter.format_for_base(Decimal(magnitude), first)
    there = BaseConverter.convert_to_base(text, first, second)
    assert BaseConverter.convert_to_base(there, second, first) == text
    assert BaseConverter.parse_in_base(text, first) == magnitude
