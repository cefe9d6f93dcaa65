import pytest

from MultiCalc.DisplayFormatter import DisplayFormatter, group_binary

SEPARATOR = {"use_thousands_separator": True}


@pytest.fixture
def formatter():
    return DisplayFormatter()


def test_decimal_grouping(formatter):
    assert formatter.format_value("1234567.891", options=SEPARATOR) == "1,234,567.891"
    assert formatter.format_value("1234567.891") == "1234567.891"


def test_exponent_is_left_alone(formatter):
    assert formatter.format_value("1.5e+25", options=SEPARATOR) == "1.5e+25"


def test_passthrough(formatter):
    assert formatter.format_value("Error") == "Error"
    assert formatter.format_value("") == "0"
    assert formatter.format_value(None) == "0"


class TestProgrammer:
    def test_binary_is_padded_to_nibbles(self, formatter):
        assert formatter.format_value("101", base="BIN", mode="Programmer") == "0101"
        assert formatter.format_value("11111111", base="BIN", mode="Programmer",
                                      options=SEPARATOR) == "1111 1111"

    def test_hex_is_upper_case_in_pairs(self, formatter):
        assert formatter.format_value("ff", base="HEX", mode="Programmer") == "FF"
        assert formatter.format_value("FFFF", base="HEX", mode="Programmer", options=SEPARATOR) == "FF FF"

    def test_expression_keeps_operators(self, formatter):
        assert formatter.format_value("FF + 1", base="HEX", mode="Programmer") == "FF + 1"
        assert formatter.format_value("5 << 2", base="DEC", mode="Programmer") == "5 << 2"


def test_results_are_cached(formatter):
    formatter.format_value("1234", options=SEPARATOR)
    formatter.format_value("1234", options=SEPARATOR)
    assert formatter.cache.hits == 1


def test_negative_value_keeps_sign(formatter):
    assert formatter.format_value("-11", base="BIN", mode="Programmer") == "-0011"
    # the grouper itself only handles bare digits
    assert group_binary("-101") == "-101"
