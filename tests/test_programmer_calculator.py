from MultiCalc import Calculator
from MultiCalc import CalculatorConstants as C

from conftest import press


def inputs(calculator):
    return {base: values["input"] for base, values in calculator.get_display_values().items()}


def test_default_base():
    assert Calculator.ProgrammerCalculator(settings={}).active_base == "DEC"
    assert Calculator.ProgrammerCalculator(settings={"default_base": "HEX"}).active_base == "HEX"


def test_hex_binary_round_trip():
    calculator = Calculator.ProgrammerCalculator(settings={}, base="HEX")
    press(calculator, "F", "F")

    response = calculator.handle_base_change("BIN")
    assert response["active_base"] == "BIN"
    assert response["input"] == "11111111"

    response = calculator.handle_base_change("HEX")
    assert response["input"] == "FF"


def test_shift_fans_out_to_every_base(programmer):
    response = press(programmer, "5", "<<", "2", "=")
    assert response["result"] == "20"
    assert inputs(programmer) == {"BIN": "10100", "OCT": "24", "DEC": "20", "HEX": "14"}


def test_preview_shows_every_base(programmer):
    response = press(programmer, "1", "0")
    displays = {base: values["display"] for base, values in response["display_values"].items()}
    assert displays["HEX"] == "A"
    assert displays["BIN"] == "1010"
    assert displays["OCT"] == "12"


def test_division_truncates(programmer):
    assert press(programmer, "7", "÷", "2", "=")["result"] == "3"
    assert inputs(programmer)["BIN"] == "11"


def test_percent_is_modulo(programmer):
    assert press(programmer, "7", "%", "3", "=")["result"] == "1"


def test_negative_results(programmer):
    press(programmer, "5", "-", "8", "=")
    assert inputs(programmer) == {"BIN": "-11", "OCT": "-3", "DEC": "-3", "HEX": "-3"}


class TestDigitValidation:
    def test_invalid_binary_digit(self):
        calculator = Calculator.ProgrammerCalculator(settings={}, base="BIN")
        response = press(calculator, "1", "2")
        assert not response["success"]
        assert "not a BIN digit" in response["error"]
        assert response["input"] == "1"

    def test_decimal_point_rejected(self, programmer):
        response = press(programmer, "1", ".")
        assert not response["success"]
        assert response["input"] == "1"

    def test_c_is_a_hex_digit(self):
        calculator = Calculator.ProgrammerCalculator(settings={}, base="HEX")
        assert press(calculator, "c")["input"] == "C"

    def test_hex_digit_in_decimal_is_rejected(self, programmer):
        response = press(programmer, "C")
        assert "not a DEC digit" in response["error"]
        assert response["input"] == "0"


def test_invalid_base_change_leaves_state(programmer):
    press(programmer, "4", "2")
    response = programmer.handle_base_change("TRI")
    assert not response["success"]
    assert response["active_base"] == "DEC"
    assert response["input"] == "42"


def test_overflow_at_max_value(programmer):
    response = press(programmer, *str(C.MAX_VALUE), "=")
    assert response["result"] == str(C.MAX_VALUE)
    assert inputs(programmer)["HEX"] == "7FFFFFFFFFFFFFFF"

    response = press(programmer, "+", "1", "=")
    assert response["input"] == "Error"
    assert response["error"].startswith("Overflow")


def test_all_clear_resets_every_base(programmer):
    press(programmer, "1", "5", "=", "AC")
    assert set(inputs(programmer).values()) == {"0"}


def test_base_switch_evaluates_pending_expression(programmer):
    press(programmer, "3", "+", "4")
    response = programmer.handle_base_change("BIN")
    assert response["input"] == "111"
    assert inputs(programmer)["DEC"] == "7"


def test_programmer_input_ceiling():
    calculator = Calculator.ProgrammerCalculator(settings={}, base="BIN")
    press(calculator, *["1"] * C.MAX_INPUT_LENGTH["Programmer"])
    response = press(calculator, "0")
    assert response["error"] == "Maximum input length reached"
