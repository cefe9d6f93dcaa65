import pytest

from MultiCalc import Calculator
from MultiCalc import CalculatorConstants as C
from MultiCalc import error as E

from conftest import press


def test_default_angle_unit_comes_from_settings():
    assert Calculator.ScientificCalculator(settings={}).angle_mode == "DEG"
    assert Calculator.ScientificCalculator(settings={"angle_unit": "radians"}).angle_mode == "RAD"


def test_sine_in_degrees(scientific):
    response = press(scientific, "sin", "9", "0", "=")
    assert response["expression"] == "sin(90)"
    assert response["result"] == "1"


def test_angle_mode_command(scientific):
    response = press(scientific, "RAD")
    assert response["angle_mode"] == "RAD"
    assert response["input"] == "0"
    assert press(scientific, "cos", "0", "=")["result"] == "1"


def test_log_of_negative_is_domain_error(scientific):
    response = press(scientific, "log", "-", "5", "=")
    assert not response["success"]
    assert "log(-5)" in response["error"]
    assert response["input"] == "Error"


def test_hyperbolic_toggle(scientific):
    assert press(scientific, "HYP")["hyperbolic"] is True
    response = press(scientific, "sin", "0")
    assert response["input"] == "sinh(0"
    assert press(scientific, "=")["result"] == "0"


def test_scientific_notation(scientific):
    press(scientific, "1", "2", "3", "4", "5")
    assert press(scientific, "F-E")["notation_mode"] == "SCI"
    assert press(scientific, "=")["result"] == "1.2345e+4"


def test_constant_after_digit_multiplies(scientific):
    response = press(scientific, "2", "π", "=")
    assert response["expression"] == "2 × π"
    assert response["result"] == "6.2831853072"


def test_factorial(scientific):
    assert press(scientific, "5", "n!", "=")["result"] == "120"


def test_power(scientific):
    response = press(scientific, "2", "x^y", "1", "0", "=")
    assert response["expression"] == "2^(10)"
    assert response["result"] == "1024"


def test_mod_operator(scientific):
    assert press(scientific, "7", "mod", "3", "=")["result"] == "1"


def test_function_arguments(scientific):
    response = press(scientific, "gcd", "1", "2", ",", "1", "8", "=")
    assert response["expression"] == "gcd(12, 18)"
    assert response["result"] == "6"


def test_comma_outside_call_is_ignored(scientific):
    assert press(scientific, "1", ",")["input"] == "1"


def test_backspace_removes_function_opener(scientific):
    response = press(scientific, "sin", "backspace")
    assert response["input"] == "0"
    assert scientific.tracker.get_open_count() == 0


def test_reciprocal_wraps_last_operand(scientific):
    response = press(scientific, "2", "+", "4", "1/x")
    assert response["input"] == "2 + (1 ÷ 4)"
    assert press(scientific, "=")["result"] == "2.25"


def test_square_inserts_function(scientific):
    assert press(scientific, "x²", "3", "=")["result"] == "9"


def test_invalid_angle_mode_raises():
    calculator = Calculator.ScientificCalculator(settings={})
    with pytest.raises(E.InputError):
        calculator.set_angle_mode("TURN")


class TestZeroDivisor:
    def test_zero_factorial_is_a_valid_divisor(self, scientific):
        response = press(scientific, "5", "÷", "0", "n!", "=")
        assert response["expression"] == "5 ÷ 0!"
        assert response["result"] == "5"

    def test_zero_to_the_zero_is_a_valid_divisor(self, scientific):
        response = press(scientific, "5", "÷", "0", "x^y", "0", "=")
        assert response["expression"] == "5 ÷ 0^(0)"
        assert response["result"] == "5"

    def test_plain_zero_divisor_still_fails(self, scientific):
        response = press(scientific, "5", "÷", "0", "=")
        assert response["error"] == "Division by zero is not allowed"


def test_length_ceiling_counts_function_opener(scientific):
    press(scientific, *["1"] * (C.MAX_INPUT_LENGTH["Scientific"] - 3))
    response = press(scientific, "sin")
    assert response["error"] == "Maximum input length reached"
    assert scientific.input == "1" * (C.MAX_INPUT_LENGTH["Scientific"] - 3)
    assert scientific.tracker.get_open_count() == 0
