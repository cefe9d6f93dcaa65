import pytest

from MultiCalc import Calculator
from MultiCalc import CalculatorConstants as C

from conftest import press


def test_precedence(standard):
    response = press(standard, "1", "2", "+", "8", "×", "2", "=")
    assert response["success"]
    assert response["result"] == "28"
    assert response["input"] == "28"
    assert response["expression"] == "12 + 8 × 2"


def test_preview_follows_buffer(standard):
    response = press(standard, "1", "2", "+", "8", "×", "2")
    assert response["input"] == "12 + 8 × 2"
    assert response["display"] == "28"


def test_preview_keeps_last_value_while_incomplete(standard):
    response = press(standard, "5", "÷", "0")
    assert response["success"]
    assert response["display"] == "5"
    assert standard.state.stale


def test_backspace_removes_whole_operator(standard):
    response = press(standard, "1", "2", "+", "backspace")
    assert response["input"] == "12"
    assert press(standard, "backspace")["input"] == "1"
    assert press(standard, "backspace")["input"] == "0"


class TestOperatorEntry:
    def test_operator_on_zero_is_ignored(self, standard):
        assert press(standard, "+")["input"] == "0"

    def test_new_operator_replaces_trailing_one(self, standard):
        assert press(standard, "5", "+", "×")["input"] == "5 × "

    def test_minus_after_times_starts_negative_operand(self, standard):
        response = press(standard, "5", "×", "-", "3", "=")
        assert response["result"] == "-15"

    def test_backspace_drops_only_the_sign(self, standard):
        assert press(standard, "5", "×", "-", "backspace")["input"] == "5 × "


def test_equals_is_idempotent(standard):
    press(standard, "5", "+", "3", "=")
    assert press(standard, "=")["input"] == "8"


def test_division_by_zero_becomes_error_state(standard):
    response = press(standard, "5", "÷", "0", "=")
    assert not response["success"]
    assert response["error"] == "Division by zero is not allowed"
    assert response["input"] == "Error"

    # next digit starts over
    assert press(standard, "7")["input"] == "7"


def test_rejected_token_leaves_buffer(standard):
    press(standard, "4", "2")
    response = press(standard, "sin")
    assert not response["success"]
    assert response["input"] == "42"


def test_input_length_ceiling(standard):
    press(standard, *["1"] * C.MAX_INPUT_LENGTH["Standard"])
    response = press(standard, "1")
    assert response["error"] == "Maximum input length reached"
    assert len(response["input"]) == C.MAX_INPUT_LENGTH["Standard"]
    # editing tokens are still accepted
    assert len(press(standard, "backspace")["input"]) == C.MAX_INPUT_LENGTH["Standard"] - 1


def test_max_value_boundary(standard):
    response = press(standard, *str(C.MAX_VALUE), "=")
    assert response["result"] == str(C.MAX_VALUE)

    response = press(standard, "+", "1", "=")
    assert response["error"].startswith("Overflow")
    assert response["input"] == "Error"


def test_equals_closes_open_parentheses(standard):
    # Lenient: missing ')' are supplied on '='
    response = press(standard, "(", "2", "+", "3", "=")
    assert response["result"] == "5"
    assert response["expression"] == "(2 + 3)"


def test_close_parenthesis_needs_operand(standard):
    assert press(standard, "(", ")")["input"] == "("
    assert press(standard, "4", ")", "×", "2", "=")["result"] == "8"


def test_digit_after_group_multiplies(standard):
    assert press(standard, "(", "2", ")", "3")["input"] == "(2) × 3"


class TestTransforms:
    def test_percent(self, standard):
        assert press(standard, "5", "0", "%")["input"] == "0.5"

    def test_square(self, standard):
        assert press(standard, "1", "2", "x²")["input"] == "144"

    def test_reciprocal(self, standard):
        assert press(standard, "4", "1/x")["input"] == "0.25"

    def test_square_root_of_negative(self, standard):
        response = press(standard, "9", "±", "√")
        assert response["input"] == "Error"
        assert "square root" in response["error"]


class TestEditing:
    def test_decimal_point(self, standard):
        assert press(standard, ".", "5", ".")["input"] == "0.5"

    def test_toggle_sign_of_last_operand(self, standard):
        assert press(standard, "3", "+", "4", "±")["input"] == "3 + -4"

    def test_clear_entry(self, standard):
        assert press(standard, "3", "+", "4", "5", "CE")["input"] == "3 + "
        assert press(standard, "CE")["input"] == "3"
        assert press(standard, "CE")["input"] == "0"

    def test_clear(self, standard):
        response = press(standard, "3", "+", "4", "C")
        assert response["input"] == "0"
        assert response["display"] == "0"


def test_memory(standard):
    press(standard, "5", "MS", "AC")
    assert press(standard, "MR")["input"] == "5"
    press(standard, "M+", "AC", "MR")
    assert standard.input == "10"
    press(standard, "MC", "MR")
    assert standard.input == "0"


def test_fractions_setting():
    calculator = Calculator.StandardCalculator(settings={"use_fractions": True})
    assert press(calculator, "1", "÷", "3", "=")["result"] == "1/3"


def test_precision_setting():
    calculator = Calculator.StandardCalculator(settings={"precision": 3})
    assert press(calculator, "2", "÷", "3", "=")["result"] == "0.667"


def test_thousands_separator_only_touches_display():
    calculator = Calculator.StandardCalculator(settings={"use_thousands_separator": True})
    response = press(calculator, *"1234567")
    assert response["input"] == "1234567"
    assert response["display"] == "1,234,567"


def test_unexpected_exception_becomes_response(standard, monkeypatch):
    def broken(buffer, digit):
        raise RuntimeError("boom")

    monkeypatch.setattr(standard.operations, "append_digit", broken)
    response = standard.handle_button_click("1")
    assert not response["success"]
    assert response["error"] == "Unexpected Error: boom"
    assert response["input"] == "Error"


class TestFactory:
    def test_case_insensitive(self):
        calculator = Calculator.create_calculator("scientific", settings={})
        assert isinstance(calculator, Calculator.ScientificCalculator)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            Calculator.create_calculator("Graphing", settings={})

    def test_capabilities(self):
        programmer = Calculator.create_calculator("Programmer", settings={})
        standard = Calculator.create_calculator("Standard", settings={})
        assert Calculator.is_programmer_variant(programmer)
        assert not Calculator.is_programmer_variant(standard)
        assert not Calculator.is_scientific_variant(standard)
        assert Calculator.available_modes() == ("Standard", "Scientific", "Programmer")


def test_length_ceiling_counts_operator_padding(standard):
    press(standard, *["1"] * (C.MAX_INPUT_LENGTH["Standard"] - 1))
    # '+' is stored as " + ", which would take the buffer past the ceiling
    response = press(standard, "+")
    assert response["error"] == "Maximum input length reached"
    assert len(standard.input) == C.MAX_INPUT_LENGTH["Standard"] - 1


def test_backspace_drops_exponent_in_one_step(standard):
    response = press(standard, "1", "÷", *"300000000", "=")
    assert response["result"] == "3.3333333333e-9"

    response = press(standard, "backspace")
    assert response["input"] == "3.3333333333"
    assert response["display"] == "3.3333333333"


def test_backspace_keeps_operator_padding(standard):
    assert press(standard, "1", "2", "+", "3", "backspace")["input"] == "12 + "
    assert press(standard, "4")["input"] == "12 + 4"


class TestParenthesesBalance:
    def test_equals_leaves_no_open_group(self, standard):
        press(standard, "(", "(", "2")
        assert standard.tracker.get_open_count() == 2
        response = press(standard, "=")
        assert response["result"] == "2"
        assert standard.tracker.get_open_count() == 0

    def test_backspace_over_parentheses(self, standard):
        press(standard, "(", "2", ")")
        assert standard.tracker.get_open_count() == 0
        assert press(standard, "backspace")["input"] == "(2"
        assert standard.tracker.get_open_count() == 1
        press(standard, "backspace", "backspace")
        assert standard.input == "0"
        assert standard.tracker.get_open_count() == 0


def test_memory_add_past_max_value_overflows(standard):
    press(standard, *str(C.MAX_VALUE), "MS")
    response = press(standard, "M+")
    assert response["error"].startswith("Overflow")
    assert standard.memory.recall() == C.MAX_VALUE
