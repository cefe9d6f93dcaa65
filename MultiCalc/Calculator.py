# Calculator.py
"""""
Calculator engines for the three modes: Standard, Scientific and Programmer.

Every engine exposes the same entry point, handle_button_click(token), which never
raises. It returns a plain response dict:

    {"input", "error", "expression", "display", "success", ["result"], ["display_values"]}

Flow per token
--------------
1) An "Error" buffer is cleared implicitly unless the token itself is a reset.
2) The input length ceiling is checked against the edited buffer (some tokens are exempt).
3) The token is dispatched: buffer edits go to the mode's Operations helper,
   evaluation and formatting go to the mode's Calculations helper.
4) Failures become response data. Rejected input leaves the buffer alone, any
   evaluation failure turns the buffer into "Error".

Callers tell the engines apart with is_programmer_variant() / is_scientific_variant().
"""""

import logging
import re
from dataclasses import dataclass

from . import CalculatorConstants as C
from . import CalculatorUtils as U
from . import config_manager
from . import error as E
from .DisplayFormatter import DisplayFormatter
from .MathEngine import ExpressionEvaluator
from .Memory import Memory
from .ProgrammerCalculations import ProgrammerCalculations
from .ProgrammerOperations import ProgrammerOperations
from .ScientificCalculations import ScientificCalculations
from .ScientificOperations import ScientificOperations, WRAPPERS
from .StandardCalculations import StandardCalculations
from .StandardOperations import StandardOperations, UNARY_TRANSFORMS

logger = logging.getLogger(__name__)

_DECIMAL_DIGIT = re.compile(r"[0-9]+")
_BASE_DIGIT = re.compile(r"[0-9A-Fa-f]")
_BASIC_OPERATOR_TOKENS = ("+", "-", "−", "×", "÷", "*", "/")


@dataclass
class CalculatorState:
    input: str = "0"
    display: str = "0"
    # True while `display` still shows the last value that could be computed
    stale: bool = False


def load_settings(settings=None):
    merged = dict(config_manager.DEFAULT_SETTINGS)
    merged.update(config_manager.load_setting_value("all") if settings is None else settings)
    return merged


# -----------------------------
# Shared engine behaviour
# -----------------------------

class CalculatorBase:
    mode = "Standard"
    reset_tokens = ("AC", "C", "CE")
    # Mode commands that never grow the buffer
    command_tokens = ()

    def __init__(self, settings=None, evaluator=None, formatter=None):
        self.settings = load_settings(settings)
        self.evaluator = evaluator if evaluator is not None else ExpressionEvaluator()
        self.formatter = formatter if formatter is not None else DisplayFormatter()
        self.memory = Memory()
        self.error = ""
        self.max_length = C.MAX_INPUT_LENGTH[self.mode]
        self.limit_length = False

    # --- state access ---

    @property
    def state(self):
        return self._state

    @property
    def input(self):
        return self.state.input

    @input.setter
    def input(self, value):
        self.state.input = value

    @property
    def display(self):
        return self.state.display

    @property
    def tracker(self):
        return self.operations.tracker

    # --- the single entry point ---

    def handle_button_click(self, token):
        token = str(token)
        logger.debug("%s: token %r on %r", self.mode, token, self.input)

        try:
            # --- 1. Implicit clear after an error ---
            if self.input == "Error" and token not in self.reset_tokens:
                self.clear()

            # --- 2. Length ceiling (enforced in edit() on the expanded buffer) ---
            self.limit_length = (token not in C.LENGTH_EXEMPT_TOKENS and token not in self.reset_tokens
                                 and token not in self.command_tokens)

            # --- 3. Dispatch ---
            response = self.dispatch(token)
            self.error = ""
            return response

        # Rejected input: buffer untouched
        except E.InputError as e:
            self.error = e.message
            logger.debug("%s: rejected %r: %s", self.mode, token, e.message)
            return self.create_response(error=e.message)
        except E.MathError as e:
            return self.fail(e)
        # Convert unexpected Python exceptions to our unified error type
        except Exception as e:
            logger.exception("%s: unexpected error on token %r", self.mode, token)
            return self.fail(E.MathError(E.message_for(E.UNEXPECTED, str(e)), code=E.UNEXPECTED))

    def fail(self, error):
        logger.debug("%s: error %s (%s) on %r", self.mode, error.code, error.message, error.equation)
        self.input = "Error"
        self.state.display = "Error"
        self.state.stale = False
        self.tracker.reset()
        self.error = error.message
        return self.create_response(error=error.message)

    def create_response(self, error="", expression="", result=None):
        return U.create_response(input=self.input, error=error, expression=expression,
                                 result=result, display=self.display)

    # --- shared dispatch pieces ---

    def dispatch(self, token):
        raise NotImplementedError

    def edit(self, new_input):
        """Assign an edited buffer and refresh the preview."""
        if self.limit_length and len(new_input) > self.max_length:
            # The rejected edit may already have registered a '('
            self.tracker.rebuild(self.input)
            raise E.InputError(E.ERROR_MESSAGES[E.MAX_INPUT_LENGTH], code=E.MAX_INPUT_LENGTH)
        self.input = new_input
        self.refresh_display()
        return self.create_response()

    def dispatch_common(self, token):
        """Tokens every mode handles alike. Returns None if `token` is not one of them."""
        ops = self.operations

        if token == "=":
            return self.calculate()
        if token == "AC":
            self.clear()
            return self.create_response()
        if token == "CE":
            return self.edit(ops.clear_entry(self.input))
        if token == "backspace":
            return self.edit(ops.backspace(self.input))
        if token == "±":
            return self.edit(ops.toggle_sign(self.input))
        if token == "(":
            return self.edit(ops.open_parenthesis(self.input))
        if token == ")":
            return self.edit(ops.close_parenthesis(self.input))
        if token in C.MEMORY_TOKENS:
            return self.handle_memory(token)
        return None

    def reject(self, token):
        raise E.InputError(E.message_for(E.INVALID_INPUT, token), code=E.INVALID_INPUT)

    def closed_input(self):
        """Buffer with one ')' appended per open group (auto-close on evaluation)."""
        return U.close_open_parentheses(self.input, self.tracker.get_open_count())

    def calculate(self):
        expression = self.closed_input()
        value = self.evaluate_expression(expression)
        result = self.format_result(value)
        logger.debug("%s: %r = %s", self.mode, expression, result)

        self.store_result(result, value)
        self.tracker.reset()
        self.refresh_display()
        return self.create_response(expression=expression, result=result)

    def store_result(self, result, value):
        self.input = result

    def clear(self):
        self.input = "0"
        self.state.display = "0"
        self.state.stale = False
        self.tracker.reset()
        self.error = ""

    def refresh_display(self):
        """Recompute the preview from the buffer, or mark it stale."""
        state = self.state
        if state.input == "Error":
            state.display = "Error"
            return
        try:
            value = self.evaluate_expression(self.closed_input())
            state.display = self.formatter.format_value(self.format_result(value), mode=self.mode,
                                                        options=self.settings)
            state.stale = False
        except E.MathError as e:
            state.stale = True
            logger.debug("%s: preview of %r is stale: %s", self.mode, state.input, e.message)

    def handle_memory(self, token):
        if token == "MC":
            self.memory.clear()
            return self.create_response()
        if token == "MR":
            recalled = self.format_result(self.memory.recall())
            return self.edit(self.operations.replace_operand(self.input, recalled))

        value = self.evaluate_expression(self.closed_input())
        if token == "MS":
            self.memory.store(value)
        elif token == "M+":
            self.memory.add(value)
        else:
            self.memory.subtract(value)
        return self.create_response()

    # --- accessors ---

    def evaluate_expression(self, expr, base=None):
        return self.calculations.evaluate_expression(expr)

    def format_result(self, value, base=None):
        return self.calculations.format_result(value)


# -----------------------------
# Standard
# -----------------------------

class StandardCalculator(CalculatorBase):
    mode = "Standard"

    def __init__(self, settings=None, evaluator=None, formatter=None):
        super().__init__(settings, evaluator, formatter)
        self._state = CalculatorState()
        self.operations = StandardOperations()
        self.calculations = StandardCalculations(self.settings, self.evaluator)

    def dispatch(self, token):
        if token == "C":
            self.clear()
            return self.create_response()

        response = self.dispatch_common(token)
        if response is not None:
            return response

        ops = self.operations
        if token in _BASIC_OPERATOR_TOKENS:
            return self.edit(ops.append_operator(self.input, token))
        if token in UNARY_TRANSFORMS:
            return self.edit(ops.apply_unary(self.input, UNARY_TRANSFORMS[token],
                                             self.evaluate_expression, self.format_result))
        if _DECIMAL_DIGIT.fullmatch(token) or token == ".":
            return self.edit(ops.append_digit(self.input, token))
        self.reject(token)


# -----------------------------
# Scientific
# -----------------------------

class ScientificCalculator(CalculatorBase):
    mode = "Scientific"
    command_tokens = C.ANGLE_MODES + ("F-E", "HYP")

    def __init__(self, settings=None, evaluator=None, formatter=None, angle_mode=None):
        super().__init__(settings, evaluator, formatter)
        self._state = CalculatorState()
        self.operations = ScientificOperations()
        if angle_mode is None:
            angle_mode = C.ANGLE_UNITS.get(self.settings.get("angle_unit"), "DEG")
        self.calculations = ScientificCalculations(self.settings, self.evaluator, angle_mode=angle_mode)
        self.hyperbolic = False

    @property
    def angle_mode(self):
        return self.calculations.angle_mode

    @property
    def notation_mode(self):
        return self.calculations.notation_mode

    def set_angle_mode(self, angle_mode):
        if angle_mode not in C.ANGLE_MODES:
            raise E.InputError(E.message_for(E.INVALID_INPUT, f"unknown angle mode {angle_mode}"),
                               code=E.INVALID_INPUT)
        self.calculations.set_angle_mode(angle_mode)
        self.refresh_display()

    def set_notation_mode(self, notation_mode):
        if notation_mode not in C.NOTATION_MODES:
            raise E.InputError(E.message_for(E.INVALID_INPUT, f"unknown notation {notation_mode}"),
                               code=E.INVALID_INPUT)
        self.calculations.notation_mode = notation_mode
        self.refresh_display()

    def toggle_hyperbolic(self):
        self.hyperbolic = not self.hyperbolic
        return self.hyperbolic

    def create_response(self, error="", expression="", result=None):
        response = super().create_response(error, expression, result)
        response["angle_mode"] = self.angle_mode
        response["notation_mode"] = self.notation_mode
        response["hyperbolic"] = self.hyperbolic
        return response

    def dispatch(self, token):
        if token == "C":
            self.clear()
            return self.create_response()

        # --- Mode commands ---
        if token in C.ANGLE_MODES:
            self.set_angle_mode(token)
            return self.create_response()
        if token == "F-E":
            self.set_notation_mode("SCI" if self.notation_mode == "F-E" else "F-E")
            return self.create_response()
        if token == "HYP":
            self.toggle_hyperbolic()
            return self.create_response()

        response = self.dispatch_common(token)
        if response is not None:
            return response

        ops = self.operations
        if token in _BASIC_OPERATOR_TOKENS or token == "mod":
            return self.edit(ops.append_operator(self.input, token))
        if token in WRAPPERS:
            return self.edit(ops.wrap_operand(self.input, token))
        if token in ("x^y", "xʸ", "^"):
            return self.edit(ops.append_power(self.input))
        if token in ("n!", "!"):
            return self.edit(ops.append_factorial(self.input))
        if token in C.SCIENTIFIC_INSERTIONS:
            return self.edit(ops.insert_opener(self.input, C.SCIENTIFIC_INSERTIONS[token]))
        if token in C.SCIENTIFIC_FUNCTIONS or token in C.FUNCTION_MAPPINGS:
            return self.edit(ops.insert_function(self.input, token, self.hyperbolic))
        if token in C.CONSTANTS:
            return self.edit(ops.insert_value(self.input, token))
        if token == "rand":
            return self.edit(ops.insert_random(self.input))
        if token == ",":
            return self.edit(ops.append_comma(self.input))
        if token == "%":
            return self.edit(ops.apply_unary(self.input, UNARY_TRANSFORMS["%"],
                                             self.evaluate_expression, self.format_result))
        if _DECIMAL_DIGIT.fullmatch(token) or token == ".":
            return self.edit(ops.append_digit(self.input, token))
        self.reject(token)


# -----------------------------
# Programmer
# -----------------------------

class ProgrammerCalculator(CalculatorBase):
    mode = "Programmer"
    # 'C' is a hex digit here
    reset_tokens = ("AC", "CE")
    command_tokens = tuple(C.BASES)

    def __init__(self, settings=None, evaluator=None, formatter=None, base=None):
        super().__init__(settings, evaluator, formatter)
        self.states = {name: CalculatorState() for name in C.BASES}
        self.operations = ProgrammerOperations()
        self.calculations = ProgrammerCalculations(self.settings, self.evaluator)

        base = base or self.settings.get("default_base") or "DEC"
        self.active_base = base if base in C.BASES else "DEC"

    @property
    def state(self):
        return self.states[self.active_base]

    def create_response(self, error="", expression="", result=None):
        response = super().create_response(error, expression, result)
        response["display_values"] = self.get_display_values()
        response["active_base"] = self.active_base
        return response

    def get_display_values(self):
        return {name: {"input": state.input, "display": state.display}
                for name, state in self.states.items()}

    def dispatch(self, token):
        if token in C.BASES:
            return self.change_base(token)

        response = self.dispatch_common(token)
        if response is not None:
            return response

        ops = self.operations
        if token in _BASIC_OPERATOR_TOKENS or token in ("%", "<<", ">>"):
            return self.edit(ops.append_operator(self.input, token))
        if _BASE_DIGIT.fullmatch(token) or _DECIMAL_DIGIT.fullmatch(token) or token == ".":
            return self.edit(ops.append_digit(self.input, token, self.active_base))
        self.reject(token)

    # --- accessors ---

    def evaluate_expression(self, expr, base=None):
        return self.calculations.evaluate_expression(expr, base or self.active_base)

    def format_result(self, value, base=None):
        return self.calculations.format_result(value, base or self.active_base)

    def convert_to_base(self, value, from_base, to_base):
        return self.calculations.convert_to_base(value, from_base, to_base)

    # --- multi-base synchrony ---

    def store_result(self, result, value):
        self.update_all_states(value)

    def update_all_states(self, value):
        """Fan one evaluated value out to all four buffers."""
        rendered = self.calculations.fan_out(value)
        for name, text in rendered.items():
            self.states[name].input = text
        self.operations.load_value(rendered[self.active_base])

    def refresh_display(self):
        self.update_display_values()

    def update_display_values(self):
        """Re-derive every base's display from the active buffer."""
        active = self.state
        if active.input == "Error":
            active.display = "Error"
            return self.get_display_values()
        try:
            value = self.evaluate_expression(self.closed_input())
            rendered = self.calculations.fan_out(value)
        except E.MathError as e:
            for state in self.states.values():
                state.stale = True
            logger.debug("Programmer: preview of %r is stale: %s", active.input, e.message)
            return self.get_display_values()

        for name, text in rendered.items():
            state = self.states[name]
            state.display = self.formatter.format_value(text, base=name, mode=self.mode, options=self.settings)
            state.stale = False
        return self.get_display_values()

    def handle_base_change(self, new_base):
        """Switch the active base (same as clicking the base button)."""
        if new_base not in C.BASES:
            message = E.message_for(E.INVALID_BASE, new_base)
            self.error = message
            return self.create_response(error=message)
        return self.handle_button_click(new_base)

    def change_base(self, new_base):
        """Evaluate the active buffer, fan it out to all bases, then switch.

        An "Error" buffer never gets here: it is cleared before dispatch.
        """
        value = self.evaluate_expression(self.closed_input())
        self.update_all_states(value)

        self.tracker.reset()
        self.active_base = new_base
        self.update_display_values()
        return self.create_response()

    def clear(self):
        for state in self.states.values():
            state.input = "0"
            state.display = "0"
            state.stale = False
        self.tracker.reset()
        self.error = ""


# -----------------------------
# Capability checks and factory
# -----------------------------

def is_programmer_variant(calculator):
    return callable(getattr(calculator, "handle_base_change", None))


def is_scientific_variant(calculator):
    return callable(getattr(calculator, "set_angle_mode", None))


CALCULATOR_MODES = {
    "Standard": StandardCalculator,
    "Scientific": ScientificCalculator,
    "Programmer": ProgrammerCalculator
}


def available_modes():
    return tuple(CALCULATOR_MODES)


def create_calculator(mode="Standard", settings=None, **kwargs):
    for name, calculator_class in CALCULATOR_MODES.items():
        if str(mode).lower() == name.lower():
            return calculator_class(settings=settings, **kwargs)
    raise ValueError(f"Unknown calculator mode: {mode}")
