# ScientificOperations.py
"""""
Buffer editing for the Scientific calculator: function openers, constants, postfix
factorial, powers, argument commas and operand wrapping (1/x, dms, deg).
"""""

import random

from . import CalculatorConstants as C
from . import CalculatorUtils as U
from .StandardOperations import StandardOperations

# Buttons that wrap the trailing operand: token -> (prefix, suffix)
WRAPPERS = {
    "1/x": ("(1 ÷ ", ")"),
    "dms": ("dms(", ")"),
    "deg": ("deg(", ")")
}


class ScientificOperations(StandardOperations):
    group_endings = (")", "!", "π", "e")
    openers = C.FUNCTION_OPENERS

    def function_name(self, token, hyperbolic=False):
        """Primitive name for a function button, honouring the hyperbolic toggle."""
        name = C.FUNCTION_MAPPINGS.get(token, token)
        if hyperbolic:
            name = C.HYPERBOLIC_MAPPINGS.get(name, name)
        return name

    def insert_opener(self, buffer, opener):
        """Insert 'name(' with an implicit × after an operand."""
        if buffer == "0":
            new = opener
        elif buffer == "-0":
            new = "-" + opener
        elif self.ends_with_operand(buffer):
            new = f"{buffer} × {opener}"
        else:
            new = buffer + opener
        self.tracker.open(len(new) - 1)
        return new

    def insert_function(self, buffer, token, hyperbolic=False):
        return self.insert_opener(buffer, self.function_name(token, hyperbolic) + "(")

    def append_power(self, buffer):
        """x^y: '^(' directly after the base operand."""
        if not self.ends_with_operand(buffer):
            return buffer
        new = buffer + "^("
        self.tracker.open(len(new) - 1)
        return new

    def append_factorial(self, buffer):
        if not self.ends_with_operand(buffer) or buffer.endswith("."):
            return buffer
        return buffer + "!"

    def append_comma(self, buffer):
        """Argument separator, only inside an open function call."""
        if buffer in ("0", "Error") or self.tracker.get_open_count() == 0:
            return buffer
        if self.expects_operand(buffer):
            return buffer
        return buffer.rstrip() + ", "

    def insert_random(self, buffer):
        value = U.trim_unnecessary_zeros(f"{random.random():.10f}")
        return self.insert_value(buffer, value)

    def wrap_operand(self, buffer, token):
        """Wrap the trailing operand: '2 + 4' with 1/x -> '2 + (1 ÷ 4)'."""
        if buffer == "Error" or self.expects_operand(buffer):
            return buffer
        prefix, suffix = WRAPPERS[token]
        head, operand = U.split_last_operand(buffer)
        if not operand:
            return buffer
        new = f"{head}{prefix}{operand}{suffix}"
        self.tracker.rebuild(new)
        return new
