# StandardOperations.py
"""""
Buffer editing for the Standard calculator.

Every method takes the current buffer text and returns the new text; the calculator
owns the buffer and assigns the result. The only state kept here is the parentheses
tracker, which has to follow every '(' and ')' typed or deleted.
"""""

import re

from . import BaseConverter
from . import CalculatorUtils as U
from . import error as E
from .ParenthesesTracker import ParenthesesTracker

_DIGITS = re.compile(r"[0-9A-Fa-f]$")
# Exponent of a result like "3.3e-9"; backspace drops it in one step
_EXPONENT_SUFFIX = re.compile(r"(?<=\d)e[+\-]?\d*$")

# Display aliases accepted for the four basic operators
OPERATOR_ALIASES = {
    "*": "×",
    "/": "÷",
    "−": "-",
    "x": "×"
}

# Operators after which a '-' starts a negative number instead of replacing them
NEGATABLE_OPERATORS = ("×", "÷", "+", "mod", "%")


# -----------------------------
# Value transforms (%, x², √, 1/x)
# -----------------------------

def percent(value):
    return value / 100


def square(value):
    return value * value


def square_root(value):
    if value < 0:
        raise E.DomainError(E.ERROR_MESSAGES["2011"], code=E.DOMAIN_ERROR)
    return value.sqrt()


def reciprocal(value):
    if value == 0:
        raise E.division_by_zero()
    return 1 / value


UNARY_TRANSFORMS = {
    "%": percent,
    "x²": square,
    "√": square_root,
    "1/x": reciprocal
}


class StandardOperations:
    # Characters that close an operand group (a digit after them needs an implicit ×)
    group_endings = (")", "!")
    # Function openers removed as one unit by backspace
    openers = ()

    def __init__(self, tracker=None):
        self.tracker = tracker if tracker is not None else ParenthesesTracker()

    # -----------------------------
    # Helpers
    # -----------------------------

    def ends_with_group(self, buffer):
        return buffer.endswith(self.group_endings)

    def ends_with_operand(self, buffer):
        return self.ends_with_group(buffer) or bool(_DIGITS.search(buffer)) or buffer.endswith(".")

    def expects_operand(self, buffer):
        """True right after an operator, an open paren or a comma."""
        stripped = buffer.rstrip()
        return U.ends_with_operator(buffer) or stripped.endswith(("(", ","))

    def _mirror_deletion(self, before, after):
        for position in range(len(before) - 1, len(after) - 1, -1):
            if before[position] in "()":
                self.tracker.handle_backspace(position, before)

    # -----------------------------
    # Entry
    # -----------------------------

    def append_digit(self, buffer, digit):
        if digit == ".":
            return self.append_decimal_point(buffer)
        if buffer == "0":
            return digit
        if buffer == "-0":
            return "-" + digit
        if self.ends_with_group(buffer):
            return f"{buffer} × {digit}"

        head, operand = U.split_last_operand(buffer)
        if operand in ("0", "-0"):
            # "5 + 0" then "3" -> "5 + 3"
            return head + operand[:-1] + digit
        return buffer + digit

    def append_decimal_point(self, buffer):
        if self.ends_with_group(buffer):
            return f"{buffer} × 0."
        operand = U.split_last_operand(buffer)[1]
        if "." in operand or "e" in operand:
            return buffer
        if not operand or operand == "-":
            return buffer + "0."
        return buffer + "."

    def append_operator(self, buffer, operator):
        operator = OPERATOR_ALIASES.get(operator, operator)
        current = buffer.rstrip()

        if current in ("0", ""):
            return buffer

        # Right after '(' or ',' only a sign is accepted
        if current.endswith(("(", ",")):
            return current + "-" if operator == "-" else buffer

        state = U.trailing_operator(current)
        if state is None:
            return f"{current} {operator} "

        head, last, negative = state
        if not head.strip() or head.rstrip().endswith(("(", ",")):
            # "(-": the trailing '-' is a sign, not an operator
            return buffer

        if operator == "-" and not negative and last in NEGATABLE_OPERATORS:
            return f"{head} {last} -"
        return f"{head} {operator} "

    def insert_value(self, buffer, text):
        """Insert a literal (constant, random number) with implicit × after an operand."""
        if buffer in ("0", "-0"):
            return text if buffer == "0" else "-" + text
        if self.expects_operand(buffer):
            return buffer + text
        return f"{buffer} × {text}"

    def replace_operand(self, buffer, text):
        """Replace the trailing operand with `text` (memory recall)."""
        if buffer == "0":
            return text
        if self.expects_operand(buffer):
            return buffer + text
        head = U.split_last_operand(buffer)[0]
        new = head + text
        self.tracker.rebuild(new)
        return new

    # -----------------------------
    # Editing
    # -----------------------------

    def backspace(self, buffer):
        if buffer in ("0", "Error", ""):
            return "0"

        state = U.trailing_operator(buffer)
        if state is not None:
            head, last, negative = state
            # "3 × -" loses only the sign, "12 + " loses the whole operator
            new = f"{head} {last} " if negative and head.strip() else head
        else:
            opener = next((o for o in self.openers if buffer.endswith(o)), None)
            exponent = _EXPONENT_SUFFIX.search(buffer)
            if opener:
                new = buffer[:-len(opener)].rstrip()
            elif exponent:
                new = buffer[:exponent.start()]
            else:
                new = buffer.rstrip()[:-1].rstrip()

        if new == "-":
            new = ""
        self._mirror_deletion(buffer, new)

        # "12 + 3" -> "12 + ", keeping the padded operator form
        tail = U.trailing_operator(new)
        if tail is not None and not tail[2] and tail[0].strip():
            new = f"{tail[0]} {tail[1]} "
        return new or "0"

    def clear_entry(self, buffer):
        if buffer in ("0", "Error", ""):
            new = "0"
        else:
            state = U.trailing_operator(buffer)
            if state is not None:
                new = state[0]
            else:
                new = U.split_last_operand(buffer)[0]
            if not new.strip():
                new = "0"
        self.tracker.rebuild(new)
        return new

    def toggle_sign(self, buffer):
        """Negate the last operand only: '3 + 4' -> '3 + -4', '(3 + 4)' -> '-(3 + 4)'."""
        if buffer in ("0", "Error") or self.expects_operand(buffer):
            return buffer

        head, operand = U.split_last_operand(buffer)
        if not operand or operand in ("0", "-0"):
            return buffer
        if operand.startswith("-"):
            operand = operand[1:]
        else:
            operand = "-" + operand

        new = head + operand
        self.tracker.rebuild(new)
        return new

    # -----------------------------
    # Parentheses
    # -----------------------------

    def open_parenthesis(self, buffer):
        if buffer == "0":
            new = "("
        elif self.ends_with_operand(buffer):
            new = f"{buffer} × ("
        else:
            new = buffer + "("
        self.tracker.open(len(new) - 1)
        return new

    def close_parenthesis(self, buffer):
        if not self.tracker.can_close(buffer):
            return buffer
        new = buffer.rstrip() + ")"
        self.tracker.close(len(new) - 1, new)
        return new

    # -----------------------------
    # Transforms of the whole value
    # -----------------------------

    def apply_unary(self, buffer, transform, evaluate, format_result):
        """Evaluate the buffer, transform the value and replace the buffer with the result."""
        expression = U.close_open_parentheses(buffer, self.tracker.get_open_count())
        value = transform(evaluate(expression))
        BaseConverter.check_bounds(value)
        self.tracker.reset()
        return format_result(value)
