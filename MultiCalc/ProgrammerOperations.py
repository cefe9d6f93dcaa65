# ProgrammerOperations.py
"""""
Buffer editing for the Programmer calculator.

Digits are checked against the active base before they reach the buffer, so a BIN
buffer never holds a '2'. Shifts and modulo are ordinary binary operators here.
"""""

from . import BaseConverter
from . import error as E
from .StandardOperations import StandardOperations


class ProgrammerOperations(StandardOperations):
    group_endings = (")",)

    def append_digit(self, buffer, digit, base="DEC"):
        if digit == ".":
            raise E.InputError(E.message_for(E.INVALID_INPUT, f"{base} values are integers"),
                               code=E.INVALID_INPUT)
        if not all(BaseConverter.is_valid_digit(char, base) for char in digit):
            raise E.InputError(E.message_for(E.INVALID_INPUT, f"'{digit}' is not a {base} digit"),
                               code=E.INVALID_INPUT)
        return super().append_digit(buffer, digit.upper())

    def load_value(self, value):
        """Buffer for a freshly fanned-out value (tracker starts over)."""
        self.tracker.reset()
        return value or "0"
