# Memory.py
from decimal import Decimal

from . import BaseConverter


class Memory:
    """Single memory register behind the MC / MR / MS / M+ / M- keys."""

    def __init__(self):
        self.value = Decimal(0)
        self.has_value = False

    def clear(self):
        self.value = Decimal(0)
        self.has_value = False

    def recall(self):
        return self.value

    def store(self, value):
        # Out-of-range values raise Overflow and leave the register as it was
        value = BaseConverter.check_bounds(Decimal(value))
        self.value = value
        self.has_value = True
        return self.value

    def add(self, value):
        return self.store(self.value + Decimal(value))

    def subtract(self, value):
        return self.store(self.value - Decimal(value))
