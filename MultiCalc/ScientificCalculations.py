# ScientificCalculations.py
from decimal import Decimal

from . import CalculatorConstants as C
from .StandardCalculations import StandardCalculations, exponential, format_decimal


class ScientificCalculations(StandardCalculations):
    """Evaluation under the active angle mode; F-E or SCI result notation."""

    def __init__(self, settings, evaluator, angle_mode="DEG", notation_mode="F-E"):
        super().__init__(settings, evaluator)
        self.angle_mode = angle_mode
        self.notation_mode = notation_mode

    def evaluate_expression(self, expr):
        return self.evaluator.evaluate(expr, angle_mode=self.angle_mode)

    def format_result(self, value):
        precision = int(self.settings.get("precision", 10))
        value = Decimal(value)

        if self.notation_mode == "SCI":
            return exponential(value, precision)

        return format_decimal(value,
                              precision=precision,
                              use_fractions=bool(self.settings.get("use_fractions", False)),
                              upper=Decimal("1e15"),
                              lower=Decimal("1e-10"))

    def set_angle_mode(self, angle_mode):
        if angle_mode not in C.ANGLE_MODES:
            raise ValueError(f"Unknown angle mode: {angle_mode}")
        self.angle_mode = angle_mode
