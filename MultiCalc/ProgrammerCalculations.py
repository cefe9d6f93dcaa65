# ProgrammerCalculations.py
from . import BaseConverter
from . import CalculatorConstants as C


class ProgrammerCalculations:
    """Evaluation in the active base; results rendered as (truncated) integers."""

    def __init__(self, settings, evaluator):
        self.settings = settings
        self.evaluator = evaluator

    def evaluate_expression(self, expr, base):
        return self.evaluator.evaluate(expr, base=base)

    def format_result(self, value, base):
        return BaseConverter.format_for_base(value, base)

    def convert_to_base(self, value, from_base, to_base):
        return BaseConverter.convert_to_base(value, from_base, to_base)

    def fan_out(self, value):
        """Render one evaluated value in every base."""
        BaseConverter.check_bounds(value)
        return {base: BaseConverter.format_for_base(value, base) for base in C.BASES}
