# StandardCalculations.py
"""""
Evaluation and result formatting for the Standard calculator.

format_decimal() is shared with the Scientific calculator: it renders a Decimal as a
fraction (if enabled), in exponential form (very large or very small magnitudes) or
fixed to `precision` decimals with trailing zeros removed.
"""""

import fractions
from decimal import Decimal, localcontext

from . import CalculatorConstants as C
from . import CalculatorUtils as U

# Largest allowed deviation of a fraction from the exact value
FRACTION_TOLERANCE = Decimal("1e-20")


def exponential(value, precision):
    """'1.5e+25' style, mantissa trimmed."""
    mantissa, _, exponent = format(value, f".{precision}e").partition("e")
    mantissa = U.trim_unnecessary_zeros(mantissa)
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def as_fraction(value, max_denominator=C.MAX_FRACTION_DENOMINATOR):
    """'n/d' if value is (numerically) a fraction with a small denominator, else None."""
    fraction = fractions.Fraction(value).limit_denominator(max_denominator)
    if abs(Decimal(fraction.numerator) / Decimal(fraction.denominator) - value) > FRACTION_TOLERANCE:
        return None
    if fraction.denominator == 1:
        return str(fraction.numerator)
    return f"{fraction.numerator}/{fraction.denominator}"


def format_decimal(value, precision=10, use_fractions=False, upper=Decimal("1e21"), lower=Decimal("1e-7")):
    value = Decimal(value)
    if value == 0:
        return "0"

    if use_fractions:
        fraction = as_fraction(value)
        if fraction is not None:
            return fraction

    if abs(value) >= upper or abs(value) < lower:
        return exponential(value, precision)

    if value == value.to_integral_value():
        return str(int(value))

    # Temporary precision boost prevents InvalidOperation during quantize()
    with localcontext() as ctx:
        ctx.prec = 128
        rounded = value.quantize(Decimal(1).scaleb(-max(precision, 0)))
    if rounded == 0:
        return "0"
    return U.trim_unnecessary_zeros(format(rounded, "f"))


class StandardCalculations:
    def __init__(self, settings, evaluator):
        self.settings = settings
        self.evaluator = evaluator

    def evaluate_expression(self, expr):
        return self.evaluator.evaluate(expr)

    def format_result(self, value):
        return format_decimal(value,
                              precision=int(self.settings.get("precision", 10)),
                              use_fractions=bool(self.settings.get("use_fractions", False)))
