# ScientificEngine.py
"""""
Scientific function primitives used by the expression evaluator.

Every function call in a parsed expression ends up in apply_function(). Before a
primitive runs, validate_domain() checks the already evaluated arguments and raises a
DomainError naming the original call, e.g. "Domain error: log(-5) is undefined (...)".
Trigonometric arguments are converted from the active angle mode, and results of the
inverse functions are converted back.
"""""

import logging
import math
import re
from decimal import Decimal, getcontext, localcontext, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, InvalidOperation

from . import CalculatorConstants as C
from . import error as E

logger = logging.getLogger(__name__)

getcontext().prec = C.DECIMAL_PRECISION

PI = Decimal("3.1415926535897932384626433832795028841971693993751")
E_CONST = Decimal(1).exp()

CONSTANTS = {
    "pi": PI,
    "π": PI,
    "e": E_CONST
}

# Digits kept from float based primitives (sin(30) -> 0.5, not 0.49999999999999994)
FLOAT_DIGITS = 15

ANGLE_FACTORS = {
    "DEG": math.pi / 180,
    "RAD": 1.0,
    "GRAD": math.pi / 200
}

_PIPE_ABS = re.compile(r"\|([^|]*)\|")


# -----------------------------
# Helpers
# -----------------------------

def is_constant(name):
    return name in CONSTANTS


def plain(value):
    """Decimal rendered without exponent, for error messages."""
    if isinstance(value, Decimal):
        value = value.normalize()
        if value == value.to_integral_value():
            return str(int(value))
        return format(value, "f")
    return str(value)


def clean(value):
    """Float -> Decimal, rounded so float noise around integers disappears."""
    if math.isnan(value):
        raise E.DomainError(E.ERROR_MESSAGES[E.DOMAIN_ERROR], code=E.DOMAIN_ERROR)
    if math.isinf(value):
        raise E.overflow()
    rounded = round(value, FLOAT_DIGITS)
    if rounded == 0:
        return Decimal(0)
    # asin(1) in degrees -> 90, not 90.00000000000001
    with localcontext() as ctx:
        ctx.prec = FLOAT_DIGITS
        return +Decimal(repr(rounded))


def is_integer(value):
    return value == value.to_integral_value()


def floored_mod(a, b):
    """Modulo with the sign of the divisor (-7 mod 3 == 2)."""
    if b == 0:
        raise E.division_by_zero()
    return a - b * (a / b).to_integral_value(rounding=ROUND_FLOOR)


def to_radians(value, angle_mode):
    return float(value) * ANGLE_FACTORS.get(angle_mode, 1.0)


def from_radians(value, angle_mode):
    return value / ANGLE_FACTORS.get(angle_mode, 1.0)


def normalize_expression(expr):
    """Map display names to primitive names and |x| to abs(x)."""
    for display_name in sorted(C.FUNCTION_MAPPINGS, key=len, reverse=True):
        primitive = C.FUNCTION_MAPPINGS[display_name]
        if display_name in ("√", "∛"):
            # bare root sign glued to its '('
            expr = expr.replace(display_name + "(", primitive + "(")
        else:
            expr = expr.replace(display_name, primitive)

    for _ in range(C.MAX_REWRITE_PASSES):
        rewritten = _PIPE_ABS.sub(r"abs(\1)", expr)
        if rewritten == expr:
            break
        expr = rewritten
    return expr


# -----------------------------
# Domain validation
# -----------------------------

def _domain_error(source, reason):
    return E.DomainError(f"Domain error: {source} is undefined ({reason})", code=E.DOMAIN_ERROR)


def validate_domain(name, args, source):
    """Raise DomainError if `args` lie outside the domain of `name`."""
    x = args[0] if args else None
    shown = plain(x) if x is not None else ""

    if name in ("log", "ln", "log2"):
        if x <= 0:
            raise _domain_error(source, f"argument {shown} must be greater than 0")
        if name == "log" and len(args) > 1:
            log_base = args[1]
            if log_base <= 0 or log_base == 1:
                raise _domain_error(source, f"base {plain(log_base)} must be positive and not 1")

    elif name in ("asin", "acos"):
        if abs(x) > 1:
            raise _domain_error(source, f"argument {shown} must be between -1 and 1")

    elif name in ("asec", "acsc"):
        if abs(x) < 1:
            raise _domain_error(source, f"argument {shown} must satisfy |x| >= 1")

    elif name == "acosh":
        if x < 1:
            raise _domain_error(source, f"argument {shown} must be at least 1")

    elif name == "atanh":
        if abs(x) >= 1:
            raise _domain_error(source, f"argument {shown} must satisfy |x| < 1")

    elif name == "acoth":
        if abs(x) <= 1:
            raise _domain_error(source, f"argument {shown} must satisfy |x| > 1")

    elif name == "asech":
        if x <= 0 or x > 1:
            raise _domain_error(source, f"argument {shown} must satisfy 0 < x <= 1")

    elif name == "acsch":
        if x == 0:
            raise _domain_error(source, "argument must not be 0")

    elif name in ("sqrt", "√"):
        if x < 0:
            raise _domain_error(source, f"argument {shown} must not be negative")

    elif name == "nthroot":
        if len(args) < 2:
            raise E.invalid_expression(f"{source} needs two arguments")
        index = args[1]
        if index == 0:
            raise _domain_error(source, "root index must not be 0")
        if x < 0 and (not is_integer(index) or int(index) % 2 == 0):
            raise _domain_error(source, f"even root of negative number {shown}")

    elif name == "factorial":
        if not is_integer(x) or x < 0 or x > C.MAX_FACTORIAL:
            raise _domain_error(source, f"argument {shown} must be an integer between 0 and {C.MAX_FACTORIAL}")

    elif name in ("gcd", "lcm"):
        if len(args) < 2:
            raise E.invalid_expression(f"{source} needs two arguments")
        if not all(is_integer(arg) for arg in args):
            raise _domain_error(source, "arguments must be integers")


# -----------------------------
# Primitives
# -----------------------------

def _trig(name, x, angle_mode, source):
    radians = to_radians(x, angle_mode)
    sin_value = clean(math.sin(radians))
    cos_value = clean(math.cos(radians))

    if name == "sin":
        return sin_value
    if name == "cos":
        return cos_value
    if name == "tan":
        if cos_value == 0:
            raise _domain_error(source, "tangent is infinite here")
        return clean(math.tan(radians))
    if name == "csc":
        if sin_value == 0:
            raise E.division_by_zero()
        return Decimal(1) / sin_value
    if name == "sec":
        if cos_value == 0:
            raise E.division_by_zero()
        return Decimal(1) / cos_value
    if name == "cot":
        if sin_value == 0:
            raise E.division_by_zero()
        return cos_value / sin_value
    raise E.invalid_expression(f"unknown function {name}")


def _inverse_trig(name, x, angle_mode):
    value = float(x)
    if name == "asin":
        result = math.asin(value)
    elif name == "acos":
        result = math.acos(value)
    elif name == "atan":
        result = math.atan(value)
    elif name == "acsc":
        result = math.asin(1 / value)
    elif name == "asec":
        result = math.acos(1 / value)
    else:
        # acot(0) == pi/2
        result = math.pi / 2 if value == 0 else math.atan(1 / value)
    return clean(from_radians(result, angle_mode))


def _hyperbolic(name, x):
    value = float(x)
    if name == "sinh":
        return clean(math.sinh(value))
    if name == "cosh":
        return clean(math.cosh(value))
    if name == "tanh":
        return clean(math.tanh(value))
    if name == "csch":
        if value == 0:
            raise E.division_by_zero()
        return clean(1 / math.sinh(value))
    if name == "sech":
        return clean(1 / math.cosh(value))
    if value == 0:
        raise E.division_by_zero()
    return clean(1 / math.tanh(value))


def _inverse_hyperbolic(name, x):
    value = float(x)
    if name == "asinh":
        return clean(math.asinh(value))
    if name == "acosh":
        return clean(math.acosh(value))
    if name == "atanh":
        return clean(math.atanh(value))
    if name == "acsch":
        return clean(math.asinh(1 / value))
    if name == "asech":
        return clean(math.acosh(1 / value))
    return clean(math.atanh(1 / value))


def _root(x, index):
    if x < 0:
        return -_root(-x, index)
    if x == 0:
        return Decimal(0)
    result = x ** (Decimal(1) / index)
    rounded = result.to_integral_value()
    # exact roots come back as integers (cbrt(27) -> 3)
    if rounded != 0 and is_integer(index) and index > 0 and rounded ** index == x:
        return rounded
    return result


def dms(x):
    """Decimal degrees -> D.MMSS."""
    whole = x.to_integral_value(rounding=ROUND_FLOOR)
    minutes_total = (x - whole) * 60
    minutes = minutes_total.to_integral_value(rounding=ROUND_FLOOR)
    seconds = (minutes_total - minutes) * 60
    return whole + minutes / 100 + seconds / 10000


def deg(x):
    """D.MMSS -> decimal degrees."""
    whole = x.to_integral_value(rounding=ROUND_FLOOR)
    minutes_total = (x - whole) * 100
    minutes = minutes_total.to_integral_value(rounding=ROUND_FLOOR)
    seconds = (minutes_total - minutes) * 100
    return whole + minutes / 60 + seconds / 3600


def apply_function(name, args, source=None, angle_mode="RAD"):
    """Evaluate scientific function `name` on Decimal `args`."""
    source = source or f"{name}({', '.join(plain(arg) for arg in args)})"
    name = C.FUNCTION_MAPPINGS.get(name, name)
    if name == "√":
        name = "sqrt"

    if not args:
        raise E.invalid_expression(f"{source} needs an argument")

    validate_domain(name, args, source)
    x = args[0]
    logger.debug("apply_function %s(%s) angle_mode=%s", name, args, angle_mode)

    try:
        if name in C.TRIG_FUNCTIONS:
            return _trig(name, x, angle_mode, source)
        if name in C.INVERSE_TRIG_FUNCTIONS:
            return _inverse_trig(name, x, angle_mode)
        if name in C.HYPERBOLIC_FUNCTIONS:
            return _hyperbolic(name, x)
        if name in C.INVERSE_HYPERBOLIC_FUNCTIONS:
            return _inverse_hyperbolic(name, x)

        # --- Logarithms and exponentials ---
        if name == "log":
            if len(args) > 1:
                return x.ln() / args[1].ln()
            return x.log10()
        if name == "ln":
            return x.ln()
        if name == "log2":
            return x.ln() / Decimal(2).ln()
        if name == "exp":
            return x.exp()

        # --- Roots and powers ---
        if name == "sqrt":
            return x.sqrt()
        if name == "cbrt":
            return _root(x, Decimal(3))
        if name == "nthroot":
            return _root(x, args[1])
        if name == "sqr":
            return x * x
        if name == "cube":
            return x * x * x

        # --- Rounding and integers ---
        if name == "abs":
            return abs(x)
        if name == "ceil":
            return x.to_integral_value(rounding=ROUND_CEILING)
        if name == "floor":
            return x.to_integral_value(rounding=ROUND_FLOOR)
        if name == "round":
            return x.to_integral_value(rounding=ROUND_HALF_UP)
        if name == "factorial":
            return Decimal(math.factorial(int(x)))
        if name == "gcd":
            return Decimal(math.gcd(*(int(arg) for arg in args)))
        if name == "lcm":
            result = abs(int(args[0]))
            for arg in args[1:]:
                other = abs(int(arg))
                result = result * other // math.gcd(result, other) if result and other else 0
            return Decimal(result)
        if name == "mod":
            if len(args) < 2:
                raise E.invalid_expression(f"{source} needs two arguments")
            return floored_mod(x, args[1])

        # --- Angle formats ---
        if name == "dms":
            return dms(x)
        if name == "deg":
            return deg(x)

    except OverflowError:
        raise E.overflow()
    except (ValueError, InvalidOperation) as e:
        raise _domain_error(source, str(e) or "invalid argument")

    raise E.invalid_expression(f"unknown function {name}")
