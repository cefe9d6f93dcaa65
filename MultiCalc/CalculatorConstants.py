# CalculatorConstants.py
"""""
Shared constants for every calculator mode: bases, numeric bounds, input limits,
button vocabularies and the regular expressions used to edit input buffers.
"""""

import re


# -----------------------------
# Bases
# -----------------------------

BASES = {
    "BIN": 2,
    "OCT": 8,
    "DEC": 10,
    "HEX": 16
}

BASE_ORDER = ("HEX", "DEC", "OCT", "BIN")

# Valid digit per base (input validation)
BASE_DIGITS = {
    "BIN": re.compile(r"^[01]$"),
    "OCT": re.compile(r"^[0-7]$"),
    "DEC": re.compile(r"^[0-9]$"),
    "HEX": re.compile(r"^[0-9A-Fa-f]$")
}

# Whole (optionally signed) numeral per base
BASE_NUMERALS = {
    "BIN": re.compile(r"^-?[01]+$"),
    "OCT": re.compile(r"^-?[0-7]+$"),
    "DEC": re.compile(r"^-?[0-9]+$"),
    "HEX": re.compile(r"^-?[0-9A-Fa-f]+$")
}


# -----------------------------
# Bounds and limits
# -----------------------------

MAX_VALUE = 9223372036854775807
MIN_VALUE = -9223372036854775808

MAX_INPUT_LENGTH = {
    "Standard": 100,
    "Scientific": 100,
    "Programmer": 69
}

DECIMAL_PRECISION = 50
MAX_FRACTION_DENOMINATOR = 10000
MAX_FACTORIAL = 170
MAX_REWRITE_PASSES = 10
DEFAULT_CACHE_SIZE = 100


# -----------------------------
# Button vocabularies
# -----------------------------

MEMORY_TOKENS = ("MC", "MR", "M+", "M-", "MS")
SHIFT_OPERATORS = ("<<", ">>")

# Tokens that are never rejected by the input length check
LENGTH_EXEMPT_TOKENS = ("=", "AC", "backspace", "CE", "±", "%") + MEMORY_TOKENS + SHIFT_OPERATORS

ANGLE_MODES = ("DEG", "RAD", "GRAD")
NOTATION_MODES = ("F-E", "SCI")

ANGLE_UNITS = {
    "degrees": "DEG",
    "radians": "RAD",
    "gradians": "GRAD"
}

HEX_LETTERS = ("A", "B", "C", "D", "E", "F")


# -----------------------------
# Scientific function vocabulary
# -----------------------------

# Display token -> evaluator primitive
FUNCTION_MAPPINGS = {
    "sin⁻¹": "asin",
    "cos⁻¹": "acos",
    "tan⁻¹": "atan",
    "csc⁻¹": "acsc",
    "sec⁻¹": "asec",
    "cot⁻¹": "acot",
    "sinh⁻¹": "asinh",
    "cosh⁻¹": "acosh",
    "tanh⁻¹": "atanh",
    "csch⁻¹": "acsch",
    "sech⁻¹": "asech",
    "coth⁻¹": "acoth",
    "log₂": "log2",
    "√x": "sqrt",
    "³√x": "cbrt",
    "∛": "cbrt",
    "√": "sqrt",
    "eˣ": "exp",
    "⌊x⌋": "floor",
    "⌈x⌉": "ceil"
}

TRIG_FUNCTIONS = ("sin", "cos", "tan", "csc", "sec", "cot")
INVERSE_TRIG_FUNCTIONS = ("asin", "acos", "atan", "acsc", "asec", "acot")
HYPERBOLIC_FUNCTIONS = ("sinh", "cosh", "tanh", "csch", "sech", "coth")
INVERSE_HYPERBOLIC_FUNCTIONS = ("asinh", "acosh", "atanh", "acsch", "asech", "acoth")

# Trig name -> hyperbolic variant (hyperbolic toggle)
HYPERBOLIC_MAPPINGS = dict(zip(TRIG_FUNCTIONS + INVERSE_TRIG_FUNCTIONS,
                               HYPERBOLIC_FUNCTIONS + INVERSE_HYPERBOLIC_FUNCTIONS))

SCIENTIFIC_FUNCTIONS = (TRIG_FUNCTIONS + INVERSE_TRIG_FUNCTIONS + HYPERBOLIC_FUNCTIONS
                        + INVERSE_HYPERBOLIC_FUNCTIONS
                        + ("log", "ln", "log2", "exp", "sqrt", "cbrt", "sqr", "cube", "nthroot",
                           "abs", "ceil", "floor", "round", "factorial", "gcd", "lcm", "mod",
                           "dms", "deg"))

CONSTANTS = ("π", "e")

# Function openers removed as one unit by backspace, longest first
FUNCTION_OPENERS = tuple(sorted(
    [name + "(" for name in SCIENTIFIC_FUNCTIONS] + ["√(", "∛(", "10^(", "2^(", "e^(", "^("],
    key=len, reverse=True))

# Scientific button -> text inserted into the buffer
SCIENTIFIC_INSERTIONS = {
    "x²": "sqr(",
    "x³": "cube(",
    "y√x": "nthroot(",
    "|x|": "abs(",
    "10ˣ": "10^(",
    "2ˣ": "2^(",
    "eˣ": "e^(",
    "x^y": "^(",
    "xʸ": "^(",
    "n!": "!",
    "√": "sqrt(",
    "∛": "cbrt("
}


# -----------------------------
# Regular expressions
# -----------------------------

# "<rest> <op> " with optional trailing negative sign, used to replace or remove operators
TRAILING_OPERATOR = re.compile(r"^(.*?)\s*([+\-×÷%]|<<|>>|mod)\s*(-\s*)?$")

# Literal division by zero: "/ 0" or "÷ 0" where the zero is a whole operand (not "0!" or "0^(...)")
LITERAL_DIVISION_BY_ZERO = re.compile(r"[÷/]\s*0+(?![0-9A-Za-z.!^])")

# Trailing dangling operators stripped before evaluation
DANGLING_OPERATOR = re.compile(r"(\s*(?:<<|>>|mod|[+\-*/%^]))+\s*$")

NUMERAL = re.compile(r"[0-9A-Fa-f]+")
