# BaseConverter.py
"""""
Sign-preserving conversion of integer numerals between BIN, OCT, DEC and HEX.

Conversion is best-effort formatting: text that cannot be parsed in the source base
renders as "0". Digit validation happens earlier, when a token is typed.
"""""

from decimal import Decimal, InvalidOperation

from . import CalculatorConstants as C
from . import error as E

_FORMAT_CODES = {
    "BIN": "b",
    "OCT": "o",
    "DEC": "d",
    "HEX": "X"
}


def check_base(base):
    if base not in C.BASES:
        raise E.BaseError(E.message_for(E.INVALID_BASE, base), code=E.INVALID_BASE)
    return C.BASES[base]


def is_valid_digit(char, base):
    check_base(base)
    return bool(C.BASE_DIGITS[base].match(char))


def is_valid_for_base(value, base):
    if not value or not isinstance(value, str) or base not in C.BASE_NUMERALS:
        return False
    return bool(C.BASE_NUMERALS[base].match(value))


def check_bounds(number, max_value=C.MAX_VALUE, min_value=C.MIN_VALUE):
    if number > max_value or number < min_value:
        raise E.overflow()
    return number


def format_for_base(value, base):
    """Render a number in `base`, truncating any fraction toward zero."""
    check_base(base)
    if value is None:
        return "0"
    try:
        number = int(Decimal(str(value)))
    except (InvalidOperation, ValueError, OverflowError):
        return "0"

    rendered = format(abs(number), _FORMAT_CODES[base])
    return "-" + rendered if number < 0 else rendered


def parse_in_base(value, base):
    """Signed int for a numeral written in `base`, or None if it does not parse."""
    radix = check_base(base)
    text = str(value).strip()

    # DEC results may still carry a fraction; programmer values are integers
    if base == "DEC" and "." in text:
        text = text.split(".", 1)[0] or "0"
        if text in ("-", ""):
            text = "0"

    if not C.BASE_NUMERALS[base].match(text):
        return None
    return int(text, radix)


def convert_to_base(value, from_base, to_base):
    check_base(from_base)
    check_base(to_base)

    text = str(value).strip() if value is not None else ""
    if not text or text in ("Error", "Overflow"):
        return "0"

    number = parse_in_base(text, from_base)
    if number is None:
        return "0"

    check_bounds(number)
    return format_for_base(number, to_base)
