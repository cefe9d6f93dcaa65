# error.py
"""""
Error types and error codes shared by every calculator mode.

Every failure inside the engine is raised as a MathError (or subclass) carrying a
4-digit code. The calculator boundary (Calculator.handle_button_click) catches them
and turns them into plain response data, so the UI never has to catch anything.
"""""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def __str__(self):
        return self.message


class SyntaxError(MathError):
    pass


class CalculationError(MathError):
    pass


class DomainError(CalculationError):
    pass


class InputError(MathError):
    """Token was rejected before the buffer was touched."""
    pass


class BaseError(InputError):
    pass


#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Sub-category
# 3. and 4. Digit: Error Number

OVERFLOW = "3026"
DIVISION_BY_ZERO = "3003"
DOMAIN_ERROR = "2010"
INVALID_EXPRESSION = "3012"
INVALID_BASE = "3030"
MAX_INPUT_LENGTH = "4010"
INVALID_INPUT = "4011"
UNEXPECTED = "9999"


ERROR_MESSAGES = {
    "2010" : "Domain error: Invalid input for function",
    "2011" : "Cannot calculate square root of negative number",
    "2012" : "Cannot calculate logarithm of non-positive number",

    "3003" : "Division by zero is not allowed",
    "3012" : "Invalid expression format",
    "3026" : "Overflow: Evaluated result exceeding max limit",
    "3030" : "Invalid base for conversion",

    "4010" : "Maximum input length reached",
    "4011" : "Invalid input",

    "5000" : "Settings could not be loaded",

    "9999" : "Unexpected Error"
}


def message_for(code, detail=None):
    """Return the table message for `code`, optionally followed by ': detail'."""
    text = ERROR_MESSAGES.get(code, ERROR_MESSAGES[UNEXPECTED])
    if detail:
        return f"{text}: {detail}"
    return text


def overflow(equation=None):
    return CalculationError(ERROR_MESSAGES[OVERFLOW], code=OVERFLOW, equation=equation)


def division_by_zero(equation=None):
    return CalculationError(ERROR_MESSAGES[DIVISION_BY_ZERO], code=DIVISION_BY_ZERO, equation=equation)


def invalid_expression(detail=None, equation=None):
    return SyntaxError(message_for(INVALID_EXPRESSION, detail), code=INVALID_EXPRESSION, equation=equation)
