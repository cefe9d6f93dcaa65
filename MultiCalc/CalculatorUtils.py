# CalculatorUtils.py
"""""
Small string helpers shared by every calculator mode.

All helpers work on the raw input buffer: operands and operators separated by single
spaces ("12 + 8 × 2"), function openers glued to their '(' ("sin(90)").
"""""

import re

from . import CalculatorConstants as C


# -----------------------------
# Expressions
# -----------------------------

def sanitize_expression(expr):
    """Turn a display buffer into evaluator text: ×/÷/π replaced, spaces collapsed,
    dangling operators at the end removed."""
    expr = (expr.replace("×", "*")
                .replace("÷", "/")
                .replace("−", "-")
                .replace("π", "pi"))
    expr = re.sub(r"\s+", " ", expr)
    expr = C.DANGLING_OPERATOR.sub("", expr)
    return expr.strip()


def ends_with_operator(expr):
    return trailing_operator(expr) is not None


def trailing_operator(expr):
    """Return (head, operator, negative_sign) if expr ends with an operator, else None."""
    match = C.TRAILING_OPERATOR.match(expr)
    if not match:
        return None
    head, operator, negative = match.groups()
    return head, operator, bool(negative)


def last_operand_start(expr):
    """Index where the last operand of expr begins.

    A parenthesised group counts as one operand together with the function name or
    sign glued in front of it, so "2 × sin(30)" -> index of 's'.
    """
    depth = 0
    position = len(expr) - 1
    while position >= 0:
        char = expr[position]
        if char == ")":
            depth += 1
        elif char == "(":
            if depth == 0:
                break
            depth -= 1
        elif char == " " and depth == 0:
            break
        position -= 1
    return position + 1


def split_last_operand(expr):
    start = last_operand_start(expr)
    return expr[:start], expr[start:]


def count_open_parentheses(expr):
    count = 0
    for char in expr:
        if char == "(":
            count += 1
        elif char == ")" and count > 0:
            count -= 1
    return count


def close_open_parentheses(expr, open_count=None):
    """Append one ')' per open group (auto-close on '=')."""
    if open_count is None:
        open_count = count_open_parentheses(expr)
    return expr + ")" * max(open_count, 0)


def trim_unnecessary_zeros(formatted_number):
    if "e" in formatted_number or "E" in formatted_number:
        return formatted_number
    if "." not in formatted_number:
        return formatted_number
    whole, decimal = formatted_number.split(".", 1)
    decimal = decimal.rstrip("0")
    return f"{whole}.{decimal}" if decimal else whole


# -----------------------------
# Responses
# -----------------------------

def create_response(input="0", error="", expression="", result=None, display=None,
                    display_values=None):
    response = {
        "input": input or "0",
        "error": error or "",
        "expression": expression or "",
        "display": display if display is not None else (input or "0"),
        "success": not error
    }
    if result is not None:
        response["result"] = result
    if display_values is not None:
        response["display_values"] = display_values
    return response
