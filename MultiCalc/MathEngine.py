# MathEngine.py
"""""
Core expression evaluator shared by the Standard, Scientific and Programmer calculators.

Pipeline
--------
1) Guards: empty input evaluates to 0, a literal "÷ 0" fails before any parsing.
2) Sanitizer: display symbols (×, ÷, π) become evaluator symbols, dangling operators go.
3) Base conversion: in BIN/OCT/HEX every numeral is rewritten as a decimal numeral.
4) Tokenizer: converts the string into a flat list of tokens (implicit '*' inserted).
5) Parser (AST): recursive descent, precedence aware.
6) Evaluation on Decimal, bound-checked against the 63-bit signed range.

Results are memoized per evaluator instance. Only successful evaluations are cached, and
the cache key holds every input that influences the result, so switching the cache off
never changes what evaluate() returns.
"""""

import logging
import re
from collections import namedtuple
from decimal import Decimal, localcontext, Overflow, DivisionByZero, InvalidOperation

from . import CalculatorConstants as C
from . import CalculatorUtils as U
from . import ScientificEngine
from . import error as E
from .LRUCache import LRUCache

logger = logging.getLogger(__name__)


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST node for numeric literal backed by Decimal."""
    def __init__(self, value):
        # Always normalize input to Decimal via string to avoid float artifacts
        if not isinstance(value, Decimal):
            value = str(value)
        self.value = Decimal(value)

    def evaluate(self):
        return self.value

    def __repr__(self):
        return f"Number({self.value})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self):
        left_value = self.left.evaluate()
        right_value = self.right.evaluate()

        if self.operator == '+':
            return left_value + right_value
        elif self.operator == '-':
            return left_value - right_value
        elif self.operator == '*':
            return left_value * right_value
        elif self.operator == '/':
            if right_value == 0:
                raise E.division_by_zero()
            return left_value / right_value
        elif self.operator == '%':
            return ScientificEngine.floored_mod(left_value, right_value)
        elif self.operator == '^':
            return power(left_value, right_value)
        elif self.operator in ('<<', '>>'):
            return shift(left_value, self.operator, right_value)
        else:
            raise E.invalid_expression(f"unknown operator {self.operator}")

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


class FunctionCall:
    """AST node for name(arg, ...) and postfix '!'. `source` is the call as typed."""
    def __init__(self, name, args, source, angle_mode):
        self.name = name
        self.args = args
        self.source = source
        self.angle_mode = angle_mode

    def evaluate(self):
        values = [arg.evaluate() for arg in self.args]
        return ScientificEngine.apply_function(self.name, values, self.source, self.angle_mode)

    def __repr__(self):
        return f"FunctionCall({self.name!r}, args={self.args})"


def power(base, exponent):
    if exponent == 0:
        return Decimal(1)
    try:
        return base ** exponent
    except DivisionByZero:
        raise E.division_by_zero()
    except InvalidOperation:
        raise E.DomainError(
            f"Domain error: {ScientificEngine.plain(base)}^{ScientificEngine.plain(exponent)} is undefined",
            code=E.DOMAIN_ERROR)


def shift(value, operator, count):
    if not ScientificEngine.is_integer(value) or not ScientificEngine.is_integer(count):
        raise E.invalid_expression("shift operands must be integers")
    if count < 0:
        raise E.invalid_expression("shift count must not be negative")

    value, count = int(value), int(count)
    if operator == '<<':
        # anything shifted this far is outside the 63-bit range anyway
        if value != 0 and count >= 128:
            raise E.overflow()
        return Decimal(value << count)
    return Decimal(value >> min(count, 128))


# -----------------------------
# Tokenizer
# -----------------------------

Token = namedtuple("Token", ["kind", "value", "position"])

_TOKEN_PATTERN = re.compile(r"""
    (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+\-]?\d+)?)
  | (?P<name>[A-Za-z_][A-Za-z_0-9]*)
  | (?P<shift><<|>>)
  | (?P<op>[-+*/%^!(),])
  | (?P<space>\s+)
""", re.VERBOSE)


def _ends_operand(token):
    return (token.kind == "number"
            or token.value in (")", "!")
            or (token.kind == "name" and ScientificEngine.is_constant(token.value)))


def _starts_operand(token):
    return (token.kind == "number"
            or token.value == "("
            or (token.kind == "name" and token.value != "mod"))


def tokenize(expr):
    """Convert an evaluator string into a token list.

    Inserts implicit multiplication where two operands meet ("2pi", "(1)(2)", "3sin(30)").
    """
    tokens = []
    position = 0

    while position < len(expr):
        match = _TOKEN_PATTERN.match(expr, position)
        if not match:
            raise E.invalid_expression(f"unexpected character '{expr[position]}' at position {position}")

        kind = match.lastgroup
        value = match.group(kind)
        if kind == "number":
            tokens.append(Token("number", Decimal(value), position))
        elif kind != "space":
            tokens.append(Token("name" if kind == "name" else "op", value, position))
        position = match.end()

    # --- Implicit multiplication pass ---
    result = []
    for token in tokens:
        if result and _ends_operand(result[-1]) and _starts_operand(token):
            result.append(Token("op", "*", token.position))
        result.append(token)
    return result


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def parse(tokens, source, angle_mode=None):
    """Parse a token list into an AST.

    Precedence via nested functions, loosest first:
    shift → sum → term → unary → power → postfix → primary.
    Function calls are only accepted when an angle mode is given (scientific mode).
    """
    tokens = list(tokens)

    def peek():
        return tokens[0].value if tokens else None

    def expect(value):
        if not tokens or tokens[0].value != value:
            found = tokens[0].value if tokens else "end of input"
            raise E.invalid_expression(f"expected '{value}' but found '{found}'")
        return tokens.pop(0)

    def parse_primary():
        if not tokens:
            raise E.invalid_expression("missing number")
        token = tokens.pop(0)

        if token.kind == "number":
            return Number(token.value)

        # Parenthesized sub-expression
        if token.value == "(":
            node = parse_shift()
            expect(")")
            return node

        if token.kind == "name":
            # Constants belong to Scientific mode; elsewhere a stray 'e' is malformed input
            if angle_mode is not None and ScientificEngine.is_constant(token.value):
                return Number(ScientificEngine.CONSTANTS[token.value])

            if angle_mode is None or token.value not in C.SCIENTIFIC_FUNCTIONS:
                raise E.invalid_expression(f"unknown function '{token.value}'")

            expect("(")
            args = [parse_shift()]
            while peek() == ",":
                tokens.pop(0)
                args.append(parse_shift())
            closing = expect(")")
            call_text = source[token.position:closing.position + 1]
            return FunctionCall(token.value, args, call_text, angle_mode)

        raise E.invalid_expression(f"unexpected token '{token.value}'")

    def parse_postfix():
        start = tokens[0].position if tokens else len(source)
        node = parse_primary()
        while peek() == "!":
            bang = tokens.pop(0)
            node = FunctionCall("factorial", [node], source[start:bang.position + 1], angle_mode)
        return node

    def parse_power():
        """Exponentiation '^' (right associative, binds tighter than unary minus on its left)."""
        base = parse_postfix()
        if peek() == "^":
            tokens.pop(0)
            exponent = parse_unary()
            return BinOp(base, "^", exponent)
        return base

    def parse_unary():
        """Handle leading '+'/'-' (unary minus becomes 0 - operand)."""
        if peek() in ("+", "-"):
            operator = tokens.pop(0).value
            operand = parse_unary()
            if operator == "-":
                return BinOp(Number("0"), "-", operand)
            return operand
        return parse_power()

    def parse_term():
        """Multiplication, division and modulo."""
        node = parse_unary()
        while peek() in ("*", "/", "%", "mod"):
            operator = tokens.pop(0).value
            if operator == "mod":
                operator = "%"
            node = BinOp(node, operator, parse_unary())
        return node

    def parse_sum():
        """Addition and subtraction."""
        node = parse_term()
        while peek() in ("+", "-"):
            operator = tokens.pop(0).value
            node = BinOp(node, operator, parse_term())
        return node

    def parse_shift():
        """Bit shifts, loosest binding."""
        node = parse_sum()
        while peek() in ("<<", ">>"):
            operator = tokens.pop(0).value
            node = BinOp(node, operator, parse_sum())
        return node

    tree = parse_shift()
    if tokens:
        raise E.invalid_expression(f"unexpected token '{tokens[0].value}'")
    return tree


# -----------------------------
# Base handling
# -----------------------------

def convert_numerals(expr, base):
    """Rewrite every numeral of `expr` from `base` to decimal; operators pass through."""
    radix = C.BASES[base]

    def to_decimal(match):
        numeral = match.group(0)
        try:
            return str(int(numeral, radix))
        except ValueError:
            raise E.invalid_expression(f"'{numeral}' is not a valid {base} number")

    return C.NUMERAL.sub(to_decimal, expr)


# -----------------------------
# Public entry point
# -----------------------------

class ExpressionEvaluator:
    def __init__(self, cache_size=C.DEFAULT_CACHE_SIZE, use_cache=True, cache=None):
        self.use_cache = use_cache
        self.cache = cache if cache is not None else LRUCache(cache_size)

    def evaluate(self, expr, base=None, max_value=C.MAX_VALUE, min_value=C.MIN_VALUE, angle_mode=None):
        """Evaluate a buffer to a Decimal.

        `base` selects the numeral system of the buffer (None/"DEC" for decimal).
        `angle_mode` enables scientific functions and sets the trig unit.
        Raises a MathError subclass on failure.
        """
        if base is not None and base not in C.BASES:
            raise E.BaseError(E.message_for(E.INVALID_BASE, base), code=E.INVALID_BASE)

        key = (expr, base, max_value, min_value, angle_mode)
        if self.use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        result = self._evaluate(expr, base, max_value, min_value, angle_mode)

        if self.use_cache:
            self.cache.set(key, result)
        return result

    def _evaluate(self, expr, base, max_value, min_value, angle_mode):
        if expr is None or not str(expr).strip():
            return Decimal(0)
        problem = str(expr)

        try:
            with localcontext() as ctx:
                ctx.prec = C.DECIMAL_PRECISION

                # --- 1. Literal division by zero ---
                if C.LITERAL_DIVISION_BY_ZERO.search(problem):
                    raise E.division_by_zero()

                # --- 2. Sanitize ---
                sanitized = U.sanitize_expression(problem)
                if angle_mode is not None:
                    sanitized = ScientificEngine.normalize_expression(sanitized)
                if not sanitized:
                    return Decimal(0)

                # --- 3. Base conversion ---
                if base not in (None, "DEC"):
                    sanitized = convert_numerals(sanitized, base)

                # --- 4. Parse and evaluate ---
                tree = parse(tokenize(sanitized), sanitized, angle_mode)
                logger.debug("Evaluating %r as %s", problem, tree)
                result = tree.evaluate()

        # Re-raise our errors after attaching the source equation
        except E.MathError as e:
            e.equation = problem
            raise
        # Known numeric overflow
        except Overflow:
            raise E.overflow(equation=problem)
        except DivisionByZero:
            raise E.division_by_zero(equation=problem)
        except InvalidOperation:
            raise E.invalid_expression(equation=problem)

        # --- 5. Bounds ---
        if not result.is_finite() or result > max_value or result < min_value:
            raise E.overflow(equation=problem)
        return result

    def clear_cache(self):
        self.cache.clear()

    def get_cache_stats(self):
        return self.cache.stats()
