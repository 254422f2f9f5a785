"""
Arithmetic evaluation for the calculator.

Evaluates the flat infix strings the engine builds (for example
"12.5+3*-4") without handing them to the interpreter: the string is
tokenized and reduced with `*` and `/` binding tighter than `+` and `-`.
"""

import math
import re
from decimal import Decimal


class CalculatorError(Exception):
    """Base exception for calculator errors."""
    pass


class MalformedExpressionError(CalculatorError):
    """Raised when an expression cannot be read as arithmetic."""
    pass


class NonFiniteResultError(CalculatorError):
    """Raised when evaluation divides by zero or overflows."""
    pass


class ParseFailureError(CalculatorError):
    """Raised when an entry is not a plain decimal number."""
    pass


OPERATORS = "+-*/"

NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")

# Operand: optional unary sign, then an unsigned literal
_OPERAND = re.compile(r"([+-]?)(\d+\.?\d*|\.\d+)")


def parse_number(text: str) -> float:
    """Parse a plain decimal literal such as "-12.5" or "3."."""
    if not NUMBER_PATTERN.fullmatch(text):
        raise ParseFailureError(f"Not a number: {text!r}")
    return float(text)


def tokenize(expression: str) -> list[float | str]:
    """
    Split an expression into alternating operands and operators.

    A sign directly in front of an operand is unary, so "5+-3" and "5--3"
    are both accepted; "5--3" subtracts a negative operand and gives 8
    rather than being rejected as a doubled operator.
    """
    expr = expression.replace(" ", "")
    if not expr:
        raise MalformedExpressionError("Empty expression")

    tokens: list[float | str] = []
    pos = 0
    while True:
        match = _OPERAND.match(expr, pos)
        if not match:
            raise MalformedExpressionError(
                f"Expected a number at position {pos} in {expression!r}"
            )
        sign, literal = match.groups()
        value = float(literal)
        tokens.append(-value if sign == "-" else value)
        pos = match.end()

        if pos == len(expr):
            return tokens
        if expr[pos] not in OPERATORS:
            raise MalformedExpressionError(
                f"Unexpected character {expr[pos]!r} in {expression!r}"
            )
        tokens.append(expr[pos])
        pos += 1


def _apply(left: float, op: str, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if right == 0:
        raise NonFiniteResultError("Division by zero")
    return left / right


def evaluate_expression(expression: str) -> float:
    """
    Evaluate a flat infix expression.

    Multiplication and division are applied first, then addition and
    subtraction, each left to right.
    """
    tokens = tokenize(expression)

    # First pass folds * and / into the running term
    terms: list[float] = [tokens[0]]
    additive: list[str] = []
    for i in range(1, len(tokens), 2):
        op, operand = tokens[i], tokens[i + 1]
        if op in "*/":
            terms[-1] = _apply(terms[-1], op, operand)
        else:
            additive.append(op)
            terms.append(operand)

    result = terms[0]
    for op, term in zip(additive, terms[1:]):
        result = _apply(result, op, term)

    if not math.isfinite(result):
        raise NonFiniteResultError(f"Result of {expression!r} is not finite")
    return result


def round_result(value: float, decimals: int = 8) -> float:
    """
    Round away binary floating-point noise such as 0.1 + 0.2.

    Halves round up (towards positive infinity) on the scaled value, so
    1.000000005 becomes 1.00000001 and -0.000000005 becomes 0.
    """
    scale = 10 ** decimals
    scaled = value * scale
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / scale


def number_to_string(value: float) -> str:
    """
    Render a number the way the display expects it.

    Integral values lose their ".0", negative zero becomes "0" and
    nothing is written in exponent notation.
    """
    if not math.isfinite(value):
        return repr(value)
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")
