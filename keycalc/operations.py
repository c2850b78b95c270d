"""Arithmetic for the keycalc engine.

Raw operations, the validation wrappers that guard them, and the dispatch
table mapping each Operation tag to its implementation and display symbol.
Also home to the text <-> number rules the engine relies on, since the
display keeps the current operand as text.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from keycalc.models import ErrorKind, Evaluation, Operation

Arithmetic = Callable[[float, float], float]
Validator = Callable[[float, float], Optional[ErrorKind]]
Evaluator = Callable[[float, float], Evaluation]


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> float:
    return a / b


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and float(x).is_integer() and x % 2 == 1


def power(a: float, b: float) -> float:
    """a raised to b, with non-finite results instead of exceptions.

    math.pow raises where a display calculator should show a value:
    overflow becomes +/-Infinity, zero to a negative power becomes Infinity
    and a negative base with a fractional exponent becomes NaN.
    """
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf
    except ValueError:
        if a == 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


def sqrt(a: float, b: float) -> float:
    return math.sqrt(a)


def with_validation(operation: Arithmetic, validate: Validator) -> Evaluator:
    """Wrap an arithmetic function so the precondition runs first.

    The wrapped function is never called when validation reports an error.
    """

    def evaluate(a: float, b: float = 0.0) -> Evaluation:
        error = validate(a, b)
        if error is not None:
            return Evaluation.failure(error)
        return Evaluation.success(operation(a, b))

    return evaluate


def _unchecked(operation: Arithmetic) -> Evaluator:
    return with_validation(operation, lambda a, b: None)


safe_divide = with_validation(
    divide, lambda a, b: ErrorKind.DIVISION_BY_ZERO if b == 0 else None
)

safe_sqrt = with_validation(
    sqrt, lambda a, b: ErrorKind.NEGATIVE_RADICAND if a < 0 else None
)


@dataclass(frozen=True)
class OperatorSpec:
    """Dispatch table entry for one Operation."""

    evaluate: Evaluator
    symbol: str
    ascii_symbol: str
    unary: bool = False


_DISPATCH: dict[Operation, OperatorSpec] = {
    Operation.ADD: OperatorSpec(_unchecked(add), "+", "+"),
    Operation.SUBTRACT: OperatorSpec(_unchecked(subtract), "-", "-"),
    Operation.MULTIPLY: OperatorSpec(_unchecked(multiply), "×", "*"),
    Operation.DIVIDE: OperatorSpec(safe_divide, "÷", "/"),
    Operation.POWER: OperatorSpec(_unchecked(power), "^", "^"),
    Operation.SQRT: OperatorSpec(safe_sqrt, "√", "sqrt", unary=True),
}


def symbol_for(op: Operation, ascii: bool = False) -> str:
    spec = _DISPATCH[op]
    return spec.ascii_symbol if ascii else spec.symbol


def is_unary(op: Operation) -> bool:
    return _DISPATCH[op].unary


def evaluate(op: Operation, a: float, b: float = 0.0) -> Evaluation:
    """Apply op to its operands through the dispatch table."""
    return _DISPATCH[op].evaluate(a, b)


# Longest numeric prefix, the way a lenient float parser reads "12.5abc" as 12.5
_NUMERIC_PREFIX_RE = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
# Text a user can produce by typing digits, a point and the sign toggle
_DECIMAL_LITERAL_RE = re.compile(r"-?\d*\.?\d*")


def parse_operand(text: str) -> float:
    """Convert display text to a number. Text without a numeric prefix is NaN."""
    if text.strip() in ("NaN", "+NaN", "-NaN"):
        return math.nan
    m = _NUMERIC_PREFIX_RE.match(text)
    if not m:
        return math.nan
    return float(m.group(1))


def is_decimal_literal(text: str) -> bool:
    """True for text typed digit by digit ('12', '-0.5', '3.'), False for '1e+21' or 'NaN'."""
    return bool(text) and any(c.isdigit() for c in text) and bool(_DECIMAL_LITERAL_RE.fullmatch(text))


def format_number(value: float) -> str:
    """Render a float with the shortest digits that round-trip.

    Integers below 1e21 print without a fraction ('8', not '8.0'). Decimal
    notation covers 1e-6 <= |x| < 1e21, exponent notation ('1e+21', '1.5e-7')
    everything else. Negative zero prints as '0'.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    parts = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in parts.digits)
    k = len(digits)
    # value == 0.<digits> * 10**n
    n = parts.exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits

    e = n - 1
    exp = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return sign + digits + exp
    return sign + digits[0] + "." + digits[1:] + exp
