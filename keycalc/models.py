"""Data models for the keycalc engine.

Operation enum, ErrorKind, Evaluation, CalculatorState, Display: the typed
structures that flow through operations → engine → adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Operation(str, Enum):
    """Operators the engine knows how to apply."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    POWER = "power"
    SQRT = "sqrt"

    @classmethod
    def parse(cls, name: str) -> Operation:
        """Look up an operation by its name (e.g., 'divide').

        Raises:
            ValueError: if the name is not a known operation.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(op.value for op in cls)
            raise ValueError(f"Unknown operation: {name!r}. Choose: {choices}") from None


class ErrorKind(str, Enum):
    """Validation failures raised before the arithmetic runs."""

    DIVISION_BY_ZERO = "division-by-zero"
    NEGATIVE_RADICAND = "negative-radicand"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.DIVISION_BY_ZERO: "Cannot divide by zero",
    ErrorKind.NEGATIVE_RADICAND: "Negative number under root",
}


@dataclass(frozen=True)
class Evaluation:
    """Outcome of applying an operation: a value or an error kind, never both."""

    value: Optional[float] = None
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: float) -> Evaluation:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> Evaluation:
        return cls(error=error)


@dataclass(frozen=True)
class CalculatorState:
    """Everything the engine knows at one point in time.

    previous_value and operation are set together or not at all.
    current_expression is display text only and is never read back.
    """

    current_value: str = "0"
    previous_value: Optional[float] = None
    operation: Optional[Operation] = None
    should_reset_display: bool = False
    current_expression: str = ""

    @property
    def has_pending(self) -> bool:
        return self.operation is not None and self.previous_value is not None


@dataclass(frozen=True)
class Display:
    """What a front end shows after a command."""

    value: str
    expression: str = ""
    error: str = ""

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "expression": self.expression,
            "error": self.error,
        }
