"""keycalc engine: the input-driven calculator state machine.

Each command takes the current CalculatorState, builds the next one and swaps
it in whole. Commands never raise for bad arithmetic: validation failures come
back as Evaluation values and surface as Display.error.

State is implicitly encoded by (operation pending?, should_reset_display):

    idle, typing      -- operator -->  pending, fresh
    pending, fresh    -- digit    -->  pending, typing
    pending, typing   -- operator -->  pending, fresh   (chained result)
    pending, *        -- equals   -->  idle, fresh
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from keycalc.models import CalculatorState, Display, Operation
from keycalc.operations import (
    evaluate,
    format_number,
    is_decimal_literal,
    is_unary,
    parse_operand,
    symbol_for,
)

logger = logging.getLogger("keycalc.engine")

DIGITS = frozenset("0123456789.")


class Calculator:
    """Calculator engine. Holds one CalculatorState and exposes six commands.

    Every command returns the Display a front end should show next.
    """

    def __init__(self, ascii_symbols: bool = False):
        self.ascii_symbols = ascii_symbols
        self._state = CalculatorState()
        self._error = ""

    # --- Observation ---

    @property
    def state(self) -> CalculatorState:
        """Snapshot of the current state (frozen, safe to hand out)."""
        return self._state

    @property
    def display_value(self) -> str:
        return self._state.current_value

    @property
    def expression_trace(self) -> str:
        return self._state.current_expression

    @property
    def error_message(self) -> str:
        return self._error

    def display(self) -> Display:
        return Display(
            value=self._state.current_value,
            expression=self._state.current_expression,
            error=self._error,
        )

    def _commit(self, state: CalculatorState, error: Optional[str] = None) -> Display:
        """Swap in the next state. error=None leaves the current message as is."""
        self._state = state
        if error is not None:
            self._error = error
        logger.debug("state -> %s (error=%r)", state, self._error)
        return self.display()

    # --- Commands ---

    def input_digit(self, digit: str) -> Display:
        """Append a digit or decimal point to the current operand.

        A second '.' is not rejected here; the key adapter filters it.
        """
        if len(digit) != 1 or digit not in DIGITS:
            logger.warning("Ignoring non-digit input: %r", digit)
            return self.display()

        s = self._state
        if s.should_reset_display:
            value = "0." if digit == "." else digit
            return self._commit(replace(s, current_value=value, should_reset_display=False))

        current = s.current_value
        if current == "0" and digit != ".":
            value = digit
        else:
            value = current + digit
        return self._commit(replace(s, current_value=value))

    def apply_operator(self, operation: Operation, symbol: Optional[str] = None) -> Display:
        """Press an operator key.

        Binary operators either chain (evaluate the pending operator first) or
        start a new pending operation. Unary operators evaluate on the spot.

        Args:
            operation: Operator pressed.
            symbol: Text for the expression trace. Defaults to the operator's
                display symbol.
        """
        s = self._state
        symbol = symbol if symbol is not None else symbol_for(operation, self.ascii_symbols)
        unary = is_unary(operation)

        if not unary and s.has_pending and not s.should_reset_display:
            current_num = parse_operand(s.current_value)
            result = evaluate(s.operation, s.previous_value, current_num)
            if not result.ok:
                return self._fail(result.error.message)
            return self._commit(
                replace(
                    s,
                    current_value=format_number(result.value),
                    previous_value=result.value,
                    operation=operation,
                    current_expression=f"{s.current_expression} {format_number(current_num)} {symbol}",
                    should_reset_display=True,
                ),
                error="",
            )

        if unary:
            result = evaluate(operation, parse_operand(s.current_value))
            if not result.ok:
                return self._fail(result.error.message)
            return self._commit(
                replace(
                    s,
                    current_value=format_number(result.value),
                    should_reset_display=True,
                    current_expression=f"{symbol}({s.current_value})",
                ),
                error="",
            )

        return self._commit(
            replace(
                s,
                previous_value=parse_operand(s.current_value),
                operation=operation,
                should_reset_display=True,
                current_expression=f"{s.current_value} {symbol}",
            ),
            error="",
        )

    def equals(self) -> Display:
        """Evaluate the pending operation. No-op when nothing is pending."""
        s = self._state
        if not s.has_pending:
            return self.display()

        current_num = parse_operand(s.current_value)
        result = evaluate(s.operation, s.previous_value, current_num)
        if not result.ok:
            # Pending operand and operator stay so the user can correct the input
            return self._fail(result.error.message)

        return self._commit(
            CalculatorState(
                current_value=format_number(result.value),
                previous_value=None,
                operation=None,
                should_reset_display=True,
                current_expression=f"{s.current_expression} {format_number(current_num)} =",
            ),
            error="",
        )

    def backspace(self) -> Display:
        """Drop the last character of the current operand."""
        current = self._state.current_value
        if (
            len(current) == 1
            or (current.startswith("-") and len(current) == 2)
            or not is_decimal_literal(current)
        ):
            value = "0"
        else:
            value = current[:-1]
        return self._commit(replace(self._state, current_value=value))

    def toggle_sign(self) -> Display:
        current = self._state.current_value
        if current == "0":
            return self.display()
        value = current[1:] if current.startswith("-") else f"-{current}"
        return self._commit(replace(self._state, current_value=value))

    def clear(self) -> Display:
        """Back to the state of a freshly built engine."""
        return self._commit(CalculatorState(), error="")

    def _fail(self, message: str) -> Display:
        logger.info("Evaluation failed: %s", message)
        return self._commit(replace(self._state, should_reset_display=True), error=message)
