"""keycalc: keyboard-driven calculator engine.

Turns a stream of key presses (digits, operators, control keys) into a running
computation and an expression trace. Division by zero and square roots of
negative numbers are reported as display errors, never raised.

Usage:
    python -m keycalc keys "5+3*2="      # Replay keys
    python -m keycalc repl               # Interactive session
    python -m keycalc keymap             # Show key bindings
"""

from keycalc.engine import Calculator
from keycalc.keymap import KeyAdapter
from keycalc.models import CalculatorState, Display, ErrorKind, Evaluation, Operation

__all__ = [
    "Calculator",
    "CalculatorState",
    "Display",
    "ErrorKind",
    "Evaluation",
    "KeyAdapter",
    "Operation",
]
