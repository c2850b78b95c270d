"""Key adapter. Turns raw key names into Calculator commands.

This is the front-end side of the engine contract: it decides which command a
key means and filters a second decimal point, which the engine itself accepts.
Key names follow browser KeyboardEvent.key values ('Enter', 'Backspace', ...).
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterator, Optional

from keycalc.engine import DIGITS, Calculator
from keycalc.models import Display, Operation

logger = logging.getLogger("keycalc.keymap")

OPERATOR_KEYS: dict[str, Operation] = {
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "*": Operation.MULTIPLY,
    "/": Operation.DIVIDE,
    "^": Operation.POWER,
    "r": Operation.SQRT,
}

COMMAND_KEYS: dict[str, str] = {
    "Enter": "equals",
    "=": "equals",
    "Escape": "clear",
    "Delete": "clear",
    "c": "clear",
    "Backspace": "backspace",
    "_": "sign",
}

# Bracketed names inside a key string: "12<Backspace>3<Enter>"
_KEY_TOKEN_RE = re.compile(r"<([A-Za-z]+)>|(\S)")


def tokenize(text: str) -> Iterator[str]:
    """Split a key string into key names. Whitespace separates nothing and is skipped."""
    for m in _KEY_TOKEN_RE.finditer(text):
        yield m.group(1) or m.group(2)


def binding_table() -> list[tuple[str, str]]:
    """(keys, action) rows for help output."""
    rows = [("0-9 .", "digit")]
    for key, op in OPERATOR_KEYS.items():
        rows.append((key, op.value))
    by_action: dict[str, list[str]] = {}
    for key, action in COMMAND_KEYS.items():
        by_action.setdefault(action, []).append(key)
    for action, keys in by_action.items():
        rows.append((" ".join(keys), action))
    return rows


class KeyAdapter:
    """Feeds key presses into one Calculator and remembers the last Display."""

    def __init__(self, calculator: Optional[Calculator] = None):
        self.calculator = calculator or Calculator()
        self._commands: dict[str, Callable[[], Display]] = {
            "equals": self.calculator.equals,
            "clear": self.calculator.clear,
            "backspace": self.calculator.backspace,
            "sign": self.calculator.toggle_sign,
        }

    def press(self, key: str) -> Display:
        """Handle one key. Unknown keys leave the display as it is."""
        calc = self.calculator

        if len(key) == 1 and key in DIGITS:
            if key == "." and "." in calc.display_value:
                return calc.display()
            return calc.input_digit(key)

        op = OPERATOR_KEYS.get(key)
        if op is not None:
            return calc.apply_operator(op)

        command = COMMAND_KEYS.get(key)
        if command is not None:
            return self._commands[command]()

        logger.debug("Unbound key: %r", key)
        return calc.display()

    def feed(self, text: str) -> list[tuple[str, Display]]:
        """Press every key in a key string, returning (key, display) per step."""
        return [(key, self.press(key)) for key in tokenize(text)]
