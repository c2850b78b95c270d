"""Settings for keycalc front ends, read from the environment.

Self-contained. Library code takes plain arguments; only the CLI calls
load_settings().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Front-end settings."""

    log_level: str = "WARNING"
    ascii_symbols: bool = False
    show_expression: bool = True

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def _normalize_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in _LEVELS:
        raise ValueError(f"Invalid log level: {raw!r}. Choose: {', '.join(_LEVELS)}")
    return level


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    log_level: Optional[str] = None,
    ascii_symbols: Optional[bool] = None,
) -> Settings:
    """Build Settings from KEYCALC_* variables, then apply explicit overrides.

    Args:
        env: Mapping to read instead of os.environ (tests pass a dict).
        log_level: Overrides KEYCALC_LOG_LEVEL.
        ascii_symbols: Overrides KEYCALC_SYMBOLS.

    Raises:
        ValueError: on an unknown log level or symbol set.
    """
    env = os.environ if env is None else env

    level = _normalize_level(log_level or env.get("KEYCALC_LOG_LEVEL", "WARNING"))

    if ascii_symbols is None:
        symbols = env.get("KEYCALC_SYMBOLS", "unicode").strip().lower()
        if symbols not in ("unicode", "ascii"):
            raise ValueError(f"Invalid KEYCALC_SYMBOLS: {symbols!r}. Choose: unicode, ascii")
        ascii_symbols = symbols == "ascii"

    show_expression = env.get("KEYCALC_SHOW_EXPRESSION", "1").strip().lower() in _TRUTHY

    return Settings(
        log_level=level,
        ascii_symbols=ascii_symbols,
        show_expression=show_expression,
    )
