"""CLI for the keycalc calculator engine.

Usage:
    python -m keycalc keys "5+3*2="              # Replay keys, show final display
    python -m keycalc keys "5/0<Enter>" --trace  # Show every step
    python -m keycalc keys "7/2=" --json         # Final display as JSON
    python -m keycalc repl                       # Interactive session
    python -m keycalc keymap                     # Show key bindings
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from keycalc.config import Settings, load_settings
from keycalc.engine import Calculator
from keycalc.keymap import KeyAdapter
from keycalc.render import render_display, render_keymap, render_plain, render_trace

app = typer.Typer(
    name="keycalc",
    help="Keyboard-driven calculator engine",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

_QUIT_WORDS = ("quit", "exit")


def _setup_logging(settings: Settings) -> None:
    """Route library loggers through Rich on stderr."""
    logging.basicConfig(
        level=settings.log_level_number,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_settings()


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="DEBUG, INFO, WARNING, ERROR"),
    ascii_symbols: bool = typer.Option(False, "--ascii", help="ASCII operator symbols in the expression"),
) -> None:
    """Keyboard-driven calculator engine."""
    try:
        # Without --ascii, KEYCALC_SYMBOLS decides
        settings = load_settings(log_level=log_level, ascii_symbols=True if ascii_symbols else None)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    _setup_logging(settings)
    ctx.obj = settings


@app.command("keys")
def cmd_keys(
    ctx: typer.Context,
    sequence: str = typer.Argument(help="Keys to press, e.g. '12+7=' or '9r<Backspace>'"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the display after every key"),
    plain: bool = typer.Option(False, "--plain", "-p", help="Plain text output instead of a panel"),
    json_output: bool = typer.Option(False, "--json", "-j", help="JSON output (a list of steps with --trace)"),
) -> None:
    """Replay a key sequence and show the resulting display."""
    settings = _settings(ctx)
    adapter = KeyAdapter(Calculator(ascii_symbols=settings.ascii_symbols))
    steps = adapter.feed(sequence)

    if json_output:
        if trace:
            data = [{"key": key, **d.to_dict()} for key, d in steps]
        else:
            data = adapter.calculator.display().to_dict()
        console.print(json.dumps(data, indent=2, ensure_ascii=False), markup=False, highlight=False, soft_wrap=True)
        return

    if trace:
        render_trace(steps, console, show_expression=settings.show_expression)
        return

    final = adapter.calculator.display()
    if plain:
        render_plain(final, console, show_expression=settings.show_expression)
    else:
        render_display(final, console, show_expression=settings.show_expression)


@app.command("repl")
def cmd_repl(ctx: typer.Context) -> None:
    """Interactive session: type keys, press return to apply them."""
    settings = _settings(ctx)
    adapter = KeyAdapter(Calculator(ascii_symbols=settings.ascii_symbols))

    console.print("[dim]Type keys and press return. <Enter> evaluates, 'quit' exits.[/dim]")
    render_display(adapter.calculator.display(), console, show_expression=settings.show_expression)

    while True:
        try:
            line = console.input("[bold]>[/bold] ")
        except EOFError:
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        adapter.feed(line)
        render_display(adapter.calculator.display(), console, show_expression=settings.show_expression)


@app.command("keymap")
def cmd_keymap() -> None:
    """Show key bindings."""
    render_keymap(console)


if __name__ == "__main__":
    app()
