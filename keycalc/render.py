"""Rich rendering for keycalc displays.

render_display() draws the calculator screen as a panel; render_trace() shows
a key-by-key table of how the display evolved.
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from keycalc.keymap import binding_table
from keycalc.models import Display


def render_display(display: Display, console: Console, show_expression: bool = True) -> None:
    """Render the calculator screen: expression line, value line, error line."""
    lines = []
    if show_expression:
        lines.append(Text(display.expression or " ", style="dim", justify="right"))
    lines.append(Text(display.value, style="bold", justify="right"))
    if display.error:
        lines.append(Text(display.error, style="red", justify="right"))

    console.print(Panel(Group(*lines), title="keycalc", width=40))


def render_plain(display: Display, console: Console, show_expression: bool = True) -> None:
    """Render the display as plain lines (for scripts and pipes)."""
    if show_expression:
        console.print(display.expression, markup=False, highlight=False)
    console.print(display.value, markup=False, highlight=False)
    if display.error:
        console.print(f"error: {display.error}", markup=False, highlight=False)


def render_trace(steps: list[tuple[str, Display]], console: Console, show_expression: bool = True) -> None:
    """Render a step-by-step table for a replayed key sequence."""
    if not steps:
        console.print("[yellow]No keys to replay.[/yellow]")
        return

    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Display", justify="right", min_width=12)
    if show_expression:
        table.add_column("Expression", style="dim")
    table.add_column("Error", style="red")

    for i, (key, d) in enumerate(steps, start=1):
        row = [str(i), escape(key), escape(d.value)]
        if show_expression:
            row.append(escape(d.expression) or "[dim]--[/dim]")
        row.append(escape(d.error))
        table.add_row(*row)

    console.print(table)


def render_keymap(console: Console) -> None:
    table = Table(title="Key bindings", show_header=True, header_style="bold")
    table.add_column("Keys", style="green", min_width=12)
    table.add_column("Action", min_width=12)
    for keys, action in binding_table():
        table.add_row(escape(keys), action)

    console.print()
    console.print(table)
    console.print()
