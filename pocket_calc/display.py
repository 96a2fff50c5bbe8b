"""Terminal rendering for Pocket Calc."""

from typing import List

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .engine import CalculatorState
from .history import HistoryEntry
from .session import Notification


console = Console()


def format_time(entry: HistoryEntry) -> str:
    """Short local time for a history entry (HH:MM)."""
    return entry.timestamp.astimezone().strftime("%H:%M")


def render_state(state: CalculatorState) -> Panel:
    """Build the display panel: expression line above the current value."""
    style = "bold red" if state.has_error else "bold white"
    lines = []
    if state.expression:
        lines.append(Text(state.expression, style="dim", justify="right"))
    lines.append(Text(state.display, style=style, justify="right"))

    return Panel(
        Group(*lines),
        title="Calculator",
        border_style="red" if state.has_error else "blue",
        width=40,
    )


def render_history(entries: List[HistoryEntry]) -> Table:
    """Build the history table, newest first."""
    table = Table(title="Calculation History")
    table.add_column("Time", style="dim", width=5)
    table.add_column("ID", style="cyan")
    table.add_column("Expression", style="white")
    table.add_column("Result", style="green", justify="right")

    for entry in entries:
        table.add_row(format_time(entry), entry.id, entry.expression, f"= {entry.result}")

    return table


def show_state(state: CalculatorState):
    """Print the display panel."""
    console.print(render_state(state))


def show_history(entries: List[HistoryEntry]):
    """Print the history table, or a placeholder when empty."""
    if not entries:
        console.print("[dim]No calculations yet[/dim]")
        return
    console.print(render_history(entries))
    console.print("[dim]Use an ID to recall its result[/dim]")


def show_notification(notification: Notification):
    """Print an error notification."""
    console.print(
        Panel.fit(
            f"[bold red]{notification.title}[/bold red]\n{notification.message}",
            border_style="red",
        )
    )
