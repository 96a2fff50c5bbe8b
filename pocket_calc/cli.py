"""CLI interface for Pocket Calc.

Commands:
- press: Feed a key sequence to a fresh calculator and show the result
- repl: Interactive calculator
- history: List, show, pick and clear past calculations
"""

import sys
from pathlib import Path

import click
import questionary
from rich.console import Console

from . import __version__
from .config import load_config
from .display import show_history, show_notification, show_state, format_time
from .history import HistoryStore
from .keymap import tokenize_keys
from .log import setup_logging
from .session import CalculatorSession


console = Console()


def _get_store(ctx) -> HistoryStore:
    config = ctx.obj["config"]
    return HistoryStore(
        ctx.obj["project_path"],
        max_entries=config.max_entries,
        storage_key=config.storage_key,
    )


def _get_session(ctx) -> CalculatorSession:
    session = CalculatorSession(_get_store(ctx))
    session.subscribe(show_notification)
    return session


@click.group()
@click.version_option(version=__version__, prog_name="pocket-calc")
@click.option(
    "--path",
    "-p",
    default=".",
    help="Directory holding .pocket-calc data (default: current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, path: str, verbose: bool):
    """Pocket Calc - a keyboard-driven calculator with history.

    Keys: digits, '.', + - * /, '=' or {Enter}, '%', {Escape} (clear all),
    {Delete} (clear entry), {Backspace}.
    """
    ctx.ensure_object(dict)
    project_path = str(Path(path).resolve())
    config = load_config(project_path)

    ctx.obj["project_path"] = project_path
    ctx.obj["config"] = config
    setup_logging("DEBUG" if verbose else config.log_level)


# --- Calculator Commands ---


@main.command()
@click.argument("keys", nargs=-1, required=True)
@click.option("--from-history", "entry_id", help="Start from a history entry's result")
@click.option("--plain", is_flag=True, help="Print only the display value")
@click.pass_context
def press(ctx, keys: tuple, entry_id: str, plain: bool):
    """Press KEYS on a fresh calculator.

    Examples:
        pocket-calc press 5+3+2=
        pocket-calc press 10 / 4 {Enter}
        pocket-calc press --from-history 1700000000000000 "*2="
    """
    session = _get_session(ctx)

    try:
        if entry_id:
            session.select_history_entry(entry_id)
        session.press_all(tokenize_keys(" ".join(keys)))
    except KeyError:
        console.print(f"[red]History entry not found: {entry_id}[/red]")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if plain:
        click.echo(session.state.display)
    else:
        show_state(session.state)

    if session.state.has_error:
        sys.exit(1)


@main.command()
@click.pass_context
def repl(ctx):
    """Run an interactive calculator.

    Type keys and press return. Commands:
        :history          Show history
        :use ID           Recall a history entry
        :clear-history    Clear history
        :quit             Exit
    """
    session = _get_session(ctx)
    show_state(session.state)

    while True:
        try:
            line = click.prompt("", prompt_suffix="> ", default="", show_default=False)
        except click.Abort:
            break

        line = line.strip()
        if not line:
            continue

        if line.startswith(":"):
            command, _, arg = line[1:].partition(" ")
            if command in ("quit", "q", "exit"):
                break
            elif command == "history":
                show_history(session.history)
                continue
            elif command == "clear-history":
                session.clear_history()
                console.print("[green]History cleared[/green]")
                continue
            elif command == "use":
                try:
                    session.select_history_entry(arg.strip())
                except KeyError:
                    console.print(f"[red]History entry not found: {arg.strip()}[/red]")
                    continue
            else:
                console.print(f"[yellow]Unknown command: :{command}[/yellow]")
                continue
        else:
            try:
                session.press_all(tokenize_keys(line))
            except ValueError as e:
                console.print(f"[red]Error: {e}[/red]")
                continue

        show_state(session.state)


# --- History Commands ---


@main.group()
@click.pass_context
def history(ctx):
    """Manage calculation history."""
    pass


@history.command("list")
@click.option("--limit", "-n", type=int, default=None, help="Show at most N entries")
@click.pass_context
def history_list(ctx, limit: int):
    """List past calculations, newest first."""
    entries = _get_store(ctx).entries
    if limit is not None:
        entries = entries[:limit]
    show_history(entries)


@history.command("show")
@click.argument("entry_id")
@click.pass_context
def history_show(ctx, entry_id: str):
    """Show a single history entry."""
    entry = _get_store(ctx).get(entry_id)

    if not entry:
        console.print(f"[red]History entry not found: {entry_id}[/red]")
        sys.exit(1)

    console.print()
    console.print(f"[bold]{entry.id}[/bold]  [dim]{format_time(entry)}[/dim]")
    console.print(f"  {entry.expression}")
    console.print(f"  [green]= {entry.result}[/green]")
    console.print()


@history.command("pick")
@click.pass_context
def history_pick(ctx):
    """Choose a past calculation and print its result."""
    entries = _get_store(ctx).entries

    if not entries:
        console.print("[dim]No calculations yet[/dim]")
        return

    choices = {f"{e.expression} = {e.result}  ({e.id})": e for e in entries}
    choice = questionary.select(
        "Recall calculation:",
        choices=list(choices),
    ).ask()

    if choice is None:
        console.print("[yellow]Aborted.[/yellow]")
        return

    session = _get_session(ctx)
    session.select_history_entry(choices[choice].id)
    show_state(session.state)


@history.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def history_clear(ctx, yes: bool):
    """Delete all past calculations."""
    if not yes and not click.confirm("Clear all history?", default=False):
        console.print("[yellow]Aborted.[/yellow]")
        return

    _get_store(ctx).clear()
    console.print("[green]History cleared[/green]")


if __name__ == "__main__":
    main()
