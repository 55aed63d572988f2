"""CLI for the calcpad calculator.

Usage:
    python -m calcpad keys "12+3="               # Feed keys, print the display
    python -m calcpad keys "2*3+4=" --trace      # Show every step
    python -m calcpad keys "1/3=" --tape t.md    # Write a markdown tape
    python -m calcpad repl                       # Interactive calculator
    python -m calcpad keymap                     # Show key bindings
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from calcpad.display import render_keymap, render_state, render_trace, write_tape
from calcpad.keymap import tokenize
from calcpad.session import Session
from calcpad.settings import load_settings

app = typer.Typer(
    name="calcpad",
    help="Left-to-right keypad calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("q", "quit", "exit")


def _tokenize_or_exit(sequence: str) -> list[str]:
    try:
        return tokenize(sequence)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("keys")
def cmd_keys(
    sequence: str = typer.Argument(help="Keys to press, e.g. '12+3=' or '5 / 0 enter'"),
    trace: Optional[bool] = typer.Option(None, "--trace/--no-trace", "-t", help="Show a per-key trace table"),
    show_state: bool = typer.Option(False, "--state", "-s", help="Show the final calculator state"),
    tape: Optional[Path] = typer.Option(None, "--tape", help="Write a markdown tape to this path"),
) -> None:
    """Press a sequence of keys on a fresh calculator and print the display."""
    settings = load_settings()
    if trace is None:
        trace = settings.trace

    keys = _tokenize_or_exit(sequence)
    session = Session(console)
    session.feed(keys)

    if trace:
        render_trace(session.steps, console)
    if show_state:
        render_state(session.calculator.state, console)
    if tape:
        path = write_tape(session.steps, settings.resolve_tape(tape))
        console.print(f"Tape written to {path}")

    typer.echo(session.display)


@app.command("repl")
def cmd_repl() -> None:
    """Interactive calculator: type keys per line, 'state' to inspect, 'q' to quit."""
    session = Session(console)
    console.print("[bold]calcpad[/bold] [dim](q to quit, 'keymap' for bindings)[/dim]")
    typer.echo(session.display)

    while True:
        try:
            line = typer.prompt("", default="", show_default=False, prompt_suffix="> ")
        except typer.Abort:
            break

        word = line.strip().lower()
        if word in _QUIT_WORDS:
            break
        if word == "state":
            render_state(session.calculator.state, console)
            continue
        if word == "keymap":
            render_keymap(console)
            continue

        try:
            keys = tokenize(line)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            continue

        session.feed(keys)
        typer.echo(session.display)


@app.command("keymap")
def cmd_keymap() -> None:
    """Show key bindings."""
    render_keymap(console)


if __name__ == "__main__":
    app()
