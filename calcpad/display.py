"""Calcpad display — renders Rich tables and writes markdown tapes.

The trace table shows one row per processed key: the key, the event it
mapped to, the display afterwards and any error. The same rows can be
written to a markdown "tape" for later reference.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from calcpad.keymap import BINDINGS
from calcpad.models import CalculatorState, TraceStep


def _fmt_state_operator(state: CalculatorState) -> str:
    """Pending operation as 'previous op', or '--' when none."""
    if not state.has_pending_operation:
        return "--"
    return f"{state.previous_input} {state.operator.value}"


def render_state(state: CalculatorState, console: Console) -> None:
    """Render the full calculator state as a two-column table."""
    table = Table(title="Calculator state", show_header=True, header_style="bold")
    table.add_column("Field", style="dim", min_width=16)
    table.add_column("Value", justify="right", min_width=12)

    table.add_row("Display", f"[bold]{state.current_input}[/bold]")
    table.add_row("Pending", _fmt_state_operator(state))
    table.add_row(
        "Waiting",
        "[yellow]yes[/yellow]" if state.waiting_for_operand else "no",
    )

    console.print()
    console.print(table)
    console.print()


def render_trace(steps: list[TraceStep], console: Console) -> None:
    """Render a per-key trace table."""
    if not steps:
        console.print("[yellow]No keys processed.[/yellow]")
        return

    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Key", style="green")
    table.add_column("Event")
    table.add_column("Display", justify="right", min_width=12)
    table.add_column("Error", style="red")

    for i, step in enumerate(steps, 1):
        event = step.event.label() if step.event else "--"
        table.add_row(str(i), escape(step.key), event, step.display, step.error)

    console.print()
    console.print(table)
    console.print()


def render_keymap(console: Console) -> None:
    """Render the key bindings table."""
    table = Table(title="Key bindings", show_header=True, header_style="bold")
    table.add_column("Keys", style="green", min_width=18)
    table.add_column("Action", min_width=18)

    for keys, action in BINDINGS:
        table.add_row(keys, action)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Markdown tape
# ---------------------------------------------------------------------------

def _md_cell(text: str) -> str:
    """Escape pipes so a value cannot break the table row."""
    return text.replace("|", "\\|")


def write_tape(steps: list[TraceStep], path: Path) -> Path:
    """Write the trace as a markdown tape. Returns the path written."""
    lines: list[str] = []
    lines.append("# Calculator Tape")
    lines.append("")
    lines.append(f"*Generated {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}*")
    lines.append("")

    if not steps:
        lines.append("No keys processed.")
    else:
        lines.append("| # | Key | Event | Display | Error |")
        lines.append("|---|-----|-------|---------|-------|")
        for i, step in enumerate(steps, 1):
            event = step.event.label() if step.event else "--"
            lines.append(
                f"| {i} | `{_md_cell(step.key)}` | {event} "
                f"| {_md_cell(step.display)} | {step.error} |"
            )
        lines.append("")
        lines.append(f"**Result:** `{steps[-1].display}`")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
