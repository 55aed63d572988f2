"""Calcpad session — feeds keys through a calculator and records what happened.

Data flow per key:
1. Map the key name to an Event (unbound keys are skipped)
2. Dispatch the event to the Calculator
3. On DivideByZero, report it on the console (the calculator has reset itself)
4. Record a TraceStep with the resulting display
"""

from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from calcpad.engine import Calculator, DivideByZero
from calcpad.keymap import key_to_event
from calcpad.models import TraceStep


class Session:
    """One calculator plus the trace of every key pressed into it."""

    def __init__(
        self,
        console: Console,
        calculator: Optional[Calculator] = None,
    ) -> None:
        self.console = console
        self.calculator = calculator or Calculator()
        self.steps: list[TraceStep] = []

    @property
    def display(self) -> str:
        return self.calculator.get_display_value()

    def press(self, key: str) -> Optional[TraceStep]:
        """Process a single key. Returns None if the key is unbound."""
        event = key_to_event(key)
        if event is None:
            self.console.print(f"  [dim]Ignored key: {escape(key)}[/dim]")
            return None

        error = ""
        try:
            self.calculator.dispatch(event)
        except DivideByZero as e:
            error = str(e)
            self.console.print(f"[red]Error:[/red] {error}")

        step = TraceStep(key=key, event=event, display=self.display, error=error)
        self.steps.append(step)
        return step

    def feed(self, keys: Iterable[str]) -> list[TraceStep]:
        """Process keys in order and return the steps recorded for them."""
        recorded = []
        for key in keys:
            step = self.press(key)
            if step:
                recorded.append(step)
        return recorded
