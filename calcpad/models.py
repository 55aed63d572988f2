"""Data models for the calcpad calculator.

Operator and EventKind enums, Event, CalculatorState, TraceStep — the typed
structures that flow through keymap → engine → session → display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Operator(str, Enum):
    """Pending binary operators, valued by their keyboard symbol."""

    NONE = ""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @classmethod
    def from_symbol(cls, symbol: str) -> Operator:
        """Look up an operator by symbol, accepting the display glyphs too.

        Raises:
            ValueError: if the symbol is not one of the four operators.
        """
        symbol = _GLYPHS.get(symbol, symbol)
        if not symbol:
            raise ValueError("Empty operator symbol")
        return cls(symbol)


# Display glyphs some keypads send instead of ASCII symbols
_GLYPHS = {"×": "*", "÷": "/", "−": "-"}


class EventKind(str, Enum):
    """The seven event kinds the calculator accepts."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR_ALL = "clear_all"
    CLEAR_ENTRY = "clear_entry"
    BACKSPACE = "backspace"


@dataclass(frozen=True)
class Event:
    """A single validated input event.

    ``value`` is the digit for DIGIT, the Operator for OPERATOR, None otherwise.
    """

    kind: EventKind
    value: Optional[Union[str, Operator]] = None

    @classmethod
    def digit(cls, d: str) -> Event:
        return cls(EventKind.DIGIT, d)

    @classmethod
    def operator(cls, op: Union[str, Operator]) -> Event:
        if not isinstance(op, Operator):
            op = Operator.from_symbol(op)
        return cls(EventKind.OPERATOR, op)

    def label(self) -> str:
        """Short human-readable form, e.g. 'digit 7' or 'operator +'."""
        if self.value is None:
            return self.kind.value
        value = self.value.value if isinstance(self.value, Operator) else self.value
        return f"{self.kind.value} {value}"


@dataclass
class CalculatorState:
    """Mutable state owned by one calculator instance.

    previous_input is "" when no left operand is pending; operator is
    Operator.NONE exactly when previous_input is "".
    """

    current_input: str = "0"
    operator: Operator = Operator.NONE
    previous_input: str = ""
    waiting_for_operand: bool = False

    def reset(self) -> None:
        """Restore every field to its initial value."""
        self.current_input = "0"
        self.operator = Operator.NONE
        self.previous_input = ""
        self.waiting_for_operand = False

    @property
    def has_pending_operation(self) -> bool:
        return self.operator is not Operator.NONE and self.previous_input != ""

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "current_input": self.current_input,
            "operator": self.operator.value,
            "previous_input": self.previous_input,
            "waiting_for_operand": self.waiting_for_operand,
        }


@dataclass
class TraceStep:
    """One processed key in a session: what came in and what was shown."""

    key: str
    event: Optional[Event]
    display: str
    error: str = ""

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "event": self.event.label() if self.event else None,
            "display": self.display,
            "error": self.error,
        }
