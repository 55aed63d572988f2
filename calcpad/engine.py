"""Calculator state machine — turns discrete key events into a running result.

Operations fold left-to-right: there is exactly one pending binary operation
at a time and no precedence. Each public method mutates the owned
CalculatorState in place and returns the new display string.

Typical flow:
    calc = Calculator()
    calc.append_digit("1"); calc.append_digit("2")   # "12"
    calc.set_operator("+")                            # "12", waiting
    calc.append_digit("3")                            # "3"
    calc.calculate_equals()                           # "15"
"""

from __future__ import annotations

import math
import re
from typing import Optional, Union

from calcpad.models import CalculatorState, Event, EventKind, Operator

# Results are rounded to this many decimal places to hide float artifacts
# (0.1 + 0.2 shows as 0.3, 1 / 3 as 0.33333333).
ROUND_DIGITS = 8

DIGITS = "0123456789"

_SCALE = 10.0 ** ROUND_DIGITS

# Floats at or above this magnitude have no fractional part
_INTEGRAL_LIMIT = 2.0 ** 52

# Longest numeric prefix, the way a browser's parseFloat reads an operand
_NUMBER_PREFIX_RE = re.compile(r"\s*([+-]?(?:Infinity|\d+(?:\.\d*)?|\.\d+))")


class DivideByZero(ZeroDivisionError):
    """Raised when the pending operation divides by zero.

    The calculator has already reset itself to its initial state by the time
    this propagates to the caller.
    """

    def __init__(self, message: str = "Cannot divide by zero") -> None:
        super().__init__(message)


def parse_operand(text: str) -> float:
    """Parse an operand string into a float.

    Trailing garbage is ignored ("5." is 5.0); a string with no numeric
    prefix (e.g. a lone "-" left behind by backspace) is NaN.
    """
    m = _NUMBER_PREFIX_RE.match(text)
    if not m:
        return math.nan
    return float(m.group(1))


def round_result(value: float) -> float:
    """Round to ROUND_DIGITS decimal places, halves toward positive infinity.

    Ties are decided on the scaled float (1.000000005 rounds up to
    1.00000001). Non-finite values pass through.
    """
    if not math.isfinite(value) or abs(value) >= _INTEGRAL_LIMIT:
        return value
    return math.floor(value * _SCALE + 0.5) / _SCALE


def format_number(value: float) -> str:
    """Format a result as its minimal decimal string.

    No trailing zeros, no exponent notation, negative zero shows as "0".
    Non-finite values are spelled Infinity, -Infinity and NaN.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    text = format(value, f".{ROUND_DIGITS}f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _apply(op: Operator, left: float, right: float) -> float:
    """Apply a binary operator. Callers handle division by zero first."""
    if op is Operator.ADD:
        return left + right
    if op is Operator.SUBTRACT:
        return left - right
    if op is Operator.MULTIPLY:
        return left * right
    if op is Operator.DIVIDE:
        return left / right
    return right


class Calculator:
    """Event-driven calculator owning a single CalculatorState.

    Instances are independent; pass an existing state to drive it from the
    outside.
    """

    def __init__(self, state: Optional[CalculatorState] = None) -> None:
        self.state = state if state is not None else CalculatorState()

    # --- Entry ---

    def append_digit(self, d: str) -> str:
        """Type a digit 0-9.

        A fresh operand is started if one is awaited; a solitary "0" is
        replaced rather than extended.
        """
        if len(d) != 1 or d not in DIGITS:
            raise ValueError(f"Not a digit: {d!r}")
        state = self.state
        if state.waiting_for_operand:
            state.current_input = d
            state.waiting_for_operand = False
        elif state.current_input == "0":
            state.current_input = d
        else:
            state.current_input += d
        return state.current_input

    def append_decimal_point(self) -> str:
        """Type a decimal point; a second one in the same operand is ignored."""
        state = self.state
        if state.waiting_for_operand:
            state.current_input = "0."
            state.waiting_for_operand = False
        elif "." not in state.current_input:
            state.current_input += "."
        return state.current_input

    # --- Operations ---

    def set_operator(self, op: Union[str, Operator]) -> str:
        """Select the pending operator, resolving any pending operation first.

        Raises:
            DivideByZero: if resolving the pending operation divides by zero.
                The new operator is not stored in that case.
            ValueError: for Operator.NONE or an unknown symbol.
        """
        if not isinstance(op, Operator):
            op = Operator.from_symbol(op)
        if op is Operator.NONE:
            raise ValueError("Cannot select Operator.NONE as the pending operator")

        state = self.state
        if state.has_pending_operation and not state.waiting_for_operand:
            result = self.evaluate()
            state.current_input = format_number(result)
            state.previous_input = state.current_input
        elif state.previous_input == "":
            state.previous_input = state.current_input

        state.operator = op
        state.waiting_for_operand = True
        return state.current_input

    def evaluate(self) -> float:
        """Apply the pending operator to previous and current operands.

        Returns the result rounded to ROUND_DIGITS decimal places. With no
        pending operator the current operand is returned as-is.

        Raises:
            DivideByZero: on division by zero, after resetting all state.
        """
        state = self.state
        current = parse_operand(state.current_input)
        if state.operator is Operator.NONE:
            return current

        previous = parse_operand(state.previous_input)
        if state.operator is Operator.DIVIDE and current == 0:
            self.clear_all()
            raise DivideByZero()

        return round_result(_apply(state.operator, previous, current))

    def calculate_equals(self) -> str:
        """Resolve the pending operation and show the result.

        No-op unless an operation is pending and its right operand has been
        started.
        """
        state = self.state
        if state.has_pending_operation and not state.waiting_for_operand:
            result = self.evaluate()
            state.current_input = format_number(result)
            state.previous_input = ""
            state.operator = Operator.NONE
            state.waiting_for_operand = True
        return state.current_input

    # --- Editing ---

    def clear_all(self) -> str:
        self.state.reset()
        return self.state.current_input

    def clear_entry(self) -> str:
        """Reset only the operand being typed; any pending operation stays."""
        self.state.current_input = "0"
        return self.state.current_input

    def delete_last_digit(self) -> str:
        state = self.state
        state.current_input = state.current_input[:-1] or "0"
        return state.current_input

    def get_display_value(self) -> str:
        return self.state.current_input

    # --- Event intake ---

    def dispatch(self, event: Event) -> str:
        """Route an Event to the matching operation and return the display.

        Raises:
            DivideByZero: propagated from equals or operator chaining.
        """
        kind = event.kind
        if kind is EventKind.DIGIT:
            return self.append_digit(event.value)
        if kind is EventKind.OPERATOR:
            return self.set_operator(event.value)
        if kind is EventKind.DECIMAL:
            return self.append_decimal_point()
        if kind is EventKind.EQUALS:
            return self.calculate_equals()
        if kind is EventKind.CLEAR_ALL:
            return self.clear_all()
        if kind is EventKind.CLEAR_ENTRY:
            return self.clear_entry()
        if kind is EventKind.BACKSPACE:
            return self.delete_last_digit()
        raise ValueError(f"Unhandled event kind: {kind}")
