"""Key bindings: physical key names to calculator events.

Key names follow the browser KeyboardEvent.key spelling ("Enter", "Escape",
"Backspace", "Delete") plus single printable characters. Sequences typed on a
command line are split into key names by tokenize():

    "12+3="          -> ["1", "2", "+", "3", "="]
    "5 / 0 enter"    -> ["5", "/", "0", "Enter"]
    "9 bs ce 4 esc"  -> ["9", "Backspace", "Delete", "4", "Escape"]
"""

from __future__ import annotations

import re
from typing import Optional

from calcpad.models import Event, EventKind, Operator

# Single-character operator keys, glyphs included
_OPERATOR_KEYS = {"+", "-", "*", "/", "×", "÷", "−"}

_NAMED_KEYS: dict[str, Event] = {
    ".": Event(EventKind.DECIMAL),
    "=": Event(EventKind.EQUALS),
    "Enter": Event(EventKind.EQUALS),
    "Backspace": Event(EventKind.BACKSPACE),
    "Escape": Event(EventKind.CLEAR_ALL),
    "Delete": Event(EventKind.CLEAR_ENTRY),
}

# Words accepted on the command line, lowercased → canonical key name
_WORD_ALIASES: dict[str, str] = {
    "enter": "Enter",
    "escape": "Escape",
    "esc": "Escape",
    "c": "Escape",
    "backspace": "Backspace",
    "bs": "Backspace",
    "delete": "Delete",
    "del": "Delete",
    "ce": "Delete",
}

# Letter runs are words; anything else non-blank is a single key
_TOKEN_RE = re.compile(r"[A-Za-z]+|\S")

# (keys, description) rows for the keymap listing
BINDINGS: list[tuple[str, str]] = [
    ("0-9", "digit"),
    ("+ - * /  (× ÷ −)", "operator"),
    (".", "decimal point"),
    ("= / Enter", "equals"),
    ("Backspace (bs)", "delete last digit"),
    ("Escape (esc, c)", "clear all"),
    ("Delete (del, ce)", "clear entry"),
]


def key_to_event(key: str) -> Optional[Event]:
    """Map a key name to its Event, or None for unbound keys."""
    if len(key) == 1 and key.isdigit() and key.isascii():
        return Event.digit(key)
    if key in _OPERATOR_KEYS:
        return Event.operator(Operator.from_symbol(key))
    return _NAMED_KEYS.get(key)


def tokenize(text: str) -> list[str]:
    """Split a typed key sequence into key names.

    Raises:
        ValueError: for a word that names no key.
    """
    keys: list[str] = []
    for m in _TOKEN_RE.finditer(text):
        token = m.group(0)
        if token.isalpha():
            name = _WORD_ALIASES.get(token.lower())
            if name is None:
                raise ValueError(f"Unknown key: {token!r}")
            keys.append(name)
        else:
            keys.append(token)
    return keys
