"""calcpad — Left-to-right keypad calculator.

A small state machine turns key events (digits, decimal point, operators,
equals, clear, clear entry, backspace) into a running result, one pending
operation at a time. A Typer CLI drives it from the terminal.

Usage:
    python -m calcpad keys "12+3="                  # Prints 15
    python -m calcpad keys "2*3+4=" --trace         # Per-key trace table
    python -m calcpad repl                          # Interactive
    python -m calcpad keymap                        # Key bindings
"""
