"""Environment-driven settings for the calcpad CLI.

CLI options win; these only supply defaults:
    CALCPAD_TRACE:     "1"/"true"/"yes" shows the per-key trace table
    CALCPAD_TAPE_DIR:  base directory for relative --tape paths
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Resolved CLI defaults."""

    trace: bool = False
    tape_dir: Optional[Path] = None

    def resolve_tape(self, tape: Path) -> Path:
        """Place a relative tape path under tape_dir when one is configured."""
        if self.tape_dir and not tape.is_absolute():
            return self.tape_dir / tape
        return tape


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment (os.environ by default)."""
    env = os.environ if env is None else env
    tape_dir = env.get("CALCPAD_TAPE_DIR", "").strip()
    return Settings(
        trace=env.get("CALCPAD_TRACE", "").strip().lower() in _TRUTHY,
        tape_dir=Path(tape_dir).expanduser() if tape_dir else None,
    )
