"""Tests for the calcpad Typer CLI.

The final display is always the last line printed, so assertions read the
last output line regardless of how stdout and stderr are interleaved.
"""

import pytest
from typer.testing import CliRunner

from calcpad.__main__ import app


@pytest.fixture
def runner():
    return CliRunner()


def last_line(result):
    return result.output.strip().splitlines()[-1]


# --- keys ---

def test_keys_addition(runner):
    result = runner.invoke(app, ["keys", "12+3="])
    assert result.exit_code == 0
    assert last_line(result) == "15"


def test_keys_chaining(runner):
    result = runner.invoke(app, ["keys", "2*3+4="])
    assert result.exit_code == 0
    assert last_line(result) == "10"


def test_keys_rounding(runner):
    result = runner.invoke(app, ["keys", "1/3="])
    assert last_line(result) == "0.33333333"


def test_keys_divide_by_zero(runner):
    result = runner.invoke(app, ["keys", "5 / 0 enter"])
    assert result.exit_code == 0
    assert "Cannot divide by zero" in result.output
    assert last_line(result) == "0"


def test_keys_unknown_word_exits_1(runner):
    result = runner.invoke(app, ["keys", "1 + foo"])
    assert result.exit_code == 1
    assert "Unknown key" in result.output


def test_keys_trace(runner):
    result = runner.invoke(app, ["keys", "2*3+4=", "--trace"])
    assert result.exit_code == 0
    assert "Key trace" in result.output
    assert last_line(result) == "10"


def test_keys_trace_from_env(runner):
    result = runner.invoke(app, ["keys", "1+1="], env={"CALCPAD_TRACE": "1"})
    assert "Key trace" in result.output


def test_keys_no_trace_overrides_env(runner):
    result = runner.invoke(app, ["keys", "1+1=", "--no-trace"], env={"CALCPAD_TRACE": "1"})
    assert "Key trace" not in result.output
    assert last_line(result) == "2"


def test_keys_state(runner):
    result = runner.invoke(app, ["keys", "9+", "--state"])
    assert "Calculator state" in result.output
    assert last_line(result) == "9"


def test_keys_tape(runner, tmp_path):
    tape = tmp_path / "tape.md"
    result = runner.invoke(app, ["keys", "1/3=", "--tape", str(tape)])
    assert result.exit_code == 0
    assert tape.exists()
    assert "**Result:** `0.33333333`" in tape.read_text(encoding="utf-8")


def test_keys_tape_dir_from_env(runner, tmp_path):
    result = runner.invoke(
        app, ["keys", "1+1=", "--tape", "run.md"], env={"CALCPAD_TAPE_DIR": str(tmp_path)},
    )
    assert result.exit_code == 0
    assert (tmp_path / "run.md").exists()


# --- repl ---

def test_repl_accumulates_across_lines(runner):
    result = runner.invoke(app, ["repl"], input="12+\n3=\nq\n")
    assert result.exit_code == 0
    assert "15" in result.output


def test_repl_recovers_from_divide_by_zero(runner):
    result = runner.invoke(app, ["repl"], input="5/0=\n2+2=\nquit\n")
    assert result.exit_code == 0
    assert "Cannot divide by zero" in result.output
    assert "4" in result.output


def test_repl_ends_on_eof(runner):
    result = runner.invoke(app, ["repl"], input="7*6=\n")
    assert result.exit_code == 0
    assert "42" in result.output


def test_repl_reports_unknown_words(runner):
    result = runner.invoke(app, ["repl"], input="foo\nq\n")
    assert result.exit_code == 0
    assert "Unknown key" in result.output


def test_repl_state_command(runner):
    result = runner.invoke(app, ["repl"], input="9+\nstate\nq\n")
    assert "Calculator state" in result.output


# --- keymap ---

def test_keymap(runner):
    result = runner.invoke(app, ["keymap"])
    assert result.exit_code == 0
    assert "Key bindings" in result.output
    assert "Escape" in result.output
