"""
Tests for terminal control selection and the in-place update primitives.
"""

from __future__ import annotations

import io

import pytest

from pollbar.progress.core.bar import Bar
from pollbar.progress.core.poller import Poller, ShowResult
from pollbar.progress.display.terminal import (
    CLEAR_LINE, RESTORE_CURSOR, SAVE_CURSOR,
    AnsiTerminalControl, PlainTerminalControl, TerminalMode,
    is_terminal, select_terminal_control,
)


class _FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_ansi_primitives_write_control_sequences() -> None:
    out = io.StringIO()
    control = AnsiTerminalControl()

    control.save_cursor(out)
    control.restore_cursor(out)
    control.clear_line(out)

    assert out.getvalue() == SAVE_CURSOR + RESTORE_CURSOR + CLEAR_LINE
    assert SAVE_CURSOR == "\x1b7"
    assert RESTORE_CURSOR == "\x1b8"


def test_plain_primitives_write_nothing() -> None:
    out = io.StringIO()
    control = PlainTerminalControl()

    control.save_cursor(out)
    control.restore_cursor(out)
    control.clear_line(out)

    assert out.getvalue() == ""


def test_forced_modes_ignore_sink() -> None:
    assert isinstance(select_terminal_control(io.StringIO(), TerminalMode.ON), AnsiTerminalControl)
    assert isinstance(select_terminal_control(_FakeTTY(), TerminalMode.OFF), PlainTerminalControl)


def test_auto_mode_uses_plain_writes_for_redirected_output() -> None:
    out = io.StringIO()

    assert not is_terminal(out)
    assert isinstance(select_terminal_control(out), PlainTerminalControl)


def test_auto_mode_uses_ansi_for_terminals() -> None:
    out = _FakeTTY()

    assert is_terminal(out)
    assert isinstance(select_terminal_control(out, TerminalMode.AUTO), AnsiTerminalControl)


def test_sink_without_isatty_is_not_a_terminal() -> None:
    class Bare:
        def write(self, s: str) -> int:
            return len(s)

    assert not is_terminal(Bare())


def test_closed_sink_is_not_a_terminal() -> None:
    out = io.StringIO()
    out.close()

    assert not is_terminal(out)


@pytest.mark.parametrize("name, value", [("FORCE_COLOR", "1"), ("TTY_COMPATIBLE", "1")])
def test_colour_overrides_do_not_make_redirected_output_a_terminal(monkeypatch, name, value) -> None:
    """Verify AUTO mode writes no escape sequences to a redirected sink."""
    monkeypatch.setenv(name, value)
    out = io.StringIO()
    bar = Bar(1, lambda b: "x")
    bar.advance()

    assert Poller(0.01, out, TerminalMode.AUTO).add(bar).show() == ShowResult.FINISHED
    assert out.getvalue() == "x\n"
    assert "\x1b" not in out.getvalue()
