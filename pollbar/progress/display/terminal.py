"""
Terminal Control

In-place update primitives used by the poller: save the cursor once, return
to it before every pass and clear each line before rewriting it. Sinks that
are not terminals get plain sequential writes instead.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

ESC = "\x1b"
SAVE_CURSOR = f"{ESC}7"
RESTORE_CURSOR = f"{ESC}8"
CLEAR_LINE = f"\r{ESC}[2K"


class TerminalMode(Enum):
    """Terminal control modes."""
    AUTO = "auto"      # ANSI control when the sink is a terminal
    ON = "on"          # Always emit ANSI control sequences
    OFF = "off"        # Plain sequential writes


class TerminalControl(ABC):
    """Abstract base class for in-place update protocols."""

    @abstractmethod
    def save_cursor(self, out: Any) -> None:
        """Remember the current cursor position as the redraw origin."""
        pass

    @abstractmethod
    def restore_cursor(self, out: Any) -> None:
        """Move the cursor back to the saved origin."""
        pass

    @abstractmethod
    def clear_line(self, out: Any) -> None:
        """Erase the line under the cursor."""
        pass


class AnsiTerminalControl(TerminalControl):
    """DEC save/restore cursor and erase-in-line sequences."""

    def save_cursor(self, out: Any) -> None:
        out.write(SAVE_CURSOR)

    def restore_cursor(self, out: Any) -> None:
        out.write(RESTORE_CURSOR)

    def clear_line(self, out: Any) -> None:
        out.write(CLEAR_LINE)


class PlainTerminalControl(TerminalControl):
    """No-op control for redirected output; every pass appends its lines."""

    def save_cursor(self, out: Any) -> None:
        return

    def restore_cursor(self, out: Any) -> None:
        return

    def clear_line(self, out: Any) -> None:
        return


def is_terminal(out: Any) -> bool:
    """
    Check whether out itself is an interactive terminal.

    Only the sink is consulted; FORCE_COLOR and TTY_COMPATIBLE are ignored.
    """
    isatty = getattr(out, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError) as e:
        logger.debug(f"Terminal detection failed for {type(out).__name__}: {e}")
        return False


def select_terminal_control(out: Any, mode: TerminalMode = TerminalMode.AUTO) -> TerminalControl:
    """
    Pick the control protocol for a sink.

    Args:
        out: Output sink the poller will write to
        mode: Terminal mode; AUTO inspects the sink

    Returns:
        TerminalControl instance
    """
    if mode == TerminalMode.ON:
        return AnsiTerminalControl()
    if mode == TerminalMode.OFF:
        return PlainTerminalControl()

    if is_terminal(out):
        logger.debug("Sink is a terminal, using ANSI in-place updates")
        return AnsiTerminalControl()

    logger.debug("Sink is not a terminal, falling back to plain writes")
    return PlainTerminalControl()
