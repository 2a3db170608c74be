"""
Progress Utilities

Helper functions for setting up pollers.
"""

import logging
from typing import Any, Optional

from .core import Poller
from .display.terminal import TerminalMode

logger = logging.getLogger(__name__)


def parse_terminal_mode(mode_str: str = "auto") -> TerminalMode:
    """
    Parse a terminal mode string.

    Args:
        mode_str: Terminal mode string ("auto", "on", "off")

    Returns:
        TerminalMode, AUTO when mode_str is not recognised
    """
    try:
        return TerminalMode(mode_str.lower())
    except ValueError:
        logger.warning(f"Invalid terminal mode '{mode_str}', using 'auto'")
        return TerminalMode.AUTO


def create_poller(
    interval: Optional[float] = None,
    terminal_mode: str = "auto",
    output: Any = None,
) -> Poller:
    """
    Create a poller with the specified interval and terminal mode.

    Args:
        interval: Seconds between redraws (default from config)
        terminal_mode: Terminal mode string ("auto", "on", "off")
        output: Output sink (default: sys.stdout)

    Returns:
        Poller instance
    """
    mode = parse_terminal_mode(terminal_mode)
    poller = Poller(interval=interval, output=output, terminal_mode=mode)
    logger.debug(f"Poller setup with interval={poller.interval}s, terminal mode={mode.value}")
    return poller
