"""
Progress Display Components

Terminal control protocols and ready-made bar format callbacks.
"""

from pollbar.progress.display.terminal import (
    TerminalMode,
    TerminalControl,
    AnsiTerminalControl,
    PlainTerminalControl,
    is_terminal,
    select_terminal_control,
)
from pollbar.progress.display.formatters import (
    TemplateFormat,
    CounterFormat,
    MeterFormat,
    StyledFormat,
)

__all__ = [
    'TerminalMode',
    'TerminalControl',
    'AnsiTerminalControl',
    'PlainTerminalControl',
    'is_terminal',
    'select_terminal_control',
    'TemplateFormat',
    'CounterFormat',
    'MeterFormat',
    'StyledFormat',
]
