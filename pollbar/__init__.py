"""
pollbar - concurrent in-place progress bars for the terminal.
"""

from pollbar.exceptions import (
    PollerError,
    OutputLockedError,
    AlreadyRunningError,
    PassError,
    SinkWriteError,
    RenderError,
)
from pollbar.progress import Bar, Poller, ShowResult, TerminalMode

__version__ = "0.1.0"

__all__ = [
    'Bar',
    'Poller',
    'ShowResult',
    'TerminalMode',
    'PollerError',
    'OutputLockedError',
    'AlreadyRunningError',
    'PassError',
    'SinkWriteError',
    'RenderError',
]
