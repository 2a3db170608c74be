"""
Logging Module - Progress-Aware Logging System

Keeps console logging out of the terminal block a poller is redrawing.
While progress mode is active, console output is held back while file
logging continues.

Usage:
    from pollbar.logging import LoggingManager

    manager = LoggingManager.get_instance()
    manager.setup(log_file, console_level)

    # Automatic while a connected poller runs
    poller.set_logging_manager(manager)
    poller.show(cancel)
"""

from pollbar.logging.manager import LoggingManager
from pollbar.logging.handlers import ProgressAwareConsoleHandler

__all__ = [
    'LoggingManager',
    'ProgressAwareConsoleHandler',
]
