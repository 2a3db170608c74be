"""
Logging Manager

Connects logging to the poller: while a redraw loop owns the terminal the
console handler holds records back, and when the loop ends they are replayed
below the final block of bars.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Any, Iterator, List, Optional, TextIO

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from pollbar.logging.handlers import ProgressAwareConsoleHandler
from pollbar.progress.display.terminal import is_terminal

logger = logging.getLogger(__name__)


def shares_output(first: Any, second: Any) -> bool:
    """Check whether writes to first could land inside output written to second."""
    if first is None or second is None:
        return False
    return first is second or (is_terminal(first) and is_terminal(second))


class LoggingManager:
    """
    Thread-safe owner of the root logger's file and console handlers.

    Progress mode is reference counted so nested or overlapping runs keep the
    console held until the last one ends.
    """

    _global_lock = RLock()
    _instance: Optional['LoggingManager'] = None

    def __init__(self, error_console: Optional[Console] = None) -> None:
        """
        Initialize logging manager.

        Args:
            error_console: Rich console for error panels (default: stderr)
        """
        self._lock = RLock()
        self._console_handler: Optional[ProgressAwareConsoleHandler] = None
        self._file_handler: Optional[logging.FileHandler] = None
        self._original_handlers: List[logging.Handler] = []
        self._progress_depth = 0
        self._error_console = error_console

    @classmethod
    def get_instance(cls) -> 'LoggingManager':
        """Get or create singleton instance (thread-safe)."""
        if cls._instance is None:
            with cls._global_lock:
                if cls._instance is None:
                    cls._instance = LoggingManager()
        return cls._instance

    @property
    def error_console(self) -> Console:
        if self._error_console is None:
            self._error_console = Console(stderr=True)
        return self._error_console

    def setup(
        self,
        log_file: Optional[Path] = None,
        console_level: int = logging.WARNING,
        stream: Optional[TextIO] = None,
    ) -> None:
        """
        Install the file and console handlers on the root logger.

        Args:
            log_file: DEBUG-level log file (no file logging when None)
            console_level: Console level: WARNING by default, INFO with
                --verbose, DEBUG with --debug
            stream: Console stream (default: sys.stdout)
        """
        with self._lock:
            root_logger = logging.getLogger()
            self._original_handlers = root_logger.handlers.copy()
            root_logger.handlers.clear()
            root_logger.setLevel(logging.DEBUG)

            if log_file is not None:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                self._file_handler = logging.FileHandler(log_file)
                self._file_handler.setLevel(logging.DEBUG)
                self._file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))
                root_logger.addHandler(self._file_handler)

            self._console_handler = ProgressAwareConsoleHandler(stream or sys.stdout)
            self._console_handler.setLevel(console_level)
            self._console_handler.setFormatter(logging.Formatter(
                '%(levelname)s - %(message)s' if console_level >= logging.INFO
                else '%(message)s'
            ))
            root_logger.addHandler(self._console_handler)

            logger.debug(f"Logging configured, console level {logging.getLevelName(console_level)}")

    def enable_progress_mode(self, sink: Any = None) -> None:
        """
        Hold console logging back while a poller draws to sink.

        Errors still print immediately unless the error console writes to
        the same output as sink; then they wait for the end of the run too.

        Args:
            sink: The poller's output sink, if known
        """
        with self._lock:
            self._progress_depth += 1
            if self._progress_depth > 1 or self._console_handler is None:
                return

            if shares_output(self.error_console.file, sink):
                self._console_handler.hold()
                logger.debug("Console held, errors deferred until the run ends")
            else:
                self._console_handler.hold(on_error=self.display_error)
                logger.debug("Console held, errors shown immediately")

    def disable_progress_mode(self) -> None:
        """End progress mode and replay held records once the last run ends."""
        with self._lock:
            if self._progress_depth == 0:
                return
            self._progress_depth -= 1
            if self._progress_depth == 0 and self._console_handler is not None:
                self._replay(*self._console_handler.end_hold())

    @contextmanager
    def progress_mode(self, sink: Any = None) -> Iterator[None]:
        """
        Context manager for progress mode with guaranteed cleanup.

        Usage:
            with logging_manager.progress_mode(sys.stdout):
                poller.show(cancel)
        """
        self.enable_progress_mode(sink)
        try:
            yield
        finally:
            self.disable_progress_mode()

    def is_progress_mode_active(self) -> bool:
        with self._lock:
            return self._progress_depth > 0

    @property
    def held_messages(self) -> List[str]:
        """Formatted records waiting for the end of progress mode."""
        with self._lock:
            if self._console_handler is None:
                return []
            return self._console_handler.held_messages()

    def display_error(self, record: logging.LogRecord) -> None:
        """
        Show an error record as a rich panel on the error console.

        Args:
            record: LogRecord to display
        """
        text = Text()
        text.append(record.levelname, style="bold red")
        if record.name:
            text.append(f" ({record.name})", style="dim red")
        text.append(f": {record.getMessage()}", style="red")
        text.append(f"\n{record.funcName}() line {record.lineno}", style="dim")

        try:
            self.error_console.print(Panel(
                text,
                title="Error during redraw",
                border_style="red",
                padding=(0, 1),
                expand=False,
            ))
        except Exception:
            sys.stderr.write(f"{record.levelname}: {record.getMessage()}\n")
            sys.stderr.flush()

    def _replay(self, records: List[logging.LogRecord], overflow: int) -> None:
        """Write held records below the final block of bars."""
        if not records:
            return

        handler = self._console_handler
        stream = handler.stream
        try:
            count = len(records) + overflow
            stream.write(f"\n{count} message(s) logged while rendering")
            stream.write(f" ({overflow} oldest dropped):\n" if overflow else ":\n")
            for record in records:
                if record.levelno >= logging.ERROR:
                    stream.flush()
                    self.display_error(record)
                else:
                    stream.write(handler.format(record) + "\n")
            stream.flush()
        except (OSError, ValueError) as e:
            sys.stderr.write(f"Failed to replay held log messages: {e}\n")

    def cleanup(self) -> None:
        """End any progress mode and restore the original root handlers."""
        with self._lock:
            if self._progress_depth:
                self._progress_depth = 1
                self.disable_progress_mode()

            root_logger = logging.getLogger()
            root_logger.handlers.clear()
            root_logger.handlers.extend(self._original_handlers)

            if self._file_handler is not None:
                self._file_handler.close()
                self._file_handler = None

            logger.debug("Logging manager cleanup complete")
