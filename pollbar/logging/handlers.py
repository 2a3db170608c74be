"""
Progress-Aware Console Handler

Console handler that keeps log output out of the block of lines a poller is
redrawing, and hands held records back once the redraw loop ends.
"""

import logging
import sys
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

ErrorCallback = Callable[[logging.LogRecord], None]


class ProgressAwareConsoleHandler(logging.StreamHandler):
    """
    Stream handler with a hold mode for the duration of a redraw loop.

    Between hold() and end_hold():
    - records below WARNING are dropped here (the file handler still has them)
    - WARNING and above are queued, oldest dropped beyond max_held
    - if an error callback was given, ERROR and above go to it immediately
    """

    def __init__(self, stream=None, max_held: int = 50) -> None:
        super().__init__(stream or sys.stdout)
        self._max_held = max_held
        self._held: Optional[Deque[logging.LogRecord]] = None
        self._overflow = 0
        self._on_error: Optional[ErrorCallback] = None

    @property
    def holding(self) -> bool:
        return self._held is not None

    def hold(self, on_error: Optional[ErrorCallback] = None) -> None:
        """Start holding records back; a hold already in place is reset."""
        self.acquire()
        try:
            self._held = deque(maxlen=self._max_held)
            self._overflow = 0
            self._on_error = on_error
        finally:
            self.release()

    def end_hold(self) -> Tuple[List[logging.LogRecord], int]:
        """
        Stop holding records.

        Returns:
            Held records in arrival order, and how many were discarded
            because the queue was full
        """
        self.acquire()
        try:
            records = list(self._held or ())
            overflow = self._overflow
            self._held = None
            self._overflow = 0
            self._on_error = None
            return records, overflow
        finally:
            self.release()

    def held_messages(self) -> List[str]:
        """Formatted text of the records currently held."""
        self.acquire()
        try:
            return [self.format(record) for record in self._held or ()]
        finally:
            self.release()

    def emit(self, record: logging.LogRecord) -> None:
        held = self._held
        if held is None:
            super().emit(record)
            return

        if record.levelno < logging.WARNING:
            return

        if record.levelno >= logging.ERROR and self._on_error is not None:
            try:
                self._on_error(record)
            except Exception:
                self.handleError(record)
            return

        if len(held) == held.maxlen:
            self._overflow += 1
        held.append(record)
