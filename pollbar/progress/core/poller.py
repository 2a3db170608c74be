"""
Core Poller Module

The redraw engine: owns the bar registry, the redraw interval and the output
sink, and runs the loop that repaints every bar in place until all of them
finish or the caller cancels.
"""

import logging
import sys
import time
from enum import Enum
from threading import Event, RLock
from typing import Any, Callable, List, Optional, TYPE_CHECKING

from pollbar.exceptions import (
    AlreadyRunningError, OutputLockedError, RenderError, SinkWriteError
)
from pollbar.progress.config import clamp_interval, get_config
from pollbar.progress.core.bar import Bar
from pollbar.progress.display.terminal import (
    TerminalControl, TerminalMode, select_terminal_control
)

if TYPE_CHECKING:
    from pollbar.logging import LoggingManager

logger = logging.getLogger(__name__)

# Errors a file-like sink raises on write/flush; ValueError covers closed streams
SINK_ERRORS = (OSError, ValueError)


class ShowResult(Enum):
    """Terminal outcomes of a redraw loop that did not fail."""
    FINISHED = "finished"
    CANCELED = "canceled"


class Poller:
    """
    Periodic in-place renderer for a set of bars.

    Thread-safe registry: add(), set_interval() and set_output() may be called
    from any thread. show() runs the redraw loop on the calling thread and
    blocks until every bar is finished, the cancel event is set, or a pass
    fails.
    """

    def __init__(
        self,
        interval: Optional[float] = None,
        output: Any = None,
        terminal_mode: Optional[TerminalMode] = None,
        logging_manager: Optional["LoggingManager"] = None,
    ) -> None:
        """
        Initialize poller.

        Args:
            interval: Seconds between redraws (default from config)
            output: Sink with a write(str) method (default: sys.stdout)
            terminal_mode: In-place update policy (default from config)
            logging_manager: LoggingManager to switch into progress mode while running
        """
        config = get_config()
        self._lock = RLock()
        self._bars: List[Bar] = []
        self._interval = clamp_interval(config.default_interval if interval is None else interval)
        self._output = output if output is not None else sys.stdout
        self._terminal_mode = terminal_mode
        self._running = False
        self._passes = 0

        self._logging_manager = logging_manager

    def add(self, *bars: Bar) -> "Poller":
        """
        Append bars to the display.

        New bars show up from the next pass, below the existing ones.

        Returns:
            The poller, so calls can be chained
        """
        if not bars:
            return self
        with self._lock:
            self._bars.extend(bars)
            logger.debug(f"Added {len(bars)} bar(s), {len(self._bars)} registered")
        return self

    def set_interval(self, seconds: float) -> None:
        """Replace the redraw interval; the next wait uses the new value."""
        seconds = clamp_interval(seconds)
        with self._lock:
            self._interval = seconds

    def set_output(self, output: Any) -> None:
        """
        Replace the output sink.

        Raises:
            OutputLockedError: If the redraw loop is running
        """
        with self._lock:
            if self._running:
                raise OutputLockedError()
            self._output = output

    def set_logging_manager(self, logging_manager: Optional["LoggingManager"]) -> None:
        """Connect a LoggingManager so console logging stays out of the redraw."""
        with self._lock:
            self._logging_manager = logging_manager

    @property
    def interval(self) -> float:
        with self._lock:
            return self._interval

    @property
    def bars(self) -> List[Bar]:
        """Copy of the registered bars in display order."""
        with self._lock:
            return list(self._bars)

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def passes(self) -> int:
        """Number of passes rendered by the current or last run."""
        with self._lock:
            return self._passes

    def show(self, cancel: Optional[Event] = None) -> ShowResult:
        """
        Run the redraw loop until all bars finish or cancel is set.

        Args:
            cancel: Event that stops the loop at the next wait (optional)

        Returns:
            ShowResult.FINISHED when every bar reached its target,
            ShowResult.CANCELED when cancel was set first

        Raises:
            AlreadyRunningError: If another show() is active on this poller
            SinkWriteError: If writing to the sink fails
            RenderError: If a format callback fails
        """
        if cancel is None:
            cancel = Event()

        with self._lock:
            if self._running:
                raise AlreadyRunningError()
            self._running = True
            self._passes = 0
            out = self._output
            mode = self._terminal_mode or get_config().terminal_mode
            logging_manager = self._logging_manager

        progress_mode_active = False
        try:
            if logging_manager is not None:
                try:
                    logging_manager.enable_progress_mode(out)
                    progress_mode_active = True
                except Exception as e:
                    logger.warning(f"Failed to enable logging progress mode: {e}")

            control = select_terminal_control(out, mode)
            logger.debug(f"Redraw loop started with {type(control).__name__}")
            self._control(out, control.save_cursor)

            while True:
                if cancel.wait(timeout=self.interval):
                    logger.debug(f"Redraw loop canceled after {self._passes} pass(es)")
                    return ShowResult.CANCELED

                self._control(out, control.restore_cursor)
                if self._poll(out, control):
                    logger.debug(f"All bars finished after {self._passes} pass(es)")
                    return ShowResult.FINISHED
        finally:
            with self._lock:
                self._running = False
            if progress_mode_active:
                try:
                    logging_manager.disable_progress_mode()
                except Exception as e:
                    logger.warning(f"Failed to disable logging progress mode: {e}")

    def _poll(self, out: Any, control: TerminalControl) -> bool:
        """
        Render every bar once, in display order.

        Returns:
            True if every bar is finished (vacuously true with no bars)
        """
        with self._lock:
            started = time.monotonic()
            bars = list(self._bars)
            for bar in bars:
                self._control(out, control.clear_line)
                line = self._render(bar)
                self._write(out, line)
                self._write(out, "\n")

            finished = all(bar.is_finished() for bar in bars)
            if get_config().flush_each_pass:
                self._flush(out)

            self._passes += 1
            elapsed = time.monotonic() - started
            if elapsed > self._interval:
                logger.debug(
                    f"Pass {self._passes} took {elapsed:.3f}s, longer than the "
                    f"{self._interval}s interval"
                )
            return finished

    def _render(self, bar: Bar) -> str:
        try:
            line = bar.render()
        except Exception as e:
            raise RenderError(f"format callback failed for {bar!r}: {e}") from e
        if not isinstance(line, str):
            raise RenderError(
                f"format callback for {bar!r} returned {type(line).__name__}, expected str"
            )
        return line

    @staticmethod
    def _control(out: Any, primitive: Callable[[Any], None]) -> None:
        try:
            primitive(out)
        except SINK_ERRORS as e:
            raise SinkWriteError(f"failed to write to {type(out).__name__}: {e}") from e

    @staticmethod
    def _write(out: Any, text: str) -> None:
        try:
            out.write(text)
        except SINK_ERRORS as e:
            raise SinkWriteError(f"failed to write to {type(out).__name__}: {e}") from e

    @staticmethod
    def _flush(out: Any) -> None:
        flush = getattr(out, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except SINK_ERRORS as e:
            raise SinkWriteError(f"failed to flush {type(out).__name__}: {e}") from e
