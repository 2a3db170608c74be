#!/usr/bin/env python3
"""
pollbar demo - Main Entry Point

Runs sample animations:
1. Three unbounded bars advanced by worker threads at different paces
2. The second and third bars are added while the poller is running
3. The redraw interval is sped up 10x
4. The run is canceled after --seconds (or Ctrl+C)
"""

import sys
import logging
import threading
import time

from pollbar.cli.config import parse_arguments
from pollbar.exceptions import PassError
from pollbar.logging import LoggingManager
from pollbar.progress import Bar, Poller, ShowResult, StyledFormat, create_poller

logger = logging.getLogger(__name__)

UNBOUNDED = sys.maxsize


class DashAnimation:
    """A runner dashing back and forth across the line."""

    def __init__(self, max_dash: int = 20) -> None:
        self.max_dash = max_dash
        self._forward = True
        self._dash = 0

    def __call__(self, bar: Bar) -> str:
        if self._forward:
            if self._dash == 0:
                frame = "┏( ^o^)┛"
            else:
                frame = "　" * (self._dash - 1) + "三┏( ^o^)┛"
        else:
            if self._dash == 0:
                frame = "　" * self.max_dash + "┗(^o^ )┓"
            else:
                frame = "　" * (self.max_dash - self._dash) + "┗(^o^ )┓三"

        if self._dash >= self.max_dash:
            self._forward = not self._forward
            self._dash = 0
        else:
            self._dash += 1
        return frame


class BounceAnimation:
    """A ball bouncing inside a box, with the bar's position count."""

    def __init__(self, width: int = 24) -> None:
        self.width = width
        self._offset = 0
        self._step = 1

    def __call__(self, bar: Bar) -> str:
        cells = [" "] * self.width
        cells[self._offset] = "o"
        if not 0 <= self._offset + self._step < self.width:
            self._step = -self._step
        self._offset += self._step
        return f"|{''.join(cells)}| {bar.position}"


def advance_every(bar: Bar, seconds: float, stop: threading.Event) -> None:
    """Worker: advance bar once per period until stop is set."""
    while not stop.wait(seconds):
        bar.advance()


def schedule_demo(poller: Poller, later_bars, cancel: threading.Event, seconds: float) -> None:
    """Add bars, speed up, then cancel, spread over the demo duration."""
    step = seconds / 4
    for bar in later_bars:
        if cancel.wait(step):
            return
        poller.add(bar)
        logger.info(f"Added bar {bar.name}")

    if cancel.wait(step):
        return
    poller.set_interval(poller.interval / 10)
    logger.info(f"Redraw interval sped up to {poller.interval}s")

    cancel.wait(step)
    cancel.set()


def main(argv=None):
    """
    Main entry point - parse config and run the demo.

    Returns:
        Exit code: 0 when finished or canceled, 1 for output failures,
        130 when interrupted
    """
    args = parse_arguments(argv)

    logging_manager = LoggingManager.get_instance()
    logging_manager.setup(args.log_file, console_level=args.console_log_level)

    poller = create_poller(args.interval, args.terminal)
    poller.set_logging_manager(logging_manager)

    bars = [
        Bar(UNBOUNDED, DashAnimation(), name="dash"),
        Bar(UNBOUNDED, StyledFormat(BounceAnimation(), "bold cyan"), name="bounce"),
        Bar(UNBOUNDED, StyledFormat(DashAnimation(max_dash=12), "magenta"), name="sprint"),
    ]
    paces = [0.03, 0.02, 0.04]

    stop = threading.Event()
    cancel = threading.Event()
    workers = [
        threading.Thread(target=advance_every, args=(bar, pace, stop), daemon=True)
        for bar, pace in zip(bars, paces)
    ]
    workers.append(threading.Thread(
        target=schedule_demo,
        args=(poller, bars[1:], cancel, args.seconds),
        daemon=True,
    ))

    poller.add(bars[0])
    for worker in workers:
        worker.start()

    try:
        result = poller.show(cancel)
        if result == ShowResult.CANCELED:
            logger.info(f"Demo canceled after {poller.passes} pass(es)")
        else:
            logger.info(f"All bars finished after {poller.passes} pass(es)")
        return 0

    except PassError as e:
        logger.error(f"Redraw failed: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 1

    except KeyboardInterrupt:
        logger.warning("Demo interrupted by user (Ctrl+C)")
        return 130

    finally:
        stop.set()
        cancel.set()
        logging_manager.cleanup()


if __name__ == '__main__':
    sys.exit(main())
