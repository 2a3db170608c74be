"""
Shared fixtures for poller tests.
"""

from __future__ import annotations

import io
import threading
from typing import List

import pytest

from pollbar.progress.config import PollerConfig, set_config
from pollbar.progress.display.terminal import CLEAR_LINE, RESTORE_CURSOR


class RecordingSink(io.StringIO):
    """In-memory sink that can split its contents into redraw passes."""

    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0
        self._lock = threading.Lock()

    def write(self, s: str) -> int:
        with self._lock:
            return super().write(s)

    def flush(self) -> None:
        self.flushes += 1
        super().flush()

    def passes(self) -> List[List[str]]:
        """Lines of each pass, assuming ANSI mode."""
        blocks = self.getvalue().split(RESTORE_CURSOR)[1:]
        return [_strip_clear(block).splitlines() for block in blocks]


class BrokenSink:
    """Sink whose write fails after a number of successful calls."""

    def __init__(self, fail_after: int = 0, error: Exception | None = None) -> None:
        self.fail_after = fail_after
        self.error = error or OSError("broken pipe")
        self.writes: List[str] = []

    def write(self, s: str) -> int:
        if len(self.writes) >= self.fail_after:
            raise self.error
        self.writes.append(s)
        return len(s)


def _strip_clear(block: str) -> str:
    return block.replace(CLEAR_LINE, "")


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts from the default configuration."""
    set_config(PollerConfig())
    yield
    set_config(PollerConfig())


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def broken_sink():
    """Factory for sinks that fail after a number of writes."""
    return BrokenSink
