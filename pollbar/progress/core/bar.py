"""
Core Progress Bar Module

Defines the Bar indicator: an atomically advanced position, a fixed target and
a format callback that turns the bar's state into one display line.
"""

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Optional

logger = logging.getLogger(__name__)

FormatFunc = Callable[["Bar"], str]


@dataclass(frozen=True)
class BarState:
    """Consistent view of a bar, read once."""
    name: str
    position: int
    target: int

    @property
    def finished(self) -> bool:
        return self.position >= self.target

    @property
    def percent(self) -> float:
        if self.target <= 0:
            return 100.0
        return min(self.position / self.target, 1.0) * 100


class AtomicCounter:
    """
    Integer counter with fetch-and-add semantics.

    Increments from any number of threads are never lost and reads never
    observe a partially applied update.
    """

    def __init__(self, initial: int = 0) -> None:
        self._lock = Lock()
        self._value = initial

    def add(self, amount: int = 1) -> int:
        """Add amount and return the previous value."""
        with self._lock:
            previous = self._value
            self._value = previous + amount
            return previous

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class Bar:
    """
    A single progress indicator.

    Producer threads call advance() freely; the poller's renderer thread is the
    only caller of render(), so a stateful format callback never runs
    concurrently with itself.
    """

    def __init__(self, target: int, format_func: FormatFunc, name: str = "") -> None:
        """
        Initialize a bar.

        Args:
            target: Position at which the bar counts as finished
            format_func: Callback returning the display string for this bar
            name: Optional label exposed to templates
        """
        if target < 0:
            raise ValueError(f"target must be non-negative, got {target}")
        if not callable(format_func):
            raise ValueError("format_func must be callable")
        self.name = name
        self._target = target
        self._format_func = format_func
        self._position = AtomicCounter()

    @classmethod
    def from_template(cls, target: int, template: str, name: str = "") -> "Bar":
        """Create a bar rendered through a str.format template."""
        # Imported here to avoid a core -> display import cycle
        from pollbar.progress.display.formatters import TemplateFormat
        return cls(target, TemplateFormat(template), name=name)

    def advance(self, amount: int = 1) -> None:
        """Advance position by amount (one unit by default)."""
        if amount < 0:
            raise ValueError(f"position only moves forward, got amount={amount}")
        self._position.add(amount)

    @property
    def position(self) -> int:
        return self._position.value

    @property
    def target(self) -> int:
        return self._target

    def snapshot(self) -> BarState:
        return BarState(name=self.name, position=self.position, target=self._target)

    def is_finished(self) -> bool:
        return self.position >= self._target

    def render(self) -> str:
        """Invoke the format callback and return its display string."""
        return self._format_func(self)

    def __repr__(self) -> str:
        label: Optional[str] = self.name or None
        return f"Bar(name={label!r}, position={self.position}, target={self._target})"
