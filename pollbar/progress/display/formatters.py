"""
Bar Format Callbacks

Ready-made format callbacks for bars. Each is a small object with a __call__
taking the bar and returning its display line; any private state (start time,
animation phase) is owned by the object and only touched by the renderer.
"""

import logging
import time
from typing import Optional, TYPE_CHECKING

from rich.console import Console
from rich.text import Text
from tqdm import tqdm

if TYPE_CHECKING:
    from pollbar.progress.core.bar import Bar, FormatFunc

logger = logging.getLogger(__name__)


class TemplateFormat:
    """
    str.format based callback.

    Available fields: name, position, target, percent.
    """

    def __init__(self, template: str) -> None:
        self.template = template

    def __call__(self, bar: "Bar") -> str:
        state = bar.snapshot()
        try:
            return self.template.format(
                name=state.name,
                position=state.position,
                target=state.target,
                percent=state.percent,
            )
        except (KeyError, IndexError):
            return self.template


class CounterFormat:
    """Fixed-width ASCII bar followed by position/target."""

    def __init__(self, width: int = 30, fill: str = "#", empty: str = "-") -> None:
        if width < 1:
            raise ValueError(f"width must be at least 1, got {width}")
        self.width = width
        self.fill = fill
        self.empty = empty

    def __call__(self, bar: "Bar") -> str:
        state = bar.snapshot()
        filled = int(self.width * state.percent / 100)
        label = f"{state.name} " if state.name else ""
        return (
            f"{label}[{self.fill * filled}{self.empty * (self.width - filled)}] "
            f"{state.position}/{state.target}"
        )


class MeterFormat:
    """
    tqdm-style meter with rate and remaining time.

    The clock starts at the first render.
    """

    def __init__(self, unit: str = "it", ncols: Optional[int] = 80, ascii: bool = True) -> None:
        self.unit = unit
        self.ncols = ncols
        self.ascii = ascii
        self._started: Optional[float] = None

    def __call__(self, bar: "Bar") -> str:
        now = time.monotonic()
        if self._started is None:
            self._started = now
        state = bar.snapshot()
        return tqdm.format_meter(
            n=state.position,
            total=state.target or None,
            elapsed=now - self._started,
            ncols=self.ncols,
            prefix=state.name,
            ascii=self.ascii,
            unit=self.unit,
        )


class StyledFormat:
    """Wraps another callback's line in a rich style, rendered to ANSI."""

    def __init__(self, inner: "FormatFunc", style: str, color_system: str = "standard") -> None:
        self.inner = inner
        self.style = style
        self._console = Console(
            force_terminal=True,
            color_system=color_system,
            width=10_000,
            soft_wrap=True,
        )

    def __call__(self, bar: "Bar") -> str:
        line = self.inner(bar)
        with self._console.capture() as capture:
            self._console.print(Text(line, style=self.style), end="")
        return capture.get()
