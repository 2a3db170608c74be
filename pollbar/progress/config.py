"""
Poller Configuration Module

Configuration dataclass shared by every poller, with thread-safe global access.
"""

import logging
import math
from dataclasses import dataclass
from threading import RLock

from .display.terminal import TerminalMode

logger = logging.getLogger(__name__)


@dataclass
class PollerConfig:
    """Configuration settings for the redraw loop."""

    # Redraw timing (in seconds)
    default_interval: float = 0.1  # Interval used when none is given
    min_interval: float = 0.01  # Smaller intervals are clamped to this

    # Output
    terminal_mode: TerminalMode = TerminalMode.AUTO  # In-place update policy
    flush_each_pass: bool = True  # Flush the sink after every pass


# Global configuration instance
_config = PollerConfig()
_config_lock = RLock()


def get_config() -> PollerConfig:
    """Get the current global poller configuration."""
    with _config_lock:
        return _config


def set_config(config: PollerConfig) -> None:
    """Set the global poller configuration."""
    global _config
    with _config_lock:
        _config = config


def update_config(**kwargs) -> None:
    """Update specific configuration values."""
    with _config_lock:
        for key, value in kwargs.items():
            if hasattr(_config, key):
                setattr(_config, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")


def clamp_interval(seconds: float) -> float:
    """
    Validate a redraw interval and clamp it to the configured floor.

    Raises:
        ValueError: If seconds is not a positive finite number
    """
    if not math.isfinite(seconds) or seconds <= 0:
        raise ValueError(f"interval must be positive, got {seconds}")

    floor = get_config().min_interval
    if seconds < floor:
        logger.debug(f"Interval {seconds}s below minimum, clamped to {floor}s")
        return floor
    return seconds
