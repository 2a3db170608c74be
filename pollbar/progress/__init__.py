"""
Progress Module

Concurrent progress bars redrawn in place by a single poller thread.

Usage:
    from pollbar.progress import Bar, Poller, CounterFormat

    bar = Bar(100, CounterFormat(), name="download")
    poller = Poller(0.1).add(bar)
    # worker threads call bar.advance()
    poller.show(cancel_event)
"""

from pollbar.progress.core import Bar, BarState, Poller, ShowResult
from pollbar.progress.display import (
    TerminalMode, TemplateFormat, CounterFormat, MeterFormat, StyledFormat
)
from pollbar.progress.config import PollerConfig, get_config, set_config, update_config
from pollbar.progress.utils import create_poller

__all__ = [
    'Bar',
    'BarState',
    'Poller',
    'ShowResult',
    'TerminalMode',
    'TemplateFormat',
    'CounterFormat',
    'MeterFormat',
    'StyledFormat',
    'PollerConfig',
    'get_config',
    'set_config',
    'update_config',
    'create_poller',
]
