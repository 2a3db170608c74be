"""
Core Progress Components

Contains the bar indicator and the poller that redraws it.
"""

from pollbar.progress.core.bar import Bar, BarState, AtomicCounter, FormatFunc
from pollbar.progress.core.poller import Poller, ShowResult

__all__ = [
    'Bar',
    'BarState',
    'AtomicCounter',
    'FormatFunc',
    'Poller',
    'ShowResult',
]
