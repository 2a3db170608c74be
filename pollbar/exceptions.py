"""
pollbar - Exceptions

Centralized exception hierarchy for poller configuration and redraw failures.
"""


class PollerError(Exception):
    """Base exception for all poller operations."""
    pass


class OutputLockedError(PollerError):
    """Exception for output changes attempted during a redraw loop.

    Raised when:
    - set_output() is called while show() is running
    """

    def __init__(self, message: str = "cannot change output while running") -> None:
        super().__init__(message)


class AlreadyRunningError(PollerError):
    """Exception for a second redraw loop on the same poller.

    Raised when:
    - show() is called while another show() on the same poller is active
    """

    def __init__(self, message: str = "poller is already running") -> None:
        super().__init__(message)


class PassError(PollerError):
    """Base exception for failures inside a redraw pass.

    Always aborts the redraw loop. The original error is chained as __cause__.
    """
    pass


class SinkWriteError(PassError):
    """Exception for output sink failures.

    Raised when:
    - Writing a control sequence, bar line or line terminator fails
    - Flushing the sink fails
    - The sink has been closed
    """
    pass


class RenderError(PassError):
    """Exception for format callback failures.

    Raised when:
    - A bar's format callback raises
    - A bar's format callback returns something other than a string
    """
    pass
