"""
Cancellation support for long-running exports.

A cancellation token is checked by the traversal before each callback. When
cancellation is requested the current callback finishes, the next check
raises PipelineCancelledException and the output file is left valid up to
its last line.
"""

import logging
import signal
from typing import Any, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class PipelineCancelledException(Exception):
    """Raised when pipeline is cancelled."""
    pass


@runtime_checkable
class CancellationToken(Protocol):
    """Protocol for cancellation tokens."""

    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        ...

    def throw_if_cancelled(self) -> None:
        """Raise exception if cancelled."""
        ...


class SimpleCancellationToken:
    """Simple cancellation token implementation."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    def is_cancelled(self) -> bool:
        """Check if cancelled."""
        return self._cancelled

    def throw_if_cancelled(self) -> None:
        """Raise if cancelled."""
        if self._cancelled:
            raise PipelineCancelledException("Pipeline execution cancelled")


def setup_cancellation_handler(token: SimpleCancellationToken) -> Optional[Any]:
    """
    Cancel the token on Ctrl+C instead of interrupting mid-line.

    A second Ctrl+C raises KeyboardInterrupt as usual.

    Returns:
        The previous SIGINT handler, for restore_default_handler().
    """
    def handler(signum: int, frame: Any) -> None:
        if token.is_cancelled():
            raise KeyboardInterrupt
        logger.warning("Cancellation requested, stopping after the current item")
        token.cancel()

    try:
        return signal.signal(signal.SIGINT, handler)
    except ValueError:
        # Not called from the main thread
        logger.debug("Cannot install SIGINT handler outside the main thread")
        return None


def restore_default_handler(previous: Optional[Any]) -> None:
    if previous is not None:
        signal.signal(signal.SIGINT, previous)
