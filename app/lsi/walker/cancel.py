"""Cooperative cancellation for path traversal.

A CancelToken is checked by the walker before each level of a walk and
before each record is produced. Cancelling never interrupts a blocking
filesystem call; the walk stops at the next check.
"""

import threading
import time

from lsi.walker.errors import DeadlineExceededError, WalkCancelledError


class CancelToken:
    """Cancellation signal with an optional deadline.

    The token can be cancelled from any thread.

    Args:
        timeout: Seconds until the token cancels itself. None or 0 means
            no deadline.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._start = time.monotonic()
        self._deadline = self._start + timeout if timeout else None

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancelToken":
        """Create a token that expires ``seconds`` from now."""
        return cls(timeout=seconds)

    @property
    def elapsed(self) -> float:
        """Seconds since the token was created."""
        return time.monotonic() - self._start

    @property
    def expired(self) -> bool:
        """Check if the deadline, if any, has passed."""
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        """Check if the token was cancelled or its deadline passed."""
        return self._event.is_set() or self.expired

    def cancel(self) -> None:
        """Cancel the token."""
        self._event.set()

    @property
    def error(self) -> WalkCancelledError | None:
        """Return the error describing the cancellation, or None.

        An explicit cancel() takes precedence over an expired deadline.
        """
        if self._event.is_set():
            return WalkCancelledError()
        if self.expired:
            return DeadlineExceededError(self.elapsed)
        return None
