"""Retry policy for deletes that race with lock holders.

A file handle closed a moment ago, an antivirus scanner or an indexer can
keep an entry locked for a short window. ``RetryPolicy`` describes how long
to wait between attempts and whether to ever give up; the default never
does.
"""

from __future__ import annotations

import errno
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from diskpath.constants import (
    BUSY_RETRY_DELAY,
    DEFAULT_RETRY_BACKOFF,
    DEFAULT_RETRY_MAX_DELAY,
    LOCKED_RETRY_DELAY,
    UNBOUNDED_ATTEMPTS,
)
from diskpath.exceptions import TransientIOError
from diskpath.logger import get_logger

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

logger = get_logger(__name__)

# errno values that mean "someone else is using it right now"
_TRANSIENT_ERRNOS = frozenset(
    {
        errno.EACCES,
        errno.EPERM,
        errno.EBUSY,
        errno.EAGAIN,
        errno.ENOTEMPTY,
        errno.ETXTBSY,
    }
)

# ERROR_ACCESS_DENIED, ERROR_SHARING_VIOLATION, ERROR_LOCK_VIOLATION,
# ERROR_DIR_NOT_EMPTY
_TRANSIENT_WINERRORS = frozenset({5, 32, 33, 145})

_LOCKED_WINERRORS = frozenset({5})


def is_transient(error: OSError) -> bool:
    """Return True if ``error`` looks like momentary contention."""
    if isinstance(error, FileNotFoundError):
        return False
    winerror = getattr(error, "winerror", None)
    if winerror is not None:
        return winerror in _TRANSIENT_WINERRORS
    if isinstance(error, PermissionError):
        return True
    return error.errno in _TRANSIENT_ERRNOS


def _is_locked(error: OSError) -> bool:
    winerror = getattr(error, "winerror", None)
    if winerror is not None:
        return winerror in _LOCKED_WINERRORS
    return isinstance(error, PermissionError)


@dataclass(frozen=True)
class RetryPolicy:
    """Wait schedule for retried deletes.

    Attributes:
        locked_delay: Seconds to wait after an access-denied failure
        busy_delay: Seconds to wait after any other transient failure
        backoff: Multiplier applied to the delay after each failed attempt
        max_delay: Upper bound for a single wait
        max_attempts: Number of failed attempts after which to give up;
            0 means retry until the operation succeeds

    """

    locked_delay: float = LOCKED_RETRY_DELAY
    busy_delay: float = BUSY_RETRY_DELAY
    backoff: float = DEFAULT_RETRY_BACKOFF
    max_delay: float = DEFAULT_RETRY_MAX_DELAY
    max_attempts: int = UNBOUNDED_ATTEMPTS

    def __post_init__(self) -> None:
        """Reject negative delays, a shrinking backoff and negative bounds."""
        if self.locked_delay < 0 or self.busy_delay < 0 or self.max_delay < 0:
            msg = "retry delays must not be negative"
            raise ValueError(msg)
        if self.backoff < 1:
            msg = "backoff must be at least 1"
            raise ValueError(msg)
        if self.max_attempts < 0:
            msg = "max_attempts must not be negative"
            raise ValueError(msg)

    @property
    def bounded(self) -> bool:
        """Whether this policy ever gives up."""
        return self.max_attempts != UNBOUNDED_ATTEMPTS

    def delay_for(self, error: OSError, attempt: int) -> float:
        """Return the wait before retry number ``attempt`` (1-based)."""
        base = self.locked_delay if _is_locked(error) else self.busy_delay
        return min(base * self.backoff ** (attempt - 1), self.max_delay)

    def exhausted(self, attempt: int) -> bool:
        """Return True once ``attempt`` failures reach the bound."""
        return self.bounded and attempt >= self.max_attempts

    def wait(
        self, delay: float, cancel: threading.Event | None = None
    ) -> bool:
        """Sleep for ``delay`` seconds, waking early if ``cancel`` is set.

        Returns:
            False if the wait was cancelled, True otherwise

        """
        if cancel is None:
            time.sleep(delay)
            return True
        return not cancel.wait(delay)

    def run(
        self,
        operation: Callable[[], None],
        *,
        done: Callable[[], bool],
        target: str,
        cancel: threading.Event | None = None,
    ) -> None:
        """Repeat ``operation`` until ``done()`` holds.

        Transient OS errors are absorbed with a wait between attempts;
        FileNotFoundError is treated as progress (someone else removed it);
        every other error propagates unchanged.

        Args:
            operation: The host call to repeat
            done: Completion test, checked before every attempt
            target: Path text used in log lines and errors
            cancel: Optional event that aborts the waits

        Raises:
            TransientIOError: When the attempt bound is reached or the wait
                is cancelled; chained to the last OS error

        """
        attempt = 0
        while not done():
            try:
                operation()
            except FileNotFoundError:
                continue
            except OSError as e:
                if not is_transient(e):
                    raise
                attempt += 1
                if self.exhausted(attempt):
                    msg = f"gave up after {attempt} attempts: {e}"
                    raise TransientIOError(msg, target=target) from e
                delay = self.delay_for(e, attempt)
                logger.warning(
                    "Attempt %d on %s failed (%s), retrying in %.1fs",
                    attempt,
                    target,
                    e,
                    delay,
                )
                if not self.wait(delay, cancel):
                    msg = f"cancelled after {attempt} attempts: {e}"
                    raise TransientIOError(msg, target=target) from e


DEFAULT_RETRY_POLICY = RetryPolicy()
