"""Allow-once-per-interval throttling for diagnostics on hot paths.

Key Responsibilities:
    - Decide whether a rate-limited action (typically a warning log line) may
      run now, at most once per configured interval

Collaborators:
    - Upstream: Admission control calls :meth:`IntervalThrottle.allow` after
      every rejection
    - Downstream: None; relies only on a monotonic clock

Thread Safety:
    - Thread-safe and non-blocking. The state lock is taken with
      ``blocking=False``; a caller that loses the race is simply denied, so
      concurrent callers never wait on each other.

Performance Characteristics:
    - O(1); one clock read and one uncontended lock acquisition per call
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

__all__ = ["IntervalThrottle"]


class IntervalThrottle:
    """Grants at most one permit per ``interval`` seconds.

    The first call is granted immediately; later calls are granted once
    ``interval`` seconds have elapsed since the last granted call.
    """

    def __init__(self, interval: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        if interval <= 0:
            raise ValueError(f"throttle interval must be positive; got {interval}")
        self.interval = float(interval)
        self._clock = clock
        self._lock = threading.Lock()
        self._last_allowed: float | None = None

    def allow(self) -> bool:
        """Return ``True`` when the caller may act in the current interval."""
        if not self._lock.acquire(blocking=False):
            return False
        try:
            now = self._clock()
            if self._last_allowed is not None and now - self._last_allowed < self.interval:
                return False
            self._last_allowed = now
            return True
        finally:
            self._lock.release()
