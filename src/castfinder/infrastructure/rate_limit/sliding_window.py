"""Per-caller sliding-window rate limiter."""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable

import structlog

log = structlog.get_logger(__name__)

# How many checks between sweeps that evict identifiers idle for a full window.
_GC_INTERVAL = 256


class SlidingWindowRateLimiter:
    """Sliding-window admission control per caller identifier.

    Uses a deque per identifier for O(1) append and efficient left-pruning.
    Every ``_GC_INTERVAL`` checks, identifiers whose newest admission has
    left the window are evicted, so the map only holds callers seen within
    the trailing window.  Rejected requests are not recorded.

    Args:
        max_requests: Admissions allowed inside one window. 0 = unlimited.
        window_seconds: Width of the trailing window.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        max_requests: int = 30,
        window_seconds: float = 10.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, deque[float]] = {}
        self._check_count = 0
        self._lock = threading.Lock()

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def check(self, identifier: str) -> bool:
        """Admit iff fewer than ``max_requests`` hits remain in the window."""
        if self._max_requests <= 0:
            return True

        now = self._clock()
        cutoff = now - self._window_seconds

        with self._lock:
            self._check_count += 1
            if self._check_count >= _GC_INTERVAL:
                self._check_count = 0
                self._evict_idle(cutoff)

            timestamps = self._windows.get(identifier)
            if timestamps is None:
                timestamps = deque()
                self._windows[identifier] = timestamps

            # Prune expired entries from the left (oldest first)
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()

            if len(timestamps) >= self._max_requests:
                log.warning(
                    "rate_limit_exceeded",
                    identifier=identifier,
                    max_requests=self._max_requests,
                    window_seconds=self._window_seconds,
                )
                return False

            timestamps.append(now)

        return True

    def _evict_idle(self, cutoff: float) -> None:
        # Timestamps are appended in order, so the newest one is on the right.
        idle = [key for key, dq in self._windows.items() if not dq or dq[-1] <= cutoff]
        for key in idle:
            del self._windows[key]
        if idle:
            log.debug("rate_limit_gc", evicted=len(idle), tracked=len(self._windows))
