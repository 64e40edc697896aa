"""
Strict Rolling-Window Rate Limiter
==================================

Asset Bank publishes a hard request budget per second (2 on shared hosting,
15 on dedicated hosting). `RateLimiter` enforces "no more than `limit`
calls start within any window of `interval` seconds".

Every call reserves its start slot while holding the lock, in call order,
so callers are released FIFO. A slot is either "now" or the start time of
the `limit`-th previous call plus `interval`, whichever is later. The caller
then sleeps until its slot outside the lock. Calls are never dropped; the
limiter only adds latency.
"""

import logging
import threading
import time
from collections import deque
from functools import wraps
from typing import Any, Callable, Deque

logger = logging.getLogger(__name__)


class RateLimiter:
    def __init__(
        self,
        limit: int,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            limit: Maximum number of call starts per window
            interval: Window length in seconds
            clock: Monotonic clock, injectable for tests
            sleep: Sleep function, injectable for tests
        """
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.limit = limit
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        # Start times of the most recent `limit` reservations
        self._ticks: Deque[float] = deque(maxlen=limit)

    def reserve(self) -> float:
        """Reserve the next start slot and return the delay until it."""
        with self._lock:
            now = self._clock()
            if len(self._ticks) < self.limit:
                self._ticks.append(now)
                return 0.0

            earliest = self._ticks[0] + self.interval
            if now >= earliest:
                self._ticks.append(now)
                return 0.0

            self._ticks.append(earliest)
            return earliest - now

    def acquire(self):
        """Block until the caller may start its call."""
        delay = self.reserve()
        if delay > 0:
            logger.debug(f"Rate limit reached, waiting {delay:.3f}s")
            self._sleep(delay)

    def call(self, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """Run `fn` once its start slot is reached."""
        self.acquire()
        return fn(*args, **kwargs)

    def wrap(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Decorate `fn` so every invocation goes through the limiter."""
        @wraps(fn)
        def throttled(*args, **kwargs):
            return self.call(fn, *args, **kwargs)
        return throttled
