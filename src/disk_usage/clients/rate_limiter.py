"""Client-side throttling for Data API requests."""

import threading
import time
from collections import deque
from collections.abc import Callable


class RateLimiter:
    """Sliding window limiter that keeps request bursts off the host app.

    Joplin serves the Data API from the desktop process, so a report over
    thousands of resources can otherwise saturate it. A limiter built with
    ``requests_per_period=None`` never waits.

    Example:
        >>> limiter = RateLimiter(requests_per_period=20, period_seconds=1)
        >>> limiter.wait_if_needed()  # Blocks if the window is full
    """

    def __init__(
        self,
        requests_per_period: int | None,
        period_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize rate limiter.

        Args:
            requests_per_period: Maximum requests per window, or None for no limit
            period_seconds: Length of the sliding window in seconds
            clock: Monotonic time source
            sleep: Function used to wait
        """
        if requests_per_period is not None and requests_per_period < 1:
            raise ValueError("requests_per_period must be at least 1")
        self.requests_per_period = requests_per_period
        self.period_seconds = period_seconds
        self.request_times: deque[float] = deque()
        self._clock = clock
        self._sleep = sleep
        # Linkage lookups may share one client across worker threads
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.requests_per_period is not None

    def _expire(self, now: float) -> None:
        while self.request_times and self.request_times[0] <= now - self.period_seconds:
            self.request_times.popleft()

    def wait_if_needed(self) -> None:
        """Block until another request fits in the window, then record it."""
        if not self.enabled:
            return

        with self._lock:
            now = self._clock()
            self._expire(now)

            if len(self.request_times) >= self.requests_per_period:
                delay = self.period_seconds - (now - self.request_times[0])
                if delay > 0:
                    self._sleep(delay)
                now = self._clock()
                self._expire(now)

            self.request_times.append(now)

    def reset(self) -> None:
        """Clear all tracked requests."""
        with self._lock:
            self.request_times.clear()
