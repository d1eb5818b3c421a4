"""Sliding-window rate limiter - at most N admissions per window."""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable

from stellar_integration.errors import RateLimitedError

log = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class RateLimiter:
    """Admits at most ``max_requests`` calls in any ``window_ms`` span.

    Keeps the admission timestamps of the current window in insertion order,
    so expired entries are always at the front. check_limit() never awaits,
    which makes it atomic on a single event loop; callers on threads must
    wrap it in a lock.
    """

    def __init__(
        self,
        max_requests: int,
        window_ms: int,
        clock: Callable[[], float] = _monotonic_ms,
    ) -> None:
        if max_requests < 1:
            raise ValueError(f"max_requests must be >= 1, got {max_requests}")
        if window_ms <= 0:
            raise ValueError(f"window_ms must be > 0, got {window_ms}")
        self._max_requests = max_requests
        self._window_ms = window_ms
        self._clock = clock
        self._requests: deque[float] = deque()

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_ms(self) -> int:
        return self._window_ms

    def check_limit(self) -> None:
        """Admit one request or raise RateLimitedError (state unchanged)."""
        now = self._clock()
        while self._requests and now - self._requests[0] >= self._window_ms:
            self._requests.popleft()

        if len(self._requests) >= self._max_requests:
            log.warning(
                "Rate limit reached: %d requests in %dms window",
                len(self._requests), self._window_ms,
            )
            raise RateLimitedError()

        self._requests.append(now)

    def remaining(self) -> int:
        """Admissions left in the current window. Does not prune."""
        now = self._clock()
        active = sum(1 for ts in self._requests if now - ts < self._window_ms)
        return max(0, self._max_requests - active)

    def reset(self) -> None:
        self._requests.clear()
