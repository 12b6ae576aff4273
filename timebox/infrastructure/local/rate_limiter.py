"""
In-memory sliding window rate limiter.
"""

import time
from collections import deque
from typing import Callable

from timebox.core.logger import logger
from timebox.interfaces.rate_limiter import IRateLimiter, RateLimitDecision

RATE_LIMIT_EXCEEDED = "Rate limit exceeded. Please try again later."


class InMemoryRateLimiter(IRateLimiter):
    """Sliding window limiter keyed by "{action}:{identifier}".

    Counts are per process. In production with multiple instances, consider a
    shared store such as Redis.
    """

    def __init__(
        self,
        max_requests: int = 3,
        window_seconds: float = 60.0,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._enabled = enabled
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    async def check(self, identifier: str, action_name: str) -> RateLimitDecision:
        if not self._enabled:
            return RateLimitDecision(allowed=True)

        key = f"{action_name}:{identifier}"
        try:
            allowed = self._record(key)
        except Exception as e:
            # Fail open - allow the request if rate limiting fails
            logger.error(f"Rate limiting error for {action_name}: {e}")
            return RateLimitDecision(allowed=True)

        if not allowed:
            logger.info(f"Rate limit hit for {key}")
            return RateLimitDecision(allowed=False, reason=RATE_LIMIT_EXCEEDED)
        return RateLimitDecision(allowed=True)

    def _record(self, key: str) -> bool:
        now = self._clock()
        self._prune(now)
        hits = self._hits.setdefault(key, deque())
        if len(hits) >= self._max_requests:
            return False
        hits.append(now)
        return True

    def _prune(self, now: float) -> None:
        """Drop expired hits, and keys whose window has fully expired."""
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and now - hits[0] >= self._window_seconds:
                hits.popleft()
            if not hits:
                del self._hits[key]
