import asyncio
import random
import time
from collections import deque
from collections.abc import Callable

from src.config.constants import DEFAULT_MAX_DELAY_MS, DEFAULT_MIN_DELAY_MS


class PolitenessDelay:
    """Random pause between consecutive page fetches to avoid blocks."""

    def __init__(self, min_delay_ms: int = DEFAULT_MIN_DELAY_MS, max_delay_ms: int = DEFAULT_MAX_DELAY_MS):
        if min_delay_ms < 0 or min_delay_ms > max_delay_ms:
            raise ValueError(f"Invalid delay bounds: {min_delay_ms}..{max_delay_ms} ms")
        self._min_delay = min_delay_ms / 1000.0
        self._max_delay = max_delay_ms / 1000.0

    def next_delay(self) -> float:
        """Seconds to wait before the next fetch, uniform within the bounds."""
        return random.uniform(self._min_delay, self._max_delay)

    async def wait(self) -> float:
        delay = self.next_delay()
        await asyncio.sleep(delay)
        return delay


class RequestRateLimiter:
    """Sliding-window request limit per caller key (client IP)."""

    def __init__(self, limit: int = 5, window_s: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_s = window_s
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    def check(self, key: str) -> bool:
        """Record a hit for key. Returns False when the key is over its limit."""
        now = self._clock()
        self._prune(now)
        hits = self._hits.setdefault(key, deque())

        if len(hits) >= self.limit:
            return False

        hits.append(now)
        return True

    def _prune(self, now: float) -> None:
        # Keys with no hits left in the window are dropped entirely
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and now - hits[0] >= self.window_s:
                hits.popleft()
            if not hits:
                del self._hits[key]

    def reset(self, key: str) -> None:
        """Forget all recorded hits for a key."""
        self._hits.pop(key, None)
