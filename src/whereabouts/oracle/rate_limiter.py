import asyncio
import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class FixedIntervalRateLimiter:
    """
    Paces calls so that at most one is permitted per `interval_seconds`.

    A single limiter is shared by both oracles, so the interval is the
    ceiling for the combined request rate (0.2s => 5 requests/second).
    """

    def __init__(self, interval_seconds: float = 0.2):
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be non-negative")
        self.interval = interval_seconds
        self._last_call: Optional[float] = None
        self.wait_count = 0

    async def acquire(self) -> None:
        """Block until the next call is permitted, then claim the slot."""
        now = time.monotonic()
        if self._last_call is not None and self.interval > 0:
            wait = self._last_call + self.interval - now
            if wait > 0:
                self.wait_count += 1
                logger.debug(f"Rate limiter sleeping {wait * 1000:.0f}ms")
                await asyncio.sleep(wait)
                now = time.monotonic()
        self._last_call = now
