"""
Spacing between upstream queries.

One name permutation can fan out into several Last.FM and iTunes requests;
each client owns a limiter so bursts stay under the providers' rate caps.
"""
import time
import logging

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sleeps just long enough to keep `calls_per_second`; 0 means no limit"""

    def __init__(self, calls_per_second: float = 5.0):
        if calls_per_second < 0:
            raise ValueError("calls_per_second must not be negative")

        self.min_interval = 1.0 / calls_per_second if calls_per_second else 0.0
        self.last_call = 0.0
        logger.debug(f"Rate limiter: {self.min_interval:.3f}s between queries")

    def wait(self):
        elapsed = time.monotonic() - self.last_call
        if self.last_call and elapsed < self.min_interval:
            time.sleep(self.min_interval - elapsed)
        self.last_call = time.monotonic()
