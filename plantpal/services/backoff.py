"""
Backoff strategies for the model fallback loops.

The invoker waits between model attempts and the image enricher waits
between plants. Both take a strategy instead of a hard-coded sleep so the
delay can be tuned from settings and tests can inject NoDelayBackoff (or a
recording sleep function).
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class BackoffStrategy:
    """Base strategy: `attempt` is 1 for the first wait, 2 for the second, ..."""

    def __init__(self, sleep: Optional[SleepFunc] = None):
        self._sleep = sleep or asyncio.sleep

    def delay_for(self, attempt: int) -> float:
        raise NotImplementedError

    async def wait(self, attempt: int) -> float:
        """Sleep for the attempt's delay and return it."""
        delay = max(0.0, self.delay_for(attempt))
        if delay > 0:
            logger.debug(f"Backing off {delay:.2f}s (attempt {attempt})")
            await self._sleep(delay)
        return delay


class FixedDelayBackoff(BackoffStrategy):
    """Same delay before every retry."""

    def __init__(self, seconds: float, sleep: Optional[SleepFunc] = None):
        super().__init__(sleep)
        if seconds < 0:
            raise ValueError("seconds must not be negative")
        self.seconds = seconds

    def delay_for(self, attempt: int) -> float:
        return self.seconds


class ExponentialBackoff(BackoffStrategy):
    """base * factor**(attempt - 1), capped at max_delay."""

    def __init__(
        self,
        base: float = 1.0,
        factor: float = 2.0,
        max_delay: float = 30.0,
        sleep: Optional[SleepFunc] = None,
    ):
        super().__init__(sleep)
        if base < 0 or factor < 1 or max_delay < 0:
            raise ValueError("base and max_delay must be >= 0 and factor >= 1")
        self.base = base
        self.factor = factor
        self.max_delay = max_delay

    def delay_for(self, attempt: int) -> float:
        exponent = max(0, attempt - 1)
        return min(self.max_delay, self.base * (self.factor ** exponent))


class NoDelayBackoff(BackoffStrategy):
    """Never waits (tests, offline tooling)."""

    def delay_for(self, attempt: int) -> float:
        return 0.0
