"""
Tests for the backoff strategies.
"""

import pytest

from plantpal.services.backoff import ExponentialBackoff, FixedDelayBackoff, NoDelayBackoff


class TestFixedDelayBackoff:

    @pytest.mark.asyncio
    async def test_same_delay_every_attempt(self, recorded_sleeps):
        backoff = FixedDelayBackoff(1.5, sleep=recorded_sleeps)

        await backoff.wait(1)
        await backoff.wait(2)

        assert recorded_sleeps.delays == [1.5, 1.5]

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            FixedDelayBackoff(-1)

    @pytest.mark.asyncio
    async def test_zero_delay_does_not_sleep(self, recorded_sleeps):
        backoff = FixedDelayBackoff(0, sleep=recorded_sleeps)

        assert await backoff.wait(1) == 0
        assert recorded_sleeps.delays == []


class TestExponentialBackoff:

    def test_delays_grow_and_cap(self):
        backoff = ExponentialBackoff(base=1.0, factor=2.0, max_delay=5.0)

        assert [backoff.delay_for(n) for n in range(1, 6)] == [1.0, 2.0, 4.0, 5.0, 5.0]

    @pytest.mark.asyncio
    async def test_wait_returns_delay(self, recorded_sleeps):
        backoff = ExponentialBackoff(base=0.5, sleep=recorded_sleeps)

        delay = await backoff.wait(3)

        assert delay == 2.0
        assert recorded_sleeps.delays == [2.0]

    def test_invalid_factor_rejected(self):
        with pytest.raises(ValueError):
            ExponentialBackoff(factor=0.5)


class TestNoDelayBackoff:

    @pytest.mark.asyncio
    async def test_never_sleeps(self, recorded_sleeps):
        backoff = NoDelayBackoff(sleep=recorded_sleeps)

        assert await backoff.wait(10) == 0.0
        assert recorded_sleeps.delays == []
