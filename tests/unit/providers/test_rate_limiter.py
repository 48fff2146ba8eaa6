import asyncio

import pytest

from common.core.config import Settings
from common.core.constants import RateLimiterType
from common.providers.rate_limiter.factory import get_upload_rate_limiter
from common.providers.rate_limiter.fixed_interval import (
    FixedIntervalRateLimiter,
    NoopRateLimiter,
)
from common.providers.rate_limiter.moving_window import MovingWindowRateLimiter


class FakeClock:
    """Monotonic clock that only moves when something sleeps."""

    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestFixedIntervalRateLimiter:
    async def test_first_acquire_never_waits(self):
        clock = FakeClock()
        limiter = FixedIntervalRateLimiter(1.0, sleep=clock.sleep, clock=clock)

        await limiter.acquire()

        assert clock.sleeps == []

    async def test_back_to_back_acquires_are_spaced(self):
        clock = FakeClock()
        limiter = FixedIntervalRateLimiter(1.0, sleep=clock.sleep, clock=clock)

        await limiter.acquire()
        await limiter.acquire()
        await limiter.acquire()

        assert clock.sleeps == [1.0, 1.0]

    async def test_elapsed_time_counts_towards_interval(self):
        clock = FakeClock()
        limiter = FixedIntervalRateLimiter(1.0, sleep=clock.sleep, clock=clock)

        await limiter.acquire()
        clock.now += 0.75
        await limiter.acquire()
        clock.now += 5
        await limiter.acquire()

        assert clock.sleeps == [pytest.approx(0.25)]

    async def test_concurrent_callers_are_spaced(self):
        clock = FakeClock()
        limiter = FixedIntervalRateLimiter(1.0, sleep=clock.sleep, clock=clock)

        await asyncio.gather(limiter.acquire(), limiter.acquire(), limiter.acquire())

        assert clock.sleeps == [1.0, 1.0]

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            FixedIntervalRateLimiter(-1)


class TestMovingWindowRateLimiter:
    async def test_within_rate_does_not_wait(self):
        sleeps = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)

        limiter = MovingWindowRateLimiter("5/minute", sleep=fake_sleep)
        for _ in range(5):
            await limiter.acquire()

        assert sleeps == []

    async def test_separate_keys_do_not_share_a_window(self):
        sleeps = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)

        first = MovingWindowRateLimiter("1/hour", key="a", sleep=fake_sleep)
        second = MovingWindowRateLimiter("1/hour", key="b", sleep=fake_sleep)
        await first.acquire()
        await second.acquire()

        assert sleeps == []


@pytest.fixture
def no_upload_rate_limiter(monkeypatch):
    monkeypatch.setattr(
        "common.providers.rate_limiter.factory._upload_rate_limiter", None
    )


def make_settings(limiter_type: RateLimiterType) -> Settings:
    return Settings(
        _env_file=None,
        google_script_url="https://script.test/exec",
        upload_rate_limiter=limiter_type,
    )


@pytest.mark.usefixtures("no_upload_rate_limiter")
class TestUploadRateLimiterFactory:
    @pytest.mark.parametrize(
        "limiter_type, expected",
        [
            (RateLimiterType.FIXED_INTERVAL, FixedIntervalRateLimiter),
            (RateLimiterType.MOVING_WINDOW, MovingWindowRateLimiter),
            (RateLimiterType.NONE, NoopRateLimiter),
        ],
    )
    def test_builds_configured_policy(self, limiter_type, expected):
        assert isinstance(get_upload_rate_limiter(make_settings(limiter_type)), expected)

    def test_instance_is_shared_between_calls(self):
        settings = make_settings(RateLimiterType.FIXED_INTERVAL)

        assert get_upload_rate_limiter(settings) is get_upload_rate_limiter(settings)
