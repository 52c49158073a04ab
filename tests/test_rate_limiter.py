import pytest

from strava_leaderboard.strava_client import RateLimiter


def test_permits_are_spaced_at_fixed_rate(fake_clock):
    limiter = RateLimiter(10, clock=fake_clock, sleep=fake_clock.sleep)

    for _ in range(4):
        limiter.acquire()

    # First permit is immediate, the rest arrive one tick (0.1s) apart.
    assert fake_clock.sleeps == pytest.approx([0.1, 0.1, 0.1])
    assert limiter.snapshot()["issued"] == 4


def test_idle_period_grants_single_permit_without_burst(fake_clock):
    limiter = RateLimiter(10, clock=fake_clock, sleep=fake_clock.sleep)
    limiter.acquire()
    fake_clock.now += 5.0

    limiter.acquire()
    limiter.acquire()

    assert fake_clock.sleeps == pytest.approx([0.1])


def test_partial_wait_after_slow_caller(fake_clock):
    limiter = RateLimiter(4, clock=fake_clock, sleep=fake_clock.sleep)
    limiter.acquire()
    fake_clock.now += 0.1
    limiter.acquire()
    assert fake_clock.sleeps == pytest.approx([0.15])


@pytest.mark.parametrize("rate", [None, 0])
def test_unconfigured_limiter_never_waits(fake_clock, rate):
    limiter = RateLimiter(rate, clock=fake_clock, sleep=fake_clock.sleep)
    for _ in range(10):
        limiter.acquire()
    assert not limiter.enabled
    assert fake_clock.sleeps == []
    assert limiter.snapshot()["issued"] == 0


def test_negative_rate_rejected():
    with pytest.raises(ValueError):
        RateLimiter(-1)
