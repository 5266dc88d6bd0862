"""Tests for interval throttling."""

import pytest

from record_prep.utils.throttle import IntervalThrottle


def test_first_call_is_allowed_then_throttled(fake_clock) -> None:
    throttle = IntervalThrottle(5.0, clock=fake_clock)

    assert throttle.allow() is True
    assert [throttle.allow() for _ in range(100)] == [False] * 100


def test_allows_again_after_interval(fake_clock) -> None:
    throttle = IntervalThrottle(5.0, clock=fake_clock)
    throttle.allow()

    fake_clock.advance(4.999)
    assert throttle.allow() is False

    fake_clock.advance(0.001)
    assert throttle.allow() is True
    assert throttle.allow() is False


def test_interval_restarts_from_last_granted_call(fake_clock) -> None:
    throttle = IntervalThrottle(5.0, clock=fake_clock)
    throttle.allow()
    fake_clock.advance(12.0)
    assert throttle.allow() is True

    fake_clock.advance(3.0)
    assert throttle.allow() is False


def test_concurrent_caller_is_denied_without_blocking(fake_clock) -> None:
    throttle = IntervalThrottle(5.0, clock=fake_clock)
    throttle._lock.acquire()
    try:
        assert throttle.allow() is False
    finally:
        throttle._lock.release()
    assert throttle.allow() is True


@pytest.mark.parametrize("interval", [0, -1.0])
def test_rejects_non_positive_interval(interval: float) -> None:
    with pytest.raises(ValueError):
        IntervalThrottle(interval)
