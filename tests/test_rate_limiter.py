"""Sliding-window rate limiter."""

from __future__ import annotations

import pytest

from stellar_integration.errors import RateLimitedError, StellarErrorCode
from stellar_integration.resilience.ratelimit import RateLimiter


def test_rejects_after_max_requests_in_window(clock):
    rl = RateLimiter(3, 1000, clock=clock)
    for _ in range(3):
        rl.check_limit()
        clock.advance(10)

    with pytest.raises(RateLimitedError) as exc_info:
        rl.check_limit()
    assert exc_info.value.code is StellarErrorCode.RATE_LIMITED
    assert exc_info.value.http_status == 429


def test_admits_again_after_window_elapses(clock):
    rl = RateLimiter(2, 1000, clock=clock)
    rl.check_limit()
    rl.check_limit()
    with pytest.raises(RateLimitedError):
        rl.check_limit()

    clock.advance(1000)
    rl.check_limit()  # does not raise


def test_entry_expires_exactly_at_window_boundary(clock):
    rl = RateLimiter(1, 500, clock=clock)
    rl.check_limit()

    clock.advance(499)
    with pytest.raises(RateLimitedError):
        rl.check_limit()

    clock.advance(1)
    rl.check_limit()


def test_sliding_not_fixed_window(clock):
    rl = RateLimiter(2, 1000, clock=clock)
    rl.check_limit()          # t=0
    clock.advance(600)
    rl.check_limit()          # t=600
    clock.advance(500)        # t=1100: first entry expired, second still live
    rl.check_limit()
    with pytest.raises(RateLimitedError):
        rl.check_limit()


def test_remaining_decreases_by_one_per_admission(clock):
    rl = RateLimiter(5, 1000, clock=clock)
    seen = [rl.remaining()]
    for _ in range(5):
        rl.check_limit()
        seen.append(rl.remaining())
    assert seen == [5, 4, 3, 2, 1, 0]


def test_rejection_does_not_change_state(clock):
    rl = RateLimiter(2, 1000, clock=clock)
    rl.check_limit()
    rl.check_limit()
    for _ in range(10):
        with pytest.raises(RateLimitedError):
            rl.check_limit()
    assert rl.remaining() == 0

    # Only the two admitted entries had to expire
    clock.advance(1000)
    assert rl.remaining() == 2


def test_remaining_never_negative_and_does_not_prune(clock):
    rl = RateLimiter(1, 1000, clock=clock)
    rl.check_limit()
    assert rl.remaining() == 0
    clock.advance(2000)
    assert rl.remaining() == 1
    assert rl.remaining() >= 0


def test_reset_clears_window(clock):
    rl = RateLimiter(1, 1000, clock=clock)
    rl.check_limit()
    rl.reset()
    assert rl.remaining() == 1
    rl.check_limit()


@pytest.mark.parametrize("max_requests, window_ms", [(0, 1000), (1, 0), (-1, 10)])
def test_rejects_nonsense_policy(max_requests, window_ms):
    with pytest.raises(ValueError):
        RateLimiter(max_requests, window_ms)


def test_default_clock_admits():
    rl = RateLimiter(2, 60_000)
    rl.check_limit()
    assert rl.remaining() == 1
